# src/dishwasher/devices/simulated.py
"""In-memory devices for running a wash cycle without hardware.

Faults are injected by percentage (0-100) against an injectable
random.Random, so a seeded run is reproducible:

    pump = SimulatedWaterPump(fault_pct=25.0, rng=random.Random(7))

0 never faults and 100 always faults, regardless of the random stream.
Simulated devices never sleep; program durations are declared, not timed.
"""

from __future__ import annotations

import random as random_module
from typing import TYPE_CHECKING

from dishwasher.contracts import EngineError, FillLevel, PumpError, WashingProgram
from dishwasher.core.logging import get_logger

if TYPE_CHECKING:
    from dishwasher.core.config import DeviceSettings
    from dishwasher.devices.protocols import DirtFilter, Door, Engine, WaterPump

logger = get_logger(__name__)


def _should_fault(rng: random_module.Random, fault_pct: float) -> bool:
    """Random check against a percentage, exact at the 0 and 100 bounds."""
    if fault_pct <= 0.0:
        return False
    if fault_pct >= 100.0:
        return True
    return rng.random() * 100.0 < fault_pct


def _check_pct(name: str, value: float) -> None:
    if not 0.0 <= value <= 100.0:
        raise ValueError(f"{name} must be between 0 and 100, got {value}")


class SimulatedDoor:
    """Door that is either open or closed for its whole lifetime."""

    def __init__(self, closed: bool = True) -> None:
        self._closed = closed
        self.locked = False

    def closed(self) -> bool:
        return self._closed

    def lock(self) -> None:
        """Lock the door.

        Raises:
            RuntimeError: If the door is open. The orchestrator checks
                closed() first, so this only fires on a caller bug.
        """
        if not self._closed:
            raise RuntimeError("Cannot lock an open door")
        self.locked = True
        logger.debug("door_locked")


class SimulatedDirtFilter:
    """Dirt filter reporting a fixed fouling percentage."""

    def __init__(self, capacity: float = 0.0) -> None:
        _check_pct("capacity", capacity)
        self._capacity = capacity

    def capacity(self) -> float:
        return self._capacity


class SimulatedWaterPump:
    """Water pump with percentage-based pour faults."""

    def __init__(self, fault_pct: float = 0.0, rng: random_module.Random | None = None) -> None:
        _check_pct("fault_pct", fault_pct)
        self._fault_pct = fault_pct
        self._rng = rng if rng is not None else random_module.Random()
        self.poured: FillLevel | None = None
        self.drained = False

    def pour(self, fill_level: FillLevel) -> None:
        if _should_fault(self._rng, self._fault_pct):
            logger.debug("pump_fault_injected", fill_level=str(fill_level))
            raise PumpError(f"Pump failed to pour {fill_level} level")
        self.poured = fill_level
        self.drained = False
        logger.debug("water_poured", fill_level=str(fill_level))

    def drain(self) -> None:
        self.poured = None
        self.drained = True
        logger.debug("water_drained")


class SimulatedEngine:
    """Engine with percentage-based program faults."""

    def __init__(self, fault_pct: float = 0.0, rng: random_module.Random | None = None) -> None:
        _check_pct("fault_pct", fault_pct)
        self._fault_pct = fault_pct
        self._rng = rng if rng is not None else random_module.Random()
        self.last_program: WashingProgram | None = None

    def run_program(self, program: WashingProgram) -> None:
        if _should_fault(self._rng, self._fault_pct):
            logger.debug("engine_fault_injected", program=str(program))
            raise EngineError(f"Engine failed to run {program} program")
        self.last_program = program
        logger.debug("program_ran", program=str(program), minutes=program.time_in_minutes)


def build_simulated_devices(settings: DeviceSettings) -> tuple[WaterPump, Engine, DirtFilter, Door]:
    """Create a simulated device set from settings.

    Pump and engine share one Random seeded from settings.seed so a whole
    cycle is reproducible from a single seed.

    Returns:
        (water_pump, engine, dirt_filter, door), in DishWasher constructor order
    """
    rng = random_module.Random(settings.seed)
    return (
        SimulatedWaterPump(fault_pct=settings.pump_fault_pct, rng=rng),
        SimulatedEngine(fault_pct=settings.engine_fault_pct, rng=rng),
        SimulatedDirtFilter(capacity=settings.filter_capacity),
        SimulatedDoor(closed=settings.door_closed),
    )
