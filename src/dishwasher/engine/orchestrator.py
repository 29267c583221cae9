# src/dishwasher/engine/orchestrator.py
"""DishWasher: Wash cycle orchestration.

Runs one wash cycle as a straight-line sequence with five terminal
outcomes:

1. Door check      -> DOOR_OPEN
2. Filter check    -> ERROR_FILTER   (only when tablets are used)
3. Lock door
4. Pour water      -> ERROR_PUMP
5. Run program     -> ERROR_PROGRAM
6. Drain
7.                 -> SUCCESS with the program's declared duration

Each step runs only if every prior step succeeded. A failing step ends the
cycle before any later device is touched: the engine never runs on an
unfilled tub and the pump never drains after a failed program.

Only the declared device failures (PumpError at pour, EngineError at
run_program) become a Status. Any other exception from a device is a bug
and propagates.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Final

import structlog

from dishwasher.contracts import EngineError, PumpError, RunResult, Status

if TYPE_CHECKING:
    from dishwasher.contracts import ProgramConfiguration
    from dishwasher.devices.protocols import DirtFilter, Door, Engine, WaterPump

# Filter fouling percentage above which a cycle with tablets is refused.
MAXIMAL_FILTER_CAPACITY: Final[float] = 50.0


class DishWasher:
    """Coordinates door, dirt filter, water pump and engine through a wash cycle.

    The dishwasher holds references to its devices and nothing else that
    survives a cycle. Cycles on one instance are serialized; overlapping
    commands to the same physical devices are not meaningful.

    Example:
        dishwasher = DishWasher(water_pump, engine, dirt_filter, door)
        result = dishwasher.start(config)
        if result.status == Status.SUCCESS:
            print(f"Done in {result.run_minutes} minutes")
    """

    def __init__(
        self,
        water_pump: WaterPump,
        engine: Engine,
        dirt_filter: DirtFilter,
        door: Door,
    ) -> None:
        self._water_pump = water_pump
        self._engine = engine
        self._dirt_filter = dirt_filter
        self._door = door
        self._cycle_lock = threading.Lock()

    def start(self, config: ProgramConfiguration) -> RunResult:
        """Run one wash cycle.

        Args:
            config: Program, fill level and tablet usage for this cycle

        Returns:
            RunResult with the terminal status; run_minutes is the program's
            declared duration on SUCCESS and 0 otherwise
        """
        with self._cycle_lock:
            return self._run_cycle(config)

    def _run_cycle(self, config: ProgramConfiguration) -> RunResult:
        log = structlog.get_logger(__name__).bind(
            program=str(config.program),
            fill_level=str(config.fill_level),
            tablets_used=config.tablets_used,
        )
        log.debug("wash_cycle_started")

        if not self._door.closed():
            return self._abort(log, Status.DOOR_OPEN, "door is open")

        if config.tablets_used:
            capacity = self._dirt_filter.capacity()
            if capacity > MAXIMAL_FILTER_CAPACITY:
                return self._abort(
                    log,
                    Status.ERROR_FILTER,
                    f"filter capacity {capacity} exceeds {MAXIMAL_FILTER_CAPACITY}",
                )

        self._door.lock()

        try:
            self._water_pump.pour(config.fill_level)
        except PumpError as e:
            return self._abort(log, Status.ERROR_PUMP, str(e))

        try:
            self._engine.run_program(config.program)
        except EngineError as e:
            return self._abort(log, Status.ERROR_PROGRAM, str(e))

        self._water_pump.drain()

        result = RunResult.success(config.program.time_in_minutes)
        log.info("wash_cycle_completed", run_minutes=result.run_minutes)
        return result

    @staticmethod
    def _abort(log: structlog.stdlib.BoundLogger, status: Status, reason: str) -> RunResult:
        log.warning("wash_cycle_aborted", status=str(status), reason=reason)
        return RunResult.failure(status)
