"""Device contracts and simulated implementations."""

from dishwasher.devices.protocols import DirtFilter, Door, Engine, WaterPump
from dishwasher.devices.simulated import (
    SimulatedDirtFilter,
    SimulatedDoor,
    SimulatedEngine,
    SimulatedWaterPump,
    build_simulated_devices,
)

__all__ = [
    "DirtFilter",
    "Door",
    "Engine",
    "SimulatedDirtFilter",
    "SimulatedDoor",
    "SimulatedEngine",
    "SimulatedWaterPump",
    "WaterPump",
    "build_simulated_devices",
]
