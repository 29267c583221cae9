"""Shared contracts for cross-boundary data types.

Enums, value objects and device exceptions used by the orchestrator, the
devices and the CLI live here.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from
dishwasher.core.config.
"""

from dishwasher.contracts.enums import FillLevel, Status, WashingProgram
from dishwasher.contracts.errors import DeviceError, EngineError, PumpError
from dishwasher.contracts.program import ProgramConfiguration, ProgramConfigurationBuilder
from dishwasher.contracts.results import RunResult

__all__ = [
    "DeviceError",
    "EngineError",
    "FillLevel",
    "ProgramConfiguration",
    "ProgramConfigurationBuilder",
    "PumpError",
    "RunResult",
    "Status",
    "WashingProgram",
]
