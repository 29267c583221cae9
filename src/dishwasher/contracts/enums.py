"""All status codes and program kinds used across subsystem boundaries.

WashingProgram durations are declared constants, not measured time. The
cycle reports the declared duration of the program it ran.
"""

from enum import StrEnum
from types import MappingProxyType


class Status(StrEnum):
    """Terminal outcome of a wash cycle.

    Exactly one value per cycle. Everything except SUCCESS is a failure
    that stopped the cycle at the step that produced it.
    """

    SUCCESS = "success"
    DOOR_OPEN = "door_open"
    ERROR_FILTER = "error_filter"
    ERROR_PROGRAM = "error_program"
    ERROR_PUMP = "error_pump"


class FillLevel(StrEnum):
    """Target amount of water the pump pours before a program runs."""

    HALF = "half"
    FULL = "full"


class WashingProgram(StrEnum):
    """Wash profile. Each carries a fixed duration in minutes."""

    INTENSIVE = "intensive"
    ECO = "eco"
    RINSE = "rinse"
    NIGHT = "night"

    @property
    def time_in_minutes(self) -> int:
        """Declared duration of this program in minutes."""
        return _PROGRAM_MINUTES[self]


_PROGRAM_MINUTES: MappingProxyType[WashingProgram, int] = MappingProxyType(
    {
        WashingProgram.INTENSIVE: 120,
        WashingProgram.ECO: 90,
        WashingProgram.RINSE: 20,
        WashingProgram.NIGHT: 180,
    }
)
