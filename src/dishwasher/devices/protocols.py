"""Device protocols defining the contracts for each collaborator.

These protocols define what methods a device must implement. They're used
for type checking and by tests that substitute recording fakes; the
orchestrator never inspects a device beyond calling these methods.

Device Types:
- Door: Reports closed state, locks before filling
- DirtFilter: Reports fouling as a percentage
- WaterPump: Pours a fill level, drains after a program
- Engine: Runs a washing program

Failures:
- WaterPump.pour raises PumpError
- Engine.run_program raises EngineError
- Door.lock and WaterPump.drain have no declared failure
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dishwasher.contracts import FillLevel, WashingProgram


@runtime_checkable
class Door(Protocol):
    """Door sensor and lock."""

    def closed(self) -> bool:
        """Return True if the door is shut."""
        ...

    def lock(self) -> None:
        """Lock the door for the rest of the cycle."""
        ...


@runtime_checkable
class DirtFilter(Protocol):
    """Dirt filter capacity sensor."""

    def capacity(self) -> float:
        """Return filter fouling as a percentage (0-100)."""
        ...


@runtime_checkable
class WaterPump(Protocol):
    """Water pump driver."""

    def pour(self, fill_level: "FillLevel") -> None:
        """Fill the tub to the given level.

        Raises:
            PumpError: If the pump could not pour
        """
        ...

    def drain(self) -> None:
        """Empty the tub."""
        ...


@runtime_checkable
class Engine(Protocol):
    """Motor engine driver."""

    def run_program(self, program: "WashingProgram") -> None:
        """Run a washing program to completion.

        Raises:
            EngineError: If the engine could not run the program
        """
        ...
