"""Wash cycle outcome.

These types answer: "What did a wash cycle produce?"

IMPORTANT:
- run_minutes is the program's declared duration, not measured time
- Every non-SUCCESS result has run_minutes == 0
- Use the factory methods; __post_init__ rejects inconsistent results
"""

from __future__ import annotations

from dataclasses import dataclass

from dishwasher.contracts.enums import Status


@dataclass(frozen=True, slots=True)
class RunResult:
    """Result of one wash cycle.

    Produced exactly once per DishWasher.start() call.
    """

    status: Status
    run_minutes: int = 0

    def __post_init__(self) -> None:
        """Validate invariants - failures carry no run time, run time is never negative."""
        if self.run_minutes < 0:
            raise ValueError(f"RunResult.run_minutes must be non-negative, got {self.run_minutes}")
        if self.status != Status.SUCCESS and self.run_minutes != 0:
            raise ValueError(
                f"RunResult with status='{self.status}' MUST have run_minutes == 0, got {self.run_minutes}. "
                "Only a completed cycle reports a run time."
            )

    @classmethod
    def success(cls, run_minutes: int) -> RunResult:
        """Create a result for a cycle that drained after running its program."""
        return cls(status=Status.SUCCESS, run_minutes=run_minutes)

    @classmethod
    def failure(cls, status: Status) -> RunResult:
        """Create a result for a cycle that stopped at a failing step.

        Raises:
            ValueError: If status is SUCCESS
        """
        if status == Status.SUCCESS:
            raise ValueError("RunResult.failure() requires a failure status, got 'success'")
        return cls(status=status, run_minutes=0)

    @property
    def succeeded(self) -> bool:
        return self.status == Status.SUCCESS
