"""Program configuration for a single wash cycle.

ProgramConfiguration is built once per wash request and never mutated.
The builder exists only for call sites that assemble a configuration in
steps; it adds no behaviour beyond required-field checking.
"""

from __future__ import annotations

from dataclasses import dataclass

from dishwasher.contracts.enums import FillLevel, WashingProgram


@dataclass(frozen=True, slots=True)
class ProgramConfiguration:
    """What the user asked the dishwasher to do.

    Attributes:
        fill_level: How much water the pump should pour
        program: Which washing program the engine should run
        tablets_used: Whether detergent tablets are loaded (gates the filter check)
    """

    fill_level: FillLevel
    program: WashingProgram
    tablets_used: bool

    @staticmethod
    def builder() -> ProgramConfigurationBuilder:
        return ProgramConfigurationBuilder()


class ProgramConfigurationBuilder:
    """Step-wise construction of a ProgramConfiguration.

    Example:
        config = (
            ProgramConfiguration.builder()
            .with_fill_level(FillLevel.HALF)
            .with_program(WashingProgram.ECO)
            .with_tablets_used(True)
            .build()
        )
    """

    def __init__(self) -> None:
        self._fill_level: FillLevel | None = None
        self._program: WashingProgram | None = None
        self._tablets_used: bool | None = None

    def with_fill_level(self, fill_level: FillLevel) -> ProgramConfigurationBuilder:
        self._fill_level = fill_level
        return self

    def with_program(self, program: WashingProgram) -> ProgramConfigurationBuilder:
        self._program = program
        return self

    def with_tablets_used(self, tablets_used: bool) -> ProgramConfigurationBuilder:
        self._tablets_used = tablets_used
        return self

    def build(self) -> ProgramConfiguration:
        """Create the configuration.

        Raises:
            ValueError: If any field was never set
        """
        if self._fill_level is None or self._program is None or self._tablets_used is None:
            missing = [
                name
                for name, value in (
                    ("fill_level", self._fill_level),
                    ("program", self._program),
                    ("tablets_used", self._tablets_used),
                )
                if value is None
            ]
            raise ValueError(f"ProgramConfiguration is missing required field(s): {', '.join(missing)}")
        return ProgramConfiguration(
            fill_level=self._fill_level,
            program=self._program,
            tablets_used=self._tablets_used,
        )
