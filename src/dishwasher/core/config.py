# src/dishwasher/core/config.py
"""
Configuration schema and loading for the dishwasher.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from dishwasher.contracts import FillLevel, ProgramConfiguration, WashingProgram


def _coerce_enum(enum_cls: type[StrEnum], v: Any) -> Any:
    """Accept enum members by name or value, case-insensitively."""
    if isinstance(v, str) and not isinstance(v, enum_cls):
        lowered = v.strip().lower()
        for member in enum_cls:
            if lowered in (member.value, member.name.lower()):
                return member
    return v


class ProgramSettings(BaseModel):
    """Which program to run and how.

    Example YAML:
        program:
          program: eco
          fill_level: half
          tablets_used: true
    """

    model_config = {"frozen": True, "extra": "forbid"}

    fill_level: FillLevel = Field(default=FillLevel.HALF, description="How much water the pump pours")
    program: WashingProgram = Field(default=WashingProgram.ECO, description="Washing program to run")
    tablets_used: bool = Field(default=False, description="Detergent tablets loaded (enables the filter check)")

    @field_validator("fill_level", mode="before")
    @classmethod
    def _parse_fill_level(cls, v: Any) -> Any:
        return _coerce_enum(FillLevel, v)

    @field_validator("program", mode="before")
    @classmethod
    def _parse_program(cls, v: Any) -> Any:
        return _coerce_enum(WashingProgram, v)

    def to_configuration(self) -> ProgramConfiguration:
        return ProgramConfiguration(
            fill_level=self.fill_level,
            program=self.program,
            tablets_used=self.tablets_used,
        )


class DeviceSettings(BaseModel):
    """Simulated device behaviour.

    Percentages are 0-100 (e.g., 5.0 means 5% of pour attempts fail).
    """

    model_config = {"frozen": True, "extra": "forbid"}

    door_closed: bool = Field(default=True, description="Whether the door reports closed")
    filter_capacity: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Dirt filter fouling percentage",
    )
    pump_fault_pct: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Pour fault percentage",
    )
    engine_fault_pct: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Program fault percentage",
    )
    seed: int | None = Field(default=None, description="Seed for reproducible fault injection")


class DishWasherSettings(BaseModel):
    """Top-level dishwasher configuration.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    program: ProgramSettings = Field(
        default_factory=ProgramSettings,
        description="Program selection for the wash cycle",
    )
    devices: DeviceSettings = Field(
        default_factory=DeviceSettings,
        description="Simulated device configuration",
    )


def load_settings(config_path: Path) -> DishWasherSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (DISHWASHER_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: DISHWASHER_DEVICES__DOOR_CLOSED for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated DishWasherSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="DISHWASHER",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)

    return DishWasherSettings(**raw_config)


def _lowercase_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively lowercase dict keys (env overrides arrive uppercase)."""
    return {k.lower(): _lowercase_keys(v) if isinstance(v, dict) else v for k, v in config.items()}


def resolve_config(settings: DishWasherSettings) -> dict[str, Any]:
    """Convert validated settings to a plain dict.

    Includes all settings (explicit + defaults) with enums as their
    string values, suitable for YAML/JSON rendering.
    """
    return settings.model_dump(mode="json")
