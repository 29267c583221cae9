# src/dishwasher/cli.py
"""Dishwasher Command Line Interface.

Entry point for the dishwasher CLI tool. Runs wash cycles against
simulated devices.
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path

import typer
import yaml
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from dishwasher import __version__
from dishwasher.contracts import FillLevel, RunResult, WashingProgram
from dishwasher.core.config import DishWasherSettings, load_settings, resolve_config
from dishwasher.devices import build_simulated_devices
from dishwasher.engine import DishWasher

__all__ = [
    "app",
]

app = typer.Typer(
    name="dishwasher",
    help="Dishwasher: run wash cycles against simulated devices.",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dishwasher version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # Existence is checked in _load_dotenv for a clearer message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Dishwasher: run wash cycles against simulated devices."""
    from dishwasher.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)

    if not no_dotenv:
        _load_dotenv(env_file.expanduser() if env_file is not None else None)


def _load_settings_or_exit(settings: str | None) -> DishWasherSettings:
    """Load settings from a file, or defaults when no file is given.

    Raises:
        typer.Exit: On any configuration error, after reporting it.
    """
    if settings is None:
        return DishWasherSettings()

    settings_path = Path(settings).expanduser()
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _apply_overrides(
    base: DishWasherSettings,
    program_overrides: dict[str, object],
    device_overrides: dict[str, object],
) -> DishWasherSettings:
    """Re-validate settings with CLI overrides applied on top.

    Raises:
        typer.Exit: If an override is invalid.
    """
    raw = resolve_config(base)
    raw["program"].update({k: v for k, v in program_overrides.items() if v is not None})
    raw["devices"].update({k: v for k, v in device_overrides.items() if v is not None})
    try:
        return DishWasherSettings(**raw)
    except ValidationError as e:
        typer.echo("Invalid options:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _format_result(result: RunResult, program: WashingProgram, output_format: OutputFormat) -> str:
    if output_format == OutputFormat.JSON:
        return json.dumps(
            {
                "status": result.status.value,
                "run_minutes": result.run_minutes,
                "program": program.value,
            }
        )
    if result.succeeded:
        return f"Wash cycle completed: {program.value} program, {result.run_minutes} minutes"
    return f"Wash cycle failed: {result.status.value}"


@app.command()
def run(
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    program: WashingProgram | None = typer.Option(
        None,
        "--program",
        "-p",
        case_sensitive=False,
        help="Washing program to run.",
    ),
    fill_level: FillLevel | None = typer.Option(
        None,
        "--fill-level",
        case_sensitive=False,
        help="How much water the pump pours.",
    ),
    tablets: bool | None = typer.Option(
        None,
        "--tablets/--no-tablets",
        help="Whether detergent tablets are loaded.",
    ),
    door_open: bool = typer.Option(
        False,
        "--door-open",
        help="Simulate an open door.",
    ),
    filter_capacity: float | None = typer.Option(
        None,
        "--filter-capacity",
        help="Simulated dirt filter fouling percentage (0-100).",
    ),
    pump_fault_pct: float | None = typer.Option(
        None,
        "--pump-fault-pct",
        help="Percentage of pour attempts that fail (0-100).",
    ),
    engine_fault_pct: float | None = typer.Option(
        None,
        "--engine-fault-pct",
        help="Percentage of program runs that fail (0-100).",
    ),
    seed: int | None = typer.Option(
        None,
        "--seed",
        help="Seed for reproducible fault injection.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CONSOLE,
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (structured).",
    ),
) -> None:
    """Run one wash cycle against simulated devices.

    Exits with code 0 when the cycle succeeds and 1 otherwise.
    """
    base = _load_settings_or_exit(settings)
    config = _apply_overrides(
        base,
        {"program": program, "fill_level": fill_level, "tablets_used": tablets},
        {
            "door_closed": False if door_open else None,
            "filter_capacity": filter_capacity,
            "pump_fault_pct": pump_fault_pct,
            "engine_fault_pct": engine_fault_pct,
            "seed": seed,
        },
    )

    dishwasher = DishWasher(*build_simulated_devices(config.devices))
    result = dishwasher.start(config.program.to_configuration())

    typer.echo(_format_result(result, config.program.program, output_format))
    if not result.succeeded:
        raise typer.Exit(1)


@app.command()
def validate(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate a settings file and print the resolved configuration."""
    config = _load_settings_or_exit(settings)
    typer.echo(yaml.safe_dump(resolve_config(config), sort_keys=False).rstrip())


@app.command()
def programs() -> None:
    """List washing programs and their durations."""
    for washing_program in WashingProgram:
        typer.echo(f"{washing_program.value:<10} {washing_program.time_in_minutes:>4} min")


if __name__ == "__main__":
    app()
