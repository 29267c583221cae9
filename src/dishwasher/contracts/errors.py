"""Device failure exceptions.

These are the only failures the orchestrator translates into a Status.
Anything else raised by a device is a bug and propagates.
"""


class DeviceError(Exception):
    """Base class for failures reported by a device during a commanded action.

    Attributes:
        device: Name of the device that failed, when known
    """

    def __init__(self, message: str = "", *, device: str | None = None) -> None:
        self.device = device
        super().__init__(message or f"{device or 'device'} failed")


class PumpError(DeviceError):
    """Raised by a water pump that could not pour."""

    def __init__(self, message: str = "", *, device: str | None = "water_pump") -> None:
        super().__init__(message, device=device)


class EngineError(DeviceError):
    """Raised by an engine that could not run a program."""

    def __init__(self, message: str = "", *, device: str | None = "engine") -> None:
        super().__init__(message, device=device)
