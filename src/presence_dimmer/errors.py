"""
Exception taxonomy for the presence dimmer.

BoundaryFatalError ends the process, DecodeError skips a single tick and
ActuatorError is isolated to the device that raised it.
"""


class PresenceDimmerError(Exception):
    """Base class for all presence dimmer errors."""


class BoundaryFatalError(PresenceDimmerError):
    """Raised when the camera or inference engine is unusable."""


class DecodeError(PresenceDimmerError):
    """Raised when an output tensor cannot be interpreted."""


class ActuatorError(PresenceDimmerError):
    """Raised when a brightness device cannot be enumerated or set."""

    def __init__(self, message: str, device: str | None = None):
        super().__init__(message)
        self.device = device


class ConfigValidationError(PresenceDimmerError):
    """Raised when config validation fails."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
