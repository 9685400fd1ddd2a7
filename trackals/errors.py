"""
Exception types raised by the correction engine and the optimizer.
"""


class TrackALSError(Exception):
    """Base class for all trackals errors."""


class ValidationError(TrackALSError, ValueError):
    """Input data failed validation (too short, non-numeric, unordered...)."""


class ConfigurationError(ValidationError):
    """An option value is out of range or of the wrong type."""


class UnsupportedMethodError(ConfigurationError):
    """The requested baseline method is not registered."""

    def __init__(self, method, available=()):
        self.method = method
        self.available = list(available)
        message = f"Unsupported baseline method: {method!r}"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)


class NumericalError(TrackALSError, ArithmeticError):
    """A numerical kernel could not produce a finite result (e.g. singular system)."""
