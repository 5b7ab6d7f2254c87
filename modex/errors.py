"""
Exceptions raised by ModEx.

Format errors and rejected uploads are the caller's fault, engine
errors come from the effort computation, and a lookup miss is an
expected outcome that only becomes an exception when asked for one.
"""

from typing import Optional, Sequence


class ModexError(Exception):
    """Base class for all ModEx errors."""


class ParseError(ModexError, ValueError):
    """
    The network text does not follow the input format.

    ``line_number`` is 1-based and points at the offending line, or is
    None when the failure is not tied to a line (an empty stream).
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"


class EngineError(ModexError):
    """The extremism/effort engine could not produce a result."""


class InvalidStrategyError(EngineError, ValueError):
    """A strategy vector does not match the network it is applied to."""


class InsufficientResourcesError(EngineError):
    """The effort of a strategy exceeds the network's resources."""

    def __init__(self, efforts: Sequence[float], total: float, resources: int):
        super().__init__(
            f"strategy needs {total:g} effort but only {resources} resources are available"
        )
        self.efforts = list(efforts)
        self.total = total
        self.resources = resources


class NetworkNotFoundError(ModexError, KeyError):
    """No network is registered under the requested key."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"network not found: {self.key}"


class UploadRejectedError(ModexError, ValueError):
    """An upload was refused before parsing (bad name, size or encoding)."""
