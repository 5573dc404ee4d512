"""Exception hierarchy for the simulation engine."""

from __future__ import annotations


class MDError(Exception):
    """Base class for all engine errors."""


class ResourceError(MDError, OSError):
    """A file or stream could not be opened, read or written."""


class MalformedTopologyError(MDError, ValueError):
    """
    A topology record could not be parsed.

    Attributes:
        line: 1-based line number of the offending record, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class NumericalError(MDError, ArithmeticError):
    """Degenerate geometry or a non-finite force or energy."""


class ConfigurationError(MDError, ValueError):
    """Invalid simulation parameters."""
