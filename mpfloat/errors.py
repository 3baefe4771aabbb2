"""Structured error types raised by the binding layer.

Every error is raised before the destination handle is written, so a
failed call never leaves a partially updated value behind.
"""

from __future__ import annotations


class MpfrError(Exception):
    """Base class for structured mpfloat errors."""


class ArgumentError(MpfrError):
    """A call argument was rejected.

    ``position`` is the 1-based index of the offending argument, counting
    the destination (or ``self``) as argument 1.
    """

    def __init__(self, function: str, position: int, message: str) -> None:
        self.function = function
        self.position = position
        self.message = message
        super().__init__(function, position, message)

    def __str__(self) -> str:
        return f"{self.function}(): bad argument #{self.position} ({self.message})"


class ArgumentTypeError(ArgumentError, TypeError):
    """Operand is neither a recognized number nor an Mpfr handle."""


class ArgumentRangeError(ArgumentError, ValueError):
    """Integer, precision, base or rounding mode outside its valid range."""


class DispatchError(ArgumentTypeError):
    """No primitive variant exists for the observed operand shapes."""


class ParseError(ArgumentError, ValueError):
    """Text is not a valid number in the requested base."""


def range_message(what: str, low: int, high: int) -> str:
    return f"{what} must be between {low} and {high}"
