"""Operand classification and integer range checks."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum

from . import _engine
from .context import as_integer, check_integer
from .errors import ArgumentRangeError, ArgumentTypeError, range_message
from .handle import Mpfr


class OperandKind(str, Enum):
    INTEGRAL = "integral"
    NATIVE_FLOAT = "native_float"
    PRECISION = "precision"


@dataclass(frozen=True)
class Operand:
    """A classified argument.

    ``value`` is an int for INTEGRAL (always within the signed machine
    word), a float for NATIVE_FLOAT and the handle's engine value for
    PRECISION. The engine value is captured at classification time, so a
    handle passed as both source and destination reads its old value.
    """

    kind: OperandKind
    value: object


def _is_negative_zero(value) -> bool:
    return isinstance(value, float) and value == 0.0 and math.copysign(1.0, value) < 0


def classify(value, position: int, function: str) -> Operand:
    if isinstance(value, Mpfr):
        return Operand(OperandKind.PRECISION, value._value)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ArgumentTypeError(
            function, position, f"number or Mpfr expected, got {type(value).__name__}"
        )
    if not _is_negative_zero(value):
        n = as_integer(value)
        if n is not None and _engine.LONG_MIN <= n <= _engine.LONG_MAX:
            return Operand(OperandKind.INTEGRAL, n)
    try:
        d = float(value)
    except OverflowError:
        d = None
    if d is None or (not isinstance(value, float) and d != value):
        raise ArgumentRangeError(
            function,
            position,
            range_message("integer", _engine.LONG_MIN, _engine.LONG_MAX)
            + " or exactly representable as a double",
        )
    return Operand(OperandKind.NATIVE_FLOAT, d)


def check_handle(value, position: int, function: str) -> Mpfr:
    if not isinstance(value, Mpfr):
        raise ArgumentTypeError(
            function, position, f"Mpfr expected, got {type(value).__name__}"
        )
    return value


def check_ulong(n: int, position: int, function: str) -> int:
    if not 0 <= n <= _engine.ULONG_MAX:
        raise ArgumentRangeError(
            function,
            position,
            "out of range of unsigned long: "
            + range_message("value", 0, _engine.ULONG_MAX),
        )
    return n


def check_long(n: int, position: int, function: str) -> int:
    if not _engine.LONG_MIN <= n <= _engine.LONG_MAX:
        raise ArgumentRangeError(
            function,
            position,
            "out of range of long: "
            + range_message("value", _engine.LONG_MIN, _engine.LONG_MAX),
        )
    return n


def check_base(value, position: int, function: str) -> int:
    if value is None:
        return 10
    base = check_integer(value, position, function)
    if not _engine.BASE_MIN <= base <= _engine.BASE_MAX:
        raise ArgumentRangeError(
            function,
            position,
            range_message("base", _engine.BASE_MIN, _engine.BASE_MAX),
        )
    return base
