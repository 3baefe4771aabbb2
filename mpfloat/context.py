"""
Process-wide defaults and the resolvers that apply them.

The default precision and rounding mode are plain module state. Access is
assumed to be single-threaded: callers sharing the defaults across threads
must serialize those calls themselves.
"""

from __future__ import annotations

import logging
import math
import numbers
from contextlib import contextmanager

from . import _engine
from .errors import ArgumentRangeError, ArgumentTypeError, range_message
from .rounding import RoundingMode

logger = logging.getLogger(__name__)

PREC_MIN = _engine.PREC_MIN
PREC_MAX = _engine.PREC_MAX

_default_prec = _engine.DEFAULT_PREC
_default_rnd = RoundingMode.RNDN


def as_integer(value) -> int | None:
    """Return ``value`` as an int when it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        if math.isfinite(value) and value.is_integer():
            return int(value)
    return None


def check_integer(value, position: int, function: str, expected: str = "integer") -> int:
    n = as_integer(value)
    if n is None:
        raise ArgumentTypeError(
            function, position, f"{expected} expected, got {type(value).__name__}"
        )
    return n


def check_prec(value, position: int, function: str) -> int:
    prec = check_integer(value, position, function)
    if not PREC_MIN <= prec <= PREC_MAX:
        raise ArgumentRangeError(
            function, position, range_message("precision", PREC_MIN, PREC_MAX)
        )
    return prec


def check_rounding(value, position: int, function: str) -> RoundingMode:
    code = check_integer(value, position, function, "rounding mode")
    try:
        return RoundingMode(code)
    except ValueError:
        names = ", ".join(mode.name for mode in RoundingMode)
        raise ArgumentRangeError(
            function, position, f"rounding mode must be one of {names}"
        ) from None


def resolve_precision(value, position: int, function: str) -> int:
    if value is None:
        return _default_prec
    return check_prec(value, position, function)


def resolve_rounding(value, position: int, function: str) -> RoundingMode:
    if value is None:
        return _default_rnd
    return check_rounding(value, position, function)


def get_default_prec() -> int:
    return _default_prec


def set_default_prec(prec) -> None:
    global _default_prec
    _default_prec = check_prec(prec, 1, "set_default_prec")
    logger.debug("default precision set to %d", _default_prec)


def get_default_rounding_mode() -> RoundingMode:
    return _default_rnd


def set_default_rounding_mode(rnd) -> None:
    global _default_rnd
    _default_rnd = check_rounding(rnd, 1, "set_default_rounding_mode")
    logger.debug("default rounding mode set to %s", _default_rnd.name)


@contextmanager
def defaults(prec=None, rnd=None):
    """Temporarily replace the default precision and/or rounding mode.

    Both arguments are validated before anything changes; the previous
    defaults are restored on exit, including when the block raises.

        >>> with defaults(prec=200, rnd=RNDD):
        ...     x = Mpfr().const_pi()
        >>> x.get_prec()
        200
    """
    global _default_prec, _default_rnd
    new_prec = resolve_precision(prec, 1, "defaults")
    new_rnd = resolve_rounding(rnd, 2, "defaults")
    saved = _default_prec, _default_rnd
    _default_prec, _default_rnd = new_prec, new_rnd
    try:
        yield
    finally:
        _default_prec, _default_rnd = saved


def free_cache() -> None:
    """Release the engine's cached constants (pi, log 2, ...)."""
    _engine.free_cache()
    logger.debug("engine constant cache released")
