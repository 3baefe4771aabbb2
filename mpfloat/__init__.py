#!/usr/bin/env python3
"""
mpfloat: Correctly Rounded Arbitrary Precision Floating-Point Values

This library exposes MPFR values as mutable Python handles. Every handle
has its own precision; operations write their result into the first
argument, rounded in the requested direction, and return it so calls can
be chained. Operands may be handles, Python ints or floats: the matching
engine primitive is chosen from the operand types.

Examples:
    >>> import mpfloat
    >>> mpfloat.set_default_prec(200)
    >>> s, t, u = mpfloat.new(), mpfloat.new(), mpfloat.new()
    >>> _ = s.set(1), t.set(1)
    >>> for i in range(1, 101):
    ...     _ = u.div(u.set(1), t.mul(t, i, mpfloat.RNDU))
    ...     _ = s.add(s, u)

    >>> x = mpfloat.new(64).const_pi()
    >>> x.tostring(10, 20)
    '3.1415926535897932385'
    >>> x.tostring(16, 10, mpfloat.RNDD)
    '3.243f6a888'

    >>> mpfloat.new().set("1@10", 62).tostring(62, 2)
    '1.0@10'

Constants:
    RNDN, RNDZ, RNDU, RNDD, RNDA: Rounding modes (nearest, toward zero,
        toward +Inf, toward -Inf, away from zero)
    PREC_MIN, PREC_MAX: Bounds on the precision of a handle
    Mpfr, new: The handle type and its constructor
    version: Library and engine version
"""

from . import operations, textconv  # noqa: F401  (registers operations)
from .context import (
    PREC_MAX,
    PREC_MIN,
    defaults,
    free_cache,
    get_default_prec,
    get_default_rounding_mode,
    set_default_prec,
    set_default_rounding_mode,
)
from .dispatch import OPERATIONS, install
from .errors import (
    ArgumentError,
    ArgumentRangeError,
    ArgumentTypeError,
    DispatchError,
    MpfrError,
    ParseError,
)
from .handle import Mpfr, new
from .rounding import RNDA, RNDD, RNDN, RNDU, RNDZ, RoundingMode
from ._engine import VERSION as _ENGINE_VERSION

install(Mpfr)

# Every operation is also a module-level function: mpfloat.add(z, x, y).
globals().update(OPERATIONS)

__version__ = "0.3.0"
version = f"mpfloat {__version__}, {_ENGINE_VERSION}"

__all__ = [
    "Mpfr",
    "new",
    "RoundingMode",
    "RNDN",
    "RNDZ",
    "RNDU",
    "RNDD",
    "RNDA",
    "PREC_MIN",
    "PREC_MAX",
    "get_default_prec",
    "set_default_prec",
    "get_default_rounding_mode",
    "set_default_rounding_mode",
    "defaults",
    "free_cache",
    "MpfrError",
    "ArgumentError",
    "ArgumentTypeError",
    "ArgumentRangeError",
    "DispatchError",
    "ParseError",
    "version",
]
