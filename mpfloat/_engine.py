"""
Primitive layer over the MPFR engine.

MPFR is reached through gmpy2. This module mirrors the engine's own
interface: one primitive per operand-type combination (``add``,
``add_si``, ``add_d``, ``si_sub``, ``ui_pow_ui``, ...), each taking the
destination precision and a rounding mode and returning the rounded value
together with the engine's ternary (0 when exact, negative when the stored
value is below the exact result, positive when above).

Values are immutable ``gmpy2.mpfr`` objects; the caller owns the handle
that stores them. Integer and double operands are converted to mpfr
values exactly before they reach the engine, so the only rounding that
ever happens is the one into the destination precision.
"""

from __future__ import annotations

import operator
from contextlib import contextmanager

import gmpy2

# Engine mode names and codes, in the engine's declaration order.
ROUNDING_MODES = (
    ("MPFR_RNDN", gmpy2.RoundToNearest),
    ("MPFR_RNDZ", gmpy2.RoundToZero),
    ("MPFR_RNDU", gmpy2.RoundUp),
    ("MPFR_RNDD", gmpy2.RoundDown),
    ("MPFR_RNDA", gmpy2.RoundAwayZero),
)
MODE_PREFIX = "MPFR_"

RNDN = gmpy2.RoundToNearest
RNDZ = gmpy2.RoundToZero
RNDU = gmpy2.RoundUp
RNDD = gmpy2.RoundDown
RNDA = gmpy2.RoundAwayZero

PREC_MIN = 1
PREC_MAX = gmpy2.get_max_precision()
DEFAULT_PREC = 53

EMIN = gmpy2.get_emin_min()
EMAX = gmpy2.get_emax_max()

# C ``long`` / ``unsigned long`` on LP64 platforms.
LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1
ULONG_MAX = 2 ** 64 - 1

BASE_MIN = 2
BASE_MAX = 62

NAN_TOKEN = "@NaN@"
INF_TOKEN = "@Inf@"

VERSION = gmpy2.mpfr_version()


@contextmanager
def _installed(ctx):
    saved = gmpy2.get_context()
    gmpy2.set_context(ctx)
    try:
        yield
    finally:
        gmpy2.set_context(saved)


def _context(prec, rnd):
    return _installed(gmpy2.context(precision=prec, round=int(rnd)))


def exact_int(n):
    return gmpy2.mpfr(n, max(n.bit_length(), PREC_MIN))


def exact_double(d):
    return gmpy2.mpfr(d, 53)


def exact_rational(q):
    return gmpy2.mpq(q.numerator, q.denominator)


def _evaluate(fn, args, prec, rnd):
    with _context(prec, rnd):
        value = gmpy2.mpfr(fn(*args), prec)
        inexact = gmpy2.get_context().inexact
    return value, inexact


def _ternary(fn, args, prec, rnd, value, inexact):
    if not inexact:
        return 0
    if rnd == RNDN:
        lower, _ = _evaluate(fn, args, prec, RNDD)
        return -1 if lower == value else 1
    if rnd == RNDU:
        return 1
    if rnd == RNDD:
        return -1
    below = not gmpy2.is_signed(value)
    if rnd == RNDZ:
        return -1 if below else 1
    return 1 if below else -1


class Primitive:
    """One engine entry point: ``primitive(prec, rnd, *args) -> (value, ternary)``."""

    __slots__ = ("name", "_fn")

    def __init__(self, name, fn):
        self.name = name
        self._fn = fn

    def __call__(self, prec, rnd, *args):
        value, inexact = _evaluate(self._fn, args, prec, rnd)
        return value, _ternary(self._fn, args, prec, rnd, value, inexact)

    def __repr__(self):
        return f"<primitive {self.name}>"


class PairPrimitive:
    """Engine entry point writing two destinations, each at its own precision."""

    __slots__ = ("name", "first", "second")

    def __init__(self, name, fn):
        self.name = name
        self.first = Primitive(name, lambda x: fn(x)[0])
        self.second = Primitive(name, lambda x: fn(x)[1])

    def __call__(self, prec1, prec2, rnd, x):
        return self.first(prec1, rnd, x), self.second(prec2, rnd, x)

    def __repr__(self):
        return f"<primitive {self.name}>"


def _root(x, k):
    if k == 0:
        return gmpy2.nan()
    return gmpy2.root(x, k)


_PRIMITIVES = {}


def _define(name, fn):
    _PRIMITIVES[name] = Primitive(name, fn)


def _define_pair(name, fn):
    _PRIMITIVES[name] = PairPrimitive(name, fn)


# Assignment and special values.
_define("set", lambda x: x)
_define("set_si", exact_int)
_define("set_d", exact_double)
_define("set_str", lambda s, base: gmpy2.mpfr(s, 0, base))
_define("set_nan", gmpy2.nan)
_define("set_inf", gmpy2.inf)
_define("set_zero", gmpy2.zero)

# Constants.
_define("const_log2", gmpy2.const_log2)
_define("const_pi", gmpy2.const_pi)
_define("const_euler", gmpy2.const_euler)
_define("const_catalan", gmpy2.const_catalan)

# One operand.
for _name, _fn in (
    ("sqr", gmpy2.square),
    ("sqrt", gmpy2.sqrt),
    ("rec_sqrt", gmpy2.rec_sqrt),
    ("cbrt", gmpy2.cbrt),
    ("abs", abs),
    ("neg", operator.neg),
    ("log", gmpy2.log),
    ("log2", gmpy2.log2),
    ("log10", gmpy2.log10),
    ("log1p", gmpy2.log1p),
    ("exp", gmpy2.exp),
    ("exp2", gmpy2.exp2),
    ("exp10", gmpy2.exp10),
    ("expm1", gmpy2.expm1),
    ("cos", gmpy2.cos),
    ("sin", gmpy2.sin),
    ("tan", gmpy2.tan),
    ("sec", gmpy2.sec),
    ("csc", gmpy2.csc),
    ("cot", gmpy2.cot),
    ("acos", gmpy2.acos),
    ("asin", gmpy2.asin),
    ("atan", gmpy2.atan),
    ("cosh", gmpy2.cosh),
    ("sinh", gmpy2.sinh),
    ("tanh", gmpy2.tanh),
    ("sech", gmpy2.sech),
    ("csch", gmpy2.csch),
    ("coth", gmpy2.coth),
    ("acosh", gmpy2.acosh),
    ("asinh", gmpy2.asinh),
    ("atanh", gmpy2.atanh),
    ("eint", gmpy2.eint),
    ("li2", gmpy2.li2),
    ("gamma", gmpy2.gamma),
    ("lngamma", gmpy2.lngamma),
    ("digamma", gmpy2.digamma),
    ("zeta", gmpy2.zeta),
    ("erf", gmpy2.erf),
    ("erfc", gmpy2.erfc),
    ("j0", gmpy2.j0),
    ("j1", gmpy2.j1),
    ("y0", gmpy2.y0),
    ("y1", gmpy2.y1),
    ("ai", gmpy2.ai),
    ("rint", gmpy2.rint),
    ("rint_ceil", gmpy2.rint_ceil),
    ("rint_floor", gmpy2.rint_floor),
    ("rint_round", gmpy2.rint_round),
    ("rint_trunc", gmpy2.rint_trunc),
    ("frac", gmpy2.frac),
):
    _define(_name, _fn)

_define("sqrt_ui", lambda n: gmpy2.sqrt(exact_int(n)))
_define("zeta_ui", lambda n: gmpy2.zeta(exact_int(n)))
_define("fac_ui", gmpy2.fac)

# One operand, two results.
_define_pair("modf", gmpy2.modf)
_define_pair("sin_cos", gmpy2.sin_cos)
_define_pair("sinh_cosh", gmpy2.sinh_cosh)

# Two operands, with machine integer and double variants.
for _name, _op in (
    ("add", operator.add),
    ("sub", operator.sub),
    ("mul", operator.mul),
    ("div", operator.truediv),
):
    _define(_name, _op)
    _define(f"{_name}_si", lambda x, n, op=_op: op(x, exact_int(n)))
    _define(f"{_name}_d", lambda x, d, op=_op: op(x, exact_double(d)))

for _name, _op in (("sub", operator.sub), ("div", operator.truediv)):
    _define(f"si_{_name}", lambda n, x, op=_op: op(exact_int(n), x))
    _define(f"d_{_name}", lambda d, x, op=_op: op(exact_double(d), x))

# Two mpfr operands only.
for _name, _fn in (
    ("fmod", gmpy2.fmod),
    ("remainder", gmpy2.remainder),
    ("atan2", gmpy2.atan2),
    ("agm", gmpy2.agm),
    ("hypot", gmpy2.hypot),
    ("min", gmpy2.minnum),
    ("max", gmpy2.maxnum),
    ("copysign", gmpy2.copy_sign),
):
    _define(_name, _fn)

# Integer order, mpfr argument.
_define("jn", gmpy2.jn)
_define("yn", gmpy2.yn)

# Powers and roots.
_define("pow", operator.pow)
_define("pow_ui", lambda x, n: x ** exact_int(n))
_define("pow_si", lambda x, n: x ** exact_int(n))
_define("ui_pow", lambda n, y: exact_int(n) ** y)
_define("ui_pow_ui", lambda n, m: exact_int(n) ** exact_int(m))
_define("root", _root)

# Three operands.
_define("fma", gmpy2.fma)
_define("fms", gmpy2.fms)


def lookup(name):
    """Return the primitive registered under ``name``."""
    return _PRIMITIVES[name]


def has(name):
    return name in _PRIMITIVES


# Predicates never round and never write.
PREDICATES = {
    "nan_p": gmpy2.is_nan,
    "inf_p": gmpy2.is_infinite,
    "number_p": gmpy2.is_finite,
    "zero_p": gmpy2.is_zero,
    "regular_p": gmpy2.is_regular,
    "integer_p": gmpy2.is_integer,
}

RELATIONS = {
    "greater_p": operator.gt,
    "greaterequal_p": operator.ge,
    "less_p": operator.lt,
    "lessequal_p": operator.le,
    "equal_p": operator.eq,
    "lessgreater_p": gmpy2.is_lessgreater,
    "unordered_p": gmpy2.is_unordered,
}


def nan(prec):
    value, _ = lookup("set_nan")(prec, RNDN)
    return value


def signbit(x):
    return gmpy2.is_signed(x)


def sgn(x):
    if gmpy2.is_nan(x) or gmpy2.is_zero(x):
        return 0
    return -1 if gmpy2.is_signed(x) else 1


def cmp(x, y):
    """Three-way comparison; 0 when either side is NaN."""
    if gmpy2.is_nan(x) or gmpy2.is_nan(y):
        return 0
    return gmpy2.cmp(x, y)


def cmp_rational(x, q):
    """Exact comparison against an mpq; 0 when ``x`` is NaN."""
    if gmpy2.is_nan(x):
        return 0
    if gmpy2.is_infinite(x):
        return sgn(x)
    a = gmpy2.mpq(*x.as_integer_ratio())
    return (a > q) - (a < q)


def cmpabs(x, y):
    if gmpy2.is_nan(x) or gmpy2.is_nan(y):
        return 0
    return gmpy2.cmp_abs(x, y)


def min_prec(x):
    """Bits needed to hold the significand of ``x``; 0 for singular values."""
    if not gmpy2.is_regular(x):
        return 0
    man, _ = x.as_mantissa_exp()
    man = abs(int(man))
    return man.bit_length() - ((man & -man).bit_length() - 1)


def get_str(x, base, digits, rnd):
    """Digit string and exponent of a regular ``x``: x = 0.DIGITS * base**exp."""
    with _context(x.precision, rnd):
        mantissa, exp, _ = x.digits(base, digits)
    return mantissa, exp


def get_d(x, rnd):
    ctx = gmpy2.ieee(64)
    ctx.round = int(rnd)
    with _installed(ctx):
        return float(+x)


def fits_slong(x):
    return gmpy2.is_integer(x) and LONG_MIN <= int(x) <= LONG_MAX


def get_si(x):
    return int(x)


def _dyadic(k):
    if k >= 0:
        return gmpy2.mpq(2 ** k)
    return gmpy2.mpq(1, 2 ** -k)


def can_round(b, err, rnd1, rnd2, prec):
    """Whether an approximation ``b`` with error at most 2**(EXP(b)-err),
    obtained in direction ``rnd1``, determines the rounding of the exact
    value to ``prec`` bits in direction ``rnd2``.
    """
    if not gmpy2.is_regular(b) or err <= prec:
        return False
    # Past this bound no rounding boundary other than b itself fits
    # inside the error interval.
    err = min(err, max(b.precision, prec + 2) + 1)
    exp, _ = gmpy2.frexp(b)
    man, shift = b.as_mantissa_exp()
    centre = gmpy2.mpq(int(man)) * _dyadic(int(shift))
    eps = _dyadic(int(exp) - err)
    negative = gmpy2.is_signed(b)
    if rnd1 == RNDN:
        low, high = centre - eps, centre + eps
    elif rnd1 == RNDD or (rnd1 == RNDZ and not negative) or (rnd1 == RNDA and negative):
        low, high = centre, centre + eps
    else:
        low, high = centre - eps, centre
    with _context(prec, rnd2):
        return gmpy2.mpfr(low) == gmpy2.mpfr(high)


def free_cache():
    gmpy2.free_cache()
