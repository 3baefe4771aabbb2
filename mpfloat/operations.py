"""
Operations whose argument shapes do not fit a dispatch table.

Each is registered under its public name and installed onto ``Mpfr``
alongside the table entries.
"""

from __future__ import annotations

import logging
import numbers

from . import _engine
from .context import (
    check_integer,
    check_prec,
    check_rounding,
    resolve_rounding,
)
from .dispatch import register
from .errors import ArgumentTypeError
from .handle import Mpfr
from .operands import (
    OperandKind,
    check_base,
    check_handle,
    check_long,
    check_ulong,
    classify,
)
from .textconv import parse

logger = logging.getLogger(__name__)

_SET_VARIANTS = {
    OperandKind.INTEGRAL: "set_si",
    OperandKind.NATIVE_FLOAT: "set_d",
    OperandKind.PRECISION: "set",
}


@register("set")
def assign(z, value, base=None, rnd=None):
    """``z.set(number | Mpfr | str, [base], [rnd])`` -> z

    ``base`` (2 to 62, default 10) applies to strings only.
    """
    dest = check_handle(z, 1, "set")
    if isinstance(value, str):
        b = check_base(base, 3, "set")
        r = resolve_rounding(rnd, 4, "set")
        dest._store(*parse(value, b, dest._prec, r))
        return dest
    operand = classify(value, 2, "set")
    if base is not None:
        raise ArgumentTypeError("set", 3, "base applies to strings only")
    r = resolve_rounding(rnd, 4, "set")
    dest._store(*_engine.lookup(_SET_VARIANTS[operand.kind])(dest._prec, r, operand.value))
    return dest


def _sign(value, position, function):
    if value is None:
        return 1
    return -1 if check_integer(value, position, function) < 0 else 1


@register("set_nan")
def set_nan(z):
    dest = check_handle(z, 1, "set_nan")
    dest._store(_engine.nan(dest._prec), 0)
    return dest


@register("set_inf")
def set_inf(z, sign=None):
    """``z.set_inf([sign])`` -> z; negative ``sign`` gives -Inf."""
    dest = check_handle(z, 1, "set_inf")
    s = _sign(sign, 2, "set_inf")
    dest._store(*_engine.lookup("set_inf")(dest._prec, _engine.RNDN, s))
    return dest


@register("set_zero")
def set_zero(z, sign=None):
    """``z.set_zero([sign])`` -> z; negative ``sign`` gives -0."""
    dest = check_handle(z, 1, "set_zero")
    s = _sign(sign, 2, "set_zero")
    dest._store(*_engine.lookup("set_zero")(dest._prec, _engine.RNDN, s))
    return dest


@register("pow")
def power(z, x, y, rnd=None):
    """``z.pow(x, y, [rnd])`` -> z

    x is a handle or an unsigned integer; y is a handle or an integer.
    A negative integer exponent needs a handle base.
    """
    dest = check_handle(z, 1, "pow")
    if isinstance(x, Mpfr):
        base = x._value
        integer_base = False
    else:
        n = check_integer(x, 2, "pow", "Mpfr or unsigned integer")
        base = check_ulong(n, 2, "pow")
        integer_base = True

    if isinstance(y, Mpfr):
        exponent = y._value
        name = "ui_pow" if integer_base else "pow"
    else:
        m = check_integer(y, 3, "pow", "Mpfr or integer")
        if integer_base:
            exponent = check_ulong(m, 3, "pow")
            name = "ui_pow_ui"
        elif m < 0:
            exponent = check_long(m, 3, "pow")
            name = "pow_si"
        else:
            exponent = check_ulong(m, 3, "pow")
            name = "pow_ui"

    r = resolve_rounding(rnd, 4, "pow")
    logger.debug("pow: dispatch to %s", name)
    dest._store(*_engine.lookup(name)(dest._prec, r, base, exponent))
    return dest


@register("root")
def root(z, x, k, rnd=None):
    """``z.root(x, k, [rnd])`` -> z, the k-th root of x (NaN for k = 0)."""
    dest = check_handle(z, 1, "root")
    src = check_handle(x, 2, "root")
    k = check_ulong(check_integer(k, 3, "root"), 3, "root")
    r = resolve_rounding(rnd, 4, "root")
    dest._store(*_engine.lookup("root")(dest._prec, r, src._value, k))
    return dest


@register("fac")
def fac(z, n, rnd=None):
    """``z.fac(n, [rnd])`` -> z, n! rounded to z's precision."""
    dest = check_handle(z, 1, "fac")
    n = check_ulong(check_integer(n, 2, "fac"), 2, "fac")
    r = resolve_rounding(rnd, 3, "fac")
    dest._store(*_engine.lookup("fac_ui")(dest._prec, r, n))
    return dest


def _fused(name):
    def fused(z, x, y, w, rnd=None):
        dest = check_handle(z, 1, name)
        a = check_handle(x, 2, name)
        b = check_handle(y, 3, name)
        c = check_handle(w, 4, name)
        r = resolve_rounding(rnd, 5, name)
        dest._store(*_engine.lookup(name)(dest._prec, r, a._value, b._value, c._value))
        return dest

    fused.__name__ = fused.__qualname__ = name
    return fused


# z = x*y + w and z = x*y - w with a single rounding.
fma = register("fma")(_fused("fma"))
fms = register("fms")(_fused("fms"))


@register("copysign")
def copysign(z, x, y, rnd=None):
    """``z.copysign(x, y, [rnd])`` -> z, |x| with the sign of y."""
    dest = check_handle(z, 1, "copysign")
    a = check_handle(x, 2, "copysign")
    b = check_handle(y, 3, "copysign")
    r = resolve_rounding(rnd, 4, "copysign")
    dest._store(*_engine.lookup("copysign")(dest._prec, r, a._value, b._value))
    return dest


_CMP_VARIANTS = {
    OperandKind.INTEGRAL: _engine.exact_int,
    OperandKind.NATIVE_FLOAT: _engine.exact_double,
    OperandKind.PRECISION: lambda value: value,
}


@register("cmp")
def cmp(x, y) -> int:
    """``x.cmp(y)`` -> negative, 0 or positive; 0 when either side is NaN."""
    src = check_handle(x, 1, "cmp")
    if isinstance(y, numbers.Rational) and not isinstance(y, bool):
        # Any size of int, and fractions, compare exactly.
        return _engine.cmp_rational(src._value, _engine.exact_rational(y))
    operand = classify(y, 2, "cmp")
    return _engine.cmp(src._value, _CMP_VARIANTS[operand.kind](operand.value))


@register("cmpabs")
def cmpabs(x, y) -> int:
    a = check_handle(x, 1, "cmpabs")
    b = check_handle(y, 2, "cmpabs")
    return _engine.cmpabs(a._value, b._value)


@register("sgn")
def sgn(x) -> int:
    return _engine.sgn(check_handle(x, 1, "sgn")._value)


@register("get_prec")
def get_prec(x) -> int:
    return check_handle(x, 1, "get_prec")._prec


@register("set_prec")
def set_prec(x, prec) -> None:
    """Change the precision of ``x``; its value becomes NaN."""
    dest = check_handle(x, 1, "set_prec")
    dest._reset(check_prec(prec, 2, "set_prec"))


@register("min_prec")
def min_prec(x) -> int:
    """Bits needed to hold the significand of ``x`` (0 for NaN, Inf, 0)."""
    return _engine.min_prec(check_handle(x, 1, "min_prec")._value)


@register("prec_round")
def prec_round(x, prec, rnd=None):
    """``x.prec_round(prec, [rnd])`` -> x, rounded to a new precision."""
    dest = check_handle(x, 1, "prec_round")
    p = check_prec(prec, 2, "prec_round")
    r = resolve_rounding(rnd, 3, "prec_round")
    value, ternary = _engine.lookup("set")(p, r, dest._value)
    dest._prec = p
    dest._store(value, ternary)
    return dest


@register("can_round")
def can_round(x, err, rnd1, rnd2, prec) -> bool:
    """Whether ``x``, approximating some value with error at most
    2**(EXP(x) - err) in direction ``rnd1``, can be rounded correctly to
    ``prec`` bits in direction ``rnd2``."""
    src = check_handle(x, 1, "can_round")
    e = check_long(check_integer(err, 2, "can_round"), 2, "can_round")
    r1 = check_rounding(rnd1, 3, "can_round")
    r2 = check_rounding(rnd2, 4, "can_round")
    p = check_prec(prec, 5, "can_round")
    return _engine.can_round(src._value, e, r1, r2, p)
