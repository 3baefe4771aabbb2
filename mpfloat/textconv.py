"""
Conversion between Mpfr values and text or native numbers.

Rendered text has the form ``[-]D.DDDD[{e|@}EXP]``: one digit before the
point, the exponent (a power of the base, written in decimal) introduced
by ``e`` for bases up to 10 and by ``@`` above, and omitted when it is 0.
NaN and the infinities use the engine's tokens in every base; zeros render
as ``0`` or ``-0``.
"""

from __future__ import annotations

import math

from . import _engine
from .context import check_integer, resolve_rounding
from .dispatch import register
from .errors import ArgumentRangeError, ParseError
from .operands import check_base, check_handle


def default_digits(prec: int, base: int) -> int:
    """Digits the engine needs to represent ``prec`` bits in ``base``."""
    return math.ceil(prec * math.log(2) / math.log(base)) + 1


def output_size(prec: int, base: int = 10, digits: int = 0) -> int:
    """Upper bound on the length of ``render`` output.

    digits + sign + point + exponent marker + exponent sign + exponent
    digits, where the exponent can never exceed the engine's largest
    binary exponent in magnitude.
    """
    if not digits:
        digits = default_digits(prec, base)
    exponent = len(str(max(abs(_engine.EMIN), _engine.EMAX)))
    return digits + 4 + exponent


def render(value, base: int = 10, digits: int = 0, rnd=_engine.RNDN) -> str:
    if _engine.PREDICATES["nan_p"](value):
        return _engine.NAN_TOKEN
    negative = _engine.signbit(value)
    if _engine.PREDICATES["inf_p"](value):
        return "-" + _engine.INF_TOKEN if negative else _engine.INF_TOKEN
    if _engine.PREDICATES["zero_p"](value):
        return "-0" if negative else "0"

    mantissa, exp = _engine.get_str(value, base, digits, rnd)
    sign = ""
    if mantissa.startswith("-"):
        sign, mantissa = "-", mantissa[1:]
    text = f"{sign}{mantissa[0]}.{mantissa[1:]}"
    exp -= 1
    if exp:
        text += f"{'@' if base > 10 else 'e'}{exp}"
    return text


def parse(text: str, base: int, prec: int, rnd, *, function: str = "set", position: int = 2):
    """Round ``text`` to ``prec`` bits; returns (value, ternary).

    The whole string must be a number: blank text, digit-group
    underscores and trailing whitespace are rejected.
    """
    if not text.strip() or "_" in text or text != text.rstrip():
        raise ParseError(function, position, "not a valid number in given base")
    try:
        return _engine.lookup("set_str")(prec, rnd, text, base)
    except ValueError as exc:
        raise ParseError(function, position, "not a valid number in given base") from exc


def check_digits(value, position: int, function: str) -> int:
    digits = check_integer(value, position, function)
    if digits < 0 or digits == 1:
        raise ArgumentRangeError(
            function, position, "digit count must be 0 or at least 2"
        )
    return digits


@register("tostring")
def tostring(x, base=None, digits=None, rnd=None) -> str:
    """``x.tostring([base], [digits], [rnd])`` -> str

    ``digits`` of 0 (the default) lets the engine pick enough digits for
    the value's own precision.
    """
    src = check_handle(x, 1, "tostring")
    b = check_base(base, 2, "tostring")
    n = 0 if digits is None else check_digits(digits, 3, "tostring")
    r = resolve_rounding(rnd, 4, "tostring")
    return render(src._value, b, n, r)


@register("tonumber")
def tonumber(x, rnd=None):
    """``x.tonumber([rnd])`` -> int when x is an integer fitting a machine
    word, float otherwise."""
    src = check_handle(x, 1, "tonumber")
    r = resolve_rounding(rnd, 2, "tonumber")
    if _engine.fits_slong(src._value):
        return _engine.get_si(src._value)
    return _engine.get_d(src._value, r)
