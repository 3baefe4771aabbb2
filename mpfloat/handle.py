"""
The Mpfr value handle.

An ``Mpfr`` owns exactly one engine value and a fixed precision. Every
operation that takes a handle as its first argument writes the rounded
result into it and returns it, so calls chain:

    >>> s = Mpfr(200)
    >>> _ = s.set(1).div(s, 3)
    >>> print(s.tostring(10, 20))
    3.3333333333333333333e-1

The operations themselves are installed onto the class by
``mpfloat.dispatch.install``.
"""

from __future__ import annotations

import numbers

from . import _engine
from .context import resolve_precision


def _is_number(value) -> bool:
    return isinstance(value, (Mpfr, numbers.Real)) and not isinstance(value, bool)


class Mpfr:
    """Arbitrary-precision floating-point cell; starts out as NaN."""

    __slots__ = ("_value", "_prec", "_ternary")

    __hash__ = None

    def __init__(self, prec=None):
        prec = resolve_precision(prec, 1, "new")
        self._prec = prec
        self._value = _engine.nan(prec)
        self._ternary = 0

    def _store(self, value, ternary: int) -> None:
        self._value = value
        self._ternary = ternary

    def _reset(self, prec: int) -> None:
        self._prec = prec
        self._store(_engine.nan(prec), 0)

    @property
    def ternary(self) -> int:
        """Exactness of the last write: 0 exact, <0 rounded down, >0 rounded up."""
        return self._ternary

    def __str__(self) -> str:
        return self.tostring()

    def __repr__(self) -> str:
        return f"<Mpfr {self.tostring()} prec={self._prec}>"

    def __float__(self) -> float:
        return float(self.tonumber())

    # Comparisons follow the engine's unordered semantics: any NaN operand
    # makes every ordering false and ``!=`` true.

    def _order(self, other):
        if isinstance(other, Mpfr):
            if _engine.PREDICATES["nan_p"](other._value):
                return None
        elif other != other:
            return None
        if _engine.PREDICATES["nan_p"](self._value):
            return None
        return self.cmp(other)

    def __eq__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is not None and order == 0

    def __ne__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is None or order != 0

    def __lt__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is not None and order < 0

    def __le__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is not None and order <= 0

    def __gt__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is not None and order > 0

    def __ge__(self, other):
        if not _is_number(other):
            return NotImplemented
        order = self._order(other)
        return order is not None and order >= 0

    # Arithmetic operators allocate a result at the widest handle precision.

    def _widest(self, other) -> int:
        if isinstance(other, Mpfr):
            return max(self._prec, other._prec)
        return self._prec

    def _lift(self, value) -> Mpfr:
        if not isinstance(value, numbers.Integral):
            return Mpfr(53).set(float(value))
        n = int(value)
        return Mpfr(max(abs(n).bit_length(), _engine.PREC_MIN)).set(n)

    def __add__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._widest(other)).add(self, other)

    def __radd__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._prec).add(other, self)

    def __sub__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._widest(other)).sub(self, other)

    def __rsub__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._prec).sub(other, self)

    def __mul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._widest(other)).mul(self, other)

    def __rmul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._prec).mul(other, self)

    def __truediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._widest(other)).div(self, other)

    def __rtruediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Mpfr(self._prec).div(other, self)

    def __pow__(self, other):
        if not _is_number(other):
            return NotImplemented
        if not isinstance(other, (Mpfr, numbers.Integral)):
            other = self._lift(other)
        return Mpfr(self._widest(other)).pow(self, other)

    def __rpow__(self, other):
        if not _is_number(other):
            return NotImplemented
        if not isinstance(other, numbers.Integral) or other < 0:
            other = self._lift(other)
        return Mpfr(self._prec).pow(other, self)

    def __neg__(self):
        return Mpfr(self._prec).neg(self)

    def __abs__(self):
        return Mpfr(self._prec).abs(self)


def new(prec=None) -> Mpfr:
    """Create a NaN handle of ``prec`` bits (default precision when omitted)."""
    return Mpfr(prec)
