"""
Operation dispatch tables.

The engine exposes a separate primitive for every operand-type
combination (``sub``, ``sub_si``, ``sub_d``, ``si_sub``, ``d_sub``, ...).
Each table below binds an operation name to the primitives of one shape;
calling the entry classifies the arguments, resolves the rounding mode and
picks the primitive whose signature matches. All arguments are validated
before the destination handle is written.

Entries are installed onto ``Mpfr`` as methods and re-exported by the
package as module-level functions, so ``z.add(x, y)`` and
``mpfloat.add(z, x, y)`` are the same call.
"""

from __future__ import annotations

import logging
import types
from dataclasses import dataclass
from typing import Callable

from . import _engine
from .context import check_integer, resolve_rounding
from .errors import ArgumentError, DispatchError
from .handle import Mpfr
from .operands import OperandKind, check_handle, check_long, check_ulong, classify

logger = logging.getLogger(__name__)

OPERATIONS: dict[str, Callable] = {}


class Operation:
    """Base for table entries; binds like a function when read off a handle."""

    name: str

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


@dataclass(frozen=True, repr=False)
class Constant(Operation):
    """``z.const_pi([rnd])`` -> z"""

    name: str
    fn: _engine.Primitive

    def __call__(self, z, rnd=None):
        dest = check_handle(z, 1, self.name)
        r = resolve_rounding(rnd, 2, self.name)
        dest._store(*self.fn(dest._prec, r))
        return dest


@dataclass(frozen=True, repr=False)
class Unary(Operation):
    """``z.exp(x, [rnd])`` -> z"""

    name: str
    fn: _engine.Primitive

    def __call__(self, z, x, rnd=None):
        dest = check_handle(z, 1, self.name)
        src = check_handle(x, 2, self.name)
        r = resolve_rounding(rnd, 3, self.name)
        dest._store(*self.fn(dest._prec, r, src._value))
        return dest


@dataclass(frozen=True, repr=False)
class UnaryOrUnsigned(Operation):
    """``z.sqrt(x | n, [rnd])`` -> z, with ``n`` an unsigned machine integer."""

    name: str
    fr: _engine.Primitive
    ui: _engine.Primitive

    def __call__(self, z, x, rnd=None):
        dest = check_handle(z, 1, self.name)
        if isinstance(x, Mpfr):
            fn, arg = self.fr, x._value
        else:
            n = check_integer(x, 2, self.name, "Mpfr or unsigned integer")
            fn, arg = self.ui, check_ulong(n, 2, self.name)
        r = resolve_rounding(rnd, 3, self.name)
        logger.debug("%s: dispatch to %s", self.name, fn.name)
        dest._store(*fn(dest._prec, r, arg))
        return dest


@dataclass(frozen=True, repr=False)
class UnaryPair(Operation):
    """``y.sin_cos(z, x, [rnd])`` -> (y, z); each rounded to its own precision."""

    name: str
    fn: _engine.PairPrimitive

    def __call__(self, y, z, x, rnd=None):
        first = check_handle(y, 1, self.name)
        second = check_handle(z, 2, self.name)
        src = check_handle(x, 3, self.name)
        r = resolve_rounding(rnd, 4, self.name)
        if first is second:
            raise ArgumentError(self.name, 2, "destinations must be distinct handles")
        one, two = self.fn(first._prec, second._prec, r, src._value)
        first._store(*one)
        second._store(*two)
        return first, second


@dataclass(frozen=True, repr=False)
class Binary(Operation):
    """``z.sub(x, y, [rnd])`` -> z, with x and y handles, integers or doubles.

    At least one of x, y must be a handle. With a number on the left the
    left-operand primitive is used when the engine has one; otherwise the
    operands are swapped into the right-operand primitive, which is only
    sound for commutative operations.
    """

    name: str
    fr_fr: _engine.Primitive
    fr_si: _engine.Primitive
    fr_d: _engine.Primitive
    si_fr: _engine.Primitive | None = None
    d_fr: _engine.Primitive | None = None
    commutative: bool = False

    def _select(self, left, right):
        if left.kind is OperandKind.PRECISION:
            if right.kind is OperandKind.INTEGRAL:
                return self.fr_si, (left.value, right.value)
            if right.kind is OperandKind.NATIVE_FLOAT:
                return self.fr_d, (left.value, right.value)
            return self.fr_fr, (left.value, right.value)
        if left.kind is OperandKind.INTEGRAL:
            flipped, swapped = self.si_fr, self.fr_si
        else:
            flipped, swapped = self.d_fr, self.fr_d
        if flipped is not None:
            return flipped, (left.value, right.value)
        if self.commutative:
            return swapped, (right.value, left.value)
        raise DispatchError(
            self.name, 2, f"unsupported operand order: {left.kind.value} on the left"
        )

    def __call__(self, z, x, y, rnd=None):
        dest = check_handle(z, 1, self.name)
        left = classify(x, 2, self.name)
        if left.kind is OperandKind.PRECISION:
            right = classify(y, 3, self.name)
        else:
            right = classify(check_handle(y, 3, self.name), 3, self.name)
        r = resolve_rounding(rnd, 4, self.name)
        fn, args = self._select(left, right)
        logger.debug("%s: dispatch to %s", self.name, fn.name)
        dest._store(*fn(dest._prec, r, *args))
        return dest


@dataclass(frozen=True, repr=False)
class BinaryFixed(Operation):
    """``z.atan2(x, y, [rnd])`` -> z, handles only."""

    name: str
    fn: _engine.Primitive

    def __call__(self, z, x, y, rnd=None):
        dest = check_handle(z, 1, self.name)
        a = check_handle(x, 2, self.name)
        b = check_handle(y, 3, self.name)
        r = resolve_rounding(rnd, 4, self.name)
        dest._store(*self.fn(dest._prec, r, a._value, b._value))
        return dest


@dataclass(frozen=True, repr=False)
class IntegerThenHandle(Operation):
    """``z.jn(n, x, [rnd])`` -> z, with ``n`` a signed machine integer."""

    name: str
    fn: _engine.Primitive

    def __call__(self, z, n, x, rnd=None):
        dest = check_handle(z, 1, self.name)
        order = check_long(check_integer(n, 2, self.name), 2, self.name)
        src = check_handle(x, 3, self.name)
        r = resolve_rounding(rnd, 4, self.name)
        dest._store(*self.fn(dest._prec, r, order, src._value))
        return dest


@dataclass(frozen=True, repr=False)
class Predicate(Operation):
    """``x.nan_p()`` -> bool"""

    name: str
    fn: Callable

    def __call__(self, x):
        return bool(self.fn(check_handle(x, 1, self.name)._value))


@dataclass(frozen=True, repr=False)
class Relation(Operation):
    """``x.less_p(y)`` -> bool; false for every ordering when a NaN is involved."""

    name: str
    fn: Callable

    def __call__(self, x, y):
        a = check_handle(x, 1, self.name)
        b = check_handle(y, 2, self.name)
        return bool(self.fn(a._value, b._value))


CONSTANTS = ("const_log2", "const_pi", "const_euler", "const_catalan")

UNARY = (
    "sqr", "rec_sqrt", "cbrt", "abs", "neg",
    "log", "log2", "log10", "log1p",
    "exp", "exp2", "exp10", "expm1",
    "cos", "sin", "tan", "sec", "csc", "cot",
    "acos", "asin", "atan",
    "cosh", "sinh", "tanh", "sech", "csch", "coth",
    "acosh", "asinh", "atanh",
    "eint", "li2", "gamma", "lngamma", "digamma",
    "erf", "erfc", "j0", "j1", "y0", "y1", "ai",
    "rint", "rint_ceil", "rint_floor", "rint_round", "rint_trunc", "frac",
)

UNARY_OR_UNSIGNED = ("sqrt", "zeta")

UNARY_PAIR = ("modf", "sin_cos", "sinh_cosh")

# name, commutative
BINARY = (
    ("add", True),
    ("sub", False),
    ("mul", True),
    ("div", False),
)

BINARY_FIXED = ("fmod", "remainder", "atan2", "agm", "hypot", "min", "max")

INTEGER_THEN_HANDLE = ("jn", "yn")


def _optional(name):
    return _engine.lookup(name) if _engine.has(name) else None


def _add(entry: Operation) -> None:
    OPERATIONS[entry.name] = entry


def register(name: str):
    """Register a hand-written operation under ``name``."""

    def decorator(fn):
        OPERATIONS[name] = fn
        return fn

    return decorator


def _build_tables() -> None:
    lookup = _engine.lookup
    for name in CONSTANTS:
        _add(Constant(name, lookup(name)))
    for name in UNARY:
        _add(Unary(name, lookup(name)))
    for name in UNARY_OR_UNSIGNED:
        _add(UnaryOrUnsigned(name, lookup(name), lookup(f"{name}_ui")))
    for name in UNARY_PAIR:
        _add(UnaryPair(name, lookup(name)))
    for name, commutative in BINARY:
        _add(
            Binary(
                name,
                lookup(name),
                lookup(f"{name}_si"),
                lookup(f"{name}_d"),
                _optional(f"si_{name}"),
                _optional(f"d_{name}"),
                commutative,
            )
        )
    for name in BINARY_FIXED:
        _add(BinaryFixed(name, lookup(name)))
    for name in INTEGER_THEN_HANDLE:
        _add(IntegerThenHandle(name, lookup(name)))
    for name, fn in _engine.PREDICATES.items():
        _add(Predicate(name, fn))
    for name, fn in _engine.RELATIONS.items():
        _add(Relation(name, fn))


_build_tables()


def install(cls) -> None:
    """Attach every registered operation to ``cls`` as a method."""
    for name, op in OPERATIONS.items():
        setattr(cls, name, op)
    logger.debug("installed %d operations on %s", len(OPERATIONS), cls.__name__)
