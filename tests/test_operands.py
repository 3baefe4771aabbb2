"""
Tests for operand classification and integer range checks

Checks:
1. Integral / NativeFloat / Precision tagging
2. Rejection of non-numeric and boolean operands
3. Machine-word range checks and their messages
"""

import math
from fractions import Fraction

import pytest

import mpfloat
from mpfloat.errors import ArgumentRangeError, ArgumentTypeError
from mpfloat.operands import (
    OperandKind,
    check_base,
    check_handle,
    check_long,
    check_ulong,
    classify,
)


class TestClassify:
    """Tests for classify"""

    def test_int_is_integral(self) -> None:
        """Python ints within a machine word are Integral"""
        operand = classify(42, 2, "add")
        assert operand.kind is OperandKind.INTEGRAL
        assert operand.value == 42

    def test_integer_valued_float_is_integral(self) -> None:
        """A float equal to its truncation is Integral"""
        operand = classify(3.0, 2, "add")
        assert operand.kind is OperandKind.INTEGRAL
        assert operand.value == 3
        assert isinstance(operand.value, int)

    def test_fractional_float_is_native_float(self) -> None:
        operand = classify(2.5, 2, "add")
        assert operand.kind is OperandKind.NATIVE_FLOAT
        assert operand.value == 2.5

    def test_negative_zero_keeps_its_sign(self) -> None:
        """-0.0 stays a double so the sign reaches the engine"""
        operand = classify(-0.0, 2, "add")
        assert operand.kind is OperandKind.NATIVE_FLOAT
        assert math.copysign(1.0, operand.value) == -1.0

    def test_special_floats_are_native_float(self) -> None:
        assert classify(math.inf, 2, "add").kind is OperandKind.NATIVE_FLOAT
        assert classify(math.nan, 2, "add").kind is OperandKind.NATIVE_FLOAT

    def test_handle_is_precision(self) -> None:
        x = mpfloat.new().set(1.5)
        operand = classify(x, 3, "add")
        assert operand.kind is OperandKind.PRECISION
        assert operand.value == x._value

    def test_word_boundaries(self) -> None:
        """Signed word limits are Integral; one past is a double if exact"""
        assert classify(2 ** 63 - 1, 2, "add").kind is OperandKind.INTEGRAL
        assert classify(-(2 ** 63), 2, "add").kind is OperandKind.INTEGRAL
        operand = classify(2 ** 63, 2, "add")
        assert operand.kind is OperandKind.NATIVE_FLOAT
        assert operand.value == 2.0 ** 63

    def test_inexact_big_int_is_range_error(self) -> None:
        """Ints that would be truncated by a double conversion are rejected"""
        with pytest.raises(ArgumentRangeError) as excinfo:
            classify(2 ** 63 + 1, 3, "mul")
        assert excinfo.value.position == 3
        assert excinfo.value.function == "mul"

    def test_overflowing_int_is_range_error(self) -> None:
        with pytest.raises(ArgumentRangeError):
            classify(10 ** 400, 2, "add")

    def test_inexact_fraction_is_range_error(self) -> None:
        """Other real types must be exact doubles, never silently rounded"""
        with pytest.raises(ArgumentRangeError) as excinfo:
            classify(Fraction(1, 3), 2, "add")
        assert excinfo.value.position == 2

    def test_exact_fraction_is_accepted(self) -> None:
        operand = classify(Fraction(3, 4), 2, "add")
        assert operand.kind is OperandKind.NATIVE_FLOAT
        assert operand.value == 0.75
        assert classify(Fraction(6, 2), 2, "add").kind is OperandKind.INTEGRAL

    def test_string_is_type_error(self) -> None:
        with pytest.raises(ArgumentTypeError) as excinfo:
            classify("1.5", 2, "add")
        assert excinfo.value.position == 2
        assert "str" in str(excinfo.value)

    def test_bool_is_type_error(self) -> None:
        with pytest.raises(ArgumentTypeError):
            classify(True, 2, "add")

    def test_none_is_type_error(self) -> None:
        with pytest.raises(ArgumentTypeError):
            classify(None, 3, "add")


class TestRangeChecks:
    """Tests for the machine-word checks"""

    def test_ulong_accepts_full_range(self) -> None:
        assert check_ulong(0, 2, "fac") == 0
        assert check_ulong(2 ** 64 - 1, 2, "fac") == 2 ** 64 - 1

    def test_ulong_rejects_negative(self) -> None:
        with pytest.raises(ArgumentRangeError) as excinfo:
            check_ulong(-1, 2, "fac")
        assert "18446744073709551615" in str(excinfo.value)

    def test_ulong_rejects_overflow(self) -> None:
        with pytest.raises(ArgumentRangeError):
            check_ulong(2 ** 64, 2, "fac")

    def test_long_range(self) -> None:
        assert check_long(-(2 ** 63), 2, "jn") == -(2 ** 63)
        with pytest.raises(ArgumentRangeError):
            check_long(2 ** 63, 2, "jn")
        with pytest.raises(ArgumentRangeError):
            check_long(-(2 ** 63) - 1, 2, "jn")

    def test_base_bounds(self) -> None:
        assert check_base(None, 2, "tostring") == 10
        assert check_base(2, 2, "tostring") == 2
        assert check_base(62, 2, "tostring") == 62
        for base in (0, 1, 63):
            with pytest.raises(ArgumentRangeError) as excinfo:
                check_base(base, 2, "tostring")
            assert "between 2 and 62" in str(excinfo.value)

    def test_check_handle(self) -> None:
        x = mpfloat.new()
        assert check_handle(x, 1, "exp") is x
        with pytest.raises(ArgumentTypeError) as excinfo:
            check_handle(1.0, 1, "exp")
        assert str(excinfo.value) == "exp(): bad argument #1 (Mpfr expected, got float)"
