"""
Tests for process-wide defaults and the precision/rounding resolvers
"""

import pytest

import mpfloat
from mpfloat import RNDA, RNDD, RNDN, RNDU, RNDZ, RoundingMode
from mpfloat.context import (
    check_prec,
    resolve_precision,
    resolve_rounding,
)
from mpfloat.errors import ArgumentRangeError, ArgumentTypeError


class TestRoundingModes:
    """Tests for the rounding-mode constants"""

    def test_names_strip_engine_prefix(self) -> None:
        assert [mode.name for mode in RoundingMode] == [
            "RNDN",
            "RNDZ",
            "RNDU",
            "RNDD",
            "RNDA",
        ]

    def test_codes_match_engine(self) -> None:
        assert (RNDN, RNDZ, RNDU, RNDD, RNDA) == (0, 1, 2, 3, 4)

    def test_module_constants_are_members(self) -> None:
        assert mpfloat.RNDD is RoundingMode.RNDD
        assert mpfloat.rounding.RNDA is RoundingMode.RNDA


class TestDefaults:
    """Tests for the default accessors"""

    def test_initial_defaults(self) -> None:
        assert mpfloat.get_default_prec() == 53
        assert mpfloat.get_default_rounding_mode() is RNDN

    def test_new_uses_default_precision(self) -> None:
        mpfloat.set_default_prec(200)
        assert mpfloat.new().get_prec() == 200
        assert mpfloat.new(64).get_prec() == 64

    def test_default_rounding_applies_when_omitted(self) -> None:
        mpfloat.set_default_rounding_mode(RNDD)
        down = mpfloat.new().div(1, mpfloat.new().set(3))
        up = mpfloat.new().div(1, mpfloat.new().set(3), RNDU)
        assert down < up
        assert down.ternary < 0

    def test_invalid_default_precision(self) -> None:
        for prec in (0, -5, mpfloat.PREC_MAX + 1):
            with pytest.raises(ArgumentRangeError):
                mpfloat.set_default_prec(prec)
        assert mpfloat.get_default_prec() == 53

    def test_invalid_default_rounding(self) -> None:
        with pytest.raises(ArgumentRangeError) as excinfo:
            mpfloat.set_default_rounding_mode(7)
        assert "RNDN, RNDZ, RNDU, RNDD, RNDA" in str(excinfo.value)
        with pytest.raises(ArgumentTypeError):
            mpfloat.set_default_rounding_mode("RNDN")
        assert mpfloat.get_default_rounding_mode() is RNDN

    def test_plain_int_rounding_is_accepted(self) -> None:
        mpfloat.set_default_rounding_mode(1)
        assert mpfloat.get_default_rounding_mode() is RNDZ

    def test_free_cache(self) -> None:
        x = mpfloat.new(100).const_pi()
        mpfloat.free_cache()
        y = mpfloat.new(100).const_pi()
        assert x.equal_p(y)

    def test_version_names_engine(self) -> None:
        assert mpfloat.version.startswith(f"mpfloat {mpfloat.__version__}")
        assert "MPFR" in mpfloat.version


class TestScopedDefaults:
    """Tests for the defaults() context manager"""

    def test_overrides_and_restores(self) -> None:
        with mpfloat.defaults(prec=300, rnd=RNDU):
            assert mpfloat.get_default_prec() == 300
            assert mpfloat.get_default_rounding_mode() is RNDU
        assert mpfloat.get_default_prec() == 53
        assert mpfloat.get_default_rounding_mode() is RNDN

    def test_partial_override(self) -> None:
        with mpfloat.defaults(rnd=RNDA):
            assert mpfloat.get_default_prec() == 53
            assert mpfloat.get_default_rounding_mode() is RNDA

    def test_restores_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with mpfloat.defaults(prec=99):
                raise RuntimeError("boom")
        assert mpfloat.get_default_prec() == 53

    def test_validates_before_changing(self) -> None:
        with pytest.raises(ArgumentRangeError):
            with mpfloat.defaults(prec=0):
                pass
        assert mpfloat.get_default_prec() == 53


class TestResolvers:
    """Tests for resolve_precision / resolve_rounding"""

    def test_none_resolves_to_default(self) -> None:
        mpfloat.set_default_prec(77)
        mpfloat.set_default_rounding_mode(RNDZ)
        assert resolve_precision(None, 1, "new") == 77
        assert resolve_rounding(None, 3, "exp") is RNDZ

    def test_explicit_values_win(self) -> None:
        assert resolve_precision(128, 1, "new") == 128
        assert resolve_rounding(RNDU, 3, "exp") is RNDU

    def test_integral_float_precision(self) -> None:
        assert check_prec(200.0, 2, "set_prec") == 200

    def test_precision_error_names_range(self) -> None:
        with pytest.raises(ArgumentRangeError) as excinfo:
            check_prec(0, 2, "set_prec")
        err = excinfo.value
        assert err.position == 2
        assert f"between {mpfloat.PREC_MIN} and {mpfloat.PREC_MAX}" in str(err)

    def test_fractional_precision_is_type_error(self) -> None:
        with pytest.raises(ArgumentTypeError):
            check_prec(10.5, 1, "new")
