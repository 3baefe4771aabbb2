import pytest

import mpfloat


@pytest.fixture(autouse=True)
def restore_defaults():
    """Every test starts from the engine defaults: 53 bits, RNDN."""
    prec = mpfloat.get_default_prec()
    rnd = mpfloat.get_default_rounding_mode()
    mpfloat.set_default_prec(53)
    mpfloat.set_default_rounding_mode(mpfloat.RNDN)
    yield
    mpfloat.set_default_prec(prec)
    mpfloat.set_default_rounding_mode(rnd)


@pytest.fixture
def num():
    """Build a handle holding ``value`` at ``prec`` bits."""

    def build(value, prec=53):
        return mpfloat.new(prec).set(value)

    return build
