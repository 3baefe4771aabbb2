"""Rounding modes, named after the engine's own modes without their prefix."""

from enum import IntEnum

from . import _engine

RoundingMode = IntEnum(
    "RoundingMode",
    [(name[len(_engine.MODE_PREFIX):], code) for name, code in _engine.ROUNDING_MODES],
    module=__name__,
)

# RNDN, RNDZ, RNDU, RNDD, RNDA
globals().update(RoundingMode.__members__)

__all__ = ["RoundingMode", *RoundingMode.__members__]
