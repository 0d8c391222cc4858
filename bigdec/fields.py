"""
Two-field layout of decimal values.

A value is stored as an arbitrary-precision integer significand and a 32-bit
signed exponent. The four outermost exponents are reserved for non-finite
values; every other exponent denotes a finite value significand × 10**exponent.

    EXPONENT_MAX      →  positive infinity
    EXPONENT_MAX - 1  →  quiet NaN
    EXPONENT_MIN + 1  →  signaling NaN
    EXPONENT_MIN      →  negative infinity
"""

# Standard library -----------------------------------------------------------------------------------------------------
from enum import Enum, unique
from typing import Final

__all__ = [
    'EXPONENT_BITS',
    'EXPONENT_MIN',
    'EXPONENT_MAX',
    'FINITE_EXPONENT_MIN',
    'FINITE_EXPONENT_MAX',
    'POSITIVE_INFINITY_EXPONENT',
    'NEGATIVE_INFINITY_EXPONENT',
    'QUIET_NAN_EXPONENT',
    'SIGNALING_NAN_EXPONENT',
    'Kind',
    'in_exponent_range',
    'is_finite_exponent',
]

EXPONENT_BITS: Final[int] = 32
EXPONENT_MIN: Final[int] = -(1 << (EXPONENT_BITS - 1))
EXPONENT_MAX: Final[int] = (1 << (EXPONENT_BITS - 1)) - 1

POSITIVE_INFINITY_EXPONENT: Final[int] = EXPONENT_MAX
NEGATIVE_INFINITY_EXPONENT: Final[int] = EXPONENT_MIN
QUIET_NAN_EXPONENT: Final[int] = EXPONENT_MAX - 1
SIGNALING_NAN_EXPONENT: Final[int] = EXPONENT_MIN + 1

FINITE_EXPONENT_MIN: Final[int] = EXPONENT_MIN + 2
FINITE_EXPONENT_MAX: Final[int] = EXPONENT_MAX - 2


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(str, Enum):
    """
    Tag of a decimal value.

    Members are str subclasses so they read well in reprs and log records.
    """
    FINITE = "finite"
    POSITIVE_INFINITY = "+infinity"
    NEGATIVE_INFINITY = "-infinity"
    QUIET_NAN = "nan"
    SIGNALING_NAN = "snan"

    @classmethod
    def from_exponent(cls, exponent: int) -> "Kind":
        """Decode the kind carried by a raw exponent field."""
        return _KIND_BY_EXPONENT.get(exponent, cls.FINITE)

    @property
    def reserved_exponent(self) -> int | None:
        """The reserved exponent encoding this kind, None for FINITE."""
        return _EXPONENT_BY_KIND.get(self)


_EXPONENT_BY_KIND: Final[dict[Kind, int]] = {
    Kind.POSITIVE_INFINITY: POSITIVE_INFINITY_EXPONENT,
    Kind.NEGATIVE_INFINITY: NEGATIVE_INFINITY_EXPONENT,
    Kind.QUIET_NAN: QUIET_NAN_EXPONENT,
    Kind.SIGNALING_NAN: SIGNALING_NAN_EXPONENT,
}

_KIND_BY_EXPONENT: Final[dict[int, Kind]] = {e: k for k, e in _EXPONENT_BY_KIND.items()}


# Methods --------------------------------------------------------------------------------------------------------------

def in_exponent_range(exponent: int) -> bool:
    """Return True if exponent fits the 32-bit exponent field."""
    return EXPONENT_MIN <= exponent <= EXPONENT_MAX


def is_finite_exponent(exponent: int) -> bool:
    """Return True if exponent fits the field and lies outside the reserved band."""
    return FINITE_EXPONENT_MIN <= exponent <= FINITE_EXPONENT_MAX
