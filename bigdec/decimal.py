"""
Arbitrary-precision decimal floating-point values.

A BigDecimal is an immutable pair of an arbitrary-precision integer significand
and a decimal exponent, value = significand × 10**exponent, plus four non-finite
states: positive and negative infinity, quiet NaN and signaling NaN.

Internally every value carries a Kind tag. The two-field encoding with its
reserved exponent band (see bigdec.fields) is exposed through the `exponent`
property, `to_fields()` and `from_fields()`.

Example:
    >>> pi = parse("3.14159265359")
    >>> pi.significand, pi.exponent
    (314159265359, -11)
    >>> str(BigDecimal(200, 2)), str(BigDecimal(200, 2).normalize())
    ('2.00', '2')
    >>> str(BigDecimal(100).normalize())
    '1E2'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import math
import struct
from decimal import Decimal
from typing import Any, Final

# Local ----------------------------------------------------------------------------------------------------------------
from .fields import (
    FINITE_EXPONENT_MAX,
    Kind,
    in_exponent_range,
    is_finite_exponent,
)
from .formatters import class_name, fmt_type, fmt_value
from .numeric import digit_count, digits_to_int, int_to_digits, std_operand
from .parsing import parse_fields

__all__ = [
    'BigDecimal',
    'Kind',
    'parse',
    'ZERO',
    'ONE',
    'POSITIVE_INFINITY',
    'NEGATIVE_INFINITY',
    'NAN',
    'SIGNALING_NAN',
    'DEFAULT_DOUBLE_PRECISION',
    'DEFAULT_SINGLE_PRECISION',
    'DEFAULT_HALF_PRECISION',
]

logger = logging.getLogger(__name__)

# Decimal digits after the point trusted from a binary float of each width
DEFAULT_DOUBLE_PRECISION: Final[int] = 15
DEFAULT_SINGLE_PRECISION: Final[int] = 8
DEFAULT_HALF_PRECISION: Final[int] = 4

_DEFAULT_PRECISIONS: Final[dict[int, int]] = {
    64: DEFAULT_DOUBLE_PRECISION,
    32: DEFAULT_SINGLE_PRECISION,
    16: DEFAULT_HALF_PRECISION,
}

_STRUCT_FORMATS: Final[dict[int, str]] = {32: "<f", 16: "<e"}

# Normalizer batches: 10**28 repeatedly, then each table entry at most once
_TEN_NONILLION: Final[int] = 10 ** 28
_TEN_NONILLION_ZEROS: Final[int] = 28
_POWERS_OF_TEN: Final[tuple[tuple[int, int], ...]] = (
    (10 ** 16, 16),
    (10 ** 8, 8),
    (10 ** 4, 4),
    (10 ** 2, 2),
    (10, 1),
)

_SPECIAL_STRINGS: Final[dict[Kind, str]] = {
    Kind.QUIET_NAN: "NaN",
    Kind.SIGNALING_NAN: "sNaN",
    Kind.POSITIVE_INFINITY: "Infinity",
    Kind.NEGATIVE_INFINITY: "-Infinity",
}


# Classes --------------------------------------------------------------------------------------------------------------

class BigDecimal:
    """
    Immutable decimal floating-point value.

    Construction:
        BigDecimal(value, precision=None)
            int-like value: exact, exponent = -precision (default 0).
            float value: formatted in scientific notation with `precision`
            digits after the point and parsed; the default precision depends
            on the float width (15 for binary64, 8 for binary32, 4 for
            binary16 NumPy scalars).
            Decimal value: exact conversion, precision must be None.

        BigDecimal.parse(text), BigDecimal.from_double(), from_single(),
        from_half(), from_decimal(), from_fields().

    Equality and hashing are field-for-field: BigDecimal(200, 2) and
    BigDecimal(2) are different representations of the same quantity and
    compare unequal. NaNs are equal to themselves.
    """

    __slots__ = ("_kind", "_significand", "_exponent")

    ZERO: "BigDecimal"
    ONE: "BigDecimal"
    POSITIVE_INFINITY: "BigDecimal"
    NEGATIVE_INFINITY: "BigDecimal"
    NAN: "BigDecimal"
    SIGNALING_NAN: "BigDecimal"

    def __new__(cls, value: Any = 0, precision: int | None = None) -> "BigDecimal":
        if isinstance(value, BigDecimal):
            if precision is not None:
                raise TypeError("precision is not supported when copying a BigDecimal")
            source = value
        elif isinstance(value, Decimal):
            if precision is not None:
                raise TypeError("precision is not supported for Decimal values, conversion is exact")
            source = BigDecimal.from_decimal(value)
        else:
            operand = std_operand(value)
            if operand.is_integer:
                precision = 0 if precision is None else precision
                source = BigDecimal._finite(operand.value, -_check_int_precision(precision))
            else:
                source = _from_binary_float(operand.value, operand.width, precision)
        obj = object.__new__(cls)
        _init_slots(obj, source._kind, source._significand, source._exponent)
        return obj

    # Named constructors -----------------------------------

    @classmethod
    def parse(cls, text: str) -> "BigDecimal":
        """Parse a decimal literal or special token, see bigdec.parsing."""
        return cls.from_fields(*parse_fields(text))

    @classmethod
    def from_double(cls, value: float, precision: int = DEFAULT_DOUBLE_PRECISION) -> "BigDecimal":
        """Convert a binary64 float keeping `precision` decimal digits after the leading one."""
        return _from_binary_float(_float_operand(value), 64, precision)

    @classmethod
    def from_single(cls, value: float, precision: int = DEFAULT_SINGLE_PRECISION) -> "BigDecimal":
        """Round value to binary32, then convert keeping `precision` digits after the leading one."""
        return _from_binary_float(_float_operand(value), 32, precision)

    @classmethod
    def from_half(cls, value: float, precision: int = DEFAULT_HALF_PRECISION) -> "BigDecimal":
        """Round value to binary16, then convert keeping `precision` digits after the leading one."""
        return _from_binary_float(_float_operand(value), 16, precision)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "BigDecimal":
        """
        Convert a decimal.Decimal exactly.

        Decimal('NaN') and Decimal('sNaN') map to quiet and signaling NaN
        regardless of sign.

        Raises:
            TypeError: value is not a Decimal.
            ValueError: the exponent of a finite value is outside the finite range.
        """
        if not isinstance(value, Decimal):
            raise TypeError(f"Decimal expected, but found {fmt_type(value)}")
        if value.is_snan():
            return SIGNALING_NAN
        if value.is_nan():
            return NAN
        if value.is_infinite():
            return NEGATIVE_INFINITY if value.is_signed() else POSITIVE_INFINITY

        sign, digits, exponent = value.as_tuple()
        if not is_finite_exponent(exponent):
            raise ValueError(f"exponent out of range: {fmt_value(value)}")
        significand = digits_to_int("".join(map(str, digits)))
        return cls._finite(-significand if sign else significand, exponent)

    @classmethod
    def from_fields(cls, significand: int, exponent: int) -> "BigDecimal":
        """
        Decode the two-field encoding.

        A reserved exponent selects the matching special value and the
        significand is ignored; any other exponent gives a finite value.

        Raises:
            TypeError: a field is not an int.
            ValueError: exponent does not fit the 32-bit exponent field.
        """
        for name, field in (("significand", significand), ("exponent", exponent)):
            if not isinstance(field, int) or isinstance(field, bool):
                raise TypeError(f"{name} must be an int, but found {fmt_type(field)}")
        if not in_exponent_range(exponent):
            raise ValueError(f"exponent does not fit the exponent field: {exponent}")

        kind = Kind.from_exponent(exponent)
        if kind is not Kind.FINITE:
            return _SPECIALS[kind]
        return cls._finite(significand, exponent)

    @classmethod
    def _finite(cls, significand: int, exponent: int) -> "BigDecimal":
        obj = object.__new__(cls)
        _init_slots(obj, Kind.FINITE, significand, exponent)
        return obj

    # Fields -----------------------------------

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def significand(self) -> int:
        """The integer significand, 0 for special values."""
        return self._significand

    @property
    def exponent(self) -> int:
        """The decimal exponent; special values report their reserved exponent."""
        return self._exponent

    def to_fields(self) -> tuple[int, int]:
        """Encode as (significand, exponent) with special values in the reserved band."""
        return self._significand, self._exponent

    def to_decimal(self) -> Decimal:
        """Convert to decimal.Decimal exactly."""
        if self._kind is not Kind.FINITE:
            return Decimal(_SPECIAL_STRINGS[self._kind])
        return Decimal(f"{int_to_digits(self._significand)}E{self._exponent}")

    # Predicates -----------------------------------

    @property
    def is_finite(self) -> bool:
        return self._kind is Kind.FINITE

    @property
    def is_nan(self) -> bool:
        return self._kind is Kind.QUIET_NAN or self._kind is Kind.SIGNALING_NAN

    @property
    def is_quiet_nan(self) -> bool:
        return self._kind is Kind.QUIET_NAN

    @property
    def is_signaling_nan(self) -> bool:
        return self._kind is Kind.SIGNALING_NAN

    @property
    def is_infinity(self) -> bool:
        return self._kind is Kind.POSITIVE_INFINITY or self._kind is Kind.NEGATIVE_INFINITY

    @property
    def is_positive_infinity(self) -> bool:
        return self._kind is Kind.POSITIVE_INFINITY

    @property
    def is_negative_infinity(self) -> bool:
        return self._kind is Kind.NEGATIVE_INFINITY

    @property
    def is_zero(self) -> bool:
        """True for finite values with a zero significand, at any exponent."""
        return self._kind is Kind.FINITE and self._significand == 0

    # Normalization -----------------------------------

    def normalize(self) -> "BigDecimal":
        """
        Return the canonical form: trailing zeros of the significand removed.

        The quantity significand × 10**exponent is preserved. Special values
        and zero are returned unchanged. Zeros are stripped in batches, 28 at a
        time while possible and then 16, 8, 4, 2 and 1 at most once each, so the
        number of divisions grows with the log of the trailing zero count.

        A batch that would push the exponent into the reserved band is skipped.

        Examples:
            >>> BigDecimal(100).normalize().to_fields()
            (1, 2)
            >>> str(BigDecimal(-31400, 3).normalize())
            '-31.4'
        """
        if self._kind is not Kind.FINITE or self._significand == 0:
            return self

        magnitude = abs(self._significand)
        exponent = self._exponent
        while (magnitude >= _TEN_NONILLION and magnitude % _TEN_NONILLION == 0
               and exponent + _TEN_NONILLION_ZEROS <= FINITE_EXPONENT_MAX):
            magnitude //= _TEN_NONILLION
            exponent += _TEN_NONILLION_ZEROS

        for divisor, zeros in _POWERS_OF_TEN:
            if magnitude >= divisor and magnitude % divisor == 0 and exponent + zeros <= FINITE_EXPONENT_MAX:
                magnitude //= divisor
                exponent += zeros

        return BigDecimal._finite(-magnitude if self._significand < 0 else magnitude, exponent)

    # Text -----------------------------------

    def to_string(self) -> str:
        """
        Render for display.

        Specials render as NaN, sNaN, Infinity and -Infinity. A finite value
        with exponent 0 renders as its significand; with a negative exponent
        of magnitude smaller than the significand's digit count, a decimal
        point is inserted; anything else renders as <significand>E<exponent>.
        """
        if self._kind is not Kind.FINITE:
            return _SPECIAL_STRINGS[self._kind]

        digits = int_to_digits(self._significand)
        exponent = self._exponent
        if exponent == 0:
            return digits
        if exponent < 0 and -exponent < digit_count(self._significand):
            point = len(digits) + exponent
            return f"{digits[:point]}.{digits[point:]}"
        return f"{digits}E{exponent}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{class_name(self)}('{self.to_string()}')"

    # Value semantics -----------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.to_fields() == other.to_fields()

    def __hash__(self) -> int:
        return hash((BigDecimal, self._significand, self._exponent))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{class_name(self)} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{class_name(self)} is immutable")

    def __reduce__(self) -> tuple:
        return (BigDecimal.from_fields, self.to_fields())

    def __copy__(self) -> "BigDecimal":
        return self

    def __deepcopy__(self, memo: dict) -> "BigDecimal":
        return self


# Methods --------------------------------------------------------------------------------------------------------------

def parse(text: str) -> BigDecimal:
    """
    Parse a decimal literal or special token.

    Raises:
        TypeError: text is not a str.
        FormatError: text does not match the grammar.

    Examples:
        >>> parse("1.5E3").to_fields()
        (15, 2)
        >>> parse("INF") is POSITIVE_INFINITY
        True
    """
    return BigDecimal.parse(text)


# Private Methods ------------------------------------------------------------------------------------------------------

def _init_slots(obj: BigDecimal, kind: Kind, significand: int, exponent: int) -> None:
    object.__setattr__(obj, "_kind", kind)
    object.__setattr__(obj, "_significand", significand)
    object.__setattr__(obj, "_exponent", exponent)


def _check_int_precision(precision: int) -> int:
    """Validate the digit count after the point for integer construction."""
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise TypeError(f"precision must be an int, but found {fmt_type(precision)}")
    if not is_finite_exponent(-precision):
        raise ValueError(f"precision out of range: {precision}")
    return precision


def _float_operand(value: Any) -> float:
    """Coerce a numeric operand to a Python float, rejecting str and bool like the constructor does."""
    return float(std_operand(value).value)


def _from_binary_float(value: float, width: int, precision: int | None) -> BigDecimal:
    """
    Convert a binary float through its scientific-notation text.

    The value is rounded to the given width first. `precision` is the number
    of digits after the point of the formatted text, so it bounds the decimal
    digits trusted from the float; this is not a bit-exact conversion.
    """
    if precision is None:
        precision = _DEFAULT_PRECISIONS[width]
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise TypeError(f"precision must be an int, but found {fmt_type(precision)}")
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    # format() keeps the sign of NaN, and "-nan" parses as signaling NaN
    if math.isnan(value):
        return NAN

    fmt = _STRUCT_FORMATS.get(width)
    if fmt is not None:
        try:
            value = struct.unpack(fmt, struct.pack(fmt, value))[0]
        except OverflowError:
            logger.debug("%r overflows binary%d, converting to infinity", value, width)
            value = math.copysign(math.inf, value)

    return BigDecimal.parse(format(value, f".{precision}E"))


def _special(kind: Kind) -> BigDecimal:
    obj = object.__new__(BigDecimal)
    _init_slots(obj, kind, 0, kind.reserved_exponent)
    return obj


# Constants ------------------------------------------------------------------------------------------------------------

ZERO: Final[BigDecimal] = BigDecimal._finite(0, 0)
ONE: Final[BigDecimal] = BigDecimal._finite(1, 0)
POSITIVE_INFINITY: Final[BigDecimal] = _special(Kind.POSITIVE_INFINITY)
NEGATIVE_INFINITY: Final[BigDecimal] = _special(Kind.NEGATIVE_INFINITY)
NAN: Final[BigDecimal] = _special(Kind.QUIET_NAN)
SIGNALING_NAN: Final[BigDecimal] = _special(Kind.SIGNALING_NAN)

_SPECIALS: Final[dict[Kind, BigDecimal]] = {
    Kind.POSITIVE_INFINITY: POSITIVE_INFINITY,
    Kind.NEGATIVE_INFINITY: NEGATIVE_INFINITY,
    Kind.QUIET_NAN: NAN,
    Kind.SIGNALING_NAN: SIGNALING_NAN,
}

BigDecimal.ZERO = ZERO
BigDecimal.ONE = ONE
BigDecimal.POSITIVE_INFINITY = POSITIVE_INFINITY
BigDecimal.NEGATIVE_INFINITY = NEGATIVE_INFINITY
BigDecimal.NAN = NAN
BigDecimal.SIGNALING_NAN = SIGNALING_NAN
