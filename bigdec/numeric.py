"""
Classify numeric operands from Python stdlib and third-party libraries.

Constructors of decimal values accept exact integers and binary floats of
three widths. This module decides which of the two an operand is, and for
floats which IEEE 754 width it carries, without importing NumPy or any other
library the operand may come from.

It also converts between Python int and decimal digit strings beyond the
interpreter's int/str conversion limit.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import operator
import sys
from decimal import Decimal
from fractions import Fraction
from typing import NamedTuple

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type

# Binary float widths by class name of NumPy scalar types
_NUMPY_FLOAT_WIDTHS = {
    "float16": 16,
    "half": 16,
    "float32": 32,
    "single": 32,
    "float64": 64,
    "double": 64,
}

# Upper bound of log10(2), to estimate decimal digit counts from bit lengths
_LOG10_2 = 0.30103


# Classes --------------------------------------------------------------------------------------------------------------

class Operand(NamedTuple):
    """
    A numeric operand reduced to a Python scalar.

    Attributes:
        value: Python int for exact integers, Python float for binary floats.
        width: Binary float width in bits (16, 32 or 64), None for integers.
    """
    value: int | float
    width: int | None = None

    @property
    def is_integer(self) -> bool:
        return self.width is None


# Methods --------------------------------------------------------------------------------------------------------------

def std_operand(value, *, allow_bool: bool = False) -> Operand:
    """
    Reduce a numeric value to an exact integer or a binary float of known width.

    Parameters
    ----------
    value : various
        Python int/float, NumPy scalars, integer-valued Decimal/Fraction, and
        third-party types via __index__, .item(), __int__ or __float__.

    allow_bool : bool, default False
        If True, convert bool to int (True→1, False→0). If False, raise
        TypeError since bool is a subclass of int and usually a bug here.

    Returns
    -------
    Operand
        (int, None) for exact integers, (float, width) for binary floats.

    Raises
    ------
    TypeError
        For unsupported types (str, list, None, ...) and for bool unless
        allow_bool=True.

    Detection Priority
    ------------------
    1. NumPy float scalars → float with the scalar's width (float16/32/64)
    2. Python int/float → fast path (float is binary64)
    3. __index__() → int (NumPy integers)
    4. .item() → recurse on the Python scalar (array scalars)
    5. Integer-valued Decimal/Fraction → int
    6. __int__() → int (when __float__ not available)
    7. __float__() → binary64 float

    Examples
    --------
    >>> std_operand(42)
    Operand(value=42, width=None)
    >>> std_operand(0.5)
    Operand(value=0.5, width=64)
    >>> std_operand(Fraction(84, 2))
    Operand(value=42, width=None)
    """
    if isinstance(value, bool):
        if allow_bool:
            return Operand(int(value))
        raise TypeError(
            f"boolean values not supported, got {value}. "
            f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
        )

    # NumPy float scalars - must come before float, numpy.float64 subclasses float
    width = _numpy_float_width(value)
    if width is not None:
        return Operand(float(value), width)

    if isinstance(value, int):
        return Operand(int(value))
    if isinstance(value, float):
        return Operand(float(value), 64)

    # Priority 3: "true integers", NumPy integer types implement this
    if hasattr(value, '__index__'):
        try:
            return Operand(operator.index(value))
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e

    # Priority 4: array/tensor scalars
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (bool, int, float)):
            return std_operand(result, allow_bool=allow_bool)

    # Priority 5: integer-valued Decimal/Fraction keep their exact value
    if isinstance(value, Fraction) or (isinstance(value, Decimal) and value.is_finite()):
        as_int = int(value)
        if value == as_int:
            return Operand(as_int)

    # Priority 6: types with only __int__
    if hasattr(value, '__int__') and not hasattr(value, '__float__'):
        try:
            return Operand(int(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __int__: {e}") from e

    # Priority 7: duck typing via __float__, may overflow to inf
    if hasattr(value, '__float__'):
        try:
            return Operand(float(value), 64)
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e

    raise TypeError(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, or types implementing __index__, __int__, "
        f"__float__ or .item() (e.g., numpy scalars, Decimal, Fraction)"
    )


def int_to_digits(value: int) -> str:
    """
    Return the decimal digits of an int, with a leading '-' if negative.

    Unlike str(), works for ints of any size regardless of
    sys.get_int_max_str_digits().
    """
    limit = sys.get_int_max_str_digits()
    if limit and value.bit_length() * _LOG10_2 + 1 > limit:
        return str(Decimal(value))
    return str(value)


def digits_to_int(digits: str) -> int:
    """
    Convert an optionally signed ASCII digit string to int.

    The caller validates the digits. Unlike int(), works for strings of
    any length regardless of sys.get_int_max_str_digits().
    """
    limit = sys.get_int_max_str_digits()
    if limit and len(digits) > limit:
        return int(Decimal(digits))
    return int(digits)


def digit_count(value: int) -> int:
    """Number of decimal digits of abs(value); 1 for zero."""
    return len(int_to_digits(abs(value)))


# Private Methods ------------------------------------------------------------------------------------------------------

def _numpy_float_width(value) -> int | None:
    """Detect NumPy float scalars by class, without importing numpy."""
    cls = value.__class__
    if getattr(cls, "__module__", "") != "numpy":
        return None
    return _NUMPY_FLOAT_WIDTHS.get(getattr(cls, "__name__", ""))
