#
# bigdec Parser
#
"""
Decimal literal parser.

Accepts the special-value tokens (case-insensitive)

    nan, +nan                          → quiet NaN
    -nan, snan                         → signaling NaN
    inf, +inf, infinity, +infinity     → positive infinity
    -inf, -infinity                    → negative infinity

and decimal literals: an optional sign, digits with at most one decimal point,
and an optional exponent suffix introduced by D, d, E or e.

The parser produces the two-field encoding (significand, exponent) described in
bigdec.fields; special values come out with their reserved exponents.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import re
from typing import Final, NoReturn

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import FormatError
from .fields import (
    NEGATIVE_INFINITY_EXPONENT,
    POSITIVE_INFINITY_EXPONENT,
    QUIET_NAN_EXPONENT,
    SIGNALING_NAN_EXPONENT,
    in_exponent_range,
    is_finite_exponent,
)
from .formatters import fmt_type
from .numeric import digits_to_int

logger = logging.getLogger(__name__)

# -nan is an alias of signaling NaN, not a negated quiet NaN
SPECIAL_TOKENS: Final[dict[str, int]] = {
    "nan": QUIET_NAN_EXPONENT,
    "+nan": QUIET_NAN_EXPONENT,
    "-nan": SIGNALING_NAN_EXPONENT,
    "snan": SIGNALING_NAN_EXPONENT,
    "inf": POSITIVE_INFINITY_EXPONENT,
    "+inf": POSITIVE_INFINITY_EXPONENT,
    "infinity": POSITIVE_INFINITY_EXPONENT,
    "+infinity": POSITIVE_INFINITY_EXPONENT,
    "-inf": NEGATIVE_INFINITY_EXPONENT,
    "-infinity": NEGATIVE_INFINITY_EXPONENT,
}

EXPONENT_MARKERS: Final[str] = "DdEe"

_SIGNIFICAND = re.compile(r"(?P<sign>[+-]?)(?P<head>[0-9]*)(?:\.(?P<tail>[0-9]*))?")
_EXPONENT = re.compile(r"[+-]?[0-9]+")


# Methods --------------------------------------------------------------------------------------------------------------

def parse_fields(text: str) -> tuple[int, int]:
    """
    Parse a decimal literal or special token into (significand, exponent).

    The represented value is significand × 10**exponent. Trailing zeros are
    kept: "3.140" gives (3140, -3).

    Raises:
        TypeError: text is not a str.
        FormatError: text is neither a special token nor a decimal literal,
            or its exponent does not fit the finite exponent range.

    Examples:
        >>> parse_fields("3.14159265359")
        (314159265359, -11)
        >>> parse_fields("1.5E3")
        (15, 2)
        >>> parse_fields("-nan")
        (0, -2147483647)
    """
    if not isinstance(text, str):
        raise TypeError(f"decimal literal must be a str, but found {fmt_type(text)}")

    special = SPECIAL_TOKENS.get(text.lower())
    if special is not None:
        return 0, special

    body = text
    suffix_exponent = 0
    marker = _find_marker(text)
    if marker >= 0:
        body, suffix = text[:marker], text[marker + 1:]
        if not _EXPONENT.fullmatch(suffix):
            _reject(text, "malformed exponent suffix")
        suffix_exponent = digits_to_int(suffix)
        if not in_exponent_range(suffix_exponent):
            _reject(text, "exponent suffix out of range")

    m = _SIGNIFICAND.fullmatch(body)
    if m is None:
        _reject(text, "malformed significand")
    head, tail = m.group("head"), m.group("tail") or ""
    if not head and not tail:
        _reject(text, "no digits")

    significand = digits_to_int(m.group("sign") + head + tail)
    exponent = suffix_exponent - len(tail)
    if not is_finite_exponent(exponent):
        _reject(text, "exponent out of range")
    return significand, exponent


# Private Methods ------------------------------------------------------------------------------------------------------

def _find_marker(text: str) -> int:
    """Index of the first exponent marker in text, or -1."""
    for i, ch in enumerate(text):
        if ch in EXPONENT_MARKERS:
            return i
    return -1


def _reject(text: str, reason: str) -> NoReturn:
    logger.debug("rejecting decimal literal %r: %s", text, reason)
    raise FormatError(text, reason)
