#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from bigdec.decimal import (
    BigDecimal,
    NAN,
    NEGATIVE_INFINITY,
    ONE,
    POSITIVE_INFINITY,
    SIGNALING_NAN,
    ZERO,
)
from bigdec.fields import FINITE_EXPONENT_MAX, FINITE_EXPONENT_MIN

# Fixtures -------------------------------------------------------------------------------------------------------------


@pytest.fixture
def finite_values() -> list[BigDecimal]:
    """A spread of finite values: signs, zeros at several scales, trailing zeros, huge and tiny exponents."""
    return [
        ZERO,
        ONE,
        BigDecimal(0, 2),
        BigDecimal(0, -3),
        BigDecimal(200, 2),
        BigDecimal(100),
        BigDecimal(-4500, 2),
        BigDecimal(314159265359, 11),
        BigDecimal(-314, 2),
        BigDecimal(-314, 3),
        BigDecimal(7, -2),
        BigDecimal(10 ** 60),
        BigDecimal(123 * 10 ** 27, 5),
        BigDecimal(-(10 ** 45) * 17, 40),
        BigDecimal.from_fields(42, FINITE_EXPONENT_MAX),
        BigDecimal.from_fields(-42, FINITE_EXPONENT_MIN),
        BigDecimal.from_fields(1000, FINITE_EXPONENT_MAX - 1),
    ]


@pytest.fixture
def special_values() -> list[BigDecimal]:
    """The four non-finite constants."""
    return [POSITIVE_INFINITY, NEGATIVE_INFINITY, NAN, SIGNALING_NAN]
