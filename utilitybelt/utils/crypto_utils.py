"""
Cryptocurrency unit shifting.

Moves the decimal point of an amount between a coin's smallest indivisible
unit and its display unit (satoshi <-> bitcoin uses a shift factor of 8).
Both directions truncate toward zero, so sub-unit dust is dropped, never rounded.

Usage:
    from utilitybelt.utils.crypto_utils import shift_down, shift_up

    shift_down(100000000)           # Decimal('1.00000000')  satoshis -> BTC
    shift_up("0.00000001")          # Decimal('1')           BTC -> satoshis
    shift_down(123456789, 6)        # Decimal('123.456789')
"""
from decimal import Decimal, ROUND_DOWN, localcontext

from utilitybelt.logging_config import get_logger
from utilitybelt.utils.number_utils import normalize_negative_zero, working_precision
from utilitybelt.utils.validation_utils import fallback_on_invalid, require_decimal, require_positive_int

logger = get_logger(__name__)

# Satoshis per bitcoin
DEFAULT_SHIFT_FACTOR = 8


@fallback_on_invalid(default=Decimal(0))
def shift_down(amount, shift_factor: int = DEFAULT_SHIFT_FACTOR) -> Decimal:
    """
    Convert an amount of smallest units to display units.

    The amount is truncated to an integer first, then divided by 10^shift_factor.

    Args:
        amount: Number or string representation of a number
        shift_factor: Power of ten to divide by, positive integer (default: 8)

    Returns:
        Shifted Decimal, or Decimal(0) on invalid input

    Examples:
        >>> shift_down(100000000) == 1
        True
        >>> shift_down("150000000.9")
        Decimal('1.50000000')
        >>> shift_down(100, 0)  # Logs an error
        Decimal('0')
    """
    value = require_decimal(amount, "amount")
    require_positive_int(shift_factor, "shift_factor")

    with localcontext() as ctx:
        ctx.prec = working_precision(value, shift_factor)
        shifted = value.quantize(Decimal(1), rounding=ROUND_DOWN).scaleb(-shift_factor)

    return normalize_negative_zero(shifted)


@fallback_on_invalid(default=Decimal(0))
def shift_up(amount, shift_factor: int = DEFAULT_SHIFT_FACTOR) -> Decimal:
    """
    Convert an amount of display units to smallest units.

    The amount is multiplied by 10^shift_factor, then truncated to an integer.
    shift_down(shift_up(x)) == x only when x has at most shift_factor decimals.

    Examples:
        >>> shift_up("1.5")
        Decimal('150000000')
        >>> shift_up("0.000000019")  # Dust below one satoshi is dropped
        Decimal('1')
    """
    value = require_decimal(amount, "amount")
    require_positive_int(shift_factor, "shift_factor")

    with localcontext() as ctx:
        ctx.prec = working_precision(value, shift_factor)
        shifted = value.scaleb(shift_factor).quantize(Decimal(1), rounding=ROUND_DOWN)

    return normalize_negative_zero(shifted)
