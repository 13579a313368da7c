"""
Number utilities for UtilityBelt.

Exact decimal arithmetic on top of decimal.Decimal: truncation and the three
rounding rules, display formatting and magnitude labelling.

Usage:
    from utilitybelt.utils.number_utils import truncate_number, format_number, label_number

    truncate_number("123.45699")           # Decimal('123.45')
    format_number(1234.56789)               # '1 234.56' (narrow no-break space, truncated)
    label_number(1234567, lang="fr")        # '1.23 Million'

Every public function is total: invalid input is logged and replaced by a
fallback (Decimal 0, 0, or the stringified input for formatters).

Rounding rules (2 decimals, on 123.45499 and -123.45499):
    truncate_number      123.45    -123.45   discards extra digits
    round_number         123.45    -123.45   half-up on magnitude
    round_number_up      123.46    -123.46   away from zero, from any digit
    round_number_down    123.45    -123.45   toward zero, from any digit
"""
from decimal import Decimal, ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, localcontext

from babel.numbers import format_decimal

from utilitybelt.config import get_settings
from utilitybelt.logging_config import get_logger
from utilitybelt.utils.string_utils import replace_last_comma_by_dot
from utilitybelt.utils.translation_utils import get_magnitude_labels, magnitude_plural_suffix
from utilitybelt.utils.validation_utils import (
    fallback_on_invalid,
    parse_decimal_value,
    require_decimal,
    require_non_negative_int,
    resolve_decimal_bounds,
    )

logger = get_logger(__name__)

# Thousands separator of every formatted number
NARROW_NO_BREAK_SPACE = "\u202f"

# Babel renders with this locale, then the grouping comma is swapped for NARROW_NO_BREAK_SPACE
_RENDERING_LOCALE = "en_US"

DECIMAL_PRECISION = get_settings().DECIMAL_PRECISION

MAGNITUDES = (
    ("trillion", Decimal(10) ** 12),
    ("billion", Decimal(10) ** 9),
    ("million", Decimal(10) ** 6),
    )


# ============================================================================
# HELPERS
# ============================================================================

def normalize_negative_zero(value: Decimal) -> Decimal:
    """Decimal('-0.00') -> Decimal('0.00'), anything else unchanged."""
    return value.copy_abs() if value.is_zero() else value


def to_canonical_string(value: Decimal) -> str:
    """
    Plain string without exponent nor trailing fractional zeros.

    Examples:
        >>> to_canonical_string(Decimal("1234.5670"))
        '1234.567'
        >>> to_canonical_string(Decimal("1E+3"))
        '1000'
    """
    text = format(normalize_negative_zero(value), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def working_precision(value: Decimal, shift: int = 0) -> int:
    """
    Significant digits needed to scale value by 10^shift without rounding.

    Never below DECIMAL_PRECISION, so everyday numbers share one context size.

    Examples:
        >>> working_precision(Decimal("1.5"))
        100
        >>> working_precision(Decimal("1E+150"), 2)
        154
    """
    sign, digits, exponent = value.as_tuple()
    return max(DECIMAL_PRECISION, len(digits) + abs(exponent) + abs(shift) + 1)


def normalize_numeric_string(string: str) -> str:
    """
    Clean a human-typed number before parsing.

    Underscores are removed. A comma is a decimal comma when the string has no
    dot ('1234,5'), otherwise commas are thousands separators ('1,234.5').
    """
    cleaned = string.replace("_", "").strip()
    if "," in cleaned and "." not in cleaned:
        return replace_last_comma_by_dot(cleaned)
    return cleaned.replace(",", "")


def _scale_and_round(value: Decimal, decimal: int, rounding: str) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = working_precision(value, decimal)
        factor = Decimal(10) ** decimal
        result = (value * factor).to_integral_value(rounding=rounding) / factor
    return normalize_negative_zero(result)


def truncate_decimal(value: Decimal, decimal: int) -> Decimal:
    return _scale_and_round(value, decimal, ROUND_DOWN)


def round_half_up_decimal(value: Decimal, decimal: int) -> Decimal:
    return _scale_and_round(value, decimal, ROUND_HALF_UP)


def round_up_decimal(value: Decimal, decimal: int) -> Decimal:
    return _scale_and_round(value, decimal, ROUND_FLOOR if value < 0 else ROUND_CEILING)


def round_down_decimal(value: Decimal, decimal: int) -> Decimal:
    return _scale_and_round(value, decimal, ROUND_CEILING if value < 0 else ROUND_FLOOR)


def fraction_pattern(minimum_decimal: int, maximum_decimal: int) -> str:
    """
    Babel pattern fraction for a digit range.

    Examples:
        >>> fraction_pattern(2, 4)
        '.00##'
        >>> fraction_pattern(0, 0)
        ''
    """
    if maximum_decimal == 0:
        return ""
    return "." + "0" * minimum_decimal + "#" * (maximum_decimal - minimum_decimal)


def render_grouped(value: Decimal, minimum_decimal: int, maximum_decimal: int) -> str:
    """Render with narrow no-break space thousands separators and a dot decimal separator."""
    pattern = "#,##0" + fraction_pattern(minimum_decimal, maximum_decimal)
    with localcontext() as ctx:
        ctx.prec = working_precision(value, maximum_decimal)
        text = format_decimal(value, format=pattern, locale=_RENDERING_LOCALE)
    return text.replace(",", NARROW_NO_BREAK_SPACE)


def format_decimal_value(value: Decimal, is_rounded: bool, maximum_decimal: int, minimum_decimal: int) -> str:
    """format_number() on an already validated Decimal and decimal bounds."""
    processed = round_half_up_decimal(value, maximum_decimal) if is_rounded else truncate_decimal(value, maximum_decimal)
    return render_grouped(normalize_negative_zero(processed), minimum_decimal, maximum_decimal)


def split_magnitude(value: Decimal):
    """
    Find the magnitude of a number.

    Returns:
        Tuple of (magnitude name, divided value), or (None, value) below one million

    Examples:
        >>> split_magnitude(Decimal("1000000"))
        ('million', Decimal('1'))
        >>> split_magnitude(Decimal("999999"))
        (None, Decimal('999999'))
    """
    absolute = value.copy_abs()
    for name, threshold in MAGNITUDES:
        if absolute >= threshold:
            with localcontext() as ctx:
                ctx.prec = working_precision(value, threshold.adjusted())
                return name, value / threshold
    return None, value


# ============================================================================
# PARSING
# ============================================================================

def is_number(value) -> bool:
    """
    True when value is a finite number or the string representation of one.

    Examples:
        >>> is_number("12.5")
        True
        >>> is_number("abc"), is_number(None), is_number(float("nan"))
        (False, False, False)
    """
    return parse_decimal_value(value) is not None


@fallback_on_invalid(default=Decimal(0))
def string_to_decimal(string_number) -> Decimal:
    """
    Convert the string representation of a number to a Decimal.

    Returns:
        Decimal, or Decimal(0) if the string is None, blank or not a number
    """
    return require_decimal(string_number, "string_number")


@fallback_on_invalid(default=Decimal(0))
def absolute_to_decimal(number) -> Decimal:
    """Absolute value as a Decimal, Decimal(0) on invalid input."""
    return require_decimal(number).copy_abs()


# ============================================================================
# TRUNCATION AND ROUNDING
# ============================================================================

@fallback_on_invalid(default=Decimal(0))
def truncate_number(number, decimal: int = 2) -> Decimal:
    """
    Truncate a number to `decimal` places without rounding.

    Args:
        number: Number or string representation of a number
        decimal: Places to keep, non-negative integer (default: 2)

    Returns:
        Truncated Decimal, or Decimal(0) on invalid input

    Examples:
        >>> truncate_number(123.456789)
        Decimal('123.45')
        >>> truncate_number("-123.456789", 3)
        Decimal('-123.456')
    """
    value = require_decimal(number)
    require_non_negative_int(decimal, "decimal")
    return truncate_decimal(value, decimal)


@fallback_on_invalid(default=Decimal(0))
def round_number(number, decimal: int = 2) -> Decimal:
    """
    Round half-up to `decimal` places.

    Only the first dropped digit matters: 123.45499 -> 123.45, 123.455 -> 123.46.
    Ties go away from zero: -123.455 -> -123.46.

    Returns:
        Rounded Decimal, or Decimal(0) on invalid input
    """
    value = require_decimal(number)
    require_non_negative_int(decimal, "decimal")
    return round_half_up_decimal(value, decimal)


@fallback_on_invalid(default=Decimal(0))
def round_number_up(number, decimal: int = 2) -> Decimal:
    """
    Round up from any dropped digit: ceiling for positive numbers,
    floor for negative ones (the magnitude always grows).

    Examples:
        >>> round_number_up(123.45001)
        Decimal('123.46')
        >>> round_number_up(-123.45499)
        Decimal('-123.46')
    """
    value = require_decimal(number)
    require_non_negative_int(decimal, "decimal")
    return round_up_decimal(value, decimal)


@fallback_on_invalid(default=Decimal(0))
def round_number_down(number, decimal: int = 2) -> Decimal:
    """
    Round down from any dropped digit: floor for positive numbers,
    ceiling for negative ones (the magnitude never grows).

    Examples:
        >>> round_number_down(123.45999)
        Decimal('123.45')
        >>> round_number_down(-123.45499)
        Decimal('-123.45')
    """
    value = require_decimal(number)
    require_non_negative_int(decimal, "decimal")
    return round_down_decimal(value, decimal)


# ============================================================================
# FORMATTING
# ============================================================================

@fallback_on_invalid(echo_argument="number")
def format_number(number, is_rounded: bool = False, maximum_decimal: int = 2, minimum_decimal: int = 2) -> str:
    """
    Format a number with a narrow no-break space as thousands separator
    and a dot as decimal separator.

    Args:
        number: Number or string representation of a number
        is_rounded: Round half-up instead of truncating (default: False)
        maximum_decimal: Maximum displayed decimals (default: 2)
        minimum_decimal: Minimum displayed decimals (default: 2), lowered to maximum_decimal if greater

    Returns:
        Formatted string, or str(number) on invalid input

    Examples:
        >>> format_number(1234.56789)
        '1 234.56'
        >>> format_number(1234.56789, True)
        '1 234.57'
        >>> format_number(-0.001)
        '0.00'
    """
    value = require_decimal(number)
    maximum_decimal, minimum_decimal = resolve_decimal_bounds(maximum_decimal, minimum_decimal, "format_number")
    return format_decimal_value(value, is_rounded, maximum_decimal, minimum_decimal)


@fallback_on_invalid(default=0)
def count_decimal_places(number) -> int:
    """
    Count the digits after the decimal point.

    Strings are cleaned first: underscores are removed and a lone decimal
    comma is read as a dot. Trailing fractional zeros do not count.

    Examples:
        >>> count_decimal_places("1,234.567")
        3
        >>> count_decimal_places(1234)
        0
        >>> count_decimal_places("12,5")
        1
        >>> count_decimal_places(None)  # Logs an error
        0
    """
    if isinstance(number, str):
        number = normalize_numeric_string(number)
    canonical = to_canonical_string(require_decimal(number))
    return len(canonical.split(".")[1]) if "." in canonical else 0


@fallback_on_invalid(echo_argument="number")
def label_number(
    number,
    lang: str = "en",
    short_label: bool = False,
    is_rounded: bool = False,
    maximum_decimal: int = 2,
    minimum_decimal: int = 2
    ) -> str:
    """
    Label a number by million, billion or trillion, formatted like format_number().

    Args:
        number: Number or string representation of a number
        lang: 'en' or 'fr', any other language uses English labels (default: 'en')
        short_label: Use M/B/T ('G' for French billions) instead of words (default: False)
        is_rounded: Round half-up instead of truncating (default: False)
        maximum_decimal: Maximum displayed decimals (default: 2)
        minimum_decimal: Minimum displayed decimals (default: 2)

    Returns:
        Labelled string, or str(number) on invalid input

    Examples:
        >>> label_number(1000000)
        '1.00 Million'
        >>> label_number(2500000000, "fr")
        '2.50 Milliards'
        >>> label_number(2500000000, "fr", True)
        '2.50 G'
        >>> label_number(999999)
        '999 999.00'
    """
    value = require_decimal(number)
    maximum_decimal, minimum_decimal = resolve_decimal_bounds(maximum_decimal, minimum_decimal, "label_number")

    magnitude, divided = split_magnitude(value)
    if magnitude is None:
        return format_decimal_value(value, is_rounded, maximum_decimal, minimum_decimal)

    label = get_magnitude_labels(lang, short_label)[magnitude]
    suffix = magnitude_plural_suffix(lang, short_label, divided)
    formatted = format_decimal_value(divided, is_rounded, maximum_decimal, minimum_decimal)
    return f"{formatted} {label}{suffix}"
