"""
Atomic unit conversion.

Stores a decimal amount as an integer string plus a power-of-ten precision,
and converts it back after checking the record is still consistent.

Usage:
    from utilitybelt.utils.atomic_unit_utils import number_to_atomic_unit, atomic_unit_to_decimal

    unit = number_to_atomic_unit("1234.567")
    # AtomicUnit(value='1234567', precision=3, original_value='1234.567', is_valid=True)
    atomic_unit_to_decimal(unit)            # Decimal('1234.567')
"""
from collections.abc import Mapping
from decimal import Decimal, ROUND_FLOOR, localcontext

from pydantic import ValidationError

from utilitybelt.logging_config import get_logger
from utilitybelt.schemas.atomic_unit import AtomicUnit, INVALID_ATOMIC_UNIT
from utilitybelt.utils.number_utils import (
    normalize_negative_zero,
    normalize_numeric_string,
    to_canonical_string,
    working_precision,
    )
from utilitybelt.utils.validation_utils import (
    InconsistencyError,
    InvalidInputError,
    fallback_on_invalid,
    parse_decimal_value,
    require_decimal,
    )

logger = get_logger(__name__)


def _coerce_atomic_unit(atomic_unit) -> AtomicUnit:
    if isinstance(atomic_unit, AtomicUnit):
        return atomic_unit

    if not isinstance(atomic_unit, Mapping):
        raise InvalidInputError(
            "invalid atomic unit, expected an AtomicUnit or a mapping",
            detail={"atomic_unit": repr(atomic_unit)}
            )

    try:
        return AtomicUnit.model_validate(dict(atomic_unit))
    except ValidationError as e:
        raise InvalidInputError(
            "invalid atomic unit, missing or malformed value, precision or isValid",
            detail={"atomic_unit": repr(atomic_unit), "errors": e.error_count()}
            ) from e


@fallback_on_invalid(default=INVALID_ATOMIC_UNIT)
def number_to_atomic_unit(number) -> AtomicUnit:
    """
    Convert a number to its atomic unit representation.

    Strings are cleaned before parsing: underscores are removed and a lone
    decimal comma is read as a dot ('1234,5' -> 1234.5).

    Args:
        number: Decimal, int, float or string representation of a number

    Returns:
        Valid AtomicUnit, or INVALID_ATOMIC_UNIT (value "0", precision 0, is_valid False) on invalid input

    Examples:
        >>> number_to_atomic_unit("1234.567")
        AtomicUnit(value='1234567', precision=3, original_value='1234.567', is_valid=True)
        >>> number_to_atomic_unit("-0.05").value
        '-5'
        >>> number_to_atomic_unit(None).is_valid  # Logs an error
        False
    """
    if isinstance(number, str):
        number = normalize_numeric_string(number)

    original_value = to_canonical_string(require_decimal(number))
    precision = len(original_value.split(".")[1]) if "." in original_value else 0

    canonical = Decimal(original_value)
    with localcontext() as ctx:
        ctx.prec = working_precision(canonical, precision)
        scaled = canonical.scaleb(precision).to_integral_value(rounding=ROUND_FLOOR)

    return AtomicUnit(
        value=format(scaled, "f"),
        precision=precision,
        original_value=original_value,
        is_valid=True
        )


@fallback_on_invalid(default=Decimal(0))
def atomic_unit_to_decimal(atomic_unit, verify_original: bool = True) -> Decimal:
    """
    Convert an atomic unit back to a Decimal.

    Args:
        atomic_unit: AtomicUnit, or a mapping with value, precision, originalValue and isValid
        verify_original: Check that value / 10^precision equals originalValue (default: True)

    Returns:
        The decimal amount, or Decimal(0) when the record is invalid or inconsistent

    Examples:
        >>> atomic_unit_to_decimal({"value": "1234567", "precision": 3, "originalValue": "1234.567", "isValid": True})
        Decimal('1234.567')
        >>> atomic_unit_to_decimal({"value": "1", "precision": 3, "originalValue": "5", "isValid": True})  # Logs an error
        Decimal('0')
    """
    unit = _coerce_atomic_unit(atomic_unit)

    if not unit.is_valid:
        raise InvalidInputError("atomic unit is flagged as invalid", detail={"atomic_unit": repr(unit)})

    value = parse_decimal_value(unit.value)
    if value is None:
        raise InvalidInputError("invalid atomic unit value, not a number", detail={"value": unit.value})

    original_value = None
    if verify_original:
        original_value = parse_decimal_value(unit.original_value)
        if original_value is None:
            raise InvalidInputError(
                "invalid atomic unit originalValue, not a number",
                detail={"original_value": unit.original_value}
                )

    with localcontext() as ctx:
        ctx.prec = working_precision(value, unit.precision)
        result = value.scaleb(-unit.precision)

    if verify_original and result != original_value:
        raise InconsistencyError(
            "atomic unit value does not match originalValue",
            detail={"value": unit.value, "precision": unit.precision, "original_value": unit.original_value}
            )

    return normalize_negative_zero(result)
