"""
Validation utilities shared by every numeric and currency helper.

Every public helper of the toolkit is a total function: malformed input never
raises, it is logged and replaced by a documented fallback value.
The precondition checks are written once here as guards that raise, and the
public functions are wrapped with fallback_on_invalid(), which turns the
raised error into a diagnostic plus the fallback.

Error taxonomy:
- InvalidInputError: None, blank or non-numeric argument
- InvalidParameterError: out-of-domain configuration (negative decimals, shift factor <= 0...)
- InconsistencyError: atomic unit whose value does not match its originalValue
"""
import functools
import inspect
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any, Callable, Dict, Optional, Tuple

from utilitybelt.logging_config import get_logger

logger = get_logger(__name__)


# ============================================================================
# ERROR TAXONOMY
# ============================================================================

class UtilityBeltError(ValueError):
    """Root exception for rejected utility input."""

    error_code: str = "UTILITYBELT_ERROR"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.detail = detail or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "detail": self.detail,
            }


class InvalidInputError(UtilityBeltError):
    error_code = "INVALID_INPUT"


class InvalidParameterError(UtilityBeltError):
    error_code = "INVALID_PARAMETER"


class InconsistencyError(UtilityBeltError):
    error_code = "INCONSISTENT_VALUE"


# ============================================================================
# DECIMAL PARSING
# ============================================================================

def parse_decimal_value(value) -> Optional[Decimal]:
    """
    Convert input to a finite Decimal safely.

    Args:
        value: Input value (Decimal, int, float, str, or None)

    Returns:
        Decimal, or None when the value is not a finite number

    Examples:
        >>> parse_decimal_value(" 12.50 ")
        Decimal('12.50')
        >>> parse_decimal_value(0.1)  # Through str(), no binary artefact
        Decimal('0.1')
        >>> parse_decimal_value("NaN") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, (float, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except (InvalidOperation, ValueError):
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


# ============================================================================
# GUARDS
# ============================================================================

def require_decimal(value, name: str = "number") -> Decimal:
    """
    Parse a numeric argument or raise InvalidInputError.

    Raises:
        InvalidInputError: If value is None, blank, non-numeric or not finite
    """
    parsed = parse_decimal_value(value)
    if parsed is None:
        raise InvalidInputError(
            f"invalid {name} parameter, expected a number or its string representation",
            detail={name: repr(value)}
            )
    return parsed


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_non_negative_int(value, name: str) -> int:
    """
    Raises:
        InvalidParameterError: If value is not an integer >= 0
    """
    if not _is_integer(value) or value < 0:
        raise InvalidParameterError(
            f"invalid {name} parameter {value!r}. Must be a non-negative integer",
            detail={name: repr(value)}
            )
    return value


def require_positive_int(value, name: str) -> int:
    """
    Raises:
        InvalidParameterError: If value is not an integer > 0
    """
    if not _is_integer(value) or value <= 0:
        raise InvalidParameterError(
            f"invalid {name} parameter {value!r}. Must be a positive integer bigger than 0",
            detail={name: repr(value)}
            )
    return value


def resolve_decimal_bounds(maximum_decimal, minimum_decimal, function_name: str) -> Tuple[int, int]:
    """
    Validate a (maximum, minimum) pair of displayed fraction digits.

    Both bounds must be non-negative integers. An inverted pair is repaired
    instead of rejected: minimum is lowered to maximum and a warning is logged.

    Args:
        maximum_decimal: Maximum number of fraction digits
        minimum_decimal: Minimum number of fraction digits
        function_name: Caller name, used in the warning

    Returns:
        Tuple of (maximum_decimal, minimum_decimal)

    Raises:
        InvalidParameterError: If a bound is not a non-negative integer

    Examples:
        >>> resolve_decimal_bounds(4, 2, "format_number")
        (4, 2)
        >>> resolve_decimal_bounds(2, 4, "format_number")  # Logs a warning
        (2, 2)
    """
    require_non_negative_int(maximum_decimal, "maximum_decimal")
    require_non_negative_int(minimum_decimal, "minimum_decimal")

    if maximum_decimal < minimum_decimal:
        logger.warning(
            f"{function_name}: maximum_decimal must be greater than or equal to minimum_decimal. "
            f"Setting minimum_decimal to maximum_decimal.",
            maximum_decimal=maximum_decimal,
            minimum_decimal=minimum_decimal
            )
        minimum_decimal = maximum_decimal

    return maximum_decimal, minimum_decimal


# ============================================================================
# BOUNDARY DECORATOR
# ============================================================================

def fallback_on_invalid(default: Any = None, echo_argument: Optional[str] = None) -> Callable:
    """
    Turn a guard failure into a logged diagnostic and a fallback value.

    Args:
        default: Value returned when a UtilityBeltError or a decimal error is raised
        echo_argument: If set, return str() of this argument instead of default

    Usage:
        @fallback_on_invalid(default=Decimal(0))
        def truncate_number(number, decimal=2): ...

        @fallback_on_invalid(echo_argument="number")
        def format_number(number, ...): ...  # returns str(number) on invalid input
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except UtilityBeltError as error:
                failure = error
            except DecimalException as error:
                # Arithmetic the guards did not foresee is reported like a rejected parameter
                failure = InvalidParameterError("decimal arithmetic failed", detail={"error": repr(error)})

            logger.error(
                f"{func.__name__}: {failure.message}",
                error_code=failure.error_code,
                **failure.detail
                )
            if echo_argument is not None:
                bound = signature.bind(*args, **kwargs)
                bound.apply_defaults()
                return str(bound.arguments.get(echo_argument))
            return default

        return wrapper

    return decorator
