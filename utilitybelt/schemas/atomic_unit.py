"""
Atomic unit schema.

An atomic unit stores a decimal amount as an integer string scaled by
10^precision, so it can travel through JSON or a database column without
floating-point loss:

    1234.567  <->  AtomicUnit(value="1234567", precision=3, original_value="1234.567", is_valid=True)

Instances are immutable. Both snake_case and the camelCase wire names
(originalValue, isValid) are accepted on input.
"""
# Postpones evaluation of type hints to improve imports and performance. Also avoid circular import issues.
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AtomicUnit(BaseModel):
    """
    Decimal amount as an integer string plus a power-of-ten precision.

    Attributes:
        value: Integer amount as a string (sign preserved), e.g. "1234567"
        precision: Number of decimal places the value is scaled by, >= 0
        original_value: Canonical string of the amount before conversion
        is_valid: False when the conversion failed (value "0", precision 0)

    Invariant:
        When is_valid is True, Decimal(value) / 10^precision == Decimal(original_value).
        atomic_unit_to_decimal() re-checks it instead of trusting the record.

    Examples:
        >>> AtomicUnit(value="1234567", precision=3, originalValue="1234.567", isValid=True)
        >>> AtomicUnit.model_validate({"value": 150, "precision": 2, "originalValue": "1.5", "isValid": True})
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    value: str = Field(..., description="Integer amount scaled by 10^precision")
    precision: int = Field(..., ge=0, strict=True, description="Power of ten the value is scaled by")
    original_value: Optional[str] = Field(None, alias="originalValue", description="Amount before conversion")
    is_valid: bool = Field(False, alias="isValid", description="Whether the conversion succeeded")

    @field_validator('value', 'original_value', mode='before')
    @classmethod
    def stringify_number(cls, v: Any) -> Any:
        """Accept numbers for the string fields, keeping their exact digits."""
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, Decimal)):
            return format(Decimal(v), "f")
        if isinstance(v, float):
            return str(v)
        return v


# Returned by number_to_atomic_unit() on invalid input
INVALID_ATOMIC_UNIT = AtomicUnit(value="0", precision=0, original_value="0", is_valid=False)
