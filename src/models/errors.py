"""
Error types raised by the flood risk engine

The engine has a single error kind: ``ValidationError``. It is raised for
out-of-range or wrong-variant input before any computation starts, so a
failed call never leaves a partial result behind.
"""

import math
from typing import Any, Optional


class ValidationError(ValueError):
    """
    Invalid input passed to an engine operation

    Attributes:
        field: Name of the offending input field
        constraint: Human-readable description of the violated constraint
        value: The rejected value
    """

    def __init__(self, field: str, constraint: str, value: Any = None):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"Invalid value for '{field}': {constraint} (got {value!r})")

    def to_dict(self) -> dict:
        """Convert to dictionary for API error payloads"""
        return {
            "field": self.field,
            "constraint": self.constraint,
            "value": self.value if _is_json_scalar(self.value) else repr(self.value),
        }


def _is_json_scalar(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return value is None or isinstance(value, (str, int, bool))


def require_number(field: str, value: Any) -> float:
    """
    Ensure ``value`` is a finite real number

    Booleans are rejected even though they are ints in Python.

    Raises:
        ValidationError: if the value is not a finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, "must be a number", value)
    if not math.isfinite(value):
        raise ValidationError(field, "must be a finite number", value)
    return float(value)


def require_in_range(
    field: str,
    value: Any,
    minimum: float,
    maximum: float,
    integer: bool = False,
    unit: Optional[str] = None
) -> float:
    """
    Ensure ``value`` is a number inside the closed interval [minimum, maximum]

    Args:
        field: Field name reported on failure
        value: Value to check
        minimum: Inclusive lower bound
        maximum: Inclusive upper bound
        integer: Require an integral value
        unit: Optional unit shown in the error message

    Returns:
        The value as float (or int when ``integer`` is set)
    """
    number = require_number(field, value)
    if integer and not float(number).is_integer():
        raise ValidationError(field, "must be an integer", value)

    suffix = f" {unit}" if unit else ""
    if number < minimum or number > maximum:
        raise ValidationError(
            field,
            f"must be between {minimum:g} and {maximum:g}{suffix}",
            value
        )
    return int(number) if integer else number
