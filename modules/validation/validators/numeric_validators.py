"""
Numeric validators module.

Contains validators for numbers and numeric strings:
- NumberValidator: Any number or numeric string
- IntegerValidator: Whole numbers, optional strict typing and range
- FloatValidator: Real numbers, optional strict typing, range and precision

Booleans are never numbers. Numeric strings may carry surrounding
whitespace, a sign, a fractional part and an exponent ("  -1.5e3 ").
"""

import math
import re
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from modules.validation.core.base import (
    BaseValidator,
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationResult,
)
from modules.validation.core.registry import register_validator

_NUMERIC_STRING = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)

# Integer digits of the largest finite float; longer numbers are out of range
MAX_DIGITS = sys.float_info.max_10_exp + 1
LOG10_2 = math.log10(2)


def is_native_number(value: Any) -> bool:
    """Check for a finite int, float or Decimal (bool excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return True


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert a number or numeric string to Decimal.

    Floats go through repr() so 0.1 becomes Decimal("0.1"), not the
    binary expansion.

    Args:
        value: Candidate value

    Returns:
        Decimal, or None if the value is not numeric
    """
    if is_native_number(value):
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(value)

    if isinstance(value, str) and _NUMERIC_STRING.fullmatch(value):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None

    return None


def decimal_places(number: Decimal) -> int:
    """Count significant fractional digits (trailing zeros ignored)"""
    _, digits, exponent = number.as_tuple()
    if exponent >= 0:
        return 0

    trailing_zeros = 0
    for digit in reversed(digits):
        if digit != 0:
            break
        trailing_zeros += 1
    if trailing_zeros == len(digits):
        return 0
    return max(-exponent - trailing_zeros, 0)


def integer_digits(number: Any) -> int:
    """Digits before the decimal point; approximate for very large ints"""
    if isinstance(number, Decimal):
        return max(number.adjusted() + 1, 1)
    return int(abs(number).bit_length() * LOG10_2) + 1


def _describe(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, Decimal)) and integer_digits(value) > MAX_DIGITS:
        return f"of {integer_digits(value)} digits"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return type(value).__name__


class _RangeMixin:
    """Shared min/max handling for parameterized numeric validators"""

    def _check_bound_parameters(self, **bounds: Any) -> Optional[ValidationResult]:
        for key, bound in bounds.items():
            if bound is not None and not is_native_number(bound):
                return self._parameter_failure(key, bound, "a number")
        return None

    def _check_magnitude(self, number: Any, value: Any) -> Optional[ValidationResult]:
        digits = integer_digits(number)
        if digits <= MAX_DIGITS:
            return None
        return self._failure(
            f"Value has {digits} integer digits, maximum supported is {MAX_DIGITS}",
            constraint="magnitude",
            category=ErrorCategory.RANGE_VIOLATION,
            type=type(value).__name__,
            digits=digits,
            max_digits=MAX_DIGITS
        )

    def _check_range(self, number: Any, min_value: Any, max_value: Any) -> Optional[ValidationResult]:
        if min_value is not None and number < min_value:
            return self._failure(
                f"Value {number} is below minimum {min_value}",
                constraint="min",
                category=ErrorCategory.RANGE_VIOLATION,
                value=number,
                min=min_value
            )

        if max_value is not None and number > max_value:
            return self._failure(
                f"Value {number} is above maximum {max_value}",
                constraint="max",
                category=ErrorCategory.RANGE_VIOLATION,
                value=number,
                max=max_value
            )

        return None


@register_validator("number")
class NumberValidator(BaseValidator):
    """Validate that a value is a number or a numeric string"""

    error_message = "Value must be numeric"
    success_message = "Value is numeric"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if to_decimal(value) is None:
            category = ErrorCategory.FORMAT_MISMATCH if isinstance(value, str) else ErrorCategory.TYPE_MISMATCH
            return self._failure(
                f"Value {_describe(value)} is not numeric",
                constraint="numeric",
                category=category,
                type=type(value).__name__,
                value=value
            )

        return self._success(
            f"Value {_describe(value)} is numeric",
            type=type(value).__name__,
            value=value
        )


@register_validator("integer")
class IntegerValidator(_RangeMixin, ParameterizedValidator):
    """
    Validate that a value is an integer.

    In the default mode, numeric strings and floats are accepted when they
    have no fractional part ("42", 42.0, "1e3"). In strict mode only an
    actual int passes.

    Parameters (construction or context):
        strict: Require an int, no coercion (default False)
        min: Minimum value, inclusive
        max: Maximum value, inclusive
    """

    error_message = "Value must be an integer"
    success_message = "Value is a valid integer"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        strict = bool(self.resolve("strict", context, False))
        min_value = self.resolve("min", context)
        max_value = self.resolve("max", context)

        invalid_parameter = self._check_bound_parameters(min=min_value, max=max_value)
        if invalid_parameter is not None:
            return invalid_parameter

        if strict:
            if isinstance(value, bool) or not isinstance(value, int):
                return self._failure(
                    f"Value {_describe(value)} is not an integer (strict mode)",
                    constraint="type",
                    category=ErrorCategory.TYPE_MISMATCH,
                    type=type(value).__name__,
                    value=value,
                    strict=True
                )
            number = value
            too_large = self._check_magnitude(number, value)
            if too_large is not None:
                return too_large
        else:
            decimal_value = to_decimal(value)
            if decimal_value is None:
                category = ErrorCategory.FORMAT_MISMATCH if isinstance(value, str) else ErrorCategory.TYPE_MISMATCH
                return self._failure(
                    f"Value {_describe(value)} is not numeric",
                    constraint="numeric",
                    category=category,
                    type=type(value).__name__,
                    value=value
                )

            too_large = self._check_magnitude(decimal_value, value)
            if too_large is not None:
                return too_large

            if decimal_value != decimal_value.to_integral_value():
                return self._failure(
                    f"Value {_describe(value)} is not an integer (has decimal part)",
                    constraint="integer",
                    category=ErrorCategory.FORMAT_MISMATCH,
                    type=type(value).__name__,
                    value=value,
                    decimal_part=True
                )
            number = int(decimal_value)

        out_of_range = self._check_range(number, min_value, max_value)
        if out_of_range is not None:
            return out_of_range

        message = f"Value {number} is a valid integer"
        range_info = []
        if min_value is not None:
            range_info.append(f"min: {min_value}")
        if max_value is not None:
            range_info.append(f"max: {max_value}")
        if range_info:
            message += " (" + ", ".join(range_info) + ")"

        return self._success(message, value=number, min=min_value, max=max_value, strict=strict)


@register_validator("float")
class FloatValidator(_RangeMixin, ParameterizedValidator):
    """
    Validate that a value is a real number.

    Parameters (construction or context):
        strict: Require an int or float, no string coercion (default False)
        min: Minimum value, inclusive
        max: Maximum value, inclusive
        precision: Maximum number of significant decimal places
    """

    error_message = "Value must be a floating-point number"
    success_message = "Value is a valid float"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        strict = bool(self.resolve("strict", context, False))
        min_value = self.resolve("min", context)
        max_value = self.resolve("max", context)
        precision = self.resolve("precision", context)

        invalid_parameter = self._check_bound_parameters(min=min_value, max=max_value)
        if invalid_parameter is not None:
            return invalid_parameter
        if precision is not None and (isinstance(precision, bool) or not isinstance(precision, int)):
            return self._parameter_failure("precision", precision, "an integer")

        if strict and (isinstance(value, bool) or not isinstance(value, (int, float))):
            return self._failure(
                f"Value {_describe(value)} is not a float (strict mode)",
                constraint="type",
                category=ErrorCategory.TYPE_MISMATCH,
                type=type(value).__name__,
                value=value,
                strict=True
            )

        decimal_value = to_decimal(value)
        if decimal_value is None:
            category = ErrorCategory.FORMAT_MISMATCH if isinstance(value, str) else ErrorCategory.TYPE_MISMATCH
            return self._failure(
                f"Value {_describe(value)} is not numeric",
                constraint="numeric",
                category=category,
                type=type(value).__name__,
                value=value
            )

        too_large = self._check_magnitude(decimal_value, value)
        if too_large is not None:
            return too_large

        number = float(decimal_value)
        if not math.isfinite(number):
            return self._failure(
                f"Value {_describe(value)} overflows the floating-point range",
                constraint="magnitude",
                category=ErrorCategory.RANGE_VIOLATION,
                type=type(value).__name__,
                value=value
            )

        actual_precision = decimal_places(decimal_value)
        if precision is not None and precision >= 0 and actual_precision > precision:
            return self._failure(
                f"Value {number} has {actual_precision} decimal places, maximum allowed is {precision}",
                constraint="precision",
                category=ErrorCategory.RANGE_VIOLATION,
                value=number,
                precision=precision,
                actual_precision=actual_precision
            )

        out_of_range = self._check_range(number, min_value, max_value)
        if out_of_range is not None:
            return out_of_range

        message = f"Value {number} is a valid float"
        constraints = []
        if min_value is not None:
            constraints.append(f"min: {min_value}")
        if max_value is not None:
            constraints.append(f"max: {max_value}")
        if precision is not None:
            constraints.append(f"precision: {precision}")
        if constraints:
            message += " (" + ", ".join(constraints) + ")"

        return self._success(
            message,
            value=number,
            min=min_value,
            max=max_value,
            precision=precision,
            actual_precision=actual_precision if precision is not None else None,
            strict=strict
        )
