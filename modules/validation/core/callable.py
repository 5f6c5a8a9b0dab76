"""
Validators built from plain functions.

CallableValidator wraps a `(value, context) -> bool` function. For the
common single-argument case use CallableValidator.from_predicate(), which
adapts a `value -> bool` predicate explicitly.
"""

from typing import Any, Callable, Optional

from modules.validation.core.base import (
    BaseValidator,
    ErrorCategory,
    ValidationContext,
    ValidationResult,
)
from modules.validation.core.exceptions import ConfigurationError
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

ValidationFunction = Callable[[Any, Optional[ValidationContext]], bool]
Predicate = Callable[[Any], bool]


class CallableValidator(BaseValidator):
    """
    Validator backed by a boolean function.

    Example:
        is_even = CallableValidator(
            "even",
            lambda value, context: isinstance(value, int) and value % 2 == 0,
            error_message="Value must be an even number"
        )
    """

    def __init__(
        self,
        name: str,
        func: ValidationFunction,
        error_message: Optional[str] = None,
        success_message: Optional[str] = None
    ):
        if not callable(func):
            raise ConfigurationError(f"Validator '{name}' requires a callable, got {type(func).__name__}")

        super().__init__(name=name, error_message=error_message, success_message=success_message)
        self._func = func

    @classmethod
    def from_predicate(
        cls,
        name: str,
        predicate: Predicate,
        error_message: Optional[str] = None,
        success_message: Optional[str] = None
    ) -> "CallableValidator":
        """Build a validator from a single-argument predicate that ignores the context"""
        return cls(
            name,
            lambda value, context: predicate(value),
            error_message=error_message,
            success_message=success_message
        )

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        try:
            passed = bool(self._func(value, context))
        except Exception as e:
            logger.warning(f"Validator '{self.name}' function raised {type(e).__name__}: {e}")
            return self._failure(
                f"Validation error: {e}",
                constraint="callable",
                category=ErrorCategory.FORMAT_MISMATCH,
                exception=str(e),
                exception_type=type(e).__name__
            )

        if passed:
            return self._success()
        return self._failure(constraint="callable", category=ErrorCategory.FORMAT_MISMATCH)
