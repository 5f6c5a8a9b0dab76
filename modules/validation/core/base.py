"""
Base classes and data models for validation system.

This module provides the foundation for all validators:
- BaseValidator: Abstract base class for all validators
- ParameterizedValidator: Base class for validators with named parameters
- ValidationResult: Standard, immutable result format
- ValidationResultType: Result kinds (success, failure, warning)
- ValidationContext: Per-call configuration bag
- ErrorCategory: Failure taxonomy carried in result errors
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from modules.validation.core.exceptions import ConfigurationError
from shared.utils.logger import log_error, log_validation_failure, setup_logger

logger = setup_logger(__name__)


class ValidationResultType(str, Enum):
    """Kinds of validation results"""
    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"  # passed, with caveats


class ErrorCategory(str, Enum):
    """Categories of validation failures, stored under errors['category']"""
    TYPE_MISMATCH = "type_mismatch"
    FORMAT_MISMATCH = "format_mismatch"
    RANGE_VIOLATION = "range_violation"
    CHECKSUM_FAILURE = "checksum_failure"
    UNSUPPORTED_VARIANT = "unsupported_variant"
    COLLABORATOR_UNAVAILABLE = "collaborator_unavailable"
    INTERNAL_ERROR = "internal_error"  # validator raised unexpectedly


@dataclass(frozen=True)
class ValidationResult:
    """
    Standard validation result format.

    All validators must return this format for consistency. Results are
    immutable; the errors mapping holds diagnostic detail for failures and
    warnings, or extracted metadata (normalized value, parsed version...)
    for successes.

    Invariants:
        kind == WARNING implies is_valid
        kind == FAILURE implies not is_valid
    """
    is_valid: bool
    message: Optional[str] = None
    errors: Dict[str, Any] = dataclass_field(default_factory=dict)
    kind: Optional[ValidationResultType] = None

    def __post_init__(self):
        kind = self.kind
        if kind is None:
            kind = ValidationResultType.SUCCESS if self.is_valid else ValidationResultType.FAILURE
        else:
            kind = ValidationResultType(kind)

        if kind == ValidationResultType.WARNING and not self.is_valid:
            raise ValueError("A warning result must be valid")
        if kind == ValidationResultType.FAILURE and self.is_valid:
            raise ValueError("A failure result cannot be valid")
        if kind == ValidationResultType.SUCCESS and not self.is_valid:
            raise ValueError("A success result must be valid")

        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "errors", dict(self.errors))

    @classmethod
    def success(cls, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> "ValidationResult":
        """Create a successful result, optionally carrying extracted metadata"""
        return cls(True, message, details or {}, ValidationResultType.SUCCESS)

    @classmethod
    def failure(cls, message: Optional[str] = None, errors: Optional[Dict[str, Any]] = None) -> "ValidationResult":
        """Create a failed result"""
        return cls(False, message, errors or {}, ValidationResultType.FAILURE)

    @classmethod
    def warning(cls, message: Optional[str] = None, errors: Optional[Dict[str, Any]] = None) -> "ValidationResult":
        """Create a passing result with caveats"""
        return cls(True, message, errors or {}, ValidationResultType.WARNING)

    @property
    def is_warning(self) -> bool:
        return self.kind == ValidationResultType.WARNING

    @property
    def constraint(self) -> Optional[str]:
        """Specific constraint tag of a failure or warning, if any"""
        return self.errors.get("constraint")

    @property
    def category(self) -> Optional[str]:
        return self.errors.get("category")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "is_valid": self.is_valid,
            "message": self.message,
            "errors": dict(self.errors),
            "kind": self.kind.value,
        }


class ValidationContext:
    """
    Ordered key/value bag passed per validation call.

    Used to override or supply validator parameters (min, max, strict,
    version...) and to opt into optional checks (check_dns...). Lookups
    distinguish an absent key from a key stored with a None value.
    Validators only read from a context, they never modify it.

    Example:
        context = ValidationContext({"min": 3}).set("max", 10)
        validator.validate("hello", context)
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, **values: Any):
        self._data: Dict[str, Any] = dict(data or {})
        self._data.update(values)

    def set(self, key: str, value: Any) -> "ValidationContext":
        """Set a context value (fluent)"""
        self._data[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a context value.

        Args:
            key: Context key
            default: Returned only when the key is absent

        Returns:
            Stored value (which may be None) or default
        """
        if key in self._data:
            return self._data[key]
        return default

    def has(self, key: str) -> bool:
        """Check if a key is present, even with a None value"""
        return key in self._data

    def remove(self, key: str) -> "ValidationContext":
        """Remove a key if present (fluent)"""
        self._data.pop(key, None)
        return self

    def all(self) -> Dict[str, Any]:
        """Get a copy of all context data, in insertion order"""
        return dict(self._data)

    def clear(self) -> "ValidationContext":
        """Remove all context data (fluent)"""
        self._data.clear()
        return self

    def copy(self) -> "ValidationContext":
        return ValidationContext(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationContext):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ValidationContext({self._data!r})"


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    All validators implement the same contract: validate(value, context)
    returns a ValidationResult and never raises for malformed input; a
    wrong type or bad syntax is itself a failed result. Subclasses
    implement _validate(); validate() wraps it with the _pre_validate and
    _post_validate hooks.

    The validator name is the registry key. It defaults to the lowercased
    class name without the "Validator" suffix (EmailValidator -> "email").

    Example:
        @register_validator("even")
        class EvenValidator(BaseValidator):
            def _validate(self, value, context=None) -> ValidationResult:
                if value % 2:
                    return self._failure("Value must be even", constraint="even",
                                         category=ErrorCategory.FORMAT_MISMATCH)
                return self._success()
    """

    error_message: str = "Validation failed"
    success_message: str = "Validation passed"

    def __init__(
        self,
        name: Optional[str] = None,
        error_message: Optional[str] = None,
        success_message: Optional[str] = None
    ):
        """
        Initialize validator.

        Args:
            name: Registry name; defaults to the class-derived name
            error_message: Default message for failures
            success_message: Default message for successes

        Raises:
            ConfigurationError: If the name is empty or not lowercase
        """
        self._name = self._check_name(name) if name is not None else self.default_name()
        if error_message is not None:
            self.error_message = error_message
        if success_message is not None:
            self.success_message = success_message

    @property
    def name(self) -> str:
        """Stable, lowercase, unique identifier used as registry key"""
        return self._name

    @classmethod
    def default_name(cls) -> str:
        class_name = cls.__name__
        if class_name.endswith("Validator") and class_name != "Validator":
            class_name = class_name[:-len("Validator")]
        return class_name.lower()

    def validate(self, value: Any, context: Optional[ValidationContext] = None) -> ValidationResult:
        """
        Validate a value.

        Args:
            value: Value to validate (any type)
            context: Optional per-call configuration

        Returns:
            ValidationResult object; an exception raised by a validator
            is logged and returned as an "internal" failure
        """
        try:
            value = self._pre_validate(value, context)
            result = self._validate(value, context)
            result = self._post_validate(result, value, context)
        except Exception as e:
            log_error(logger, e, f"Validator '{self._name}'")
            result = self._failure(
                f"Validator execution failed: {e}",
                constraint="internal",
                category=ErrorCategory.INTERNAL_ERROR,
                exception_type=type(e).__name__
            )

        if not result.is_valid:
            log_validation_failure(logger, self._name, result.message, result.errors)
        return result

    @abstractmethod
    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        """
        Execute validation logic.

        Args:
            value: Value to validate
            context: Optional per-call configuration

        Returns:
            ValidationResult object
        """
        pass

    def _pre_validate(self, value: Any, context: Optional[ValidationContext]) -> Any:
        """Hook for value normalization before validation"""
        return value

    def _post_validate(
        self,
        result: ValidationResult,
        value: Any,
        context: Optional[ValidationContext]
    ) -> ValidationResult:
        """Hook for result transformation after validation"""
        return result

    def _success(self, message: Optional[str] = None, **details: Any) -> ValidationResult:
        return ValidationResult.success(message or self.success_message, details)

    def _failure(
        self,
        message: Optional[str] = None,
        *,
        constraint: str,
        category: ErrorCategory,
        **details: Any
    ) -> ValidationResult:
        """
        Helper to create a failed result with the common error fields.

        Args:
            message: Failure message (defaults to error_message)
            constraint: Specific constraint tag, e.g. "checksum"
            category: Failure category
            **details: Additional diagnostic fields

        Returns:
            ValidationResult object
        """
        errors = {"constraint": constraint, "category": ErrorCategory(category).value}
        errors.update(details)
        return ValidationResult.failure(message or self.error_message, errors)

    def _warning(self, message: Optional[str] = None, *, constraint: str, **details: Any) -> ValidationResult:
        """Helper to create a passing result with caveats"""
        errors = {"constraint": constraint}
        errors.update(details)
        return ValidationResult.warning(message or self.success_message, errors)

    def _type_failure(self, value: Any, expected: str = "a string", subject: str = "Value") -> ValidationResult:
        """Failure for a value that is not of the expected primitive shape"""
        actual = type(value).__name__
        return self._failure(
            f"{subject} must be {expected}, {actual} given",
            constraint="type",
            category=ErrorCategory.TYPE_MISMATCH,
            type=actual
        )

    @staticmethod
    def _format_message(template: str, **data: Any) -> str:
        """Replace {placeholder} tokens in a message template"""
        for key, value in data.items():
            template = template.replace("{" + key + "}", str(value))
        return template

    @staticmethod
    def _check_name(name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Validator name must be a non-empty string, got {name!r}")
        if name != name.lower():
            raise ConfigurationError(f"Validator name must be lowercase, got '{name}'")
        return name.strip()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"


class ParameterizedValidator(BaseValidator):
    """
    Base class for validators configured with named parameters.

    Construction-time parameters are defaults; a per-call context holding
    the same key overrides them. Parameters never change after
    construction: with_parameter()/with_parameters() return new
    validators, so one instance can be shared safely across threads.

    Subclasses declare mandatory parameters in required_parameters
    (name -> description); a missing one fails construction immediately.

    Example:
        validator = LengthValidator(min=5)
        validator.resolve("min", ValidationContext({"min": 10}))  # 10
        validator.resolve("min", None)                            # 5
    """

    required_parameters: Dict[str, str] = {}

    def __init__(
        self,
        parameters: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        error_message: Optional[str] = None,
        success_message: Optional[str] = None,
        **kwargs: Any
    ):
        """
        Initialize validator with parameters.

        Args:
            parameters: Parameter dictionary (e.g. from YAML)
            name: Registry name; defaults to the class-derived name
            error_message: Default message for failures
            success_message: Default message for successes
            **kwargs: Additional parameters, merged over `parameters`

        Raises:
            ConfigurationError: If a required parameter is missing
        """
        super().__init__(name=name, error_message=error_message, success_message=success_message)
        self._parameters: Dict[str, Any] = dict(parameters or {})
        self._parameters.update(kwargs)
        self._check_required_parameters()

    @property
    def parameters(self) -> Dict[str, Any]:
        """Copy of the construction-time parameters"""
        return dict(self._parameters)

    def get_parameter(self, key: str, default: Any = None) -> Any:
        if key in self._parameters:
            return self._parameters[key]
        return default

    def has_parameter(self, key: str) -> bool:
        return key in self._parameters

    def resolve(self, key: str, context: Optional[ValidationContext], default: Any = None) -> Any:
        """
        Resolve the effective value of a parameter.

        Precedence: context value (when the key is present, even if None),
        then the construction-time parameter, then `default`.

        Args:
            key: Parameter name
            context: Optional per-call context
            default: Fallback when neither source has the key

        Returns:
            Effective parameter value
        """
        if context is not None and context.has(key):
            return context.get(key)
        return self.get_parameter(key, default)

    def with_parameters(self, parameters: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "ParameterizedValidator":
        """Return a new validator with the given parameters added or changed"""
        clone = copy.copy(self)
        clone._parameters = dict(self._parameters)
        clone._parameters.update(parameters or {})
        clone._parameters.update(kwargs)
        return clone

    def with_parameter(self, key: str, value: Any) -> "ParameterizedValidator":
        return self.with_parameters({key: value})

    def without_parameter(self, key: str) -> "ParameterizedValidator":
        """
        Return a new validator with a parameter removed.

        Raises:
            ConfigurationError: If the parameter is required
        """
        clone = copy.copy(self)
        clone._parameters = {k: v for k, v in self._parameters.items() if k != key}
        clone._check_required_parameters()
        return clone

    def _parameter_failure(
        self,
        key: str,
        value: Any,
        expected: str,
        category: ErrorCategory = ErrorCategory.TYPE_MISMATCH
    ) -> ValidationResult:
        """Failure for a parameter (from context or construction) with an unusable value"""
        return self._failure(
            f"Invalid '{key}' parameter {value!r} for validator '{self._name}' (expected {expected})",
            constraint="parameter",
            category=category,
            parameter=key,
            parameter_value=value
        )

    def _check_required_parameters(self) -> None:
        for param, description in self.required_parameters.items():
            if param not in self._parameters:
                raise ConfigurationError(
                    f'Required parameter "{param}" is missing for validator "{self._name}": {description}',
                    details={"validator": self._name, "parameter": param}
                )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, parameters={self._parameters!r})"
