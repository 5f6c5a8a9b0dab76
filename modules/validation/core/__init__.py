"""
Validation core module.

Contains base classes, interfaces, and utilities for the validation system.
"""

from modules.validation.core.base import (
    BaseValidator,
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationResult,
    ValidationResultType,
)
from modules.validation.core.callable import CallableValidator
from modules.validation.core.exceptions import (
    ConfigurationError,
    ValidationFrameworkError,
    ValidatorNotFoundError,
)
from modules.validation.core.registry import (
    VALIDATOR_CLASSES,
    ValidatorRegistry,
    get_default_registry,
    get_validator_class,
    register_validator,
    reset_default_registry,
)

__all__ = [
    'BaseValidator',
    'ParameterizedValidator',
    'CallableValidator',
    'ValidationContext',
    'ValidationResult',
    'ValidationResultType',
    'ErrorCategory',
    'ConfigurationError',
    'ValidationFrameworkError',
    'ValidatorNotFoundError',
    'VALIDATOR_CLASSES',
    'ValidatorRegistry',
    'get_default_registry',
    'get_validator_class',
    'register_validator',
    'reset_default_registry',
]
