"""
Validation module.

Provides structured validation of individual values: email addresses,
URLs, phone numbers, IBANs, UUIDs, numbers and text.

Main components:
- ValidationEngine: Facade resolving validators by name
- ValidatorFactory: Builds validators from names, classes and definitions
- BaseValidator / ParameterizedValidator: Base classes for all validators
- ValidatorRegistry: Name-keyed directory of validator instances
- Built-in validators: text, numeric, network, identifier validators

Usage:
    from modules.validation import ValidationEngine

    engine = ValidationEngine()
    result = engine.validate("uuid", "550e8400-e29b-41d4-a716-446655440000")

    if result.is_valid:
        print(f"UUID version {result.errors['version']}")
    else:
        print(f"Error: {result.message} ({result.constraint})")
"""

from modules.validation.core import (
    BaseValidator,
    CallableValidator,
    ConfigurationError,
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationFrameworkError,
    ValidationResult,
    ValidationResultType,
    ValidatorNotFoundError,
    ValidatorRegistry,
    VALIDATOR_CLASSES,
    get_default_registry,
    register_validator,
    reset_default_registry,
)
from modules.validation.core.config_loader import ValidationConfigLoader
from modules.validation.engine import ValidationEngine
from modules.validation.factory import ValidatorFactory
from modules.validation.validators import (
    AlphaValidator,
    AlphanumericValidator,
    EmailValidator,
    FloatValidator,
    IbanValidator,
    IntegerValidator,
    LengthValidator,
    NumberValidator,
    PhoneValidator,
    UrlValidator,
    UuidValidator,
)

__all__ = [
    'ValidationEngine',
    'ValidatorFactory',
    'ValidationConfigLoader',
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
    'ValidatorRegistry',
    'VALIDATOR_CLASSES',
    'get_default_registry',
    'register_validator',
    'reset_default_registry',
    'AlphaValidator',
    'AlphanumericValidator',
    'LengthValidator',
    'NumberValidator',
    'IntegerValidator',
    'FloatValidator',
    'EmailValidator',
    'UrlValidator',
    'PhoneValidator',
    'IbanValidator',
    'UuidValidator',
]
