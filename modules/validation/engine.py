"""
ValidationEngine - Main entry point for value validation.

Resolves validator names through a registry, applies a stored or
per-call context, and exposes detailed (`validate`) and boolean
(`is_valid`, `is_email`, ...) entry points.
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from modules.validation.core.base import BaseValidator, ValidationContext, ValidationResult
from modules.validation.core.config_loader import ValidationConfigLoader
from modules.validation.core.exceptions import ValidatorNotFoundError
from modules.validation.core.registry import VALIDATOR_CLASSES, ValidatorRegistry, get_default_registry
from modules.validation.factory import ValidatorFactory
from shared.utils.config import settings
from shared.utils.logger import setup_logger

# Import validators to trigger registration
from modules.validation import validators  # noqa: F401

logger = setup_logger(__name__)

ContextLike = Union[ValidationContext, Mapping[str, Any]]


def _to_context(context: Optional[ContextLike]) -> Optional[ValidationContext]:
    if context is None or isinstance(context, ValidationContext):
        return context
    return ValidationContext(dict(context))


class ValidationEngine:
    """
    Validation facade.

    Built-in validators from the class catalog are registered on
    construction unless the registry already holds an instance under
    the same name.

    Usage:
        engine = ValidationEngine()
        result = engine.validate("iban", "DE89370400440532013000")

        if result.is_valid:
            print(result.errors["country_code"])
        else:
            print(f"Error: {result.message}")

        engine.is_email("user@example.com")
        engine.with_context({"allow_spaces": True}).is_alpha("hello world")
    """

    def __init__(
        self,
        registry: Optional[ValidatorRegistry] = None,
        auto_register: Optional[bool] = None,
        context: Optional[ContextLike] = None,
        config_path: Optional[Union[str, Path]] = None
    ):
        """
        Initialize validation engine.

        Args:
            registry: Registry to resolve names against
                      If None, uses the process-wide default registry
            auto_register: Register built-in validators
                           If None, uses AUTO_REGISTER_BUILTINS from settings
            context: Default context applied when a call passes none
            config_path: Optional YAML file of validator definitions
                        If None, uses VALIDATION_CONFIG_PATH from settings
        """
        self._registry = registry if registry is not None else get_default_registry()
        self._context = _to_context(context)
        self.factory = ValidatorFactory(self._registry)

        if auto_register is None:
            auto_register = settings.AUTO_REGISTER_BUILTINS
        if auto_register:
            self._register_builtin_validators()

        if config_path is None:
            config_path = settings.VALIDATION_CONFIG_PATH
        if config_path:
            self.load_config(config_path)

        logger.info(
            f"{settings.APP_NAME} {settings.APP_VERSION}: "
            f"ValidationEngine initialized with {self._registry.count()} validators"
        )

    def _register_builtin_validators(self) -> None:
        for name, validator_class in VALIDATOR_CLASSES.items():
            if not self._registry.has(name):
                self._registry.register(validator_class(name=name))

    @property
    def registry(self) -> ValidatorRegistry:
        return self._registry

    @property
    def context(self) -> Optional[ValidationContext]:
        return self._context

    def with_context(self, context: Optional[ContextLike]) -> "ValidationEngine":
        """
        Return an engine bound to the same registry with a new default context.

        The current engine is left unchanged.
        """
        engine = copy.copy(self)
        engine._context = _to_context(context)
        return engine

    def register_validator(self, validator: BaseValidator, overwrite: bool = False) -> "ValidationEngine":
        self._registry.register(validator, overwrite=overwrite)
        return self

    def available_validators(self) -> List[str]:
        return sorted(self._registry.names())

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> Dict[str, BaseValidator]:
        """
        Register validators declared in a YAML file.

        The file's global default_context, if not empty, becomes the
        engine's default context.

        Args:
            config_path: YAML file path
                        If None, uses VALIDATION_CONFIG_PATH from settings

        Returns:
            Dictionary of the validators created, by name

        Raises:
            ConfigurationError: If the file or a definition is invalid
        """
        loader = ValidationConfigLoader(config_path)
        loader.load()

        default_context = loader.get_default_context()
        if default_context:
            self._context = ValidationContext(default_context)

        created = self.factory.create_many(loader.get_validator_definitions(), register=True)
        logger.info(f"Registered {len(created)} validators from configuration")
        return created

    def validate(
        self,
        validator_name: str,
        value: Any,
        context: Optional[ContextLike] = None
    ) -> ValidationResult:
        """
        Validate a value with a registered validator.

        Args:
            validator_name: Registry name (e.g., "email", "iban")
            value: Value to validate
            context: Per-call context; replaces the engine's default context

        Returns:
            ValidationResult from the validator

        Raises:
            ValidatorNotFoundError: If no validator is registered under the name

        Example:
            result = engine.validate("length", "abc", {"min": 3, "max": 5})
        """
        validator = self._registry.get(validator_name)
        if validator is None:
            raise ValidatorNotFoundError(validator_name)

        effective_context = _to_context(context)
        if effective_context is None:
            effective_context = self._context

        return validator.validate(value, effective_context)

    def is_valid(self, validator_name: str, value: Any, context: Optional[ContextLike] = None) -> bool:
        return self.validate(validator_name, value, context).is_valid

    # Convenience methods. An unregistered validator yields False.

    def _check(self, validator_name: str, value: Any, context: Optional[ContextLike] = None) -> bool:
        if not self._registry.has(validator_name):
            logger.warning(f"Validator '{validator_name}' not registered; treating value as invalid")
            return False
        return self.is_valid(validator_name, value, context)

    def is_email(self, value: Any) -> bool:
        return self._check("email", value)

    def is_phone(self, value: Any) -> bool:
        return self._check("phone", value)

    def is_url(self, value: Any) -> bool:
        return self._check("url", value)

    def is_number(self, value: Any) -> bool:
        return self._check("number", value)

    def is_alpha(self, value: Any) -> bool:
        return self._check("alpha", value)

    def is_alphanumeric(self, value: Any) -> bool:
        return self._check("alphanumeric", value)

    def is_length(self, value: Any, min: Optional[int] = None, max: Optional[int] = None) -> bool:
        """Check length bounds; min/max are passed as context so they override any default"""
        context = ValidationContext(self._context.all() if self._context else {})
        context.set("min", min).set("max", max)
        return self._check("length", value, context)

    def is_iban(self, value: Any) -> bool:
        return self._check("iban", value)

    def is_uuid(self, value: Any) -> bool:
        return self._check("uuid", value)

    def __repr__(self) -> str:
        return f"ValidationEngine(validators={self._registry.count()}, context={self._context!r})"
