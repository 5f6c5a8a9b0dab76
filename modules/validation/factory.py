"""
ValidatorFactory - builds validator instances from names, classes and definitions.

Validator classes are looked up in the factory's own class map first,
then in the global catalog filled by @register_validator. Parameterized
validators receive their parameters at construction; passing parameters
to any other validator is a configuration error.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Type, Union

from modules.validation.core.base import BaseValidator, ParameterizedValidator
from modules.validation.core.callable import CallableValidator, ValidationFunction
from modules.validation.core.exceptions import ConfigurationError
from modules.validation.core.registry import VALIDATOR_CLASSES, ValidatorRegistry, get_default_registry
from shared.utils.logger import setup_logger

# Import validators to trigger registration
from modules.validation import validators  # noqa: F401

logger = setup_logger(__name__)

ValidatorRef = Union[str, Type[BaseValidator]]


class ValidatorFactory:
    """
    Creates validators and optionally registers them.

    Usage:
        factory = ValidatorFactory(registry)
        short_text = factory.create("length", {"max": 20}, name="short_text", register=True)
        even = factory.create_callable("even", lambda value, context: value % 2 == 0)
    """

    def __init__(self, registry: Optional[ValidatorRegistry] = None):
        """
        Initialize factory.

        Args:
            registry: Registry used when registering created validators
                      If None, uses the process-wide default registry
        """
        self.registry = registry if registry is not None else get_default_registry()
        self._classes: Dict[str, Type[BaseValidator]] = {}

    def register_class(self, name: str, validator_class: Type[BaseValidator]) -> "ValidatorFactory":
        """
        Map a name to a validator class for this factory.

        Raises:
            ConfigurationError: If the class is not a validator
        """
        self._ensure_validator_class(validator_class)
        self._classes[name] = validator_class
        return self

    def get_class(self, name: str) -> Optional[Type[BaseValidator]]:
        return self._classes.get(name) or VALIDATOR_CLASSES.get(name)

    def create(
        self,
        validator: ValidatorRef,
        parameters: Optional[Mapping[str, Any]] = None,
        name: Optional[str] = None,
        register: bool = False,
        overwrite: bool = False
    ) -> BaseValidator:
        """
        Create a validator instance.

        Args:
            validator: Catalog name (e.g. "length") or validator class
            parameters: Construction parameters (parameterized validators only)
            name: Registry name; defaults to the validator's own name
            register: Register the new instance in the factory's registry
            overwrite: Replace an existing registration with the same name

        Returns:
            Validator instance

        Raises:
            ConfigurationError: On unknown names, non-validator classes,
                                unexpected or missing parameters
        """
        validator_class = self._resolve_class(validator)
        params = dict(parameters or {})

        if issubclass(validator_class, CallableValidator):
            raise ConfigurationError(
                f"{validator_class.__name__} wraps a function; use create_callable() instead"
            )

        if issubclass(validator_class, ParameterizedValidator):
            instance = validator_class(params, name=name)
        elif params:
            raise ConfigurationError(
                f"Validator {validator_class.__name__} does not accept parameters, got {sorted(params)}",
                details={"validator": validator_class.__name__, "parameters": params}
            )
        else:
            try:
                instance = validator_class(name=name)
            except TypeError as e:
                raise ConfigurationError(
                    f"Cannot instantiate validator {validator_class.__name__}: {e}",
                    details={"validator": validator_class.__name__}
                ) from e

        logger.debug(f"Created validator '{instance.name}' ({validator_class.__name__})")

        if register:
            self.registry.register(instance, overwrite=overwrite)
        return instance

    def create_and_register(
        self,
        validator: ValidatorRef,
        parameters: Optional[Mapping[str, Any]] = None,
        name: Optional[str] = None,
        overwrite: bool = False
    ) -> BaseValidator:
        return self.create(validator, parameters, name=name, register=True, overwrite=overwrite)

    def create_callable(
        self,
        name: str,
        func: ValidationFunction,
        error_message: Optional[str] = None,
        success_message: Optional[str] = None,
        register: bool = False,
        overwrite: bool = False
    ) -> CallableValidator:
        """
        Create a validator from a `(value, context) -> bool` function.

        Args:
            name: Registry name
            func: Validation function
            error_message: Message for failures
            success_message: Message for successes
            register: Register the new instance
            overwrite: Replace an existing registration with the same name

        Returns:
            CallableValidator instance
        """
        instance = CallableValidator(name, func, error_message=error_message, success_message=success_message)
        if register:
            self.registry.register(instance, overwrite=overwrite)
        return instance

    def create_many(
        self,
        definitions: Iterable[Mapping[str, Any]],
        register: bool = False
    ) -> Dict[str, BaseValidator]:
        """
        Create validators from definitions (as loaded from YAML).

        Each definition holds 'type' (catalog name or class), and optionally
        'name', 'params' and 'overwrite'.

        Args:
            definitions: Validator definitions
            register: Register each new instance

        Returns:
            Dictionary mapping validator names to instances
        """
        created: Dict[str, BaseValidator] = {}

        for definition in definitions:
            validator_type = definition.get('type')
            if not validator_type:
                raise ConfigurationError(
                    "Validator definition requires a 'type'",
                    details={"definition": dict(definition)}
                )

            instance = self.create(
                validator_type,
                definition.get('params'),
                name=definition.get('name'),
                register=register,
                overwrite=bool(definition.get('overwrite', False))
            )
            created[instance.name] = instance

        return created

    def _resolve_class(self, validator: ValidatorRef) -> Type[BaseValidator]:
        if isinstance(validator, str):
            validator_class = self.get_class(validator)
            if validator_class is None:
                raise ConfigurationError(
                    f"Unknown validator type '{validator}'",
                    details={"type": validator, "available": sorted(set(self._classes) | set(VALIDATOR_CLASSES))}
                )
            return validator_class

        self._ensure_validator_class(validator)
        return validator

    @staticmethod
    def _ensure_validator_class(validator_class: Any) -> None:
        if not isinstance(validator_class, type) or not issubclass(validator_class, BaseValidator):
            raise ConfigurationError(f"{validator_class!r} is not a validator class")
        if getattr(validator_class, "__abstractmethods__", None):
            raise ConfigurationError(f"{validator_class.__name__} is abstract and cannot be instantiated")
