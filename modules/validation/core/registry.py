"""
Validator registry system.

Two registries live here:
- VALIDATOR_CLASSES: catalog of validator *classes* by name, filled by the
  @register_validator decorator. Used by the engine and the factory to
  instantiate built-ins and YAML-defined validators.
- ValidatorRegistry: directory of validator *instances* by name, the
  lookup table the engine validates against.

A process-wide default ValidatorRegistry is created on first use by
get_default_registry() and discarded by reset_default_registry() (for test
isolation). Code that needs isolation can pass its own ValidatorRegistry
to the engine instead.
"""

import threading
from typing import Dict, Optional, Set, Type

from modules.validation.core.base import BaseValidator
from modules.validation.core.exceptions import ConfigurationError
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global catalog of validator classes
VALIDATOR_CLASSES: Dict[str, Type[BaseValidator]] = {}


def register_validator(name: str):
    """
    Decorator to register a validator class in the global catalog.

    Usage:
        @register_validator("iban")
        class IbanValidator(BaseValidator):
            def _validate(self, value, context=None):
                ...

    Args:
        name: Unique name for the validator (used in configuration)

    Returns:
        Decorator function
    """
    def decorator(cls: Type[BaseValidator]):
        if name in VALIDATOR_CLASSES and VALIDATOR_CLASSES[name] is not cls:
            logger.warning(
                f"Validator class '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )

        VALIDATOR_CLASSES[name] = cls
        logger.debug(f"Registered validator class: {name} -> {cls.__name__}")
        return cls

    return decorator


def get_validator_class(name: str) -> Optional[Type[BaseValidator]]:
    """
    Get validator class by name from the catalog.

    Args:
        name: Validator name

    Returns:
        Validator class or None if not found
    """
    return VALIDATOR_CLASSES.get(name)


def list_validator_classes() -> Dict[str, str]:
    """
    List all cataloged validator classes.

    Returns:
        Dictionary mapping validator names to class names
    """
    return {
        name: cls.__name__
        for name, cls in VALIDATOR_CLASSES.items()
    }


class ValidatorRegistry:
    """
    Name -> validator instance directory.

    Mutations (register, unregister, clear) and enumeration (all, names)
    are serialized by a lock. Lookups (get, has) read the mapping without
    locking; a mutation replaces single entries, so a lookup always sees
    either the old or the new instance.

    Usage:
        registry = ValidatorRegistry()
        registry.register(IbanValidator())
        registry.get("iban").validate("DE89370400440532013000")
    """

    def __init__(self):
        self._validators: Dict[str, BaseValidator] = {}
        self._lock = threading.RLock()

    def register(self, validator: BaseValidator, overwrite: bool = False) -> "ValidatorRegistry":
        """
        Register a validator instance under its name.

        Args:
            validator: Validator instance
            overwrite: Replace an existing validator with the same name

        Returns:
            The registry (fluent)

        Raises:
            ConfigurationError: If the name is taken and overwrite is False
        """
        if not isinstance(validator, BaseValidator):
            raise ConfigurationError(
                f"Only validator instances can be registered, got {type(validator).__name__}"
            )

        name = validator.name
        with self._lock:
            if name in self._validators:
                if not overwrite:
                    raise ConfigurationError(
                        f"Validator '{name}' is already registered. Use overwrite=True to replace.",
                        details={"name": name}
                    )
                logger.warning(
                    f"Validator '{name}' is already registered. "
                    f"Overwriting with {validator.__class__.__name__}"
                )

            self._validators[name] = validator

        logger.debug(f"Registered validator: {name} -> {validator.__class__.__name__}")
        return self

    def get(self, name: str) -> Optional[BaseValidator]:
        """
        Get validator by name.

        Args:
            name: Validator name

        Returns:
            Validator instance or None if not registered
        """
        return self._validators.get(name)

    def has(self, name: str) -> bool:
        return name in self._validators

    def unregister(self, name: str) -> "ValidatorRegistry":
        """Remove a validator; removing an unknown name is a no-op"""
        with self._lock:
            removed = self._validators.pop(name, None)

        if removed is not None:
            logger.debug(f"Unregistered validator: {name}")
        return self

    def all(self) -> Dict[str, BaseValidator]:
        """Snapshot of all registered validators, in registration order"""
        with self._lock:
            return dict(self._validators)

    def names(self) -> Set[str]:
        with self._lock:
            return set(self._validators)

    def count(self) -> int:
        return len(self._validators)

    def clear(self) -> "ValidatorRegistry":
        with self._lock:
            self._validators.clear()

        logger.debug("Cleared validator registry")
        return self

    def __contains__(self, name: object) -> bool:
        return name in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        return f"ValidatorRegistry({sorted(self.names())!r})"


_default_registry: Optional[ValidatorRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> ValidatorRegistry:
    """
    Get the process-wide registry, creating it on first use.

    Returns:
        Shared ValidatorRegistry instance
    """
    global _default_registry

    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = ValidatorRegistry()
                logger.debug("Created default validator registry")
    return _default_registry


def reset_default_registry() -> None:
    """Discard the process-wide registry; the next get creates a fresh one"""
    global _default_registry

    with _default_registry_lock:
        if _default_registry is not None:
            _default_registry.clear()
        _default_registry = None
