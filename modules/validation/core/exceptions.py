"""
Exceptions raised by the validation framework.

Validators never raise for bad input data; a malformed value is reported
through a failed ValidationResult. The exceptions below are reserved for
programmer errors (misconfiguration, unknown validator names). Failures of
optional collaborators (DNS lookups) are caught inside validators and
translated into results.
"""

from typing import Any, Dict, Optional


class ValidationFrameworkError(Exception):
    """Base class for all framework errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ValidationFrameworkError):
    """
    Raised when a validator or registry is misconfigured.

    Examples: a parameterized validator missing a required parameter,
    registering a duplicate name without overwrite, or an invalid
    validator definition in a YAML configuration file.
    """
    pass


class ValidatorNotFoundError(ValidationFrameworkError, LookupError):
    """Raised by the engine when asked to run a validator that is not registered"""

    def __init__(self, name: str):
        super().__init__(
            f"Validator '{name}' is not registered",
            details={"name": name}
        )
        self.name = name

