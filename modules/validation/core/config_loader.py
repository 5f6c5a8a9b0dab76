"""
Validation configuration loader.

Loads validator definitions from YAML configuration files.

Example file:
    global:
      default_context:
        allow_spaces: true
    validators:
      - name: username_length
        type: length
        params:
          min: 3
          max: 20
      - type: uuid
        params:
          version: 4
        overwrite: true
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from modules.validation.core.exceptions import ConfigurationError
from shared.utils.config import settings
from shared.utils.logger import log_error, setup_logger

logger = setup_logger(__name__)


class ValidatorDefinition(BaseModel):
    """One entry of the validators list."""
    type: str = Field(min_length=1)
    name: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    overwrite: bool = False


class ValidationConfigLoader:
    """
    Loads validation configuration from YAML files.

    Supports:
    - Validator definitions (type, optional name, params, overwrite)
    - Global settings (default context for the engine)
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to validation YAML file
                        If None, uses VALIDATION_CONFIG_PATH from settings
        """
        if config_path is None:
            config_path = settings.VALIDATION_CONFIG_PATH

        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            ConfigurationError: If YAML parsing fails or the document is not a mapping
        """
        if self.config_path is None:
            self._config = self._get_default_config()
            return self._config

        if not self.config_path.exists():
            logger.warning(
                f"Validation config file not found: {self.config_path}. "
                "Using empty configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            log_error(logger, e, f"Failed to parse validation config {self.config_path}")
            raise ConfigurationError(
                f"Invalid YAML in validation config {self.config_path}: {e}",
                details={"path": str(self.config_path)}
            ) from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Validation config {self.config_path} must be a mapping, got {type(config).__name__}",
                details={"path": str(self.config_path)}
            )

        defaults = self._get_default_config()
        defaults.update(config)
        self._config = defaults

        logger.info(f"Loaded validation config from: {self.config_path}")
        return self._config

    def get_global_settings(self) -> Dict[str, Any]:
        """
        Get global validation settings.

        Returns:
            Global settings dictionary

        Raises:
            ConfigurationError: If the global section is not a mapping
        """
        if self._config is None:
            self.load()

        global_settings = self._config.get('global') or {}
        if not isinstance(global_settings, dict):
            raise ConfigurationError("'global' must be a mapping")
        return global_settings

    def get_default_context(self) -> Dict[str, Any]:
        """
        Get the default validation context declared under global settings.

        Raises:
            ConfigurationError: If default_context is not a mapping
        """
        default_context = self.get_global_settings().get('default_context') or {}
        if not isinstance(default_context, dict):
            raise ConfigurationError("global.default_context must be a mapping")
        return default_context

    def get_validator_definitions(self) -> List[Dict[str, Any]]:
        """
        Get validator definitions.

        Returns:
            List of definitions with keys type, name, params, overwrite

        Raises:
            ConfigurationError: If a definition is malformed
        """
        if self._config is None:
            self.load()

        definitions = self._config.get('validators') or []
        if not isinstance(definitions, list):
            raise ConfigurationError("'validators' must be a list of definitions")

        parsed: List[Dict[str, Any]] = []
        for index, definition in enumerate(definitions):
            try:
                parsed.append(ValidatorDefinition.model_validate(definition).model_dump())
            except ValidationError as e:
                raise ConfigurationError(
                    f"Validator definition #{index} is invalid: {e.errors()[0]['msg']}",
                    details={"definition": definition, "errors": e.errors()}
                ) from e

        return parsed

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when no file is available.

        Returns:
            Default configuration dictionary
        """
        return {
            'global': {
                'default_context': {}
            },
            'validators': []
        }

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        self._config = None
        return self.load()
