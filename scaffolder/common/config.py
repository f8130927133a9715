"""Configuration loading utilities.

App configuration is a nested mapping, usually read from an
``app-config.yaml`` file. ``ConfigReader`` wraps that mapping and exposes
optional accessors addressed by dotted keys such as
``scaffolder.gitlab.api.token``.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog
import yaml

from scaffolder.common.errors import ConfigValidationError

logger = structlog.get_logger()


class ConfigReader:
    """Read-only view over a nested configuration mapping.

    Attributes:
        prefix: Dotted key of this view inside the root config, used in
            error messages. Empty for the root reader.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, prefix: str = ""):
        self._data: Mapping[str, Any] = data or {}
        self.prefix = prefix

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "ConfigReader":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConfigReader over the parsed document

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigValidationError: If the YAML cannot be parsed or its
                top level is not a mapping
        """
        try:
            with open(config_path, "r") as f:
                config_dict = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Failed to parse YAML: {e}")

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigValidationError(
                f"Configuration root must be a mapping, got {type(config_dict).__name__}"
            )

        logger.info("Configuration loaded", config_path=str(config_path))
        return cls(config_dict)

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}.{key}" if self.prefix else key

    def get_optional(self, key: str) -> Any:
        """Return the value at a dotted key, or None if any segment is absent."""
        current: Any = self._data
        for segment in key.split("."):
            if not isinstance(current, Mapping) or segment not in current:
                return None
            current = current[segment]
        return current

    def get_optional_string(self, key: str) -> Optional[str]:
        value = self.get_optional(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigValidationError(
                f"Invalid type in config for key '{self._full_key(key)}', "
                f"got {type(value).__name__}, wanted string"
            )
        return value

    def get_string(self, key: str) -> str:
        value = self.get_optional_string(key)
        if value is None:
            raise ConfigValidationError(
                f"Missing required config value at '{self._full_key(key)}'"
            )
        return value

    def get_optional_config(self, key: str) -> Optional["ConfigReader"]:
        value = self.get_optional(key)
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise ConfigValidationError(
                f"Invalid type in config for key '{self._full_key(key)}', "
                f"got {type(value).__name__}, wanted object"
            )
        return ConfigReader(value, self._full_key(key))

    def get_optional_config_array(self, key: str) -> Optional[List["ConfigReader"]]:
        """Return a list of readers for an array of objects at ``key``.

        Raises:
            ConfigValidationError: If the value is not a list of mappings.
        """
        value = self.get_optional(key)
        if value is None:
            return None
        if not isinstance(value, list):
            raise ConfigValidationError(
                f"Invalid type in config for key '{self._full_key(key)}', "
                f"got {type(value).__name__}, wanted object-array"
            )

        readers: List[ConfigReader] = []
        for index, item in enumerate(value):
            item_key = f"{self._full_key(key)}[{index}]"
            if not isinstance(item, Mapping):
                raise ConfigValidationError(
                    f"Invalid type in config for key '{item_key}', "
                    f"got {type(item).__name__}, wanted object"
                )
            readers.append(ConfigReader(item, item_key))
        return readers

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._data)
