"""
Configuration Management.

This module provides centralized configuration with:
- YAML configuration file loading
- Environment variable override support
- ${VAR:default} interpolation inside YAML string values
- Configuration validation
- Nested configuration access with dot notation
- Built-in defaults for every setting the scrambler reads
"""

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from ..core.errors import NumberScramblerError
from ..core.shuffler import DEFAULT_LIST_SIZE, FISHER_YATES, SUPPORTED_ALGORITHMS

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_CONFIG: Dict[str, Any] = {
    'generation': {
        'size': DEFAULT_LIST_SIZE,
        'algorithm': FISHER_YATES,
    },
    'display': {
        'per_row': 10,
        'width': 5,
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}


class ConfigurationError(NumberScramblerError):
    """Custom exception for configuration-related errors."""
    pass


class ConfigValidator:
    """Configuration validation utilities."""

    @staticmethod
    def validate_positive_int(value: int, name: str) -> int:
        """Validate that a value is an integer greater than zero."""
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        return value

    @staticmethod
    def validate_non_negative_int(value: int, name: str) -> int:
        """Validate that a value is an integer of zero or more."""
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        return value

    @staticmethod
    def validate_string_choice(value: str, choices: List[str], name: str) -> str:
        """Validate that a string is one of the allowed choices."""
        if value not in choices:
            raise ConfigurationError(f"{name} must be one of {choices}, got '{value}'")
        return value


class EnvironmentVariableResolver:
    """Resolves environment variables in configuration values."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    @classmethod
    def resolve_string(cls, value: str) -> str:
        """Resolve environment variables in a string value."""
        if not isinstance(value, str):
            return value

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = None

            # ${VAR_NAME:default_value}
            if ':' in var_name:
                var_name, default_value = var_name.split(':', 1)

            env_value = os.getenv(var_name, default_value)
            if env_value is None:
                raise ConfigurationError(f"Environment variable '{var_name}' not found and no default provided")

            return env_value

        return cls.ENV_VAR_PATTERN.sub(replace_env_var, value)

    @classmethod
    def resolve_value(cls, value: Any) -> Any:
        """Recursively resolve environment variables in configuration values."""
        if isinstance(value, str):
            return cls.resolve_string(value)
        elif isinstance(value, dict):
            return {k: cls.resolve_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [cls.resolve_value(item) for item in value]
        else:
            return value


class ConfigurationManager:
    """
    Configuration store for the scrambler.

    Values are layered, lowest precedence first: ``DEFAULT_CONFIG``, the
    YAML file, then environment variables named ``<PREFIX>_<SECTION>__<KEY>``
    (for example ``NLS_GENERATION__SIZE=500`` sets ``generation.size``).
    """

    def __init__(self,
                 config_file: Optional[Union[str, Path]] = None,
                 env_prefix: str = "NLS",
                 strict_validation: bool = True):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to YAML configuration file
            env_prefix: Prefix for environment variable overrides
            strict_validation: Validate every known setting on load
        """
        self.config_file = Path(config_file) if config_file else None
        self.env_prefix = env_prefix
        self.strict_validation = strict_validation

        self._config: Dict[str, Any] = {}
        self._validators: Dict[str, Callable] = {}
        self._logger = logging.getLogger(__name__)

        self._register_default_validators()
        self.reload()

    def _register_default_validators(self):
        """Register default configuration validators."""
        validators = {
            'generation.size': lambda v: ConfigValidator.validate_non_negative_int(v, 'generation.size'),
            'generation.algorithm': lambda v: ConfigValidator.validate_string_choice(v, SUPPORTED_ALGORITHMS, 'generation.algorithm'),
            'display.per_row': lambda v: ConfigValidator.validate_positive_int(v, 'display.per_row'),
            'display.width': lambda v: ConfigValidator.validate_positive_int(v, 'display.width'),
            'logging.level': lambda v: ConfigValidator.validate_string_choice(v, LOG_LEVELS, 'logging.level'),
        }

        self._validators.update(validators)

    def reload(self):
        """Reload configuration from defaults, file and environment variables."""
        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Could not read {self.config_file}: {e}")

            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Top level of {self.config_file} must be a mapping")

            self._logger.info(f"Loaded configuration from {self.config_file}")
        else:
            file_config = {}
            if self.config_file:
                self._logger.warning(f"Configuration file not found: {self.config_file}")

        file_config = EnvironmentVariableResolver.resolve_value(file_config)
        env_overrides = self._load_env_overrides()

        merged = self._merge_configs(copy.deepcopy(DEFAULT_CONFIG), file_config)
        self._config = self._merge_configs(merged, env_overrides)

        if self.strict_validation:
            self._validate_config()

        self._logger.debug("Configuration reloaded successfully")

    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables."""
        overrides = {}
        prefix = f"{self.env_prefix}_"

        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_path = self._env_key_to_path(key[len(prefix):])
                self._set_nested_value(overrides, config_path, self._convert_env_value(value))

        return overrides

    @staticmethod
    def _env_key_to_path(key: str) -> str:
        return '.'.join(part.lower() for part in key.split('__'))

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate Python type."""
        if not value:
            return None

        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            if '.' in value or 'e' in value.lower():
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        if value.startswith(('{', '[', '"')):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _set_nested_value(self, config: Dict[str, Any], path: str, value: Any):
        """Set a nested value in configuration using dot notation."""
        keys = path.split('.')
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _validate_config(self):
        """Validate configuration using registered validators."""
        for config_path, validator in self._validators.items():
            value = self.get(config_path)
            if value is not None:
                validator(value)

    def get(self, path: str, default: Any = None, required: bool = False) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            path: Configuration path (e.g., 'generation.size')
            default: Default value if path not found
            required: Raise error if path not found and no default

        Returns:
            Configuration value

        Raises:
            ConfigurationError: If required path not found
        """
        current = self._config

        try:
            for key in path.split('.'):
                current = current[key]
            return current
        except (KeyError, TypeError):
            if required and default is None:
                raise ConfigurationError(f"Required configuration path not found: {path}")
            return default

    def set(self, path: str, value: Any, validate: bool = True):
        """
        Set configuration value using dot notation.

        Args:
            path: Configuration path
            value: Value to set
            validate: Whether to validate the value
        """
        if validate and path in self._validators:
            self._validators[path](value)

        self._set_nested_value(self._config, path, value)

    def has(self, path: str) -> bool:
        """Check if configuration path exists."""
        try:
            self.get(path, required=True)
            return True
        except ConfigurationError:
            return False

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section."""
        return self.get(section, default={})

    def register_validator(self, path: str, validator: Callable[[Any], Any]):
        """Register a custom validator for a configuration path."""
        self._validators[path] = validator

    def to_dict(self) -> Dict[str, Any]:
        """Get entire configuration as dictionary."""
        return copy.deepcopy(self._config)

    def save_to_file(self, file_path: Union[str, Path]):
        """Save current configuration to YAML file."""
        with open(file_path, 'w') as f:
            yaml.safe_dump(self._config, f, default_flow_style=False, indent=2)

    def get_env_info(self) -> Dict[str, Any]:
        """Get information about environment variable overrides."""
        prefix = f"{self.env_prefix}_"
        env_vars = {
            self._env_key_to_path(key[len(prefix):]): value
            for key, value in os.environ.items()
            if key.startswith(prefix)
        }

        return {
            'prefix': self.env_prefix,
            'overrides': env_vars,
            'total_overrides': len(env_vars)
        }


class ConfigurationFactory:
    """Factory for creating pre-configured ConfigurationManager instances."""

    SEARCH_PATHS = [
        Path("configs/config.yaml"),
        Path("config.yaml"),
    ]

    @staticmethod
    def create_default(config_file: Optional[Union[str, Path]] = None) -> ConfigurationManager:
        """Create configuration manager, looking for a config file in common locations."""
        if config_file is None:
            for path in ConfigurationFactory.SEARCH_PATHS:
                if path.exists():
                    config_file = path
                    break

        return ConfigurationManager(config_file=config_file, env_prefix="NLS")

    @staticmethod
    def create_testing(config_dict: Optional[Dict[str, Any]] = None) -> ConfigurationManager:
        """Create configuration manager for tests, ignoring files and the NLS_ environment."""
        manager = ConfigurationManager(env_prefix="NLS_TEST", strict_validation=False)

        if config_dict:
            manager._config = manager._merge_configs(manager._config, config_dict)

        return manager


_global_config: Optional[ConfigurationManager] = None


def get_config() -> ConfigurationManager:
    """Get global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigurationFactory.create_default()
    return _global_config


def set_config(config: Optional[ConfigurationManager]):
    """Set global configuration instance."""
    global _global_config
    _global_config = config


def init_config(config_file: Optional[Union[str, Path]] = None,
                environment: str = "default") -> ConfigurationManager:
    """
    Initialize global configuration.

    Args:
        config_file: Path to configuration file
        environment: "default" or "testing"

    Returns:
        Configured ConfigurationManager instance
    """
    if environment == "testing":
        config = ConfigurationFactory.create_testing()
    elif environment == "default":
        config = ConfigurationFactory.create_default(config_file)
    else:
        raise ConfigurationError(f"Unknown environment: {environment}")

    set_config(config)
    return config


class ConfigContext:
    """Context manager for temporary configuration changes."""

    def __init__(self, **kwargs):
        self.changes = kwargs
        self._snapshot: Dict[str, Any] = {}

    def __enter__(self):
        config = get_config()
        self._snapshot = config.to_dict()
        for path, value in self.changes.items():
            config.set(path, value, validate=False)
        return config

    def __exit__(self, exc_type, exc_val, exc_tb):
        get_config()._config = self._snapshot
