"""Configuration management module."""

import copy
import os
from typing import Dict, Any, List, Optional
import yaml
from dotenv import load_dotenv

from random_sample.errors import ConfigurationError


# Values used when the YAML file omits a key
DEFAULTS: Dict[str, Any] = {
    "host": {
        "url": "http://localhost:8096",
        "api_key": "",
        "timeout": 30,
    },
    "plugin": {
        "id": "",
        "store": "jellyfin",
        "file_path": "./plugin_configuration.json",
    },
    "sampling": {
        "per_library_limit": 1000,
    },
    "registration": {
        "on_startup": False,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8097,
    },
    "logging": {
        "level": "INFO",
        "log_dir": "./logs",
    },
}

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "JELLYFIN_URL": ("host", "url"),
    "JELLYFIN_API_KEY": ("host", "api_key"),
    "RANDOM_SAMPLE_PLUGIN_ID": ("plugin", "id"),
    "LOG_LEVEL": ("logging", "level"),
}


class Config:
    """Configuration class for accessing YAML config values."""

    def __init__(self, config_dict: Dict[str, Any]):
        self._config = config_dict

    def __getattr__(self, name: str) -> Any:
        """Allow attribute-style access to config values."""
        if name.startswith("_"):
            raise AttributeError(name)
        value = self._config.get(name)
        if isinstance(value, dict):
            return Config(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value with optional default."""
        return self._config.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config back to dictionary."""
        return self._config


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> Config:
    """
    Load configuration from YAML file and environment variables.

    Missing keys fall back to DEFAULTS. When use_env is set, a .env file
    is loaded and the variables in ENV_OVERRIDES replace file values.

    Args:
        config_path: Path to the YAML configuration file (optional)
        use_env: Whether to apply environment variable overrides

    Returns:
        Config object with loaded configuration

    Raises:
        ConfigurationError: If config file is invalid
    """
    config_dict: Dict[str, Any] = {}

    if config_path and os.path.exists(config_path):
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

    config_dict = _merge(copy.deepcopy(DEFAULTS), config_dict)

    if use_env:
        load_dotenv()
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                config_dict[section][key] = value

    store = config_dict["plugin"]["store"]
    if store not in ("jellyfin", "file"):
        raise ConfigurationError(
            f"Unknown plugin configuration store '{store}'. Must be 'jellyfin' or 'file'"
        )

    return Config(config_dict)


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration values.

    Args:
        config: Config object to validate

    Returns:
        List of warning messages (empty if all valid)
    """
    warnings = []

    if not config.host.url:
        warnings.append("host.url is empty; host calls will fail")
    if not config.host.api_key:
        warnings.append("host.api_key is empty; startup registration is unavailable")
    if int(config.host.timeout) < 5:
        warnings.append("host.timeout < 5 seconds may be too short")

    if config.plugin.store == "jellyfin" and not config.plugin.id:
        warnings.append("plugin.id is empty; panel settings cannot be persisted on the host")

    if int(config.sampling.per_library_limit) < 1:
        warnings.append("sampling.per_library_limit should be at least 1")

    log_dir = config.logging.log_dir
    if log_dir and not os.path.exists(log_dir):
        warnings.append(f"Log directory will be created: {log_dir}")

    if config.registration.on_startup and not config.host.api_key:
        warnings.append("registration.on_startup requires host.api_key")

    return warnings
