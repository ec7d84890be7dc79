"""Configuration loader with project file and environment support."""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from faasctl.exceptions import ConfigError
from faasctl.lib.paths import get_config_file, get_project_config_file

DEFAULT_GATEWAY = "http://localhost:8080"
DEFAULT_NETWORK = "func_functions"
DEFAULT_TEMPLATE_REPOSITORY = "https://github.com/openfaas/faas-cli"

DEFAULT_CONFIG = {
    "gateway": {
        "url": DEFAULT_GATEWAY,
        "network": DEFAULT_NETWORK,
        "timeout": 60,
        "tls_insecure": False,
        "username": None,
        "password": None,
    },
    "build": {
        "parallel": 1,
    },
    "templates": {
        "repository": DEFAULT_TEMPLATE_REPOSITORY,
    },
}


class ConfigLoader:
    """
    Load and merge configuration from multiple sources.

    The ConfigLoader manages hierarchical configuration loading from:
    1. Built-in defaults
    2. User config ($XDG_CONFIG_HOME/faasctl/config.yaml)
    3. Project config (./faasctl.yaml)
    4. Environment variables (FAASCTL_*)

    Attributes
    ----------
    config_path : Path
        Path to user configuration file.
    """

    ENV_PREFIX = "FAASCTL_"

    # Variables that configure the process rather than config keys
    RESERVED_ENV_KEYS = {"FAASCTL_LOG_LEVEL", "FAASCTL_LOG_FORMAT"}

    def __init__(self, config_path: Path | None = None):
        """
        Initialize configuration loader.

        Parameters
        ----------
        config_path : Path or None, optional
            Path to user config file. If None, uses default config.yaml location,
            by default None.
        """
        self.config_path = config_path or get_config_file()

    def _load_yaml_file(self, path: Path) -> dict:
        """
        Load and parse a YAML configuration file.

        Parameters
        ----------
        path : Path
            Path to YAML file to load.

        Returns
        -------
        dict
            Parsed YAML content, or empty dict if file doesn't exist.

        Raises
        ------
        ConfigError
            If YAML file contains invalid syntax or is not a mapping.
        """
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return content

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """
        Deep merge two dictionaries recursively.

        Nested dictionaries are merged recursively. For non-dict values,
        the override value replaces the base value.

        Parameters
        ----------
        base : dict
            Base dictionary to merge into.
        override : dict
            Override dictionary with values to merge.

        Returns
        -------
        dict
            New dictionary with merged contents.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply environment variable overrides to configuration.

        Variable names are converted from FAASCTL_SECTION_KEY format to a
        nested path: the first segment is the section, the rest joined with
        underscores is the key, so FAASCTL_GATEWAY_TLS_INSECURE sets
        gateway.tls_insecure.

        Parameters
        ----------
        config : dict
            Configuration dictionary to apply overrides to.

        Returns
        -------
        dict
            Configuration with environment variable overrides applied.
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.ENV_PREFIX) or env_key in self.RESERVED_ENV_KEYS:
                continue

            parts = env_key[len(self.ENV_PREFIX) :].lower().split("_", 1)
            if len(parts) != 2 or not parts[1]:
                continue

            section, key = parts
            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue
            current[key] = _coerce_env_value(env_value)

        return config

    def load(self) -> dict:
        """
        Load and merge configuration from all sources.

        Returns
        -------
        dict
            Merged configuration dictionary with metadata section.
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        config = self._deep_merge(config, self._load_yaml_file(self.config_path))

        project_config = get_project_config_file()
        config = self._deep_merge(config, self._load_yaml_file(project_config))

        config = self._apply_env_overrides(config)

        config["_meta"] = {
            "config_sources": self._get_loaded_sources(),
        }

        return config

    def _get_loaded_sources(self) -> list[str]:
        """
        Get list of configuration files that were loaded.

        Returns
        -------
        list of str
            Config file paths that exist.
        """
        sources = []

        if self.config_path.exists():
            sources.append(str(self.config_path))

        project_config = get_project_config_file()
        if project_config.exists():
            sources.append(str(project_config))

        return sources


def _coerce_env_value(value: str) -> Any:
    """Convert "true"/"false" and integer strings from the environment."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if value.isdigit():
        return int(value)
    return value


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using dot notation path.

    Parameters
    ----------
    config : dict
        Configuration dictionary to query.
    key_path : str
        Key path in dot notation (e.g., "gateway.url").
    default : Any, optional
        Default value to return if key doesn't exist, by default None.

    Returns
    -------
    Any
        Configuration value if found, default value otherwise.

    Examples
    --------
    >>> config = {"gateway": {"url": "http://127.0.0.1:8080"}}
    >>> get_config_value(config, "gateway.url")
    'http://127.0.0.1:8080'
    >>> get_config_value(config, "nonexistent.key", "default")
    'default'
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
