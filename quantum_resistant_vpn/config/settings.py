"""
YAML-backed settings store.

Keys are dotted paths into the nested YAML document (``crypto.default_classic``).
Lookups consult, in order: values set during this session, environment
variables (``QRVPN_CRYPTO_DEFAULT_CLASSIC``), then the settings file.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

from ..utils.secure_file import SecureFile

logger = logging.getLogger(__name__)

ENV_PREFIX = "QRVPN"
CONFIG_FILE_NAME = ".quantum-resistant-vpn.yaml"


def default_search_paths() -> List[Path]:
    """Locations checked for an existing settings file, in priority order."""
    return [
        Path.home() / CONFIG_FILE_NAME,
        Path("/etc") / "quantum-resistant-vpn" / "config.yaml",
        Path.cwd() / CONFIG_FILE_NAME,
    ]


def load_environment(env_file: Optional[Union[str, Path]] = None) -> bool:
    """Load a .env file into the process environment.

    Existing environment variables take precedence over the file.

    Args:
        env_file: Explicit .env path. If None, the nearest .env file at or
            above the working directory is used.

    Returns:
        True if a .env file was found and loaded
    """
    path = str(env_file) if env_file is not None else find_dotenv(usecwd=True)
    if not path:
        return False
    loaded = load_dotenv(path)
    if loaded:
        logger.debug(f"Loaded environment from {path}")
    return loaded


def env_var_name(key: str) -> str:
    return f"{ENV_PREFIX}_{key.replace('.', '_').replace('-', '_').upper()}"


class SettingsStore:
    """Key-value settings persisted as a YAML document."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize the store.

        Args:
            config_file: Explicit settings file. If None, the first existing
                file from `default_search_paths()` is used, or the file in the
                user's home directory when none exists yet.
        """
        if config_file is not None:
            self.config_file = Path(config_file)
        else:
            existing = [p for p in default_search_paths() if p.exists()]
            self.config_file = existing[0] if existing else default_search_paths()[0]

        self.secure_file = SecureFile(self.config_file)
        self._data: Dict[str, Any] = self._load()
        self._overrides: Dict[str, Any] = {}

        logger.debug(f"Settings store using {self.config_file}")

    def _load(self) -> Dict[str, Any]:
        text = self.secure_file.read_text()
        if not text:
            return {}
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {self.config_file}: {e}")
            raise
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {self.config_file} must contain a mapping")
        return data

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Look up a dotted key.

        Args:
            key: Dotted key, e.g. ``crypto.default_classic``
            default: Returned when the key is unset everywhere

        Returns:
            The configured value, or `default`
        """
        if key in self._overrides:
            return self._overrides[key]

        env_value = os.environ.get(env_var_name(key))
        if env_value:
            return env_value

        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_string(self, key: str) -> str:
        value = self.get(key)
        return "" if value is None else str(value)

    def set(self, key: str, value: Any) -> None:
        """Set a dotted key in memory. Call `save()` to persist it."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

        # drop session values for parents or children that this write replaced
        for existing in list(self._overrides):
            if key.startswith(existing + ".") or existing.startswith(key + "."):
                del self._overrides[existing]
        self._overrides[key] = value

    def save(self) -> None:
        """Write the settings document to disk.

        Raises:
            OSError: If the settings file cannot be written
        """
        text = yaml.safe_dump(self._data, default_flow_style=False, sort_keys=True)
        self.secure_file.write_text(text)
        logger.info(f"Saved settings to {self.config_file}")


_settings: Optional[SettingsStore] = None


def get_settings() -> SettingsStore:
    """Get the process-wide settings store, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = SettingsStore()
    return _settings


def configure_settings(config_file: Optional[Union[str, Path]] = None) -> SettingsStore:
    """Replace the process-wide settings store."""
    global _settings
    _settings = SettingsStore(config_file)
    return _settings
