"""
VAULTPREP Configuration Management

This module handles configuration for the VaultPrep compiler and its
export surfaces. Values come from a JSON file layered over built-in defaults.
"""

import os
import json
import copy
import logging
from typing import Dict, Any, Optional

_log = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "export": {
        "output_dir": "export",
        "filenames": {
            "source_data": "source_data",
            "standard_hub": "standard_hub",
            "standard_satellite": "standard_satellite",
            "standard_link": "standard_link",
            "denormalized": "denormalized_metadata"
        }
    },
    "link": {
        "unresolved_policy": "placeholder"
    },
    "satellite": {
        "implicit_fallback": False
    },
    "registry": {
        "duplicate_policy": "error"
    },
    "api": {
        "host": "0.0.0.0",
        "port": 8000
    },
    "logging": {
        "level": "INFO",
        "file": None
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay override onto base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for VaultPrep."""

    def __init__(self, config_file: Optional[str] = "config.json"):
        """Initialize configuration.

        Args:
            config_file: Path to a JSON config file. ``None`` uses defaults only.
        """
        self.config_file = config_file
        self.environment = os.getenv("VAULTPREP_ENV", "development")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        A file may carry an ``environments`` section; the entry named by
        ``VAULTPREP_ENV`` is overlaid on the rest of the file.
        """
        if not self.config_file or not os.path.exists(self.config_file):
            return self._get_default_config()
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = _merge(DEFAULT_CONFIG, json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            _log.warning(f"Error loading config {self.config_file}: {e}")
            return self._get_default_config()

        overrides = (config.get("environments") or {}).get(self.environment)
        if isinstance(overrides, dict):
            config = _merge(config, overrides)
        return config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dotted key."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save(self) -> bool:
        """Save configuration to file."""
        if not self.config_file:
            return False
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2)
            return True
        except OSError as e:
            _log.error(f"Error saving config: {e}")
            return False

    @property
    def unresolved_link_policy(self) -> str:
        """How the link compiler treats references it cannot resolve."""
        return self.get("link.unresolved_policy", "placeholder")

    @property
    def implicit_satellite_fallback(self) -> bool:
        """Whether tables without hashdiff groups get one implicit satellite."""
        return bool(self.get("satellite.implicit_fallback", False))

    @property
    def duplicate_hashkey_policy(self) -> str:
        """How the hashkey registry treats a name claimed by two groups."""
        return self.get("registry.duplicate_policy", "error")

    def export_filename(self, relation: str) -> str:
        """Get the file stem used for a relation."""
        return self.get(f"export.filenames.{relation}", relation)
