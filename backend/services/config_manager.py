"""
Configuration Manager - Handle formatter settings persistence
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from services.placeholders import PlaceholderContext, substitute_placeholders

DEFAULT_EXECUTABLE = "openscad-format"


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1. Environment variable
            config_dir = os.environ.get("OPENSCAD_FORMAT_CONFIG_DIR")

            # 2. Home directory ~/.openscad_format
            if not config_dir:
                config_dir = os.path.expanduser("~/.openscad_format")

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    print(f"[ConfigManager] Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # 3. Fall back to the temp directory
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "openscad_format"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                print(f"[ConfigManager] Using temporary config path: {self._config_file}")

        except OSError as e:
            print(f"[ConfigManager] Critical error during init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "openscad_format_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next access re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[ConfigManager] Error loading config: {e}")
            return self._default_config()

        if not isinstance(loaded, dict):
            print(
                f"[ConfigManager] Error loading config: expected an object, "
                f"got {type(loaded).__name__}"
            )
            return self._default_config()

        return {**self._default_config(), **loaded}

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "executable": DEFAULT_EXECUTABLE,
            "config": None,  # path passed to the formatter as --config
            "languages": ["scad"],
            "timeout": 30,  # seconds
            "server": {"host": "127.0.0.1", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def get_executable_path(self, context: PlaceholderContext) -> str:
        """Configured formatter executable, or the default name when unset"""
        exec_path = self.get("executable")
        if not exec_path:
            return DEFAULT_EXECUTABLE
        return substitute_placeholders(exec_path, context)

    def get_config_path(self, context: PlaceholderContext) -> str | None:
        """Configured formatter config file, or None when unset"""
        config_path = self.get("config")
        if not config_path:
            return None
        return substitute_placeholders(config_path, context)
