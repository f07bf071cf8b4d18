"""
User configuration management for Duplicate Folder Finder.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.dupefolder/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.dupefolder/config.json

Example config.json:
{
    "default_mode": "quick",
    "cache_file": null
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import CACHE_FILE, DEFAULT_MODE
from .models import ComparisonMode

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    Attributes are lazy-loaded and cached for performance.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DUPEFOLDER_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)

        return Path.home() / '.dupefolder'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for complex types
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_mode(self) -> ComparisonMode:
        """Comparison mode used when none is given."""
        name = self.get('default_mode', default=DEFAULT_MODE, env_var='DUPEFOLDER_MODE')
        try:
            return ComparisonMode.from_name(str(name))
        except ValueError as e:
            logger.warning(f"{e} Falling back to {DEFAULT_MODE}.")
            return ComparisonMode.from_name(DEFAULT_MODE)

    @property
    def cache_file(self) -> str:
        """Path to the folder content cache file."""
        custom = self.get('cache_file', env_var='DUPEFOLDER_CACHE_FILE')
        if custom:
            return str(custom)
        return CACHE_FILE

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "DupeFolder User Configuration",
            "default_mode": DEFAULT_MODE,
            "cache_file": None,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
