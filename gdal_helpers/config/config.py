# gdal_helpers/config/config.py

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from . import defaults

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager with YAML override support."""

    def __init__(self, config_file: Optional[Path] = None, discover: bool = True):
        self.settings = self.load_defaults()
        self.config_file: Optional[Path] = None

        explicit = config_file is not None
        if config_file is None and discover:
            config_file = self._find_config_file()

        if config_file is not None:
            config_file = Path(config_file)
            if not config_file.exists():
                if explicit:
                    raise FileNotFoundError(f"Config file not found: {config_file}")
                logger.warning(f"Config file not found: {config_file} - using defaults")
            elif explicit:
                self._load_yaml_config(config_file)
                self.config_file = config_file
            else:
                # Discovered files are optional: fall back to defaults
                try:
                    self._load_yaml_config(config_file)
                    self.config_file = config_file
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning(f"Config file loading failed: {e} - using defaults")
                    self.settings = self.load_defaults()

            if self.config_file is not None:
                logger.debug(f"Loaded configuration from {config_file}")

    def _find_config_file(self) -> Optional[Path]:
        """Find a config file, honouring GDAL_HELPERS_CONFIG first."""
        explicit = os.environ.get('GDAL_HELPERS_CONFIG')
        if explicit:
            return Path(explicit)

        potential_locations = [
            Path.cwd() / 'gdal_helpers.yml',
            Path.home() / '.gdal_helpers' / 'config.yml',
        ]

        for location in potential_locations:
            if location.exists() and location.is_file():
                return location

        return None

    def load_defaults(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'paths': copy.deepcopy(defaults.PATHS),
            'gdal': copy.deepcopy(defaults.GDAL),
            'vsimem': copy.deepcopy(defaults.VSIMEM),
            'logging': copy.deepcopy(defaults.LOGGING),
            'spatial': copy.deepcopy(defaults.SPATIAL),
        }

    def _load_yaml_config(self, config_file: Path):
        """Load and merge configuration from a YAML file."""
        with open(config_file, 'r') as file:
            yaml_config = yaml.safe_load(file)
        if yaml_config:
            if not isinstance(yaml_config, dict):
                raise ValueError(f"Top level of {config_file} must be a mapping")
            self._deep_merge(self.settings, yaml_config)

    def _deep_merge(self, base: dict, override: dict):
        """Deep merge override into base dictionary."""
        for key, value in override.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def update(self, overrides: Dict[str, Any]):
        """Merge a dict of overrides into the current settings."""
        self._deep_merge(self.settings, overrides)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def gdal(self) -> Dict[str, Any]:
        return self.settings['gdal']

    @property
    def vsimem(self) -> Dict[str, Any]:
        return self.settings['vsimem']

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings['logging']

    @property
    def spatial(self) -> Dict[str, Any]:
        return self.settings['spatial']

    @property
    def paths(self) -> Dict[str, Any]:
        return self.settings['paths']


# Global configuration instance
config = Config()
