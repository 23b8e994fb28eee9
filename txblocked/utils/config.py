# txblocked/utils/config.py - Configuration management
"""
Configuration management for the analyzer.
Loads and validates configuration from YAML files.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from txblocked.collector.events import BlockReason


class Config:
    """
    Configuration manager for the analyzer.

    Loads configuration from YAML files and provides access to settings.
    """

    DEFAULT_CONFIG = {
        'output': {
            'format': 'stdout',
            'directory': '.',
            'limit': 50,
            'time_unit': 'us',
            'use_colors': True,
        },
        'filters': {
            'reasons': [],
            'min_duration_ns': 0,
        },
    }

    OUTPUT_FORMATS = ('stdout', 'json', 'csv', 'markdown', 'prometheus')
    TIME_UNITS = ('ns', 'us', 'ms')

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str):
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML file

        Raises:
            ValueError: If the file cannot be read, is not a YAML mapping,
                or holds invalid settings
        """
        config_path = Path(config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_file}, using defaults")
            return

        try:
            with open(config_path, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.logger.error(f"Failed to load config: {e}")
            raise ValueError(f"cannot read {config_file}: {e}") from e

        if not isinstance(loaded_config, dict):
            raise ValueError(
                f"{config_file} must hold a mapping of settings, "
                f"not {type(loaded_config).__name__}"
            )

        # Merge with defaults
        self._merge_config(self.config, loaded_config)
        self.logger.info(f"Loaded configuration from {config_file}")

        self.validate()

    def validate(self):
        """
        Check settings that the analyzer cannot run with.

        Raises:
            ValueError: If a setting is out of range
        """
        output_format = self.get('output.format')
        if output_format not in self.OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format}")

        time_unit = self.get('output.time_unit')
        if time_unit not in self.TIME_UNITS:
            raise ValueError(f"Unknown time unit: {time_unit}")

        min_duration = self.get('filters.min_duration_ns', 0)
        if not isinstance(min_duration, int) or min_duration < 0:
            raise ValueError(f"filters.min_duration_ns must be a non-negative integer: {min_duration}")

        reasons = self.get('filters.reasons', [])
        if not isinstance(reasons, list):
            raise ValueError("filters.reasons must be a list")

        known = {r.value.lower(): r for r in BlockReason if r is not BlockReason.NONE}
        for label in reasons:
            if not isinstance(label, str) or label.lower() not in known:
                choices = ", ".join(r.value for r in known.values())
                raise ValueError(f"Unknown reason in filters.reasons: {label!r} (expected one of: {choices})")

    def _merge_config(self, base: Dict, override: Dict):
        """
        Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'output.format')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'output.limit')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def to_dict(self) -> Dict:
        """
        Get full configuration as dictionary.

        Returns:
            Configuration dictionary
        """
        return copy.deepcopy(self.config)

    def save_to_file(self, config_file: str):
        """
        Save current configuration to YAML file.

        Args:
            config_file: Path to output YAML file
        """
        config_path = Path(config_file)

        try:
            with open(config_path, 'w') as f:
                yaml.dump(self.config, f, default_flow_style=False)

            self.logger.info(f"Saved configuration to {config_file}")

        except Exception as e:
            self.logger.error(f"Failed to save config: {e}")
            raise
