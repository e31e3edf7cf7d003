"""
Configuration Management System

Handles calibration map settings, configuration loading, validation,
and environment variable overrides.
"""

import os
import yaml
import json
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from ..calibration.calibration_table import CalibrationTable
from ..utils.logging_config import setup_logging


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TableConfig:
    """Calibration table configuration."""
    name: str = "calibration"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: str = "calibration_map.log"
    max_file_size_mb: float = 10.0
    backup_count: int = 5
    console_output: bool = True
    detailed_format: bool = False


class Settings:
    """
    Configuration manager for the calibration map.

    Loads and saves settings as YAML or JSON, validates them and applies
    environment variable overrides.
    """

    def __init__(self, config_file: str = "config/calibration_map.yaml"):
        """
        Initialize settings manager.

        Args:
            config_file: Path to configuration file
        """
        self.config_file = config_file
        self.logger = logging.getLogger(__name__)

        # Configuration sections
        self.table = TableConfig()
        self.logging = LoggingConfig()

        # Custom settings
        self._custom_settings: Dict[str, Any] = {}

    def load_config(self, config_file: str = None) -> bool:
        """
        Load configuration from file.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if loaded successfully
        """
        if config_file:
            self.config_file = config_file

        try:
            if not os.path.exists(self.config_file):
                self.logger.warning(f"Config file {self.config_file} not found, using defaults")
                return self._create_default_config()

            # Determine file format
            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'r') as f:
                    config_data = json.load(f)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            self._load_section_config(config_data)

            if not self._validate_config():
                return False

            self.logger.info(f"Configuration loaded from {self.config_file}")
            return True

        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            self.logger.error(f"Failed to load configuration: {e}")
            return False

    def save_config(self, config_file: str = None) -> bool:
        """
        Save current configuration to file.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if saved successfully
        """
        if config_file:
            self.config_file = config_file

        try:
            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            config_data = self.to_dict()

            # Save based on file extension
            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'w') as f:
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'w') as f:
                    json.dump(config_data, f, indent=2)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            self.logger.info(f"Configuration saved to {self.config_file}")
            return True

        except (OSError, yaml.YAMLError, TypeError) as e:
            self.logger.error(f"Failed to save configuration: {e}")
            return False

    def get_custom_setting(self, key: str, default: Any = None) -> Any:
        """Get custom setting value."""
        return self._custom_settings.get(key, default)

    def set_custom_setting(self, key: str, value: Any):
        """Set custom setting value."""
        self._custom_settings[key] = value

    def update_from_dict(self, config_dict: Dict[str, Any]):
        """Update configuration from dictionary."""
        self._load_section_config(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'table': asdict(self.table),
            'logging': asdict(self.logging),
            'custom': self._custom_settings
        }

    def load_environment_overrides(self):
        """Load configuration overrides from environment variables."""
        if 'CALMAP_TABLE_NAME' in os.environ:
            self.table.name = os.environ['CALMAP_TABLE_NAME']

        if 'CALMAP_LOG_LEVEL' in os.environ:
            self.logging.level = os.environ['CALMAP_LOG_LEVEL'].upper()
        if 'CALMAP_LOG_FILE' in os.environ:
            self.logging.log_file = os.environ['CALMAP_LOG_FILE']

        self.logger.info("Environment variable overrides applied")

    def setup_logging(self, logger_name: Optional[str] = None) -> bool:
        """Configure logging from the logging section (root logger by default)."""
        return setup_logging(
            level=self.logging.level,
            log_file=self.logging.log_file,
            max_file_size_mb=self.logging.max_file_size_mb,
            backup_count=self.logging.backup_count,
            console_output=self.logging.console_output,
            detailed_format=self.logging.detailed_format,
            logger_name=logger_name
        )

    def create_table(self) -> CalibrationTable:
        """Create an empty calibration table named after the table section."""
        return CalibrationTable(name=self.table.name)

    def _load_section_config(self, config_data: Dict[str, Any]):
        """Load configuration data into sections."""
        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_data).__name__}")

        for section_name, section in (('table', self.table), ('logging', self.logging)):
            if section_name in config_data:
                section_data = config_data[section_name] or {}
                if not isinstance(section_data, dict):
                    raise ValueError(f"Section '{section_name}' must be a mapping")
                for key, value in section_data.items():
                    if hasattr(section, key):
                        setattr(section, key, value)

        if 'custom' in config_data:
            custom_data = config_data['custom'] or {}
            if not isinstance(custom_data, dict):
                raise ValueError("Section 'custom' must be a mapping")
            self._custom_settings.update(custom_data)

    def _validate_config(self) -> bool:
        """Validate configuration values."""
        try:
            if not self.table.name:
                raise ValueError("Table name must not be empty")

            if str(self.logging.level).upper() not in VALID_LOG_LEVELS:
                raise ValueError(f"Unknown log level: {self.logging.level}")
            if self.logging.max_file_size_mb <= 0:
                raise ValueError("Max log file size must be positive")
            if self.logging.backup_count < 0:
                raise ValueError("Log backup count cannot be negative")

            return True

        except (ValueError, TypeError) as e:
            self.logger.error(f"Configuration validation failed: {e}")
            return False

    def _create_default_config(self) -> bool:
        """Create default configuration file."""
        self.logger.info("Creating default configuration file")
        return self.save_config()
