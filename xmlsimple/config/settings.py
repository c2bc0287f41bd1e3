"""
Configuration management for xmlsimple.

This module provides functionality for loading and managing configuration
from JSON/YAML files and environment variables.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from xmlsimple.core.constants import CONFIG_DEFAULTS_DIR, DEFAULT_DECIMAL_SEPARATOR, ENV_PREFIX
from xmlsimple.core.exceptions import ConfigurationError

class Settings:
    """
    Settings manager for xmlsimple.

    This class loads and manages configuration from YAML files and environment variables.
    Options are grouped in sections, e.g. the "parser" section holds the decimal separator.
    """

    _instance = None

    @classmethod
    def get_instance(cls):
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __init__(self, config_dir: Optional[str] = CONFIG_DEFAULTS_DIR):
        """
        Initialize the settings manager.

        Args:
            config_dir: Directory with default YAML files, one file per section
        """
        self.config: Dict[str, Dict[str, Any]] = {}
        if config_dir:
            self._load_defaults(config_dir)
        self._load_environment()

    def _load_defaults(self, config_dir: str):
        """Load default configuration from YAML files."""
        if not os.path.isdir(config_dir):
            return

        for filename in sorted(os.listdir(config_dir)):
            if filename.endswith('.yaml') or filename.endswith('.yml'):
                filepath = os.path.join(config_dir, filename)
                try:
                    with open(filepath, 'r') as f:
                        section = os.path.splitext(filename)[0]
                        self.config[section] = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    raise ConfigurationError(f"Error loading config file {filepath}: {e}") from e

    def _load_environment(self):
        """Load configuration from environment variables."""
        load_dotenv()  # Load .env file if present

        # Example: XMLSIMPLE_PARSER_DECIMAL_SEPARATOR to config['parser']['decimal_separator']
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            name = key[len(ENV_PREFIX):].lower()
            if '_' in name:
                section, option = name.split('_', 1)
                self.set(section, option, value)

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """Get a configuration value."""
        values = self.config.get(section)
        if not isinstance(values, dict):
            return default
        return values.get(option, default)

    def set(self, section: str, option: str, value: Any) -> None:
        """Set a configuration value."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][option] = value

    @classmethod
    def from_file(cls, filepath: str) -> 'Settings':
        """
        Create a Settings instance from a configuration file.

        Args:
            filepath: Path to the configuration file (YAML, JSON, or key=value format)

        Returns:
            Settings instance
        """
        instance = cls()

        if not os.path.isfile(filepath):
            raise ConfigurationError(f"Config file not found: {filepath}")

        _, ext = os.path.splitext(filepath)

        try:
            if ext.lower() in ('.yaml', '.yml'):
                with open(filepath, 'r') as f:
                    config_data = yaml.safe_load(f)
                if not isinstance(config_data, dict):
                    raise ConfigurationError(f"Invalid YAML config format in {filepath}")
                instance.config.update(config_data)

            elif ext.lower() == '.json':
                with open(filepath, 'r') as f:
                    config_data = json.load(f)
                if not isinstance(config_data, dict):
                    raise ConfigurationError(f"Invalid JSON config format in {filepath}")
                instance.config.update(config_data)

            else:
                # key=value lines, "section.option=value" or plain "option=value"
                with open(filepath, 'r') as f:
                    for line in f:
                        line = line.strip()
                        if not line or line.startswith('#') or '=' not in line:
                            continue

                        key, value = line.split('=', 1)
                        key = key.strip().lower()
                        if '.' in key:
                            section, option = key.split('.', 1)
                        else:
                            section, option = 'general', key
                        instance.set(section, option, value.strip())

        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Error loading config file {filepath}: {e}") from e

        return instance

    def get_parser_params(self) -> Dict[str, Any]:
        """
        Get parser parameters.

        Returns:
            Dictionary with parser parameters
        """
        params = dict(self.config.get('parser') or {})
        params.setdefault('decimal_separator', DEFAULT_DECIMAL_SEPARATOR)

        separator = params['decimal_separator']
        if not isinstance(separator, str) or len(separator) != 1:
            raise ConfigurationError(f"Invalid decimal separator: {separator!r}")
        return params

    def get_logging_params(self) -> Dict[str, Any]:
        """
        Get logging parameters.

        Returns:
            Dictionary with logging parameters
        """
        params = dict(self.config.get('logging') or {})
        params.setdefault('level', 'INFO')
        params.setdefault('log_dir', None)
        return params
