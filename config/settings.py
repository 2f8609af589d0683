"""
Configuration management for the Marketplace Command Agent.

This module provides a centralized configuration system that loads settings
from YAML files and environment variables.
"""

import os
import yaml
import logging
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, asdict


VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class TaskExtractionConfig:
    """Configuration for task synthesis."""
    default_product_name: str = 'Product Listing'
    title_template: str = 'Prepare listing for {product}'
    max_relative_days: int = 99  # "in N days" accepts at most two digits


@dataclass
class APIConfig:
    """Configuration for the HTTP boundary."""
    host: str = '127.0.0.1'
    port: int = 8000
    route: str = '/api/agent'


@dataclass
class UIConfig:
    """Configuration for the operator console."""
    page_title: str = 'Marketplace Command Agent'
    speak_responses: bool = False


class Settings:
    """
    Main settings class that manages all configuration.
    """

    def __init__(self):
        """Initialize settings with default values."""
        self.task_extraction = TaskExtractionConfig()
        self.api = APIConfig()
        self.ui = UIConfig()

        # General settings
        self.log_level = "INFO"
        self.log_file = None

        # Environment-specific settings
        self.environment = os.getenv('ENVIRONMENT', 'development')
        self.debug = self.environment == 'development'

        # Load environment variables
        self._load_from_env()

    @classmethod
    def from_yaml(cls, config_path: str) -> 'Settings':
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Settings instance with loaded configuration
        """
        settings = cls()

        try:
            config_file = Path(config_path)
            if config_file.exists():
                with open(config_file, 'r') as f:
                    config_data = yaml.safe_load(f) or {}

                settings._update_from_dict(config_data)
                # Environment variables still win over the file
                settings._load_from_env()
                logging.info(f"Configuration loaded from {config_path}")
            else:
                logging.warning(f"Configuration file {config_path} not found, using defaults")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration from {config_path}: {e}")
            logging.info("Using default configuration")

        return settings

    def _load_from_env(self):
        """Load settings from environment variables."""
        self.log_level = os.getenv('LOG_LEVEL', self.log_level)
        self.api.host = os.getenv('AGENT_API_HOST', self.api.host)
        if os.getenv('AGENT_API_PORT'):
            self.api.port = int(os.getenv('AGENT_API_PORT'))

    def _update_from_dict(self, config_dict: Dict[str, Any]):
        """Update settings from a dictionary."""
        sections = {
            'task_extraction': self.task_extraction,
            'api': self.api,
            'ui': self.ui,
        }
        for name, section in sections.items():
            for key, value in (config_dict.get(name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)

        # General settings may sit at the top level or under "general"
        general = dict(config_dict.get('general') or {})
        general.update({key: value for key, value in config_dict.items() if key not in sections and key != 'general'})
        for key in ['log_level', 'log_file', 'environment', 'debug']:
            if key in general:
                setattr(self, key, general[key])

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary format."""
        return {
            'task_extraction': asdict(self.task_extraction),
            'api': asdict(self.api),
            'ui': asdict(self.ui),
            'general': {
                'log_level': self.log_level,
                'log_file': self.log_file,
                'environment': self.environment,
                'debug': self.debug,
            }
        }

    def save_to_yaml(self, output_path: str):
        """
        Save current settings to a YAML file.

        Args:
            output_path: Path where to save the configuration
        """
        try:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)

            with open(output_file, 'w') as f:
                yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

            logging.info(f"Configuration saved to {output_path}")

        except OSError as e:
            logging.error(f"Failed to save configuration to {output_path}: {e}")
            raise

    def validate(self) -> bool:
        """
        Validate the current configuration.

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = []

        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            errors.append(f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}")

        if not (0 < self.api.port < 65536):
            errors.append("API port must be between 1 and 65535")

        if not self.api.route.startswith('/'):
            errors.append("API route must start with '/'")

        if not (1 <= self.task_extraction.max_relative_days <= 99):
            errors.append("Max relative days must be between 1 and 99")

        if '{product}' not in self.task_extraction.title_template:
            errors.append("Title template must contain '{product}'")

        if not self.task_extraction.default_product_name.strip():
            errors.append("Default product name must not be empty")

        # Log errors if any
        if errors:
            for error in errors:
                logging.error(f"Configuration validation error: {error}")
            return False

        logging.info("Configuration validation passed")
        return True

    def get_config_dict_for_component(self, component: str) -> Dict[str, Any]:
        """
        Get configuration dictionary for a specific component.

        Args:
            component: Name of the component ('task_extraction', 'api', 'ui')

        Returns:
            Configuration dictionary for the component
        """
        component_configs = {
            'task_extraction': self.task_extraction.__dict__,
            'api': self.api.__dict__,
            'ui': self.ui.__dict__
        }

        return component_configs.get(component, {})


# Global settings instance
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def initialize_settings(config_path: Optional[str] = None) -> Settings:
    """
    Initialize global settings from configuration file.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Initialized settings instance
    """
    global _settings_instance

    if config_path:
        _settings_instance = Settings.from_yaml(config_path)
    else:
        _settings_instance = Settings()

    _settings_instance.validate()

    return _settings_instance
