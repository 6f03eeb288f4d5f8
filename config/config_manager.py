"""
Configuration management for the league eligibility system.
"""

import logging
import yaml
from typing import Dict, Any

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file, filling in missing keys from the defaults."""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return ConfigManager.get_default_config()
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return ConfigManager.get_default_config()

        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' is not a mapping. Using default configuration.")
            return ConfigManager.get_default_config()

        config = ConfigManager.get_default_config()
        config.update(loaded)
        return config

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'database_path': 'league_players.db',
            'log_level': 'INFO',
            'required_documents': ['NATIONAL_ID', 'SELFIE'],
            'required_consents': ['TERMS_CONDITIONS', 'DATA_PROCESSING'],
            'geography': {}
        }
