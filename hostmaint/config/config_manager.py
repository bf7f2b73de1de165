"""Configuration loading and management."""
import logging
import os

import yaml

from .config import Config
from .threshold_config import ThresholdConfig
from .backup_config import BackupConfig
from .log_scan_config import LogScanConfig
from .display_config import DisplayConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), 'default_config.yaml'
)


class ConfigManager:
    """Configuration loading and management."""

    @staticmethod
    def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
        """Load configuration from YAML file - let it crash if bad."""
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
        logger.debug("Loaded configuration from %s", config_path)
        return ConfigManager.from_dict(config_data)

    @staticmethod
    def from_dict(config_data: dict) -> Config:
        """Build a Config from already-parsed YAML data."""
        thresholds = ThresholdConfig(**config_data.get('thresholds', {}))
        backup = BackupConfig(**config_data.get('backup', {}))
        logs = LogScanConfig(**config_data.get('logs', {}))
        display = DisplayConfig(**config_data.get('display', {}))

        return Config(
            thresholds=thresholds,
            backup=backup,
            logs=logs,
            display=display,
            command_timeout=config_data.get('command_timeout', 30.0),
        )
