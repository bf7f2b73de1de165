"""Configuration dataclasses and YAML loading."""
from .config import Config
from .threshold_config import ThresholdConfig
from .backup_config import BackupConfig
from .log_scan_config import LogScanConfig
from .display_config import DisplayConfig
from .config_manager import ConfigManager

__all__ = [
    "Config",
    "ThresholdConfig",
    "BackupConfig",
    "LogScanConfig",
    "DisplayConfig",
    "ConfigManager",
]
