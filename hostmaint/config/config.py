"""Main configuration data structure."""
from dataclasses import dataclass, field
from .threshold_config import ThresholdConfig
from .backup_config import BackupConfig
from .log_scan_config import LogScanConfig
from .display_config import DisplayConfig


@dataclass
class Config:
    """Main configuration class."""
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    backup: BackupConfig = field(default_factory=BackupConfig)
    logs: LogScanConfig = field(default_factory=LogScanConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    command_timeout: float = 30.0

    def __post_init__(self):
        """Fix invalid values."""
        if self.command_timeout <= 0:
            self.command_timeout = 30.0
