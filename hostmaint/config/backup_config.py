"""Backup configuration data structure."""
from dataclasses import dataclass, field
from typing import List

DEFAULT_BACKUP_DIR = "/var/backups/sys_monitor"


@dataclass
class BackupConfig:
    """Where archives are written and which paths are offered as presets."""
    directory: str = DEFAULT_BACKUP_DIR
    presets: List[str] = field(default_factory=lambda: ["/etc", "/home"])

    def __post_init__(self):
        """Fix invalid values."""
        if not self.directory:
            self.directory = DEFAULT_BACKUP_DIR
        self.presets = [p for p in self.presets if p]
