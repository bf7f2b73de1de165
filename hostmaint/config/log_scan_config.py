"""Log scan configuration data structure."""
from dataclasses import dataclass, field
from typing import List

DEFAULT_LOG_FILES = [
    "/var/log/messages",
    "/var/log/syslog",
    "/var/log/auth.log",
    "/var/log/secure",
    "/var/log/kern.log",
    "/var/log/dmesg",
]

DEFAULT_KEYWORDS = ["error", "fail", "failed", "exception", "panic", "segfault", "warn"]


@dataclass
class LogScanConfig:
    """Log files to scan and the keywords that count as a match."""
    files: List[str] = field(default_factory=lambda: list(DEFAULT_LOG_FILES))
    keywords: List[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    tail_lines: int = 20

    def __post_init__(self):
        """Fix invalid values."""
        if not self.keywords:
            self.keywords = list(DEFAULT_KEYWORDS)
        if self.tail_lines <= 0:
            self.tail_lines = 20
