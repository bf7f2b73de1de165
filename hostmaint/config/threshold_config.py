"""Threshold configuration data structure."""
import re
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_LIMIT = 80

_NON_NEGATIVE_INT = re.compile(r'^[0-9]+$')


@dataclass
class ThresholdConfig:
    """Alert trigger percentages for CPU, memory and disk."""
    cpu_limit: int = DEFAULT_LIMIT
    memory_limit: int = DEFAULT_LIMIT
    disk_limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        """Fix invalid values."""
        if not _valid_limit(self.cpu_limit):
            self.cpu_limit = DEFAULT_LIMIT
        if not _valid_limit(self.memory_limit):
            self.memory_limit = DEFAULT_LIMIT
        if not _valid_limit(self.disk_limit):
            self.disk_limit = DEFAULT_LIMIT

    def limit_for(self, kind: str) -> int:
        """Return the limit that applies to a metric kind."""
        if kind == "cpu":
            return self.cpu_limit
        if kind == "memory":
            return self.memory_limit
        if kind == "disk":
            return self.disk_limit
        raise ValueError(f"Unknown metric kind: {kind}")

    def updated(self, cpu: Optional[str] = None, memory: Optional[str] = None,
                disk: Optional[str] = None) -> "ThresholdConfig":
        """Return a copy with every valid answer applied; invalid ones keep the old limit."""
        return replace(
            self,
            cpu_limit=parse_limit(cpu, self.cpu_limit),
            memory_limit=parse_limit(memory, self.memory_limit),
            disk_limit=parse_limit(disk, self.disk_limit),
        )

    def summary(self) -> str:
        return f"CPU={self.cpu_limit}% MEM={self.memory_limit}% DISK={self.disk_limit}%"


def is_valid_limit_text(text: Optional[str]) -> bool:
    """True when text is a non-negative integer no greater than 100."""
    if text is None:
        return False
    text = text.strip()
    return bool(_NON_NEGATIVE_INT.match(text)) and int(text) <= 100


def parse_limit(text: Optional[str], current: int) -> int:
    """Parse an operator answer, falling back to the current limit."""
    if is_valid_limit_text(text):
        return int(text.strip())
    return current


def _valid_limit(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 100
