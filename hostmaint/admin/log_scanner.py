"""Keyword scan over common system log files."""
import logging
import os
import re
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config.log_scan_config import DEFAULT_KEYWORDS

logger = logging.getLogger(__name__)


@dataclass
class LogScanResult:
    path: str
    matches: List[str] = field(default_factory=list)
    error: Optional[str] = None


class LogScanner:
    """Finds the most recent lines mentioning any keyword, case-insensitively."""

    def __init__(self, files: Sequence[str], keywords: Sequence[str], tail_lines: int = 20):
        self.files = list(files)
        self.keywords = [k for k in keywords if k] or list(DEFAULT_KEYWORDS)
        self.tail_lines = tail_lines
        self.pattern = re.compile('|'.join(re.escape(k) for k in self.keywords), re.IGNORECASE)

    def scan(self) -> List[LogScanResult]:
        """Scan each existing file; absent files are skipped."""
        results = []
        for path in self.files:
            if not os.path.isfile(path):
                logger.debug("Skipping missing log %s", path)
                continue
            results.append(self.scan_file(path))
        return results

    def scan_file(self, path: str) -> LogScanResult:
        recent = deque(maxlen=self.tail_lines)
        try:
            with open(path, 'r', errors='replace') as f:
                for line in f:
                    if self.pattern.search(line):
                        recent.append(line.rstrip('\n'))
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return LogScanResult(path, error=e.strerror or str(e))
        return LogScanResult(path, matches=list(recent))
