"""Parsers turning system utility output into percentages.

Every function here is pure: it takes the text a command printed and
returns a value, or None when nothing usable was found.
"""
import re
from typing import List, Optional, Tuple

_TOP_IDLE = re.compile(r'([0-9]+(?:[.,][0-9]+)?)\s*%?\s*id\b')


def _to_float(text: str) -> Optional[float]:
    try:
        return float(text.replace(',', '.'))
    except ValueError:
        return None


def _usage_from_idle(idle: Optional[float]) -> Optional[float]:
    if idle is None or not 0 <= idle <= 100:
        return None
    return round(100 - idle, 1)


def parse_cpu_summary(text: str) -> Optional[float]:
    """Parse CPU usage from the ``Cpu(s)`` line of ``top -bn1``.

    Handles both ``%Cpu(s):  2.0 us, ... 96.5 id`` and the older
    ``Cpu(s):  2.0%us, ... 96.5%id`` layouts.
    """
    for line in text.splitlines():
        if 'Cpu(s)' not in line:
            continue
        match = _TOP_IDLE.search(line.split(':', 1)[-1])
        if match:
            return _usage_from_idle(_to_float(match.group(1)))
    return None


def parse_mpstat_summary(text: str) -> Optional[float]:
    """Parse CPU usage from the ``all`` row of ``mpstat 1 1``."""
    idle_offset = None
    idle = None
    for line in text.splitlines():
        tokens = line.split()
        if '%idle' in tokens:
            # Count from the right: the time column may carry an AM/PM token.
            idle_offset = len(tokens) - tokens.index('%idle')
            continue
        if idle_offset is None or 'all' not in tokens or len(tokens) < idle_offset:
            continue
        value = _to_float(tokens[-idle_offset])
        if value is not None:
            idle = value
            if tokens[0].startswith('Average'):
                break
    return _usage_from_idle(idle)


def memory_percent(used: int, total: int) -> int:
    """Percentage of used memory, rounded half-up."""
    return (200 * used + total) // (2 * total)


def parse_memory_summary(text: str) -> Optional[int]:
    """Parse memory usage from the ``Mem:`` row of ``free``."""
    for line in text.splitlines():
        tokens = line.split()
        if not tokens or tokens[0] != 'Mem:' or len(tokens) < 3:
            continue
        try:
            total = int(tokens[1])
            used = int(tokens[2])
        except ValueError:
            return None
        if total <= 0 or used < 0:
            return None
        percent = memory_percent(used, total)
        return percent if percent <= 100 else None
    return None


def parse_disk_usage(text: str) -> List[Tuple[str, int]]:
    """Parse ``df -P`` output into (mount target, percent used) pairs.

    Only device-backed filesystems are kept; order follows df.
    """
    usage = []
    for line in text.splitlines()[1:]:
        fields = line.split(None, 5)
        if len(fields) < 6 or not fields[0].startswith('/dev/'):
            continue
        capacity = fields[4].rstrip('%')
        if not capacity.isdigit():
            continue
        percent = int(capacity)
        if percent > 100:
            continue
        usage.append((fields[5], percent))
    return usage


def filter_device_rows(text: str) -> str:
    """Keep the header and the ``/dev/`` rows of a df listing."""
    lines = text.splitlines()
    if not lines:
        return ""
    kept = [lines[0]] + [line for line in lines[1:] if line.startswith('/dev/')]
    return "\n".join(kept)


def cpu_summary_line(text: str) -> Optional[str]:
    """Return the ``Cpu(s)`` line of ``top -bn1`` output."""
    for line in text.splitlines():
        if 'Cpu(s)' in line:
            return line.strip()
    return None
