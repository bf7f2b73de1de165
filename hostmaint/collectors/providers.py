"""Ordered fallback chains of metric providers."""
import logging
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

import psutil

from .command_runner import CommandRunner
from .parsers import memory_percent

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Provider(Generic[T]):
    """One way of obtaining a value; returns None when it has no data."""

    name = "provider"

    def fetch(self) -> Optional[T]:
        raise NotImplementedError


class CommandProvider(Provider[T]):
    """Runs a command and hands its stdout to a parser."""

    def __init__(self, runner: CommandRunner, argv: List[str],
                 parser: Callable[[str], Optional[T]]):
        self.runner = runner
        self.argv = argv
        self.parser = parser
        self.name = argv[0]

    def fetch(self) -> Optional[T]:
        output = self.runner.output(self.argv)
        if output is None:
            return None
        return self.parser(output)


class PsutilCpuProvider(Provider[float]):
    name = "psutil"

    def __init__(self, interval: float = 0.5):
        self.interval = interval

    def fetch(self) -> Optional[float]:
        return round(psutil.cpu_percent(interval=self.interval), 1)


class PsutilMemoryProvider(Provider[int]):
    name = "psutil"

    def fetch(self) -> Optional[int]:
        memory = psutil.virtual_memory()
        if memory.total <= 0:
            return None
        return memory_percent(memory.used, memory.total)


class PsutilDiskProvider(Provider[list]):
    name = "psutil"

    def fetch(self) -> Optional[list]:
        usage = []
        for partition in psutil.disk_partitions(all=False):
            if not partition.device.startswith('/dev/'):
                continue
            try:
                percent = psutil.disk_usage(partition.mountpoint).percent
            except (PermissionError, OSError):
                continue
            usage.append((partition.mountpoint, round(percent)))
        return usage or None


def first_available(providers: Sequence[Provider[T]]) -> Optional[T]:
    """Try providers in order and return the first value found."""
    for provider in providers:
        try:
            value = provider.fetch()
        except (psutil.Error, OSError) as e:
            logger.debug("Provider %s failed: %s", provider.name, e)
            continue
        if value is not None:
            return value
        logger.debug("Provider %s had no data, trying next", provider.name)
    return None
