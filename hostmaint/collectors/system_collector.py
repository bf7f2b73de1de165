"""System metrics collector for CPU, memory and disk usage."""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from .command_runner import CommandRunner
from .parsers import (
    cpu_summary_line,
    filter_device_rows,
    parse_cpu_summary,
    parse_disk_usage,
    parse_memory_summary,
    parse_mpstat_summary,
)
from .providers import (
    CommandProvider,
    Provider,
    PsutilCpuProvider,
    PsutilDiskProvider,
    PsutilMemoryProvider,
    first_available,
)
from .system_models import Metric

logger = logging.getLogger(__name__)


class SystemCollector:
    """Collects CPU, memory and per-filesystem disk usage.

    Each metric is backed by an ordered list of providers. The defaults
    prefer the classic command line tools and fall back to psutil; tests
    pass their own lists.
    """

    def __init__(self, runner: Optional[CommandRunner] = None,
                 cpu_providers: Optional[Sequence[Provider]] = None,
                 memory_providers: Optional[Sequence[Provider]] = None,
                 disk_providers: Optional[Sequence[Provider]] = None):
        """Initialize the system collector."""
        self.runner = runner or CommandRunner()
        if cpu_providers is None:
            cpu_providers = [
                CommandProvider(self.runner, ['top', '-bn1'], parse_cpu_summary),
                CommandProvider(self.runner, ['mpstat', '1', '1'], parse_mpstat_summary),
                PsutilCpuProvider(),
            ]
        if memory_providers is None:
            memory_providers = [
                CommandProvider(self.runner, ['free'], parse_memory_summary),
                PsutilMemoryProvider(),
            ]
        if disk_providers is None:
            disk_providers = [
                CommandProvider(self.runner, ['df', '-P'], parse_disk_usage),
                PsutilDiskProvider(),
            ]
        self.cpu_providers = list(cpu_providers)
        self.memory_providers = list(memory_providers)
        self.disk_providers = list(disk_providers)

    def collect(self) -> List[Metric]:
        """Collect all metrics: CPU, then memory, then disks in reported order."""
        metrics = []

        cpu = self.collect_cpu()
        if cpu is not None:
            metrics.append(cpu)

        memory = self.collect_memory()
        if memory is not None:
            metrics.append(memory)

        metrics.extend(self.collect_disks())
        return metrics

    def collect_cpu(self) -> Optional[Metric]:
        usage = first_available(self.cpu_providers)
        if usage is None:
            logger.warning("CPU usage unavailable from every provider")
            return None
        return Metric.cpu(usage)

    def collect_memory(self) -> Optional[Metric]:
        usage = first_available(self.memory_providers)
        if usage is None:
            logger.warning("Memory usage unavailable from every provider")
            return None
        return Metric.memory(usage)

    def collect_disks(self) -> List[Metric]:
        usage = first_available(self.disk_providers)
        if not usage:
            logger.warning("Disk usage unavailable from every provider")
            return []
        return [Metric.disk(mount, percent) for mount, percent in usage]

    def collect_snapshot(self) -> Dict[str, str]:
        """Gather the raw, human-readable sections shown above the alerts."""
        sections = OrderedDict()

        uptime = self.runner.output(['uptime'])
        if uptime:
            sections["Uptime & Load"] = uptime.strip()

        cpu = self._cpu_summary_text()
        if cpu:
            sections["CPU Usage"] = cpu

        memory = self.runner.output(['free', '-h'])
        if memory:
            sections["Memory Usage"] = memory.rstrip()

        disks = self.runner.output(['df', '-hT'])
        if disks:
            sections["Disk Usage (by filesystem)"] = filter_device_rows(disks)

        return sections

    def _cpu_summary_text(self) -> Optional[str]:
        """Per-CPU view from mpstat when installed, else the top summary line."""
        if self.runner.available('mpstat'):
            output = self.runner.output(['mpstat', '1', '1'])
            if output:
                return output.strip()

        output = self.runner.output(['top', '-bn1'])
        if not output:
            return None
        line = cpu_summary_line(output)
        if line:
            return line
        return "\n".join(output.splitlines()[:5])
