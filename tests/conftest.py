"""Shared fixtures: canned command output and a fake command runner."""
import pytest

from hostmaint.collectors.command_runner import CommandResult, CommandRunner
from hostmaint.collectors.parsers import (
    parse_cpu_summary,
    parse_disk_usage,
    parse_memory_summary,
    parse_mpstat_summary,
)
from hostmaint.collectors.providers import CommandProvider
from hostmaint.collectors.system_collector import SystemCollector
from hostmaint.core.errors import CommandUnavailableError

TOP_OUTPUT = """\
top - 10:15:01 up 3 days,  2:01,  1 user,  load average: 0.52, 0.58, 0.59
Tasks: 212 total,   1 running, 211 sleeping,   0 stopped,   0 zombie
%Cpu(s): 60.0 us, 10.0 sy,  0.0 ni, 25.0 id,  5.0 wa,  0.0 hi,  0.0 si,  0.0 st
MiB Mem :  15936.2 total,   8123.4 free,   4211.8 used,   3601.0 buff/cache
MiB Swap:   2048.0 total,   2048.0 free,      0.0 used.  11321.6 avail Mem
"""

MPSTAT_OUTPUT = """\
Linux 6.1.0 (web01) \t10/17/2026 \t_x86_64_\t(4 CPU)

10:15:01 AM  CPU    %usr   %nice    %sys %iowait    %irq   %soft  %steal  %guest  %gnice   %idle
10:15:02 AM  all    1.00    0.00    0.50    0.00    0.00    0.00    0.00    0.00    0.00   98.50
Average:     all    1.00    0.00    0.50    0.00    0.00    0.00    0.00    0.00    0.00   98.50
"""

FREE_OUTPUT = """\
               total        used        free      shared  buff/cache   available
Mem:            5000        4000         500          10         500         900
Swap:           2048           0        2048
"""

DF_OUTPUT = """\
Filesystem     1024-blocks      Used Available Capacity Mounted on
udev               8123456         0   8123456       0% /dev
tmpfs              1634568      2100   1632468       1% /run
/dev/sda1        102687672  43777216  53651080      45% /
tmpfs              8172832         0   8172832       0% /dev/shm
/dev/sdb1        515928320 474654080  41274240      92% /data
"""

DF_HUMAN_OUTPUT = """\
Filesystem     Type   Size  Used Avail Use% Mounted on
udev           devtmpfs 7.8G   0  7.8G   0% /dev
/dev/sda1      ext4    98G   42G   52G  45% /
tmpfs          tmpfs  7.8G     0  7.8G   0% /dev/shm
/dev/sdb1      ext4   492G  453G   40G  92% /data
"""


class FakeRunner(CommandRunner):
    """Replays canned output keyed by full argv tuple or program name."""

    def __init__(self, outputs=None, missing=(), returncodes=None):
        super().__init__()
        self.outputs = outputs or {}
        self.missing = set(missing)
        self.returncodes = returncodes or {}
        self.calls = []

    def available(self, program):
        return program not in self.missing

    def run(self, argv, capture=True, timeout=None):
        self.calls.append((list(argv), capture))
        if argv[0] in self.missing:
            raise CommandUnavailableError(f"Command not found: {argv[0]}")
        key = tuple(argv)
        stdout = self.outputs.get(key, self.outputs.get(argv[0], ""))
        returncode = self.returncodes.get(key, self.returncodes.get(argv[0], 0))
        stderr = "command failed" if returncode else ""
        return CommandResult(list(argv), returncode, stdout, stderr)

    def programs_called(self):
        return [argv[0] for argv, _ in self.calls]


@pytest.fixture
def host_outputs():
    return {
        ('top', '-bn1'): TOP_OUTPUT,
        ('mpstat', '1', '1'): MPSTAT_OUTPUT,
        ('free',): FREE_OUTPUT,
        ('free', '-h'): FREE_OUTPUT,
        ('df', '-P'): DF_OUTPUT,
        ('df', '-hT'): DF_HUMAN_OUTPUT,
        ('uptime',): " 10:15:01 up 3 days,  2:01,  1 user,  load average: 0.52, 0.58, 0.59\n",
    }


@pytest.fixture
def fake_runner(host_outputs):
    return FakeRunner(host_outputs)


def command_only_collector(runner):
    """Collector without the psutil fallbacks so missing tools stay missing."""
    return SystemCollector(
        runner,
        cpu_providers=[
            CommandProvider(runner, ['top', '-bn1'], parse_cpu_summary),
            CommandProvider(runner, ['mpstat', '1', '1'], parse_mpstat_summary),
        ],
        memory_providers=[CommandProvider(runner, ['free'], parse_memory_summary)],
        disk_providers=[CommandProvider(runner, ['df', '-P'], parse_disk_usage)],
    )
