"""Process listing and termination backed by psutil."""
import logging
import re
import time
from typing import List

import psutil

from ..core.errors import InvalidInputError, PrivilegeError, ProcessNotFoundError
from .system_models import ProcessInfo

logger = logging.getLogger(__name__)

SORT_KEYS = ("cpu", "memory")

_PID = re.compile(r"^[0-9]+$")


class ProcessMonitor:
    """Lists the heaviest processes and kills processes by PID."""

    def __init__(self, sample_interval: float = 0.1):
        self.sample_interval = sample_interval

    def top_processes(self, sort_by: str = "cpu", limit: int = 10) -> List[ProcessInfo]:
        """Return the top processes ordered by CPU or memory usage."""
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_by}")

        procs = list(psutil.process_iter(['pid', 'ppid', 'name', 'cmdline', 'memory_percent']))

        # cpu_percent needs two samples; the first call only primes the counters.
        for proc in procs:
            try:
                proc.cpu_percent(None)
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        if self.sample_interval:
            time.sleep(self.sample_interval)

        processes = []
        for proc in procs:
            try:
                info = proc.info
                cmdline = ' '.join(info['cmdline']) if info['cmdline'] else ''
                processes.append(ProcessInfo(
                    pid=info['pid'],
                    ppid=info['ppid'] or 0,
                    command=cmdline or info['name'] or '?',
                    cpu_percent=proc.cpu_percent(None),
                    memory_percent=info['memory_percent'] or 0.0,
                ))
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue

        if sort_by == "cpu":
            processes.sort(key=lambda p: p.cpu_percent, reverse=True)
        else:
            processes.sort(key=lambda p: p.memory_percent, reverse=True)
        return processes[:limit]

    def kill(self, pid_text: str) -> int:
        """Send SIGKILL to a process given its PID as typed by the operator."""
        pid_text = (pid_text or '').strip()
        if not _PID.match(pid_text):
            raise InvalidInputError("PID must be numeric.")
        pid = int(pid_text)
        if pid == 0:
            raise InvalidInputError("PID 0 refers to the whole process group.")

        try:
            psutil.Process(pid).kill()
        except psutil.NoSuchProcess as e:
            raise ProcessNotFoundError(
                f"Failed to kill {pid}. No such process."
            ) from e
        except psutil.AccessDenied as e:
            raise PrivilegeError(
                f"Failed to kill {pid}. Permission denied."
            ) from e

        logger.info("Killed process %d", pid)
        return pid
