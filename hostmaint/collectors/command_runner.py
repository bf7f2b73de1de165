"""Thin wrapper around subprocess for invoking system utilities."""
import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..core.errors import CommandFailedError, CommandUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Exit status and captured output of one command."""
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs external commands synchronously."""

    def __init__(self, timeout: Optional[float] = 30.0):
        self.timeout = timeout

    def available(self, program: str) -> bool:
        """Check whether a program is on PATH."""
        return shutil.which(program) is not None

    def run(self, argv: List[str], capture: bool = True,
            timeout: Optional[float] = None) -> CommandResult:
        """Run a command and return its result.

        With ``capture=False`` the child inherits the terminal, which is what
        interactive programs such as ``passwd`` need. Timeouts only apply to
        captured commands.

        Raises CommandUnavailableError if the program is missing or cannot be
        executed, and CommandFailedError if a captured command times out.
        """
        logger.debug("Running %s", " ".join(argv))
        try:
            if capture:
                result = subprocess.run(
                    argv,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    timeout=timeout if timeout is not None else self.timeout,
                )
                return CommandResult(argv, result.returncode, result.stdout, result.stderr)
            result = subprocess.run(argv)
            return CommandResult(argv, result.returncode)
        except FileNotFoundError as e:
            raise CommandUnavailableError(f"Command not found: {argv[0]}") from e
        except OSError as e:
            raise CommandUnavailableError(f"Cannot run {argv[0]}: {e.strerror or e}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandFailedError(f"Command timed out: {' '.join(argv)}") from e

    def output(self, argv: List[str], timeout: Optional[float] = None) -> Optional[str]:
        """Return stdout of a successful command, or None if it is missing or failed."""
        try:
            result = self.run(argv, timeout=timeout)
        except (CommandUnavailableError, CommandFailedError) as e:
            logger.debug("No output from %s: %s", argv[0], e)
            return None

        if not result.ok:
            logger.debug("%s exited with status %d", argv[0], result.returncode)
            return None
        return result.stdout
