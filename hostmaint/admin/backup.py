"""Timestamped tar.gz backups of directories."""
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..collectors.command_runner import CommandRunner
from ..core.errors import CommandFailedError, MissingResourceError, PrivilegeError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class BackupResult:
    source: Path
    archive: Path


def archive_name(source: Path, when: datetime) -> str:
    """``backup_<basename>_<timestamp>.tar.gz``; the filesystem root is named ``root``."""
    base = source.name or "root"
    return f"backup_{base}_{when.strftime(TIMESTAMP_FORMAT)}.tar.gz"


class BackupManager:
    """Creates compressed archives of a source directory with tar."""

    def __init__(self, backup_dir: str, runner: Optional[CommandRunner] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.backup_dir = Path(backup_dir)
        self.runner = runner or CommandRunner(timeout=None)
        self.clock = clock

    def create_backup(self, source: str) -> BackupResult:
        """Archive ``source`` into the backup directory.

        Paths inside the archive are stored relative to ``/`` so an archive
        of ``/etc`` restores with ``tar -xzf ... -C /``.
        """
        if not source or not source.strip():
            raise MissingResourceError("No source path given.")
        src = Path(os.path.abspath(os.path.expanduser(source.strip())))
        if not src.is_dir():
            raise MissingResourceError(f"Source path not found: {src}")

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PrivilegeError(
                f"Cannot create backup directory {self.backup_dir}. Run with sudo."
            ) from e

        archive = self.backup_dir / archive_name(src, self.clock())
        relative = str(src.relative_to(src.anchor)) or "."
        argv = ['tar', '-czf', str(archive), '-C', src.anchor, relative]

        result = self.runner.run(argv)
        if not result.ok:
            logger.warning("tar exited with status %d: %s", result.returncode, result.stderr.strip())
            if archive.exists():
                archive.unlink()
            raise CommandFailedError("Backup failed. Check permissions and available disk space.")

        logger.info("Backup of %s written to %s", src, archive)
        return BackupResult(source=src, archive=archive)
