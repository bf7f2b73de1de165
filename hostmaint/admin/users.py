"""User account management via the system account database and shadow utils."""
import logging
import pwd
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..collectors.command_runner import CommandRunner
from ..core.errors import (
    CommandFailedError,
    InvalidInputError,
    PrivilegeError,
    UserExistsError,
    UserNotFoundError,
)
from .privileges import is_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserAccount:
    name: str
    uid: int
    home: str
    shell: str


def validate_username(name: Optional[str]) -> str:
    """Strip and check a username typed by the operator."""
    name = (name or '').strip()
    if not name:
        raise InvalidInputError("Username must not be empty.")
    if name.startswith('-') or any(c.isspace() for c in name):
        raise InvalidInputError(f"Invalid username: {name!r}")
    return name


class UserManager:
    """Lists, adds and removes accounts and changes passwords.

    Mutating operations check, in order: the name is well formed, the
    account does (or does not) exist, and the process runs as root.
    """

    def __init__(self, runner: Optional[CommandRunner] = None,
                 root_check: Callable[[], bool] = is_root):
        self.runner = runner or CommandRunner(timeout=None)
        self.root_check = root_check

    def list_users(self) -> List[UserAccount]:
        """All accounts, system and normal, in account database order."""
        return [
            UserAccount(entry.pw_name, entry.pw_uid, entry.pw_dir, entry.pw_shell)
            for entry in pwd.getpwall()
        ]

    def user_exists(self, name: str) -> bool:
        try:
            pwd.getpwnam(name)
        except KeyError:
            return False
        return True

    def check_new_user(self, name: Optional[str]) -> str:
        name = validate_username(name)
        if self.user_exists(name):
            raise UserExistsError("User already exists.")
        self._require_root("add a user")
        return name

    def check_existing_user(self, name: Optional[str], action: str) -> str:
        name = validate_username(name)
        if not self.user_exists(name):
            raise UserNotFoundError("User not found.")
        self._require_root(action)
        return name

    def add_user(self, name: str, create_home: bool = True) -> str:
        name = self.check_new_user(name)
        argv = ['useradd', '-m', name] if create_home else ['useradd', name]
        self._run_checked(argv, f"Failed to create user {name}.")
        logger.info("Created user %s", name)
        return name

    def remove_user(self, name: str, remove_home: bool = False) -> str:
        name = self.check_existing_user(name, "remove a user")
        argv = ['userdel', '-r', name] if remove_home else ['userdel', name]
        self._run_checked(argv, f"Failed to remove user {name}.")
        logger.info("Removed user %s", name)
        return name

    def change_password(self, name: str) -> str:
        name = self.check_existing_user(name, "change password")
        self.set_password(name)
        return name

    def set_password(self, name: str):
        """Run passwd attached to the terminal so the operator can type the password."""
        self._run_checked(['passwd', name], f"Failed to set password for {name}.",
                          capture=False)
        logger.info("Password updated for %s", name)

    def _require_root(self, action: str):
        if not self.root_check():
            raise PrivilegeError(f"You need root privileges to {action}. Use sudo.")

    def _run_checked(self, argv: List[str], message: str, capture: bool = True):
        result = self.runner.run(argv, capture=capture)
        if not result.ok:
            detail = result.stderr.strip()
            logger.warning("%s exited with status %d: %s", argv[0], result.returncode, detail)
            raise CommandFailedError(f"{message} {detail}".strip())
        return result
