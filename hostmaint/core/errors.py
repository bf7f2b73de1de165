"""Exception hierarchy for maintenance actions."""


class MaintenanceError(Exception):
    """Base class for failures that abort a single menu action."""


class PrivilegeError(MaintenanceError):
    """Operation needs root privileges."""


class MissingResourceError(MaintenanceError):
    """A file, path, user or process does not exist."""


class UserNotFoundError(MissingResourceError):
    """Named account is not in the account database."""


class ProcessNotFoundError(MissingResourceError):
    """No process with the given PID."""


class UserExistsError(MaintenanceError):
    """Account already exists."""


class InvalidInputError(MaintenanceError):
    """Operator input failed validation."""


class CommandUnavailableError(MaintenanceError):
    """Required external program is not installed."""


class CommandFailedError(MaintenanceError):
    """External program exited with a non-zero status or timed out."""
