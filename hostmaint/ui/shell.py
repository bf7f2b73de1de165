"""Interactive numbered-menu shell."""
import logging
import re
import sys
from dataclasses import replace
from typing import Callable, Dict, Optional, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..admin.backup import BackupManager
from ..admin.log_scanner import LogScanner
from ..admin.privileges import is_root
from ..admin.users import UserManager
from ..collectors.command_runner import CommandRunner
from ..collectors.process_collector import ProcessMonitor
from ..collectors.system_collector import SystemCollector
from ..config.config import Config
from ..config.threshold_config import is_valid_limit_text
from ..core.errors import (
    MaintenanceError,
    MissingResourceError,
    InvalidInputError,
    UserExistsError,
)
from ..core.health import build_health_report
from .report_formatter import ReportFormatter, process_table

logger = logging.getLogger(__name__)

TITLE = "LINUX SYSTEM MONITORING & MAINTENANCE TOOL"

# Errors the operator can fix by changing the input; shown as warnings.
_WARNING_ERRORS = (MissingResourceError, InvalidInputError, UserExistsError)

_MENU_NUMBER = re.compile(r"^[0-9]+$")


class Shell:
    """Menu loop owning the session's threshold configuration."""

    def __init__(self, config: Config, console: Optional[Console] = None,
                 stream: Optional[TextIO] = None,
                 runner: Optional[CommandRunner] = None,
                 collector: Optional[SystemCollector] = None,
                 processes: Optional[ProcessMonitor] = None,
                 users: Optional[UserManager] = None,
                 backups: Optional[BackupManager] = None,
                 scanner: Optional[LogScanner] = None,
                 root_check: Callable[[], bool] = is_root):
        self.config = config
        self.console = console or Console(no_color=not config.display.show_colors)
        self.stream = stream if stream is not None else sys.stdin
        self.root_check = root_check
        self.thresholds = replace(config.thresholds)

        runner = runner or CommandRunner(timeout=config.command_timeout)
        self.collector = collector or SystemCollector(runner)
        self.processes = processes or ProcessMonitor(config.display.process_sample_interval)
        self.users = users or UserManager(root_check=root_check)
        self.backups = backups or BackupManager(config.backup.directory)
        self.scanner = scanner or LogScanner(
            config.logs.files, config.logs.keywords, config.logs.tail_lines
        )
        self.formatter = ReportFormatter()

    def run(self) -> int:
        """Run the main menu until the operator exits; returns the exit code."""
        if not self.root_check():
            self._warn("Warning: Some operations require root privileges (run with sudo).")

        actions: Dict[str, Callable[[], None]] = {
            "1": self.health_report,
            "2": self.manage_users,
            "3": self.monitor_processes,
            "4": self.backup_files,
            "5": self.scan_logs,
            "6": self.configure_thresholds,
        }
        try:
            while True:
                self._print_header()
                self._print_menu([
                    "View System Health Report",
                    "Manage Users (add/remove/list)",
                    "Monitor Running Processes",
                    "Backup Important Files",
                    "Scan Log Files (errors/warnings)",
                    "Configure Alert Thresholds (CPU/MEM/DISK)",
                    "Exit",
                ])
                choice = self._ask("Enter your choice [1-7]: ").strip()
                if choice == "7":
                    break
                action = actions.get(choice)
                if action is None:
                    self.console.print("Invalid option.")
                    self._pause()
                    continue
                action()
        except (EOFError, KeyboardInterrupt):
            self.console.print()

        self.console.print("Goodbye.")
        return 0

    # Feature 1: health report

    def health_report(self):
        self._print_header()
        report = build_health_report(
            self.collector,
            self.thresholds,
            self.processes,
            top_count=self.config.display.top_processes,
        )
        self.console.print(self.formatter.render(report))
        self._pause()

    # Feature 2: users

    def manage_users(self):
        actions = {
            "1": self._list_users,
            "2": self._add_user,
            "3": self._remove_user,
            "4": self._change_password,
        }
        while True:
            self._print_header()
            self.console.print(Text("User Management:", style="bold"))
            self._print_menu([
                "List users (system & normal)",
                "Add user",
                "Remove user",
                "Change user password",
                "Back to main menu",
            ])
            choice = self._ask("Enter choice [1-5]: ").strip()
            if choice == "5":
                return
            action = actions.get(choice)
            if action is None:
                self.console.print("Invalid choice.")
            else:
                self._attempt(action)
            self._pause()

    def _list_users(self):
        table = Table(title="All users (from /etc/passwd)", title_justify="left")
        table.add_column("User")
        table.add_column("UID", justify="right")
        table.add_column("Home")
        table.add_column("Shell")
        for account in self.users.list_users():
            table.add_row(account.name, str(account.uid), account.home, account.shell)
        self.console.print(table)

    def _add_user(self):
        name = self.users.check_new_user(self._ask("Enter new username: "))
        create_home = self._confirm("Create home directory?", default=True)
        self.users.add_user(name, create_home=create_home)
        self._success(f"User {name} created.")
        self.users.set_password(name)

    def _remove_user(self):
        name = self.users.check_existing_user(
            self._ask("Enter username to remove: "), "remove a user"
        )
        remove_home = self._confirm("Remove home directory as well?", default=False)
        self.users.remove_user(name, remove_home=remove_home)
        self._success(f"User {name} removed.")

    def _change_password(self):
        name = self.users.change_password(self._ask("Enter username to update password: "))
        self._success(f"Password updated for {name}.")

    # Feature 3: processes

    def monitor_processes(self):
        while True:
            self._print_header()
            self.console.print(Text("Process Monitoring:", style="bold"))
            self._print_menu([
                f"Show top {self.config.display.top_processes} processes by CPU",
                f"Show top {self.config.display.top_processes} processes by RAM",
                "Kill a process by PID",
                "Back to main menu",
            ])
            choice = self._ask("Enter choice [1-4]: ").strip()
            if choice == "4":
                return
            if choice == "1":
                self._show_top("cpu", "Top processes by CPU")
            elif choice == "2":
                self._show_top("memory", "Top processes by Memory")
            elif choice == "3":
                self._attempt(self._kill_process)
            else:
                self.console.print("Invalid choice.")
            self._pause()

    def _show_top(self, sort_by: str, title: str):
        top = self.processes.top_processes(sort_by, self.config.display.top_processes)
        self.console.print(process_table(title, top))

    def _kill_process(self):
        pid = self.processes.kill(self._ask("Enter PID to kill: "))
        self._success(f"Process {pid} killed.")

    # Feature 4: backup

    def backup_files(self):
        self._print_header()
        if not self.root_check():
            self._warn(
                f"Warning: backup to {self.backups.backup_dir} may need root "
                "privileges to access some files."
            )
        self.console.print(Text("Backup Important Files:", style="bold"))

        presets = self.config.backup.presets
        options = [f"Backup {path}" for path in presets]
        options += ["Backup custom path", "Back to main menu"]
        self._print_menu(options)

        choice = self._ask(f"Choose option [1-{len(options)}]: ").strip()
        if not _MENU_NUMBER.match(choice) or not 1 <= int(choice) <= len(options):
            self.console.print("Invalid choice.")
            self._pause()
            return
        index = int(choice) - 1
        if index == len(options) - 1:
            return
        if index < len(presets):
            source = presets[index]
        else:
            source = self._ask("Enter absolute path to backup: ")

        self._attempt(lambda: self._run_backup(source))
        self._pause()

    def _run_backup(self, source: str):
        self.console.print(Text(f"Creating backup of {source.strip()}...", style="bold"))
        result = self.backups.create_backup(source)
        self._success(f"Backup created at: {result.archive}")

    # Feature 5: log scan

    def scan_logs(self):
        self._print_header()
        self.console.print(Text("Log File Scanner:", style="bold"))
        self.console.print(
            "This will search common logs for keywords: " + " ".join(self.scanner.keywords),
            markup=False,
        )
        self.console.print()

        found_any = False
        for result in self.scanner.scan():
            self.console.print(Text(f"Scanning {result.path}...", style="blue"))
            if result.error:
                self._warn(f"Cannot read {result.path}: {result.error}")
            elif result.matches:
                self._warn(f"Recent matches in {result.path}:")
                for line in result.matches:
                    self.console.print(Text(line))
                found_any = True
            self.console.print()

        if not found_any:
            self._success(
                "No recent error/warning keywords found in checked logs (or logs absent)."
            )
        self._pause()

    # Feature 6: thresholds

    def configure_thresholds(self):
        current = self.thresholds
        answers = {}
        for key, label, value in (
            ("cpu", "CPU", current.cpu_limit),
            ("memory", "MEM", current.memory_limit),
            ("disk", "DISK", current.disk_limit),
        ):
            answer = self._ask(f"Set {label} alert threshold (%) [{value}]: ").strip()
            if answer and not is_valid_limit_text(answer):
                self._warn(f"Ignoring {answer!r}; {label} threshold stays at {value}%.")
            answers[key] = answer

        self.thresholds = current.updated(**answers)
        logger.info("Thresholds now %s", self.thresholds.summary())
        self._success(f"Thresholds updated: {self.thresholds.summary()}")
        self._pause()

    # Helpers

    def _attempt(self, action: Callable[[], None]):
        """Run one action, reporting failures instead of leaving the menu."""
        try:
            action()
        except _WARNING_ERRORS as e:
            self._warn(str(e))
        except MaintenanceError as e:
            logger.debug("Action failed: %s", e)
            self._error(str(e))

    def _ask(self, prompt: str) -> str:
        """Prompt and read one line; an empty read means end of input."""
        self.console.print(prompt, end="", markup=False, highlight=False)
        self.console.file.flush()
        line = self.stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")

    def _confirm(self, question: str, default: bool) -> bool:
        hint = "y" if default else "n"
        answer = self._ask(f"{question} (y/n) [{hint}]: ").strip().lower()
        if not answer:
            return default
        return answer == "y"

    def _pause(self):
        self.console.print()
        self._ask("Press Enter to continue...")

    def _print_header(self):
        self.console.clear()
        self.console.print(Panel(
            Text(TITLE, justify="center", style="bold blue"),
            border_style="blue",
        ))
        self.console.print()

    def _print_menu(self, options):
        for number, option in enumerate(options, start=1):
            self.console.print(f"{number}) {option}", markup=False)
        self.console.print()

    def _success(self, message: str):
        self.console.print(Text(message, style="green"))

    def _warn(self, message: str):
        self.console.print(Text(message, style="yellow"))

    def _error(self, message: str):
        self.console.print(Text(message, style="red"))
