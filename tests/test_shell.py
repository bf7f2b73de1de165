"""End-to-end tests driving the menu shell with scripted input."""
import io
import pwd
import sys
from datetime import datetime

import psutil
import pytest
from rich.console import Console

from hostmaint.admin.backup import BackupManager
from hostmaint.admin.log_scanner import LogScanner
from hostmaint.admin.users import UserManager
from hostmaint.collectors.command_runner import CommandRunner
from hostmaint.collectors.parsers import parse_cpu_summary
from hostmaint.collectors.providers import CommandProvider
from hostmaint.collectors.system_collector import SystemCollector
from hostmaint.collectors.process_collector import ProcessMonitor
from hostmaint.collectors.system_models import ProcessInfo
from hostmaint.config.config import Config
from hostmaint.ui.shell import Shell

from conftest import FakeRunner, command_only_collector


class StubMonitor(ProcessMonitor):
    def top_processes(self, sort_by="cpu", limit=10):
        return [ProcessInfo(4242, 1, f"busy-{sort_by}", 12.5, 3.0)]


def make_shell(script, config=None, root=False, **overrides):
    config = config or Config()
    runner = overrides.pop('runner', FakeRunner())
    console = Console(file=io.StringIO(), width=200, no_color=True)
    defaults = dict(
        console=console,
        stream=io.StringIO(script),
        runner=runner,
        collector=command_only_collector(runner),
        processes=StubMonitor(sample_interval=0),
        users=UserManager(runner=runner, root_check=lambda: root),
        backups=BackupManager("/nonexistent/backups", runner=runner),
        scanner=LogScanner([], ["error"]),
        root_check=lambda: root,
    )
    defaults.update(overrides)
    return Shell(config, **defaults)


def output_of(shell):
    return shell.console.file.getvalue()


class TestMainMenu:

    def test_exit_returns_zero(self):
        shell = make_shell("7\n")
        assert shell.run() == 0
        assert "Goodbye." in output_of(shell)

    def test_end_of_input_exits_cleanly(self):
        shell = make_shell("")
        assert shell.run() == 0

    def test_invalid_option(self):
        shell = make_shell("9\n\n7\n")
        assert shell.run() == 0
        assert "Invalid option." in output_of(shell)

    def test_non_root_notice(self):
        shell = make_shell("7\n", root=False)
        shell.run()
        assert "require root privileges" in output_of(shell)

    def test_root_has_no_notice(self):
        shell = make_shell("7\n", root=True)
        shell.run()
        assert "require root privileges" not in output_of(shell)


class TestThresholdMenu:

    def test_non_numeric_keeps_previous(self):
        shell = make_shell("6\nabc\n90\n\n\n7\n")
        assert shell.run() == 0
        assert shell.thresholds.cpu_limit == 80
        assert shell.thresholds.memory_limit == 90
        assert shell.thresholds.disk_limit == 80
        output = output_of(shell)
        assert "Ignoring 'abc'" in output
        assert "Thresholds updated: CPU=80% MEM=90% DISK=80%" in output

    def test_config_defaults_not_mutated(self):
        config = Config()
        shell = make_shell("6\n10\n10\n10\n\n7\n", config=config)
        shell.run()
        assert shell.thresholds.summary() == "CPU=10% MEM=10% DISK=10%"
        assert config.thresholds.summary() == "CPU=80% MEM=80% DISK=80%"

    def test_new_thresholds_used_by_report(self, host_outputs):
        runner = FakeRunner(host_outputs)
        shell = make_shell("6\n\n90\n95\n\n1\n\n7\n", runner=runner,
                           collector=command_only_collector(runner))
        shell.run()
        report = output_of(shell).split("Alerts:")[-1]
        assert "[OK] CPU usage: 75.0%" in report
        assert "[OK] Memory usage: 80%" in report
        assert "disk usage on /data" not in report


class TestHealthReport:

    def test_report_output(self, host_outputs):
        runner = FakeRunner(host_outputs)
        shell = make_shell("1\n\n7\n", runner=runner, collector=command_only_collector(runner))
        assert shell.run() == 0
        output = output_of(shell)
        assert "busy-cpu" in output
        assert "busy-memory" in output
        alerts = output.split("Alerts:")[-1]
        assert "[OK] CPU usage: 75.0%" in alerts
        assert "[ALERT] High Memory usage: 80%" in alerts
        assert "[ALERT] High disk usage on /data: 92%" in alerts
        assert "on /:" not in alerts


class TestProcessMenu:

    def test_kill_missing_pid_keeps_session(self, monkeypatch):
        def no_such(pid):
            raise psutil.NoSuchProcess(pid)

        monkeypatch.setattr(psutil, "Process", no_such)
        shell = make_shell("3\n3\n999999\n\n4\n7\n", processes=ProcessMonitor(0))
        assert shell.run() == 0
        output = output_of(shell)
        assert "Failed to kill 999999" in output
        assert "Goodbye." in output

    def test_kill_non_numeric_pid(self):
        shell = make_shell("3\n3\nabc\n\n4\n7\n")
        shell.run()
        assert "PID must be numeric." in output_of(shell)

    def test_top_by_memory(self):
        shell = make_shell("3\n2\n\n4\n7\n")
        shell.run()
        assert "busy-memory" in output_of(shell)


class TestUserMenu:

    @pytest.fixture(autouse=True)
    def no_accounts(self, monkeypatch):
        def getpwnam(name):
            raise KeyError(name)

        monkeypatch.setattr(pwd, "getpwnam", getpwnam)

    def test_add_user_needs_root(self):
        runner = FakeRunner()
        shell = make_shell("2\n2\nalice\n\n5\n7\n", runner=runner,
                           users=UserManager(runner=runner, root_check=lambda: False))
        assert shell.run() == 0
        assert "You need root privileges to add a user. Use sudo." in output_of(shell)
        assert runner.calls == []

    def test_add_user_as_root(self):
        runner = FakeRunner()
        shell = make_shell("2\n2\nalice\nn\n\n5\n7\n", root=True, runner=runner,
                           users=UserManager(runner=runner, root_check=lambda: True))
        shell.run()
        assert [argv for argv, _ in runner.calls] == [['useradd', 'alice'], ['passwd', 'alice']]
        assert "User alice created." in output_of(shell)

    def test_remove_unknown_user(self):
        shell = make_shell("2\n3\nbob\n\n5\n7\n", root=True)
        shell.run()
        assert "User not found." in output_of(shell)


class TestBackupMenu:

    def test_custom_path_backup(self, tmp_path):
        source = tmp_path / "site"
        source.mkdir()
        runner = FakeRunner()
        backups = BackupManager(str(tmp_path / "out"), runner=runner,
                                clock=lambda: datetime(2026, 10, 17, 12, 0, 0))
        shell = make_shell(f"4\n3\n{source}\n\n7\n", runner=runner, backups=backups)
        assert shell.run() == 0
        output = output_of(shell)
        assert "may need root privileges" in output
        assert "backup_site_2026-10-17_12-00-00.tar.gz" in output
        assert runner.calls[0][0][0] == 'tar'

    def test_missing_source(self, tmp_path):
        shell = make_shell(f"4\n3\n{tmp_path / 'gone'}\n\n7\n")
        shell.run()
        assert "Source path not found" in output_of(shell)

    def test_back_returns_to_menu(self):
        shell = make_shell("4\n4\n7\n")
        assert shell.run() == 0


class TestLogMenu:

    def test_matches_printed(self, tmp_path):
        log = tmp_path / "syslog"
        log.write_text("kernel: [  1.0] ERROR something broke\nall good\n")
        shell = make_shell("5\n\n7\n", scanner=LogScanner([str(log)], ["error"]))
        shell.run()
        output = output_of(shell)
        assert f"Recent matches in {log}:" in output
        assert "kernel: [  1.0] ERROR something broke" in output

    def test_nothing_found(self):
        shell = make_shell("5\n\n7\n")
        shell.run()
        assert "No recent error/warning keywords found" in output_of(shell)


class TestInputHandling:

    def test_superscript_pid_rejected(self):
        shell = make_shell("3\n3\n²\n\n4\n7\n")
        assert shell.run() == 0
        output = output_of(shell)
        assert "PID must be numeric." in output
        assert "Goodbye." in output

    def test_superscript_backup_choice_rejected(self):
        shell = make_shell("4\n²\n\n7\n")
        assert shell.run() == 0
        assert "Invalid choice." in output_of(shell)

    def test_last_line_without_newline(self):
        shell = make_shell("7")
        assert shell.run() == 0
        assert "Goodbye." in output_of(shell)

    def test_end_of_input_mid_action(self):
        shell = make_shell("6\n95\n")
        assert shell.run() == 0
        assert shell.thresholds.cpu_limit == 80

    def test_reads_stdin_by_default(self, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("7\n"))
        console = Console(file=io.StringIO(), width=200, no_color=True)
        shell = Shell(Config(), console=console, root_check=lambda: True)
        assert shell.run() == 0
        assert "Enter your choice [1-7]: " in console.file.getvalue()


class TestUndecodableCommandOutput:

    def test_report_survives_invalid_utf8(self, tmp_path):
        data = tmp_path / "top.out"
        data.write_bytes(b"%Cpu(s): 60.0 us, 25.0 id\n  1 root \xff\xfebad\n")
        script = tmp_path / "fake-top"
        script.write_text(f"#!/bin/sh\ncat '{data}'\n")
        script.chmod(0o755)

        class ScriptRunner(CommandRunner):
            """Every command prints the same bytes."""

            def available(self, program):
                return True

            def run(self, argv, capture=True, timeout=None):
                return super().run([str(script)], capture=capture, timeout=timeout)

        runner = ScriptRunner(timeout=5)
        collector = SystemCollector(
            runner,
            cpu_providers=[CommandProvider(runner, ['top', '-bn1'], parse_cpu_summary)],
            memory_providers=[],
            disk_providers=[],
        )
        shell = make_shell("1\n\n7\n", runner=runner, collector=collector)
        assert shell.run() == 0
        output = output_of(shell)
        assert "[OK] CPU usage: 75.0%" in output
        assert "Goodbye." in output
