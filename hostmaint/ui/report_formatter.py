"""Rendering of health reports with Rich."""
from typing import List, Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..collectors.system_models import ProcessInfo
from ..core.alerts import AlertResult
from ..core.health import HealthReport

LEVEL_STYLES = {
    "ALERT": "bold red",
    "OK": "green",
}


def format_percent(value: float) -> str:
    if isinstance(value, int):
        return f"{value}%"
    return f"{value:.1f}%"


def alert_message(result: AlertResult) -> str:
    metric = result.metric
    value = format_percent(metric.value)
    if metric.kind == "cpu":
        return f"High CPU usage detected: {value}" if result.exceeded else f"CPU usage: {value}"
    if metric.kind == "memory":
        return f"High Memory usage: {value}" if result.exceeded else f"Memory usage: {value}"
    if result.exceeded:
        return f"High disk usage on {metric.name}: {value}"
    return f"Disk usage on {metric.name}: {value}"


def format_alert_line(result: AlertResult) -> Text:
    """One line: level marker, label and value, coloured by level."""
    style = LEVEL_STYLES[result.level]
    return Text.assemble(
        (f"[{result.level}]", style),
        " ",
        (alert_message(result), style),
    )


def alert_lines(results: Sequence[AlertResult]) -> List[Text]:
    """Alert section lines in collector order; disks only when over their limit."""
    return [
        format_alert_line(r) for r in results
        if r.metric.kind != "disk" or r.exceeded
    ]


def disk_usage_table(results: Sequence[AlertResult]) -> Table:
    """Raw per-filesystem usage, every disk regardless of level."""
    table = Table(title="Filesystem Usage", title_justify="left")
    table.add_column("Mounted on")
    table.add_column("Use%", justify="right")
    table.add_column("Limit", justify="right")
    for result in results:
        if result.metric.kind != "disk":
            continue
        table.add_row(
            result.metric.name,
            Text(format_percent(result.metric.value), style=LEVEL_STYLES[result.level]),
            format_percent(result.limit),
        )
    return table


def process_table(title: str, processes: Sequence[ProcessInfo]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("PID", justify="right")
    table.add_column("PPID", justify="right")
    table.add_column("Command", overflow="ellipsis", no_wrap=True, max_width=60)
    table.add_column("%MEM", justify="right")
    table.add_column("%CPU", justify="right")
    for proc in processes:
        table.add_row(
            str(proc.pid),
            str(proc.ppid),
            proc.command,
            f"{proc.memory_percent:.1f}",
            f"{proc.cpu_percent:.1f}",
        )
    return table


class ReportFormatter:
    """Turns a HealthReport into renderables for a Rich console."""

    def render(self, report: HealthReport) -> Group:
        parts = [
            Text(f"System Health Report ({report.timestamp.strftime('%Y-%m-%d_%H-%M-%S')}):",
                 style="bold"),
        ]

        for title, body in report.sections.items():
            parts.append(Panel(Text(body), title=title, title_align="left", border_style="blue"))

        if report.disk_results:
            parts.append(disk_usage_table(report.results))

        if report.top_cpu:
            parts.append(process_table("Top Processes by CPU", report.top_cpu))
        if report.top_memory:
            parts.append(process_table("Top Processes by Memory", report.top_memory))

        parts.append(Text("Alerts:", style="bold"))
        parts.extend(self.render_alerts(report.results))
        return Group(*parts)

    def render_alerts(self, results: Sequence[AlertResult]) -> List[Text]:
        if not results:
            return [Text("No metrics could be collected.", style="yellow")]
        return alert_lines(results)
