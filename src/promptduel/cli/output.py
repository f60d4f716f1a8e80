"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from promptduel.events.models import EventStats, EventStatus, StatusEvent, SystemLevel

# Global console instance
console = Console()

STATUS_STYLES = {
    EventStatus.STARTED: "yellow",
    EventStatus.COMPLETED: "green",
    EventStatus.FAILED: "red",
}

LEVEL_STYLES = {
    SystemLevel.INFO: "blue",
    SystemLevel.WARN: "yellow",
    SystemLevel.ERROR: "red",
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_panel(content: str, title: str | None = None) -> None:
    """Print content in a panel."""
    console.print(Panel(content, title=title))


def print_table(
    headers: list[str],
    rows: list[list[Any]],
    title: str | None = None,
) -> None:
    """Print a table."""
    table = Table(title=title)

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def _format_duration(duration: float | None) -> str:
    return f"{duration:.0f} ms" if duration is not None else "-"


def describe_event(event: StatusEvent) -> tuple[str, str, str]:
    """
    Summarize an event as (kind, status, detail) for display.

    Args:
        event: Event to summarize.

    Returns:
        Rich-markup strings for the kind, status and detail columns.
    """
    if event.type == "api_request":
        style = STATUS_STYLES[event.status]
        detail = f"{event.model} ({_format_duration(event.duration)})"
        if event.error:
            detail += f" {event.error}"
        return "API", f"[{style}]{event.status.value}[/{style}]", detail

    if event.type == "tool_call":
        style = STATUS_STYLES[event.status]
        detail = f"{event.tool_name}({event.arguments}) ({_format_duration(event.duration)})"
        if event.error:
            detail += f" {event.error}"
        return "Tool", f"[{style}]{event.status.value}[/{style}]", detail

    if event.type == "stream":
        state = "complete" if event.is_complete else "chunk"
        return "Stream", state, f"{len(event.content)} chars"

    style = LEVEL_STYLES[event.level]
    return "System", f"[{style}]{event.level.value}[/{style}]", event.message


def print_event_feed(events: list[StatusEvent], title: str | None = "Status Events") -> None:
    """Print events as a table, oldest first."""
    table = Table(title=title)
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("Run", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Status")
    table.add_column("Detail")

    for event in events:
        kind, status, detail = describe_event(event)
        run_label = getattr(event, "run_label", None) or "-"
        table.add_row(event.timestamp.strftime("%H:%M:%S"), run_label, kind, status, detail)

    console.print(table)


def print_stats(stats: EventStats) -> None:
    """Print event statistics on one line."""
    console.print(
        f"[dim]Events: {stats.total_events} | API requests: {stats.api_requests} | "
        f"Tool calls: {stats.tool_calls} | Errors: {stats.errors} | "
        f"Avg response: {stats.avg_response_time:.0f} ms[/dim]"
    )
