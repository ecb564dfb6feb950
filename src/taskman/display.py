"""Rich rendering for task tables and reports."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from taskman.models import Priority, Summary, Task

PRIORITY_STYLES: dict[Priority, str] = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}
OVERDUE_STYLE = "bold red"


def truncate(title: str, width: int) -> str:
    """Shorten a title to width characters, marking the cut with '...'."""
    if len(title) <= width:
        return title
    return title[: width - 3] + "..."


def render_tasks(
    tasks: Sequence[Task],
    today: date,
    title: str = "Tasks",
    max_title_width: int = 50,
) -> RenderableType:
    """Render tasks as a table; overdue pending tasks are highlighted."""
    if not tasks:
        return Text("No tasks found.", style="dim")

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Priority", no_wrap=True)
    table.add_column("Due", no_wrap=True)
    table.add_column("Status", no_wrap=True)

    for task in tasks:
        overdue = task.is_overdue(today)
        priority = Text(task.priority.value, style=PRIORITY_STYLES[task.priority])
        status = "[green]✓ Done[/green]" if task.completed else "[dim]Pending[/dim]"

        if task.due_date is None:
            due = Text("-", style="dim")
        elif overdue:
            due = Text(f"{task.due_date.isoformat()} (overdue)", style=OVERDUE_STYLE)
        else:
            due = Text(task.due_date.isoformat())

        table.add_row(
            Text(task.id),
            Text(truncate(task.title, max_title_width)),
            priority,
            due,
            status,
            style=OVERDUE_STYLE if overdue else None,
        )

    return table


def render_summary(summary: Summary) -> Text:
    """Render task counts, one per line."""
    text = Text()
    text.append("Total: ", style="cyan")
    text.append(f"{summary.total}\n")
    text.append("Pending: ", style="cyan")
    text.append(f"{summary.pending}\n")
    text.append("Completed: ", style="cyan")
    text.append(f"{summary.completed}")
    return text
