"""Tests for taskman.display module."""

from __future__ import annotations

from datetime import date

from rich.console import Console
from rich.table import Table
from rich.text import Text

from taskman.display import OVERDUE_STYLE, render_summary, render_tasks, truncate
from taskman.models import Priority, Summary, Task

TODAY = date(2025, 1, 10)


def rendered(renderable, console: Console) -> str:
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestTruncate:
    """Tests for truncate helper."""

    def test_short_title_unchanged(self) -> None:
        assert truncate("Buy milk", 50) == "Buy milk"

    def test_long_title_cut_with_ellipsis(self) -> None:
        result = truncate("x" * 60, 50)
        assert len(result) == 50
        assert result.endswith("...")


class TestRenderTasks:
    """Tests for render_tasks."""

    def test_empty_selection(self, console: Console) -> None:
        result = render_tasks([], TODAY)
        assert isinstance(result, Text)
        assert "No tasks found." in rendered(result, console)

    def test_table_columns_and_rows(self, console: Console) -> None:
        tasks = [
            Task(id="a1", title="Buy milk"),
            Task(id="b2", title="File taxes", priority=Priority.HIGH, completed=True),
        ]

        table = render_tasks(tasks, TODAY, title="Tasks")

        assert isinstance(table, Table)
        assert [c.header for c in table.columns] == ["ID", "Title", "Priority", "Due", "Status"]
        assert table.row_count == 2
        out = rendered(table, console)
        assert "Buy milk" in out
        assert "High" in out
        assert "✓ Done" in out
        assert "Pending" in out

    def test_overdue_row_highlighted(self, console: Console) -> None:
        """Pending tasks past their due date are flagged and styled."""
        tasks = [
            Task(id="a1", title="Late", due_date=date(2025, 1, 9)),
            Task(id="b2", title="On time", due_date=TODAY),
        ]

        table = render_tasks(tasks, TODAY)

        assert table.rows[0].style == OVERDUE_STYLE
        assert table.rows[1].style is None
        out = rendered(table, console)
        assert "2025-01-09 (overdue)" in out
        assert "2025-01-10 (overdue)" not in out

    def test_completed_past_due_not_overdue(self, console: Console) -> None:
        task = Task(id="a1", title="x", due_date=date(2024, 1, 1), completed=True)
        table = render_tasks([task], TODAY)
        assert "(overdue)" not in rendered(table, console)

    def test_title_markup_not_interpreted(self, console: Console) -> None:
        table = render_tasks([Task(id="a1", title="[bold]literal[/bold]")], TODAY)
        assert "[bold]literal[/bold]" in rendered(table, console)

    def test_id_markup_not_interpreted(self, console: Console) -> None:
        """IDs from a hand-edited data file are shown as written."""
        table = render_tasks([Task(id="[/x]", title="Odd id")], TODAY)
        assert "[/x]" in rendered(table, console)

    def test_long_titles_truncated(self, console: Console) -> None:
        table = render_tasks([Task(id="a1", title="word " * 30)], TODAY, max_title_width=20)
        assert "..." in rendered(table, console)

    def test_does_not_mutate_tasks(self) -> None:
        task = Task(id="a1", title="Late", due_date=date(2025, 1, 1))
        before = task.model_copy()
        render_tasks([task], TODAY)
        assert task == before


def test_render_summary(console: Console) -> None:
    out = rendered(render_summary(Summary(total=3, pending=2, completed=1)), console)
    assert "Total: 3" in out
    assert "Pending: 2" in out
    assert "Completed: 1" in out
