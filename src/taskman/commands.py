"""Command dispatcher for the interactive task shell.

A line is split on whitespace; the first token names the command and the rest
are its arguments. Handlers call into the TaskStore and print the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape

from taskman.display import render_summary, render_tasks
from taskman.models import Priority, SortOrder, TaskFilter
from taskman.store import InvalidTaskError, TaskmanError, TaskStore

CommandHandler = Callable[[list[str]], None]

EXIT_COMMANDS = ("exit", "quit")

PRIORITY_FLAGS: dict[str, Priority] = {
    "--low": Priority.LOW,
    "--medium": Priority.MEDIUM,
    "--high": Priority.HIGH,
}
SORT_FLAGS: dict[str, SortOrder] = {
    "--highest": SortOrder.HIGHEST,
    "--lowest": SortOrder.LOWEST,
}
FILTER_TITLES: dict[TaskFilter, str] = {
    TaskFilter.ALL: "Tasks",
    TaskFilter.COMPLETED: "Completed tasks",
    TaskFilter.UNCOMPLETED: "Uncompleted tasks",
}

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Routes command lines to TaskStore operations."""

    def __init__(self, store: TaskStore, console: Console, max_title_width: int = 50) -> None:
        self.store = store
        self.console = console
        self.max_title_width = max_title_width
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

        self.register(
            "add",
            self.cmd_add,
            "[--low|--medium|--high] [--due <days>] <title>",
            "Add a new task",
        )
        self.register(
            "list",
            self.cmd_list,
            "[--highest|--lowest] [completed|uncompleted]",
            "List tasks",
        )
        self.register("summary", self.cmd_summary, "", "Show task counts")
        self.register("search", self.cmd_search, "<keyword>", "Search task titles")
        self.register("complete", self.cmd_complete, "<id>", "Mark a task as complete")
        self.register("uncomplete", self.cmd_uncomplete, "<id>", "Mark a task as pending")
        self.register("delete", self.cmd_delete, "<id>", "Delete a task")
        self.register("save", self.cmd_save, "", "Save tasks to the data file")
        self.register("load", self.cmd_load, "", "Load tasks from the data file")
        self.register("help", self.cmd_help, "", "Show this help")
        self._help["exit"] = "Exit the session"

    def register(self, name: str, handler: CommandHandler, usage: str, help_text: str) -> None:
        self._handlers[name] = handler
        self._help[f"{name} {usage}".strip()] = help_text

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, line: str) -> bool:
        """Handle one input line.

        Returns:
            False when the session should end, True otherwise
        """
        parts = line.split()
        if not parts:
            return True

        name = parts[0].lower()
        args = parts[1:]

        if name in EXIT_COMMANDS:
            return False

        if name not in self._handlers:
            self.console.print(
                f"[red]Unknown command:[/red] {escape(name)}. "
                "Type [cyan]help[/cyan] for available commands."
            )
            return True

        try:
            self.execute(name, args)
        except TaskmanError as e:
            logger.debug("Command %s failed: %s", name, e)
            self.console.print(f"[red]{escape(str(e))}[/red]")
        return True

    def execute(self, name: str, args: list[str]) -> None:
        """Run a registered command, letting TaskmanError propagate."""
        self._handlers[name](args)

    # -------------------- handlers --------------------

    def cmd_add(self, args: list[str]) -> None:
        priority = Priority.MEDIUM
        due_in_days: int | None = None

        tokens = list(args)
        while tokens and tokens[0].startswith("--"):
            flag = tokens.pop(0).lower()
            if flag in PRIORITY_FLAGS:
                priority = PRIORITY_FLAGS[flag]
            elif flag == "--due":
                if not tokens:
                    raise InvalidTaskError("--due requires a number of days.")
                due_in_days = _parse_days(tokens.pop(0))
            else:
                raise InvalidTaskError(f"Unknown option for add: {flag}")

        task = self.store.add_task(" ".join(tokens), due_in_days=due_in_days, priority=priority)

        due = f", due {task.due_date.isoformat()}" if task.due_date else ""
        self.console.print(
            f"[green]Added task:[/green] [cyan]{escape(task.id)}[/cyan] {escape(task.title)} "
            f"[dim]({task.priority.value}{due})[/dim]"
        )

    def cmd_list(self, args: list[str]) -> None:
        task_filter = TaskFilter.ALL
        sort_order = SortOrder.NONE

        for arg in args:
            if arg.lower() in SORT_FLAGS:
                sort_order = SORT_FLAGS[arg.lower()]
            elif arg.startswith("--"):
                raise InvalidTaskError(f"Unknown option for list: {arg}")
            else:
                task_filter = _parse_filter(arg)

        tasks = self.store.list_tasks(task_filter, sort_order)
        self._print_tasks(tasks, FILTER_TITLES[task_filter])

    def cmd_summary(self, args: list[str]) -> None:
        self.console.print(render_summary(self.store.summary()))

    def cmd_search(self, args: list[str]) -> None:
        keyword = " ".join(args)
        tasks = self.store.search_tasks(keyword)
        self._print_tasks(tasks, f"Search: {escape(keyword)}" if keyword else "Search")

    def cmd_complete(self, args: list[str]) -> None:
        task = self.store.complete_task(_require_id("complete", args))
        self.console.print(f"[green]Task completed:[/green] {escape(task.id)}")

    def cmd_uncomplete(self, args: list[str]) -> None:
        task = self.store.uncomplete_task(_require_id("uncomplete", args))
        self.console.print(f"[green]Task marked pending:[/green] {escape(task.id)}")

    def cmd_delete(self, args: list[str]) -> None:
        task = self.store.delete_task(_require_id("delete", args))
        self.console.print(f"[green]Task deleted:[/green] {escape(task.id)} {escape(task.title)}")

    def cmd_save(self, args: list[str]) -> None:
        count = self.store.save_to_file()
        self.console.print(f"[green]Saved {count} tasks to[/green] {escape(str(self.store.path))}")

    def cmd_load(self, args: list[str]) -> None:
        if self.store.load_from_file():
            self.console.print(
                f"[green]Loaded {len(self.store)} tasks from[/green] {escape(str(self.store.path))}"
            )
        else:
            self.console.print(
                "[yellow]Nothing to load.[/yellow] [dim]Starting with an empty task list.[/dim]"
            )

    def cmd_help(self, args: list[str]) -> None:
        self.console.print(self.build_help(), markup=False, highlight=False)

    def build_help(self) -> str:
        width = max(len(usage) for usage in self._help)
        lines = ["Available commands:"]
        for usage, help_text in self._help.items():
            lines.append(f"  {usage.ljust(width)}  {help_text}")
        return "\n".join(lines)

    def _print_tasks(self, tasks, title: str) -> None:
        self.console.print(
            render_tasks(
                tasks,
                today=self.store.today(),
                title=title,
                max_title_width=self.max_title_width,
            )
        )


def _parse_days(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise InvalidTaskError(f"Invalid due days: {value} (expected a whole number)") from None
    if days < 0:
        raise InvalidTaskError("Due days must be zero or a positive whole number.")
    return days


def _parse_filter(value: str) -> TaskFilter:
    try:
        return TaskFilter(value.lower())
    except ValueError:
        raise InvalidTaskError(
            f"Unknown filter: {value} (expected completed or uncompleted)"
        ) from None


def _require_id(command: str, args: list[str]) -> str:
    if not args:
        raise InvalidTaskError(f"Usage: {command} <id>")
    return args[0]
