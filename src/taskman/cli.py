"""CLI interface for taskman."""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from taskman import __version__
from taskman.commands import CommandDispatcher
from taskman.config import TaskmanConfig
from taskman.logging_setup import setup_logging
from taskman.models import Priority, SortOrder, TaskFilter
from taskman.shell import run_shell
from taskman.store import TaskmanError, TaskStore

console = Console()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskman")
@click.option(
    "--data",
    "data_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Task data file (default: data/tasks.json)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: .taskman/config.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    data_path: Path | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """taskman - Manage a task list from the command line.

    With no command, starts an interactive session.

    \b
    Interactive usage:
      taskman                          # Start a session, type 'help' inside
    \b
    One-shot usage:
      taskman add Buy milk             # Add a task and save
      taskman add --high --due 0 File taxes
      taskman list --highest uncompleted
    """
    setup_logging(verbose=verbose)

    try:
        config = TaskmanConfig.load(config_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid config:[/red] {escape(str(e))}")
        ctx.exit(1)

    if data_path is not None:
        config.data.path = str(data_path)

    store = TaskStore(config.data.path, save_completed=config.data.save_completed)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = store

    if ctx.invoked_subcommand is None:
        if config.data.autoload:
            store.load_from_file()
        dispatcher = CommandDispatcher(
            store, console, max_title_width=config.display.max_title_width
        )
        run_shell(
            dispatcher,
            console,
            show_banner=config.display.show_banner,
            prompt=config.display.prompt,
        )


def _run_once(ctx: click.Context, name: str, args: list[str], mutates: bool = False) -> None:
    """Load the data file, run one command, and save if it changed anything."""
    config: TaskmanConfig = ctx.obj["config"]
    store: TaskStore = ctx.obj["store"]

    # A rejected data file loads as empty; saving would replace it wholesale.
    loaded = store.load_from_file()
    if mutates and not loaded and store.path.exists():
        console.print(
            f"[red]Could not read tasks from {escape(str(store.path))}; not saving over it.[/red]"
        )
        console.print("[dim]Fix or move the file and try again.[/dim]")
        ctx.exit(1)

    dispatcher = CommandDispatcher(store, console, max_title_width=config.display.max_title_width)

    try:
        dispatcher.execute(name, args)
        if mutates:
            store.save_to_file()
    except TaskmanError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)


@main.command("add")
@click.argument("title", nargs=-1, required=True)
@click.option("--low", "priority", flag_value=Priority.LOW.value, help="Low priority")
@click.option("--medium", "priority", flag_value=Priority.MEDIUM.value, help="Medium priority")
@click.option("--high", "priority", flag_value=Priority.HIGH.value, help="High priority")
@click.option("--due", "due_days", type=click.IntRange(min=0), help="Due in this many days")
@click.pass_context
def add(
    ctx: click.Context,
    title: tuple[str, ...],
    priority: str | None,
    due_days: int | None,
) -> None:
    """Add a task.

    \b
    Examples:
      taskman add Buy milk
      taskman add --high --due 0 File taxes
    """
    args = [f"--{(priority or Priority.MEDIUM.value).lower()}"]
    if due_days is not None:
        args += ["--due", str(due_days)]
    _run_once(ctx, "add", args + list(title), mutates=True)


@main.command("list")
@click.argument(
    "task_filter",
    required=False,
    type=click.Choice([f.value for f in TaskFilter], case_sensitive=False),
)
@click.option("--highest", "sort_order", flag_value=SortOrder.HIGHEST.value, help="Highest first")
@click.option("--lowest", "sort_order", flag_value=SortOrder.LOWEST.value, help="Lowest first")
@click.pass_context
def list_command(ctx: click.Context, task_filter: str | None, sort_order: str | None) -> None:
    """List tasks, optionally filtered and sorted by priority."""
    args = []
    if sort_order:
        args.append(f"--{sort_order}")
    if task_filter:
        args.append(task_filter)
    _run_once(ctx, "list", args)


@main.command()
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Show total, pending and completed counts."""
    _run_once(ctx, "summary", [])


@main.command()
@click.argument("keyword", nargs=-1)
@click.pass_context
def search(ctx: click.Context, keyword: tuple[str, ...]) -> None:
    """Search task titles (case-insensitive)."""
    _run_once(ctx, "search", list(keyword))


@main.command()
@click.argument("task_id")
@click.pass_context
def complete(ctx: click.Context, task_id: str) -> None:
    """Mark a task as complete."""
    _run_once(ctx, "complete", [task_id], mutates=True)


@main.command()
@click.argument("task_id")
@click.pass_context
def uncomplete(ctx: click.Context, task_id: str) -> None:
    """Mark a task as pending again."""
    _run_once(ctx, "uncomplete", [task_id], mutates=True)


@main.command()
@click.argument("task_id")
@click.pass_context
def delete(ctx: click.Context, task_id: str) -> None:
    """Delete a task."""
    _run_once(ctx, "delete", [task_id], mutates=True)
