"""Interactive read-dispatch loop."""

from __future__ import annotations

import logging

from rich.console import Console

from taskman.art import COMMAND_HINT, get_banner
from taskman.commands import CommandDispatcher

logger = logging.getLogger(__name__)


def run_shell(
    dispatcher: CommandDispatcher,
    console: Console,
    *,
    show_banner: bool = True,
    prompt: str = "> ",
) -> None:
    """Read command lines until exit, end of input, or Ctrl-C."""
    if show_banner:
        console.print(get_banner(console.width), style="bold cyan", markup=False, highlight=False)
    console.print(f"[dim]{COMMAND_HINT}[/dim]")

    while True:
        try:
            line = console.input(prompt, markup=False)
        except EOFError:
            logger.debug("End of input, exiting.")
            console.print()
            break
        except KeyboardInterrupt:
            logger.debug("Interrupted, exiting.")
            console.print()
            break

        if not dispatcher.dispatch(line):
            break

    console.print("Goodbye!")
