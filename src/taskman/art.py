"""ASCII art shown when an interactive session starts."""

from __future__ import annotations

BANNER = r"""
 _____         _      __  __
|_   _|_ _ ___| | __ |  \/  | __ _ _ __   __ _  __ _  ___ _ __
  | |/ _` / __| |/ / | |\/| |/ _` | '_ \ / _` |/ _` |/ _ \ '__|
  | | (_| \__ \   <  | |  | | (_| | | | | (_| | (_| |  __/ |
  |_|\__,_|___/_|\_\ |_|  |_|\__,_|_| |_|\__,_|\__, |\___|_|
                                               |___/
"""

COMMAND_HINT = (
    "Available commands: add, list, summary, search, complete, uncomplete, "
    "delete, save, load, help, exit"
)


def get_banner(width: int | None = None) -> str:
    """Get the startup banner.

    Args:
        width: Terminal width. Narrow terminals get a one-line title instead.

    Returns:
        The banner text.
    """
    art_width = max(len(line) for line in BANNER.splitlines())
    if width is not None and width < art_width:
        return "Task Manager CLI"
    return BANNER
