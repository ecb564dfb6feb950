"""taskman - Interactive command-line task list manager."""

__version__ = "0.1.0"
