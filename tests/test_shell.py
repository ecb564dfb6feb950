"""Tests for the interactive shell loop."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from taskman.commands import CommandDispatcher
from taskman.shell import run_shell
from taskman.store import TaskStore

Output = Callable[[], str]


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str, end: type[BaseException] = EOFError) -> None:
    """Make input() return the given lines, then raise end."""
    items: Iterator[str] = iter(lines)

    def fake_input(*args: object) -> str:
        try:
            return next(items)
        except StopIteration:
            raise end from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestRunShell:
    """Tests for run_shell."""

    def test_banner_and_hint(
        self, dispatcher: CommandDispatcher, output: Output, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feed(monkeypatch, "exit")
        run_shell(dispatcher, dispatcher.console)
        out = output()
        assert "|_   _|" in out
        assert "Available commands:" in out
        assert out.rstrip().endswith("Goodbye!")

    def test_no_banner(
        self, dispatcher: CommandDispatcher, output: Output, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feed(monkeypatch, "exit")
        run_shell(dispatcher, dispatcher.console, show_banner=False)
        assert "|_   _|" not in output()

    def test_dispatches_until_exit(
        self,
        dispatcher: CommandDispatcher,
        store: TaskStore,
        output: Output,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        feed(monkeypatch, "add Buy milk", "bogus", "exit", "add never reached")
        run_shell(dispatcher, dispatcher.console, show_banner=False)

        assert [t.title for t in store.tasks] == ["Buy milk"]
        assert "Unknown command: bogus" in output()

    def test_end_of_input_is_graceful(
        self,
        dispatcher: CommandDispatcher,
        store: TaskStore,
        output: Output,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """EOF ends the session with a farewell instead of an error."""
        feed(monkeypatch, "add Buy milk")
        run_shell(dispatcher, dispatcher.console, show_banner=False)
        assert len(store) == 1
        assert "Goodbye!" in output()

    def test_ctrl_c_is_graceful(
        self, dispatcher: CommandDispatcher, output: Output, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feed(monkeypatch, end=KeyboardInterrupt)
        run_shell(dispatcher, dispatcher.console, show_banner=False)
        assert "Goodbye!" in output()

    def test_custom_prompt(
        self, dispatcher: CommandDispatcher, output: Output, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        feed(monkeypatch, "exit")
        run_shell(dispatcher, dispatcher.console, show_banner=False, prompt="tasks> ")
        assert "tasks> " in output()
