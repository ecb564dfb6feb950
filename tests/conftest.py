"""Shared fixtures for taskman tests."""

from __future__ import annotations

import io
import json
import os
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path

import pytest
from rich.console import Console

from taskman.commands import CommandDispatcher
from taskman.store import TaskStore

TODAY = date(2025, 1, 10)


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path to a data file inside a not-yet-created directory."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(data_file: Path) -> TaskStore:
    """A store whose clock is pinned to TODAY."""
    return TaskStore(data_file, clock=lambda: TODAY)


@pytest.fixture
def console() -> Console:
    """A plain, wide console writing to a buffer."""
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)


@pytest.fixture
def dispatcher(store: TaskStore, console: Console) -> CommandDispatcher:
    return CommandDispatcher(store, console)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Read everything written to the buffered console so far."""
    return lambda: console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def sample_tasks_data() -> list[dict]:
    """Sample persisted task records."""
    return [
        {
            "id": "a1b2c3d4",
            "title": "Buy milk",
            "priority": "Medium",
            "completed": False,
            "dueDate": None,
        },
        {
            "id": "e5f6a7b8",
            "title": "File taxes",
            "priority": "High",
            "completed": True,
            "dueDate": "2025-01-05",
        },
        {
            "id": "c9d0e1f2",
            "title": "Water plants",
            "priority": "Low",
            "completed": False,
            "dueDate": "2025-01-08",
        },
    ]


@pytest.fixture
def sample_data_file(data_file: Path, sample_tasks_data: list[dict]) -> Path:
    """Write the sample records to the data file."""
    data_file.parent.mkdir(parents=True)
    with open(data_file, "w") as f:
        json.dump(sample_tasks_data, f)
    return data_file
