"""Task store - ordered in-memory task collection with JSON persistence.

Insertion order is the canonical order of the collection. Queries return new
lists and never reorder the stored tasks. The data file is always written and
read wholesale: a save replaces the whole file, a load replaces the whole
collection.
"""

from __future__ import annotations

import json
import logging
import os
import secrets
import tempfile
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from taskman.config import DATA_FILE
from taskman.models import Priority, SortOrder, Summary, Task, TaskFilter

logger = logging.getLogger(__name__)

ID_BYTES = 4

E = TypeVar("E", TaskFilter, SortOrder)


class TaskmanError(Exception):
    """Base class for recoverable, user-facing errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidTaskError(TaskmanError, ValueError):
    """Raised when user input fails validation."""


class TaskNotFoundError(TaskmanError, KeyError):
    """Raised when no task has the requested ID."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(TaskmanError):
    """Raised when the data file cannot be written."""


class TaskStore:
    """Owns the ordered task collection and its persistence."""

    def __init__(
        self,
        path: Path | str = DATA_FILE,
        *,
        save_completed: bool = True,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.path = Path(path)
        self.save_completed = save_completed
        self._clock = clock
        self._tasks: list[Task] = []
        self._issued_ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> list[Task]:
        """A copy of the collection in insertion order."""
        return list(self._tasks)

    def today(self) -> date:
        return self._clock()

    # -------------------- mutation --------------------

    def add_task(
        self,
        title: str,
        due_in_days: int | None = None,
        priority: Priority = Priority.MEDIUM,
    ) -> Task:
        """Append a new pending task and return it.

        Args:
            title: Task title; surrounding whitespace is stripped
            due_in_days: Days from today until the task is due, or None
            priority: Task priority

        Raises:
            InvalidTaskError: If the title is blank, or due_in_days is negative or
                puts the due date past the last representable date
        """
        if not title.strip():
            raise InvalidTaskError("Task title cannot be empty.")

        due_date = None
        if due_in_days is not None:
            if isinstance(due_in_days, bool) or not isinstance(due_in_days, int):
                raise InvalidTaskError(f"Invalid due days: {due_in_days!r}")
            if due_in_days < 0:
                raise InvalidTaskError("Due days must be zero or a positive whole number.")
            try:
                due_date = self.today() + timedelta(days=due_in_days)
            except (OverflowError, ValueError):
                raise InvalidTaskError(f"Due days out of range: {due_in_days}") from None

        task = Task(
            id=self._new_id(),
            title=title,
            priority=priority,
            due_date=due_date,
        )
        self._tasks.append(task)
        logger.debug("Added task %s", task.id)
        return task

    def complete_task(self, task_id: str) -> Task:
        """Mark a task as complete. Completing a completed task is a no-op."""
        task = self._require(task_id)
        task.completed = True
        return task

    def uncomplete_task(self, task_id: str) -> Task:
        """Mark a task as pending again."""
        task = self._require(task_id)
        task.completed = False
        return task

    def delete_task(self, task_id: str) -> Task:
        """Remove a task and return it. Its ID is never issued again."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                logger.debug("Deleted task %s", task_id)
                return task
        raise TaskNotFoundError(task_id)

    # -------------------- queries --------------------

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def list_tasks(
        self,
        task_filter: TaskFilter | str = TaskFilter.ALL,
        sort_order: SortOrder | str = SortOrder.NONE,
    ) -> list[Task]:
        """Select tasks by completion state, optionally ordered by priority.

        Sorting is stable, so tasks of equal priority keep their insertion
        order in both directions.

        Raises:
            InvalidTaskError: If the filter or sort keyword is unknown
        """
        task_filter = _coerce(TaskFilter, task_filter, "filter")
        sort_order = _coerce(SortOrder, sort_order, "sort order")

        selected = [task for task in self._tasks if task_filter.matches(task)]

        if sort_order is SortOrder.HIGHEST:
            selected.sort(key=lambda t: t.priority.rank, reverse=True)
        elif sort_order is SortOrder.LOWEST:
            selected.sort(key=lambda t: t.priority.rank)

        return selected

    def search_tasks(self, keyword: str) -> list[Task]:
        """Case-insensitive substring search over task titles."""
        needle = keyword.casefold()
        return [task for task in self._tasks if needle in task.title.casefold()]

    def summary(self) -> Summary:
        completed = sum(1 for task in self._tasks if task.completed)
        return Summary(
            total=len(self._tasks),
            pending=len(self._tasks) - completed,
            completed=completed,
        )

    # -------------------- persistence --------------------

    def save_to_file(self) -> int:
        """Write the collection to the data file and return the task count.

        The file is written to a temporary sibling first and renamed over the
        target, so the previous content survives a failed save.

        Raises:
            StorageError: If the directory or file cannot be written
        """
        tasks = self._tasks if self.save_completed else [t for t in self._tasks if not t.completed]
        records = [task.to_record() for task in tasks]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                    f.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.debug("Save to %s failed", self.path, exc_info=True)
            raise StorageError(f"Could not save tasks to {self.path}: {e.strerror or e}") from e

        logger.info("Saved %d tasks to %s", len(records), self.path)
        return len(records)

    def load_from_file(self) -> bool:
        """Replace the collection with the tasks in the data file.

        A missing, unreadable or malformed file is not an error: the store is
        reset to empty and False is returned.

        Returns:
            True if tasks were loaded, False if there was nothing to load
        """
        tasks = self._read_file()
        if tasks is None:
            self._tasks = []
            return False

        self._tasks = tasks
        self._issued_ids.update(task.id for task in tasks)
        logger.info("Loaded %d tasks from %s", len(tasks), self.path)
        return True

    def _read_file(self) -> list[Task] | None:
        if not self.path.exists():
            logger.debug("Nothing to load: %s does not exist", self.path)
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Nothing to load: could not read %s (%s)", self.path, e)
            return None

        if not isinstance(data, list):
            logger.warning("Nothing to load: %s does not hold a list of tasks", self.path)
            return None

        try:
            tasks = [Task.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning(
                "Nothing to load: %s has invalid task records (%d errors)",
                self.path,
                e.error_count(),
            )
            return None

        if len({task.id for task in tasks}) != len(tasks):
            logger.warning("Nothing to load: %s has duplicate task IDs", self.path)
            return None

        return tasks

    # -------------------- helpers --------------------

    def _require(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _new_id(self) -> str:
        """Generate a short random ID not held or previously issued."""
        live = {task.id for task in self._tasks}
        while True:
            task_id = secrets.token_hex(ID_BYTES)
            if task_id not in live and task_id not in self._issued_ids:
                self._issued_ids.add(task_id)
                return task_id


def _coerce(enum_type: type[E], value: E | str, label: str) -> E:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise InvalidTaskError(f"Unknown {label}: {value} (expected one of: {choices})") from None
