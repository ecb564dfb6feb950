"""Configuration models for taskman."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field


class DataConfig(BaseModel):
    """Configuration for the task data file."""

    path: str = "data/tasks.json"
    save_completed: bool = True
    """When false, completed tasks are dropped on save."""
    autoload: bool = False


class DisplayConfig(BaseModel):
    """Configuration for console output."""

    show_banner: bool = True
    prompt: str = "> "
    max_title_width: int = Field(default=50, ge=4)


class TaskmanConfig(BaseModel):
    """Main configuration for taskman."""

    data: DataConfig = Field(default_factory=DataConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TaskmanConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)


# Default config directory
TASKMAN_DIR = Path(".taskman")
CONFIG_FILE = TASKMAN_DIR / "config.json"
DATA_FILE = Path("data") / "tasks.json"
