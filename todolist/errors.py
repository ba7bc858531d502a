from __future__ import annotations

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for every error the CLI reports to the user."""


class InvalidInput(TodoError, ValueError):
    @classmethod
    def priority(cls, value: str) -> "InvalidInput":
        return cls(f"Invalid priority '{value}'. Use: high, medium, or low")

    @classmethod
    def date(cls, value: str) -> "InvalidInput":
        return cls(f"Invalid date format '{value}'. Expected: YYYY-MM-DD")


class NotFound(TodoError, KeyError):
    def __init__(self, task_id: int) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        # KeyError would repr() the argument.
        return f"Task with ID {self.task_id} not found"


class CorruptData(TodoError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Data file {path} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class StorageIOError(TodoError):
    def __init__(self, path: Path, reason: str, *, action: Optional[str] = None) -> None:
        what = f"{action} {path}" if action else str(path)
        super().__init__(f"File operation failed ({what}): {reason}")
        self.path = path
        self.reason = reason
