from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .errors import InvalidInput


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """
        Accepts the full name or its short form, case-insensitively:
          high | h, medium | med | m, low | l
        """
        key = text.strip().lower()
        for p, names in _PRIORITY_NAMES.items():
            if key in names:
                return p
        raise InvalidInput.priority(text)

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_NAMES = {
    Priority.HIGH: ("high", "h"),
    Priority.MEDIUM: ("medium", "med", "m"),
    Priority.LOW: ("low", "l"),
}

_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class ListFilter(Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class Task:
    id: int
    description: str
    priority: Priority
    due_date: Optional[date]
    completed: bool
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise InvalidInput("Task description must not be empty")

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """
        Pending and due strictly before today. A task due today is not overdue.
        """
        if self.completed or self.due_date is None:
            return False
        return self.due_date < (today or date.today())

    def matches(self, flt: ListFilter, today: Optional[date] = None) -> bool:
        if flt is ListFilter.PENDING:
            return not self.completed
        if flt is ListFilter.COMPLETED:
            return self.completed
        if flt is ListFilter.OVERDUE:
            return self.is_overdue(today)
        return True


@dataclass(frozen=True)
class Stats:
    total: int
    pending: int
    completed: int
    overdue: int = 0
