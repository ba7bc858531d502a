from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Union

from .errors import InvalidInput, NotFound
from .models import ListFilter, Priority, Stats, Task

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class TaskStore:
    """
    In-memory, insertion-ordered collection of tasks.

    Ids come from a single counter owned by the store. The counter only moves
    forward, so an id freed by delete() or clear_completed() is never handed
    out again, even after a save/load cycle (Storage persists next_id).
    """

    def __init__(self) -> None:
        self._tasks: List[Task] = []
        self._next_id = 1

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task], next_id: Optional[int] = None) -> "TaskStore":
        store = cls()
        seen = set()
        for t in tasks:
            if t.id in seen:
                raise InvalidInput(f"Duplicate task id {t.id}")
            seen.add(t.id)
            store._tasks.append(t)
        highest = max(seen, default=0)
        store._next_id = max(next_id or 1, highest + 1)
        return store

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def _index_of(self, task_id: int) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise NotFound(task_id)

    def add(
        self,
        description: str,
        priority: Union[Priority, str] = Priority.MEDIUM,
        due_date: Optional[date] = None,
    ) -> int:
        if isinstance(priority, str):
            priority = Priority.parse(priority)
        task = Task(
            id=self._next_id,
            description=description.strip() if description else "",
            priority=priority,
            due_date=due_date,
            completed=False,
            created_at=_utc_now(),
        )
        self._tasks.append(task)
        self._next_id += 1
        logger.debug("added task id=%s priority=%s due=%s", task.id, priority.value, due_date)
        return task.id

    def get(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    def complete(self, task_id: int) -> None:
        i = self._index_of(task_id)
        if self._tasks[i].completed:
            return
        self._tasks[i] = replace(self._tasks[i], completed=True)
        logger.debug("completed task id=%s", task_id)

    def delete(self, task_id: int) -> Task:
        task = self._tasks.pop(self._index_of(task_id))
        logger.debug("deleted task id=%s", task_id)
        return task

    def list(self, flt: ListFilter = ListFilter.ALL, today: Optional[date] = None) -> List[Task]:
        return [t for t in self._tasks if t.matches(flt, today)]

    def by_priority(self, flt: ListFilter = ListFilter.ALL, today: Optional[date] = None) -> List[Task]:
        # sorted() is stable: equal priorities keep insertion order.
        return sorted(self.list(flt, today), key=lambda t: t.priority.rank)

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        logger.debug("cleared %d completed task(s)", removed)
        return removed

    def stats(self, today: Optional[date] = None) -> Stats:
        completed = sum(1 for t in self._tasks if t.completed)
        return Stats(
            total=len(self._tasks),
            pending=len(self._tasks) - completed,
            completed=completed,
            overdue=sum(1 for t in self._tasks if t.is_overdue(today)),
        )
