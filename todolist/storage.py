from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .errors import CorruptData, InvalidInput, StorageIOError
from .models import Priority, Task
from .store import TaskStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _parse_created_at(text: Optional[str]) -> datetime:
    if not text:
        return datetime.now(timezone.utc).replace(microsecond=0)
    dt = datetime.fromisoformat(str(text).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_due(text: Optional[str]) -> Optional[date]:
    if text is None or text == "":
        return None
    if not isinstance(text, str):
        raise ValueError(f"invalid due_date {text!r}")
    # Older files stored a full timestamp; only the calendar date matters.
    day, _, _ = text.partition("T")
    return date.fromisoformat(day)


def task_to_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "description": t.description,
        "priority": t.priority.value,
        "due_date": t.due_date.isoformat() if t.due_date else None,
        "completed": t.completed,
        "created_at": t.created_at.isoformat(),
    }


def task_from_dict(d: dict) -> Task:
    """
    Build a Task from a stored record.

    Unknown keys are ignored. Missing optional keys get defaults:
      priority -> Medium, due_date -> None, completed -> False,
      created_at -> now
    `title` is accepted in place of `description`.
    """
    if not isinstance(d, dict):
        raise ValueError(f"task record must be an object, got {type(d).__name__}")
    if "id" not in d:
        raise ValueError("task record without 'id'")
    description = d.get("description", d.get("title"))
    if description is None:
        raise ValueError(f"task {d['id']} has no description")

    task_id = d["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise ValueError(f"invalid task id {task_id!r}")

    completed = d.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"invalid completed flag {completed!r} on task {task_id}")

    return Task(
        id=task_id,
        description=str(description),
        priority=Priority.parse(str(d.get("priority") or Priority.MEDIUM.value)),
        due_date=_parse_due(d.get("due_date")),
        completed=completed,
        created_at=_parse_created_at(d.get("created_at")),
    )


class Storage:
    """
    JSON file holding the whole task collection:

        {"version": 1, "next_id": 4, "tasks": [{...}, ...]}

    save() writes a temp file next to the target and renames it over the
    target, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> TaskStore:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no data file at %s, starting empty", self.path)
            return TaskStore()
        except UnicodeDecodeError as e:
            raise CorruptData(self.path, f"not valid UTF-8 ({e})") from e
        except OSError as e:
            raise StorageIOError(self.path, str(e), action="reading") from e

        if not text.strip():
            return TaskStore()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptData(self.path, f"invalid JSON ({e})") from e
        except RecursionError as e:
            raise CorruptData(self.path, "JSON nested too deeply") from e
        if not isinstance(data, dict):
            raise CorruptData(self.path, "top level is not an object")

        records = data.get("tasks", [])
        if not isinstance(records, list):
            raise CorruptData(self.path, "'tasks' is not a list")

        try:
            tasks = [task_from_dict(r) for r in records]
            next_id = data.get("next_id")
            if next_id is not None and (isinstance(next_id, bool) or not isinstance(next_id, int)):
                raise ValueError(f"invalid next_id {next_id!r}")
            store = TaskStore.from_tasks(tasks, next_id=next_id)
        except (InvalidInput, ValueError, TypeError) as e:
            raise CorruptData(self.path, str(e)) from e

        logger.debug("loaded %d task(s) from %s", len(store), self.path)
        return store

    def dumps(self, store: TaskStore) -> str:
        data: dict[str, Any] = {
            "version": FORMAT_VERSION,
            "next_id": store.next_id,
            "tasks": [task_to_dict(t) for t in store.list()],
        }
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def save(self, store: TaskStore) -> None:
        payload = self.dumps(store)
        tmp_path: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StorageIOError(self.path, str(e), action="writing") from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.debug("could not remove temp file %s", tmp_path)
        logger.debug("saved %d task(s) to %s", len(store), self.path)

    def delete(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageIOError(self.path, str(e), action="deleting") from e

    def backup(self, dest: Path) -> Path:
        dest = Path(dest)
        if not self.path.exists():
            raise StorageIOError(self.path, "source file does not exist", action="backing up")
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.path, dest)
        except OSError as e:
            raise StorageIOError(dest, str(e), action="backing up to") from e
        logger.debug("backed up %s to %s", self.path, dest)
        return dest
