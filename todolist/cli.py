from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from colorama import just_fix_windows_console

from . import display
from .config import default_store_path, log_level_from_env
from .errors import InvalidInput, TodoError
from .logging_setup import setup_logging
from .models import ListFilter, Priority
from .storage import Storage

logger = logging.getLogger(__name__)


def _parse_date(d: Optional[str]) -> Optional[date]:
    if not d:
        return None
    try:
        return date.fromisoformat(d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(InvalidInput.date(d))) from e


def _parse_priority(p: str) -> Priority:
    try:
        return Priority.parse(p)
    except InvalidInput as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _parse_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid task ID '{raw}'. Expected a positive integer.") from e
    if value < 1:
        raise argparse.ArgumentTypeError(f"Invalid task ID '{raw}'. Expected a positive integer.")
    return value


def _storage_from_args(ns: argparse.Namespace) -> Storage:
    if getattr(ns, "file", None):
        return Storage(Path(ns.file).expanduser().resolve())
    return Storage(default_store_path())


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def cmd_add(ns: argparse.Namespace) -> int:
    storage = _storage_from_args(ns)
    store = storage.load()
    task_id = store.add(" ".join(ns.description), priority=ns.priority, due_date=ns.due)
    storage.save(store)
    print(display.success(f"Task added successfully! (ID: {task_id})"))
    print()
    print(display.format_task_detail(store.get(task_id)))
    return 0


def cmd_list(ns: argparse.Namespace) -> int:
    store = _storage_from_args(ns).load()
    flt = ListFilter(ns.filter)
    if ns.sort == "priority":
        tasks = store.by_priority(flt)
    else:
        tasks = store.list(flt)
    print(display.format_task_list(tasks, display.list_title(flt)))
    print()
    print(display.format_stats(store.stats()))
    return 0


def cmd_complete(ns: argparse.Namespace) -> int:
    storage = _storage_from_args(ns)
    store = storage.load()
    if store.get(ns.task_id).completed:
        print(display.info(f"Task {ns.task_id} is already completed"))
        return 0
    store.complete(ns.task_id)
    storage.save(store)
    print(display.success(f"Task {ns.task_id} marked as completed!"))
    print()
    print(display.format_task(store.get(ns.task_id)))
    return 0


def cmd_show(ns: argparse.Namespace) -> int:
    store = _storage_from_args(ns).load()
    print(display.format_task_detail(store.get(ns.task_id)))
    return 0


def cmd_delete(ns: argparse.Namespace) -> int:
    storage = _storage_from_args(ns)
    store = storage.load()
    task = store.delete(ns.task_id)
    storage.save(store)
    print(display.success(f"Task {task.id} '{task.description}' deleted!"))
    return 0


def cmd_clear(ns: argparse.Namespace) -> int:
    storage = _storage_from_args(ns)
    store = storage.load()
    pending_removal = len(store.list(ListFilter.COMPLETED))
    if pending_removal == 0:
        print(display.info("No completed tasks to clear"))
        return 0

    if not ns.force:
        prompt = f"⚠️  About to delete {pending_removal} completed task(s). Are you sure? (y/N): "
        if not _confirm(prompt):
            print(display.info("Operation cancelled"))
            return 0

    removed = store.clear_completed()
    storage.save(store)
    print(display.success(f"Cleared {removed} completed task(s)!"))
    return 0


def cmd_backup(ns: argparse.Namespace) -> int:
    storage = _storage_from_args(ns)
    dest = storage.backup(Path(ns.dest).expanduser().resolve())
    print(display.success(f"Backed up {storage.path} to {dest}"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="todo",
        description="A simple command-line to-do list manager.",
    )
    p.add_argument(
        "--file",
        help="Path to the JSON data file (default: ~/.todolist/todos.json or TODOLIST_FILE env var)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("add", aliases=["a"], help="Add a new task.")
    s.add_argument("description", nargs="+", help="What needs doing.")
    s.add_argument(
        "-p",
        "--priority",
        type=_parse_priority,
        default=Priority.MEDIUM,
        help="high, medium or low (default: medium).",
    )
    s.add_argument("-d", "--due", type=_parse_date, help="Due date in YYYY-MM-DD.")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("list", aliases=["ls"], help="List tasks.")
    s.add_argument(
        "filter",
        nargs="?",
        default=ListFilter.ALL.value,
        choices=[f.value for f in ListFilter],
        help="Which tasks to show (default: all).",
    )
    s.add_argument("--sort", choices=["id", "priority"], default="id", help="Ordering (default: id).")
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("complete", aliases=["c"], help="Mark a task as completed.")
    s.add_argument("task_id", type=_parse_id, help="Task ID.")
    s.set_defaults(func=cmd_complete)

    s = sub.add_parser("show", aliases=["s"], help="Show task details.")
    s.add_argument("task_id", type=_parse_id, help="Task ID.")
    s.set_defaults(func=cmd_show)

    s = sub.add_parser("delete", aliases=["d"], help="Delete a task.")
    s.add_argument("task_id", type=_parse_id, help="Task ID.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("clear", help="Remove all completed tasks.")
    s.add_argument("-f", "--force", action="store_true", help="Skip the confirmation prompt.")
    s.set_defaults(func=cmd_clear)

    s = sub.add_parser("backup", help="Copy the data file somewhere else.")
    s.add_argument("dest", help="Destination file path.")
    s.set_defaults(func=cmd_backup)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    setup_logging(logging.DEBUG if ns.verbose else log_level_from_env())
    just_fix_windows_console()

    try:
        return int(ns.func(ns))
    except TodoError as e:
        logger.debug("command %s failed", ns.cmd, exc_info=True)
        print(display.error(str(e)), file=sys.stderr)
        return 1
