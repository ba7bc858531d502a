from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from colorama import Fore, Style

from .models import ListFilter, Priority, Stats, Task

RULE = "─" * 60

_PRIORITY_LABEL = {
    Priority.HIGH: Fore.RED + Style.BRIGHT + "HIGH",
    Priority.MEDIUM: Fore.YELLOW + "MED ",
    Priority.LOW: Fore.BLUE + "LOW ",
}

_PRIORITY_COLOR = {
    Priority.HIGH: Fore.RED,
    Priority.MEDIUM: Fore.YELLOW,
    Priority.LOW: Fore.BLUE,
}

_LIST_TITLES = {
    ListFilter.ALL: "📋 All Tasks",
    ListFilter.PENDING: "⏳ Pending Tasks",
    ListFilter.COMPLETED: "✅ Completed Tasks",
    ListFilter.OVERDUE: "⚠️  Overdue Tasks",
}


def _c(text: str, *styles: str) -> str:
    return "".join(styles) + text + Style.RESET_ALL


def list_title(flt: ListFilter) -> str:
    return _LIST_TITLES[flt]


def format_task(task: Task, today: Optional[date] = None) -> str:
    status = _c("✓", Fore.GREEN, Style.BRIGHT) if task.completed else _c("○", Fore.YELLOW)
    ident = _c(f"[{task.id:>3}]", Fore.CYAN)
    prio = _PRIORITY_LABEL[task.priority] + Style.RESET_ALL
    desc = _c(task.description, Style.DIM) if task.completed else task.description

    due = ""
    if task.due_date:
        color = Fore.RED if task.is_overdue(today) else Fore.CYAN
        due = " 📅 " + _c(task.due_date.isoformat(), color)

    return f"{status} {ident} {prio} | {desc}{due}"


def format_task_list(tasks: Iterable[Task], title: str, today: Optional[date] = None) -> str:
    tasks = list(tasks)
    if not tasks:
        return _c("📭 No tasks found.", Style.DIM)
    lines = [_c(title, Style.BRIGHT), _c(RULE, Style.DIM)]
    lines.extend(format_task(t, today) for t in tasks)
    lines.append(_c(RULE, Style.DIM))
    lines.append(f"{_c(str(len(tasks)), Fore.CYAN, Style.BRIGHT)} task(s)")
    return "\n".join(lines)


def format_task_detail(task: Task, today: Optional[date] = None) -> str:
    def row(label: str, value: str) -> str:
        return f"{_c(label, Style.BRIGHT)}: {value}"

    if task.completed:
        status = _c("Completed ✓", Fore.GREEN)
    else:
        status = _c("Pending ○", Fore.YELLOW)

    if task.due_date is None:
        due = _c("None", Style.DIM)
    elif task.is_overdue(today):
        due = f"{task.due_date.isoformat()} {_c('(OVERDUE!)', Fore.RED, Style.BRIGHT)}"
    else:
        due = _c(task.due_date.isoformat(), Fore.CYAN)

    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")

    return "\n".join(
        [
            _c("Task Details", Style.BRIGHT),
            _c(RULE, Style.DIM),
            row("ID", _c(str(task.id), Fore.CYAN)),
            row("Description", task.description),
            row("Status", status),
            row("Priority", _c(task.priority.value, _PRIORITY_COLOR[task.priority])),
            row("Created", _c(created, Style.DIM)),
            row("Due Date", due),
            _c(RULE, Style.DIM),
        ]
    )


def format_stats(stats: Stats) -> str:
    lines = [
        _c("📊 Statistics", Style.BRIGHT),
        f"  Total:     {_c(str(stats.total), Fore.CYAN)}",
        f"  Pending:   {_c(str(stats.pending), Fore.YELLOW)}",
        f"  Completed: {_c(str(stats.completed), Fore.GREEN)}",
    ]
    if stats.overdue > 0:
        lines.append(f"  Overdue:   {_c(str(stats.overdue), Fore.RED, Style.BRIGHT)}")
    return "\n".join(lines)


def success(message: str) -> str:
    return f"{_c('✓', Fore.GREEN, Style.BRIGHT)} {_c(message, Fore.GREEN)}"


def error(message: str) -> str:
    return f"{_c('✗', Fore.RED, Style.BRIGHT)} {_c(message, Fore.RED)}"


def info(message: str) -> str:
    return f"{_c('ℹ', Fore.CYAN, Style.BRIGHT)} {message}"
