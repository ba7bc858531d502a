from datetime import date, datetime, timezone

from todolist import display
from todolist.models import ListFilter, Priority, Stats, Task

TODAY = date(2026, 5, 10)


def _task(**kw) -> Task:
    fields = dict(
        id=3,
        description="write report",
        priority=Priority.HIGH,
        due_date=None,
        completed=False,
        created_at=datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc),
    )
    fields.update(kw)
    return Task(**fields)


def test_format_task_shows_id_priority_and_description():
    line = display.format_task(_task())
    assert "3" in line
    assert "HIGH" in line
    assert "write report" in line
    assert "○" in line


def test_format_task_completed_and_due():
    line = display.format_task(_task(completed=True, priority=Priority.LOW, due_date=date(2026, 5, 1)), TODAY)
    assert "✓" in line
    assert "LOW" in line
    assert "2026-05-01" in line


def test_overdue_due_date_is_red():
    late = display.format_task(_task(due_date=date(2026, 5, 1)), TODAY)
    upcoming = display.format_task(_task(due_date=date(2026, 6, 1)), TODAY)
    assert display.Fore.RED + "2026-05-01" in late
    assert display.Fore.CYAN + "2026-06-01" in upcoming


def test_format_task_list():
    out = display.format_task_list([_task(id=1), _task(id=2)], display.list_title(ListFilter.ALL))
    assert "All Tasks" in out
    assert "2" in out.splitlines()[-1]
    assert "task(s)" in out


def test_format_task_list_empty():
    assert "No tasks found" in display.format_task_list([], "anything")


def test_format_task_detail():
    out = display.format_task_detail(_task(due_date=date(2026, 5, 1)), TODAY)
    assert "write report" in out
    assert "Pending" in out
    assert "High" in out
    assert "OVERDUE" in out

    out = display.format_task_detail(_task(completed=True), TODAY)
    assert "Completed" in out
    assert "None" in out


def test_format_stats_hides_zero_overdue():
    assert "Overdue" not in display.format_stats(Stats(total=2, pending=1, completed=1))
    out = display.format_stats(Stats(total=2, pending=2, completed=0, overdue=1))
    assert "Overdue" in out
    assert "Total" in out


def test_messages():
    assert "saved" in display.success("saved")
    assert "✗" in display.error("broken")
    assert "ℹ" in display.info("note")
