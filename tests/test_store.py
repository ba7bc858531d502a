import random
from datetime import date

import pytest

from todolist.errors import InvalidInput, NotFound
from todolist.models import ListFilter, Priority
from todolist.store import TaskStore

TODAY = date(2026, 5, 10)


def test_add_first_task_gets_id_1():
    store = TaskStore()
    task_id = store.add("buy milk", Priority.MEDIUM, None)
    assert task_id == 1

    tasks = store.list(ListFilter.ALL)
    assert [t.id for t in tasks] == [1]
    assert tasks[0].completed is False
    assert tasks[0].description == "buy milk"


def test_deleted_id_is_not_reused():
    store = TaskStore()
    assert [store.add(d) for d in ("a", "b", "c")] == [1, 2, 3]
    store.delete(2)
    assert store.add("new") == 4
    assert [t.id for t in store.list()] == [1, 3, 4]


def test_deleting_highest_id_does_not_free_it():
    store = TaskStore()
    store.add("a")
    store.add("b")
    store.delete(2)
    assert store.add("c") == 3


def test_complete_then_clear():
    store = TaskStore()
    store.add("only")
    store.complete(1)
    assert store.clear_completed() == 1
    assert store.list() == []


def test_clear_completed_without_matches_is_noop():
    store = TaskStore()
    store.add("a")
    assert store.clear_completed() == 0
    assert len(store) == 1


def test_complete_unknown_id_leaves_store_unchanged():
    store = TaskStore()
    store.add("a")
    before = store.list()
    with pytest.raises(NotFound) as exc:
        store.complete(99)
    assert exc.value.task_id == 99
    assert "99" in str(exc.value)
    assert store.list() == before


def test_get_and_delete_unknown_id():
    store = TaskStore()
    with pytest.raises(NotFound):
        store.get(1)
    with pytest.raises(NotFound):
        store.delete(1)


def test_complete_is_idempotent():
    once = TaskStore()
    once.add("a")
    once.complete(1)

    twice = TaskStore.from_tasks(once.list(), next_id=once.next_id)
    twice.complete(1)
    twice.complete(1)

    assert twice.list() == once.list()
    assert twice.get(1).completed is True


def test_add_rejects_empty_description_and_keeps_counter():
    store = TaskStore()
    with pytest.raises(InvalidInput):
        store.add("")
    with pytest.raises(InvalidInput):
        store.add("x", priority="urgent")
    assert store.add("ok") == 1


def test_add_accepts_priority_name():
    store = TaskStore()
    store.add("x", priority="h")
    assert store.get(1).priority is Priority.HIGH


def test_list_returns_a_snapshot():
    store = TaskStore()
    store.add("a")
    snapshot = store.list()
    store.add("b")
    store.complete(1)
    assert len(snapshot) == 1
    assert snapshot[0].completed is False


def test_pending_and_completed_partition_all():
    rng = random.Random(7)
    store = TaskStore()
    for i in range(30):
        store.add(f"task {i}")
    for task_id in rng.sample(range(1, 31), 12):
        store.complete(task_id)
    for task_id in rng.sample(range(1, 31), 5):
        store.delete(task_id)

    every = {t.id for t in store.list(ListFilter.ALL)}
    pending = {t.id for t in store.list(ListFilter.PENDING)}
    completed = {t.id for t in store.list(ListFilter.COMPLETED)}
    assert pending | completed == every
    assert pending & completed == set()


def test_ids_unique_across_random_add_delete():
    rng = random.Random(42)
    store = TaskStore()
    issued = []
    for _ in range(200):
        live = [t.id for t in store.list()]
        if live and rng.random() < 0.4:
            store.delete(rng.choice(live))
        else:
            issued.append(store.add("x"))
        ids = [t.id for t in store.list()]
        assert len(ids) == len(set(ids))
    assert len(issued) == len(set(issued))
    assert issued == sorted(issued)


def test_overdue_filter_and_completion():
    store = TaskStore()
    store.add("late", due_date=date(2026, 5, 1))
    store.add("future", due_date=date(2026, 6, 1))
    store.add("no date")

    assert [t.id for t in store.list(ListFilter.OVERDUE, today=TODAY)] == [1]
    store.complete(1)
    assert store.list(ListFilter.OVERDUE, today=TODAY) == []


def test_by_priority_is_stable():
    store = TaskStore()
    store.add("low", Priority.LOW)
    store.add("high", Priority.HIGH)
    store.add("med", Priority.MEDIUM)
    store.add("high too", Priority.HIGH)
    assert [t.id for t in store.by_priority()] == [2, 4, 3, 1]


def test_stats():
    store = TaskStore()
    store.add("a", due_date=date(2026, 1, 1))
    store.add("b")
    store.add("c")
    store.complete(3)
    s = store.stats(today=TODAY)
    assert (s.total, s.pending, s.completed, s.overdue) == (3, 2, 1, 1)


def test_from_tasks_rejects_duplicates():
    store = TaskStore()
    store.add("a")
    t = store.get(1)
    with pytest.raises(InvalidInput):
        TaskStore.from_tasks([t, t])


def test_from_tasks_counter_never_below_highest_id():
    store = TaskStore()
    store.add("a")
    store.add("b")
    reloaded = TaskStore.from_tasks(store.list(), next_id=1)
    assert reloaded.next_id == 3
