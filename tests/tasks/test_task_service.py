from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.attendance_tasks.attendance_tasks.common.pagination import PageRequest
from src.attendance_tasks.attendance_tasks.core.enums import TaskPriority, TaskStatus
from src.attendance_tasks.attendance_tasks.core.exceptions import InvalidRequestError, NotFoundError
from src.attendance_tasks.attendance_tasks.tasks.service import TaskService

ALICE = "alice"
BOB = "bob"


@pytest.fixture
def svc(tasks_repo):
    return TaskService(tasks_repo)


def test_create_defaults(svc, fixed_now):
    task = svc.create(ALICE, title="  Write report ", now=fixed_now)

    assert task.title == "Write report"
    assert task.priority == TaskPriority.MEDIUM
    assert task.status == TaskStatus.PENDING
    assert task.due_date is None
    assert task.created_at == task.updated_at == fixed_now


def test_list_orders_by_priority_then_due_date_nulls_last(svc, fixed_now):
    svc.create(ALICE, title="low", priority=TaskPriority.LOW, now=fixed_now)
    svc.create(ALICE, title="high", priority=TaskPriority.HIGH, due_date=date(2025, 2, 1), now=fixed_now)
    svc.create(ALICE, title="medium", priority=TaskPriority.MEDIUM, due_date=date(2025, 1, 1), now=fixed_now)

    titles = [t.title for t in svc.list(ALICE).items]

    assert titles == ["high", "medium", "low"]


def test_list_same_priority_earlier_due_first_and_undated_last(svc, fixed_now):
    svc.create(ALICE, title="undated", priority=TaskPriority.HIGH, now=fixed_now)
    svc.create(ALICE, title="feb", priority=TaskPriority.HIGH, due_date=date(2025, 2, 1), now=fixed_now)
    svc.create(ALICE, title="jan", priority=TaskPriority.HIGH, due_date=date(2025, 1, 1), now=fixed_now)
    svc.create(ALICE, title="undated-newer", priority=TaskPriority.HIGH, now=fixed_now + timedelta(minutes=1))

    titles = [t.title for t in svc.list(ALICE).items]

    assert titles == ["jan", "feb", "undated-newer", "undated"]


def test_list_never_returns_other_users_tasks(svc, fixed_now):
    for i in range(3):
        svc.create(ALICE, title=f"a{i}", priority=TaskPriority.HIGH, now=fixed_now)
        svc.create(BOB, title=f"b{i}", priority=TaskPriority.HIGH, now=fixed_now)

    for status in (None, TaskStatus.PENDING, TaskStatus.COMPLETED):
        for priority in (None, TaskPriority.HIGH, TaskPriority.LOW):
            for page in (PageRequest(page=1, limit=2), PageRequest(page=2, limit=2), PageRequest(page=1, limit=100)):
                result = svc.list(ALICE, status=status, priority=priority, page=page)
                assert all(t.user_id == ALICE for t in result.items)
                assert result.total <= 3


def test_list_filters_and_paginates(svc, fixed_now):
    for i in range(5):
        svc.create(ALICE, title=f"t{i}", priority=TaskPriority.LOW, now=fixed_now + timedelta(minutes=i))
    done = svc.create(ALICE, title="done", now=fixed_now)
    svc.update(ALICE, done.id, {"status": TaskStatus.COMPLETED})

    page = svc.list(ALICE, priority=TaskPriority.LOW, page=PageRequest(page=2, limit=2))
    assert page.total == 5
    assert [t.title for t in page.items] == ["t2", "t1"]

    completed = svc.list(ALICE, status=TaskStatus.COMPLETED)
    assert [t.title for t in completed.items] == ["done"]


def test_get_other_users_task_is_not_found(svc, fixed_now):
    task = svc.create(BOB, title="secret", now=fixed_now)

    with pytest.raises(NotFoundError):
        svc.get(ALICE, task.id)
    assert svc.get(BOB, task.id).title == "secret"


def test_update_status_only_leaves_other_fields(svc, fixed_now):
    task = svc.create(ALICE, title="t", priority=TaskPriority.HIGH, due_date=date(2025, 3, 1), now=fixed_now)
    later = fixed_now + timedelta(hours=1)

    updated = svc.update(ALICE, task.id, {"status": TaskStatus.IN_PROGRESS}, now=later)

    assert updated.status == TaskStatus.IN_PROGRESS
    assert (updated.title, updated.priority, updated.due_date) == ("t", TaskPriority.HIGH, date(2025, 3, 1))
    assert updated.updated_at == later


def test_update_any_status_to_any_other(svc, fixed_now):
    task = svc.create(ALICE, title="t", now=fixed_now)

    for status in (TaskStatus.COMPLETED, TaskStatus.PENDING, TaskStatus.CANCELLED, TaskStatus.IN_PROGRESS):
        assert svc.update(ALICE, task.id, {"status": status}).status == status


@pytest.mark.parametrize("changes", [{}, {"owner": "bob"}, {"id": "x", "created_at": datetime(2020, 1, 1)}])
def test_update_without_updatable_fields_is_invalid(svc, fixed_now, changes):
    task = svc.create(ALICE, title="t", now=fixed_now)

    with pytest.raises(InvalidRequestError):
        svc.update(ALICE, task.id, changes)


def test_update_ignores_unknown_fields(svc, fixed_now):
    task = svc.create(ALICE, title="t", now=fixed_now)

    updated = svc.update(ALICE, task.id, {"title": "renamed", "user_id": BOB})

    assert updated.title == "renamed"
    assert updated.user_id == ALICE


def test_update_or_delete_other_users_task_is_not_found(svc, fixed_now):
    task = svc.create(BOB, title="t", now=fixed_now)

    with pytest.raises(NotFoundError):
        svc.update(ALICE, task.id, {"title": "mine now"})
    with pytest.raises(NotFoundError):
        svc.delete(ALICE, task.id)
    assert svc.get(BOB, task.id).title == "t"


def test_delete_twice_reports_not_found(svc, fixed_now):
    task = svc.create(ALICE, title="t", now=fixed_now)

    svc.delete(ALICE, task.id)
    with pytest.raises(NotFoundError):
        svc.delete(ALICE, task.id)
