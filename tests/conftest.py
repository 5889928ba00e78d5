from __future__ import annotations

import dataclasses
import threading
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.attendance_tasks.attendance_tasks.attendance.model import AttendanceRecord
from src.attendance_tasks.attendance_tasks.container import build_services
from src.attendance_tasks.attendance_tasks.core.enums import AttendanceStatus, Role, TaskStatus
from src.attendance_tasks.attendance_tasks.core.exceptions import DuplicateKeyError
from src.attendance_tasks.attendance_tasks.main import create_app
from src.attendance_tasks.attendance_tasks.tasks.model import Task
from src.attendance_tasks.attendance_tasks.users.model import User

TEST_SECRET = "test-secret-test-secret-test-secret-0000"
FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, now) -> User:
        with self._lock:
            if self.get_by_email(email):
                raise DuplicateKeyError("uq_users_email")
            self._seq += 1
            user = User(
                id=f"00000000-0000-4000-8000-{self._seq:012d}",
                name=name,
                email=email,
                password_hash=password_hash,
                role=Role(role),
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            self._by_id[user.id] = user
            return user

    def set_active(self, user_id: str, *, is_active: bool, now) -> bool:
        user = self._by_id.get(user_id)
        if not user:
            return False
        self._by_id[user_id] = dataclasses.replace(user, is_active=is_active, updated_at=now)
        return True


class InMemoryAttendance:
    """Keyed by (user_id, date) like the unique constraint; inserts are atomic."""

    def __init__(self):
        self._by_user_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_user_date.values())

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def create_checkin(self, *, user_id, work_date, checked_in_at, status, notes=None) -> AttendanceRecord:
        with self._lock:
            if (user_id, work_date) in self._by_user_date:
                raise DuplicateKeyError("uq_attendance_user_date")
            self._seq += 1
            rec = AttendanceRecord(
                id=f"10000000-0000-4000-8000-{self._seq:012d}",
                user_id=user_id,
                date=work_date,
                checked_in_at=checked_in_at,
                checked_out_at=None,
                status=AttendanceStatus(status),
                notes=notes,
                created_at=checked_in_at,
            )
            self._by_user_date[(user_id, work_date)] = rec
            return rec

    def close_open_record(self, *, user_id, work_date, checked_out_at) -> Optional[AttendanceRecord]:
        with self._lock:
            rec = self._by_user_date.get((user_id, work_date))
            if not rec or rec.checked_out_at is not None:
                return None
            rec = dataclasses.replace(rec, checked_out_at=checked_out_at)
            self._by_user_date[(user_id, work_date)] = rec
            return rec

    def list_for_user(self, user_id, *, start_date=None, end_date=None, limit, offset):
        items = [
            r
            for r in self._by_user_date.values()
            if r.user_id == user_id
            and (start_date is None or r.date >= start_date)
            and (end_date is None or r.date <= end_date)
        ]
        items.sort(key=lambda r: r.date, reverse=True)
        return items[offset : offset + limit], len(items)


def task_sort_key(task: Task):
    return (
        task.priority.rank,
        task.due_date is None,
        task.due_date or date.max,
        -task.created_at.timestamp(),
    )


class InMemoryTasks:
    def __init__(self):
        self._by_id: dict[str, Task] = {}
        self._seq = 0

    def create(self, *, user_id, title, description, priority, due_date, now) -> Task:
        self._seq += 1
        task = Task(
            id=f"20000000-0000-4000-8000-{self._seq:012d}",
            user_id=user_id,
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.PENDING,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        self._by_id[task.id] = task
        return task

    def list_for_user(self, user_id, *, status=None, priority=None, limit, offset):
        items = [
            t
            for t in self._by_id.values()
            if t.user_id == user_id
            and (status is None or t.status == status)
            and (priority is None or t.priority == priority)
        ]
        items.sort(key=task_sort_key)
        return items[offset : offset + limit], len(items)

    def get_for_user(self, user_id, task_id) -> Optional[Task]:
        task = self._by_id.get(task_id)
        return task if task and task.user_id == user_id else None

    def update_for_user(self, user_id, task_id, changes, *, now) -> Optional[Task]:
        task = self.get_for_user(user_id, task_id)
        if not task:
            return None
        task = dataclasses.replace(task, **dict(changes), updated_at=now)
        self._by_id[task_id] = task
        return task

    def delete_for_user(self, user_id, task_id) -> bool:
        if not self.get_for_user(user_id, task_id):
            return False
        del self._by_id[task_id]
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 9, 0, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def tasks_repo() -> InMemoryTasks:
    return InMemoryTasks()


@pytest.fixture
def container(users_repo, attendance_repo, tasks_repo):
    return build_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        tasks_repo=tasks_repo,
        jwt_secret=TEST_SECRET,
        token_lifetime=timedelta(days=7),
        password_method=FAST_HASH,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signup(client):
    """Sign a user up over HTTP; returns (token, user_json)."""

    def _signup(email="a@x.com", password="Secret123", name="Alice", role=None):
        body = {"name": name, "email": email, "password": password}
        if role:
            body["role"] = role
        resp = client.post("/auth/signup", json=body)
        assert resp.status_code == 201, resp.get_json()
        data = resp.get_json()
        return data["token"], data["user"]

    return _signup


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return bearer
