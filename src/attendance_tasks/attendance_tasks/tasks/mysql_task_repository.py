from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, Task
from .repository import TaskRepository

_COLUMNS = "id, user_id, title, description, priority, status, due_date, created_at, updated_at"

_ORDER_BY = "FIELD(priority, {ranks}), due_date IS NULL, due_date ASC, created_at DESC".format(
    ranks=", ".join(f"'{p.value}'" for p in TaskPriority.by_severity())
)


def _row_to_task(r: dict) -> Task:
    return Task(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        title=r["title"],
        description=r.get("description"),
        priority=TaskPriority(r["priority"]),
        status=TaskStatus(r["status"]),
        due_date=r.get("due_date"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: str,
        title: str,
        description: Optional[str],
        priority: TaskPriority,
        due_date: Optional[date],
        now: datetime,
    ) -> Task:
        task_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(id, user_id, title, description, priority, status, due_date, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (task_id, user_id, title, description, priority.value, TaskStatus.PENDING.value, due_date, now, now),
            )
        return Task(
            id=task_id,
            user_id=user_id,
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.PENDING,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )

    def list_for_user(
        self,
        user_id: str,
        *,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        limit: int,
        offset: int,
    ) -> Tuple[Sequence[Task], int]:
        conditions = ["user_id=%s"]
        params: list = [user_id]
        if status:
            conditions.append("status=%s")
            params.append(TaskStatus(status).value)
        if priority:
            conditions.append("priority=%s")
            params.append(TaskPriority(priority).value)
        where = " AND ".join(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM tasks WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks
                WHERE {where}
                ORDER BY {_ORDER_BY}
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            rows = fetchall(cur)
        return [_row_to_task(r) for r in rows], total

    def get_for_user(self, user_id: str, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def update_for_user(self, user_id: str, task_id: str, changes: Mapping[str, Any], *, now: datetime) -> Optional[Task]:
        # column names come from the whitelist only, values are always bound
        fields = [f for f in UPDATABLE_FIELDS if f in changes]
        assignments = ", ".join(f"{f}=%s" for f in fields + ["updated_at"])
        values = [changes[f].value if isinstance(changes[f], Enum) else changes[f] for f in fields]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE tasks SET {assignments} WHERE id=%s AND user_id=%s",
                (*values, now, task_id, user_id),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def delete_for_user(self, user_id: str, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            return cur.rowcount > 0
