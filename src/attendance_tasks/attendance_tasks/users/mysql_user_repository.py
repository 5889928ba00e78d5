from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, name, email, password, role, is_active, created_at, updated_at"


def _row_to_user(row: dict) -> User:
    return User(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        now: datetime,
    ) -> User:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, email, password, role, is_active, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,1,%s,%s)
                """,
                (user_id, name, email, password_hash, role.value, now, now),
            )
        return User(
            id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def set_active(self, user_id: str, *, is_active: bool, now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET is_active=%s, updated_at=%s WHERE id=%s",
                (1 if is_active else 0, now, user_id),
            )
            return cur.rowcount > 0
