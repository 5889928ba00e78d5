from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateKeyError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a pooled connection and yield `(conn, cursor)` as one transaction.

    Commits when the block finishes, rolls back on any error. Unique-key
    violations are re-raised as `DuplicateKeyError`.
    """
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateKeyError(duplicate_key_name(e.msg)) from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def duplicate_key_name(message: Optional[str]) -> Optional[str]:
    """Constraint name from "Duplicate entry 'x' for key 'users.uq_users_email'"."""
    if not message or "for key" not in message:
        return None
    return message.rsplit("for key", 1)[1].strip().strip("'").rsplit(".", 1)[-1]


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])
