"""Schema provisioning: create the database if needed and apply database/schema.sql."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

import mysql.connector

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[4] / "database" / "schema.sql"

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quoted strings."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\" and quote:
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def load_schema_statements(schema_path: str | Path = SCHEMA_PATH) -> List[str]:
    """Statements of the schema script, minus comments and any CREATE DATABASE / USE.

    The target database always comes from configuration, never from the script.
    """
    sql = Path(schema_path).read_text(encoding="utf-8")
    sql = _LINE_COMMENT.sub("", _CREATE_DB_OR_USE.sub("", sql))
    return list(iter_sql_statements(sql))


@contextmanager
def _server_connection(db_config: dict, *, use_database: bool = True):
    params = {
        "host": str(db_config.get("host", "localhost")),
        "port": int(db_config.get("port", 3306)),
        "user": str(db_config.get("user", "root")),
        "password": str(db_config.get("password", "")),
    }
    if use_database:
        params["database"] = _database_name(db_config)
    conn = mysql.connector.connect(**params)
    try:
        yield conn
    finally:
        conn.close()


def _database_name(db_config: dict) -> str:
    return str(db_config.get("database", "attendance_tasks"))


def ensure_database_exists(db_config: dict) -> None:
    name = _database_name(db_config)
    with _server_connection(db_config, use_database=False) as conn:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    statements = load_schema_statements(schema_path)
    ensure_database_exists(db_config)

    with _server_connection(db_config) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()

    logger.info("Schema applied to %s (%d statements)", _database_name(db_config), len(statements))


def list_tables(db_config: dict) -> List[str]:
    with _server_connection(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
