from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, user_id, date, checked_in_at, checked_out_at, status, notes, created_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        date=r["date"],
        checked_in_at=r["checked_in_at"],
        checked_out_at=r.get("checked_out_at"),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        checked_in_at: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        record_id = str(uuid.uuid4())
        # uq_attendance_user_date rejects a second row for the same day
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, user_id, date, checked_in_at, status, notes, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (record_id, user_id, work_date, checked_in_at, status.value, notes, checked_in_at),
            )
        return AttendanceRecord(
            id=record_id,
            user_id=user_id,
            date=work_date,
            checked_in_at=checked_in_at,
            checked_out_at=None,
            status=status,
            notes=notes,
            created_at=checked_in_at,
        )

    def close_open_record(self, *, user_id: str, work_date: date, checked_out_at: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET checked_out_at=%s
                WHERE user_id=%s AND date=%s AND checked_out_at IS NULL
                """,
                (checked_out_at, user_id, work_date),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int,
    ) -> Tuple[Sequence[AttendanceRecord], int]:
        conditions = ["user_id=%s"]
        params: list = [user_id]
        if start_date:
            conditions.append("date >= %s")
            params.append(start_date)
        if end_date:
            conditions.append("date <= %s")
            params.append(end_date)
        where = " AND ".join(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM attendance WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY date DESC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            rows = fetchall(cur)
        return [_row_to_record(r) for r in rows], total
