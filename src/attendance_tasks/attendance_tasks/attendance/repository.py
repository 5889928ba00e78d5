from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        checked_in_at: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Single atomic insert.

        Raises `DuplicateKeyError` when (user_id, work_date) already exists;
        implementations must never pre-check and then insert.
        """

        raise NotImplementedError

    def close_open_record(self, *, user_id: str, work_date: date, checked_out_at: datetime) -> Optional[AttendanceRecord]:
        """Set `checked_out_at` on the user's open record for `work_date`.

        Returns the updated record, or None when there is no open record
        (never checked in, or already checked out).
        """

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int,
    ) -> Tuple[Sequence[AttendanceRecord], int]:
        """Records newest date first, plus the total matching count."""

        raise NotImplementedError
