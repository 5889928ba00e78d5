from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import utc_now
from ..common.pagination import Page, PageRequest
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, DuplicateKeyError, NotFoundError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in / check-out for the acting user.

    The calendar date is always taken from UTC. The one-record-per-day rule is
    enforced by the store's unique key, never by a read-then-write here.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def check_in(
        self,
        user_id: str,
        *,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or utc_now()
        today = now.date()

        try:
            record = self._attendance.create_checkin(
                user_id=user_id,
                work_date=today,
                checked_in_at=now,
                status=AttendanceStatus(status),
                notes=notes,
            )
        except DuplicateKeyError:
            raise ConflictError("Already checked in for today")

        logger.info("Check-in recorded: user_id=%s date=%s", user_id, today.isoformat())
        return record

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or utc_now()
        today = now.date()

        record = self._attendance.close_open_record(user_id=user_id, work_date=today, checked_out_at=now)
        if record is None:
            raise NotFoundError("No open check-in found for today")

        logger.info("Check-out recorded: user_id=%s date=%s", user_id, today.isoformat())
        return record

    def get_today(self, user_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        today = (now or utc_now()).date()
        return self._attendance.get_for_user_and_date(user_id, today)

    def history(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: PageRequest = PageRequest(limit=DEFAULT_HISTORY_LIMIT),
    ) -> Page[AttendanceRecord]:
        records, total = self._attendance.list_for_user(
            user_id,
            start_date=start_date,
            end_date=end_date,
            limit=page.limit,
            offset=page.offset,
        )
        return Page(items=records, total=total, page=page.page, limit=page.limit)
