from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one UTC calendar date.

    States: no record (absent) -> `checked_out_at is None` (checked in)
    -> `checked_out_at` set (checked out, terminal).
    """

    id: str
    user_id: str
    date: date
    checked_in_at: datetime
    checked_out_at: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
