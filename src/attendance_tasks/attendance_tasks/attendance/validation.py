from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import clean_text, date_order, int_range, iso_date, one_of, optional_string
from ..core.constants import MAX_NOTES_LENGTH, MAX_PAGE_LIMIT
from ..core.enums import AttendanceStatus

CHECKIN_RULES = [
    one_of("status", [s.value for s in AttendanceStatus], message="Invalid status"),
    optional_string("notes", max_length=MAX_NOTES_LENGTH, label="Notes"),
]

HISTORY_RULES = [
    iso_date("from", message="from must be a valid date"),
    iso_date("to", message="to must be a valid date"),
    date_order("from", "to"),
    int_range("page", min_value=1),
    int_range("limit", min_value=1, max_value=MAX_PAGE_LIMIT),
]


def checkin_from_payload(payload: Mapping[str, Any]) -> dict:
    return {
        "status": AttendanceStatus(payload.get("status") or AttendanceStatus.PRESENT.value),
        "notes": clean_text(payload.get("notes")),
    }
