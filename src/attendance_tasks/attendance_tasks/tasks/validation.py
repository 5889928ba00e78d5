from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import parse_iso_date
from ..common.validators import clean_text, int_range, iso_date, not_null, one_of, optional_string, required_string
from ..core.constants import MAX_DESCRIPTION_LENGTH, MAX_PAGE_LIMIT, MAX_TITLE_LENGTH
from ..core.enums import TaskPriority, TaskStatus
from .model import UPDATABLE_FIELDS

_PRIORITIES = [p.value for p in TaskPriority]
_STATUSES = [s.value for s in TaskStatus]

TASK_CREATE_RULES = [
    required_string("title", max_length=MAX_TITLE_LENGTH, label="Title"),
    optional_string("description", max_length=MAX_DESCRIPTION_LENGTH, label="Description"),
    one_of("priority", _PRIORITIES, message="Invalid priority"),
    iso_date("due_date", message="Invalid date format"),
]

TASK_UPDATE_RULES = [
    not_null("title", label="Title"),
    optional_string("title", max_length=MAX_TITLE_LENGTH, label="Title", allow_blank=False),
    optional_string("description", max_length=MAX_DESCRIPTION_LENGTH, label="Description"),
    not_null("priority", label="Priority"),
    one_of("priority", _PRIORITIES, message="Invalid priority"),
    not_null("status", label="Status"),
    one_of("status", _STATUSES, message="Invalid status"),
    iso_date("due_date", message="Invalid date format"),
]

TASK_LIST_RULES = [
    one_of("status", _STATUSES, message="Invalid status"),
    one_of("priority", _PRIORITIES, message="Invalid priority"),
    int_range("page", min_value=1),
    int_range("limit", min_value=1, max_value=MAX_PAGE_LIMIT),
]


def task_create_from_payload(payload: Mapping[str, Any]) -> dict:
    due_date = payload.get("due_date")
    return {
        "title": payload["title"].strip(),
        "description": clean_text(payload.get("description")),
        "priority": TaskPriority(payload.get("priority") or TaskPriority.MEDIUM.value),
        "due_date": parse_iso_date(due_date) if due_date else None,
    }


def task_changes_from_payload(payload: Mapping[str, Any]) -> dict:
    """Keep only updatable keys, converted to domain types; unknown keys are dropped."""
    changes: dict = {}
    for key in UPDATABLE_FIELDS:
        if key not in payload:
            continue
        value = payload[key]
        if key == "title":
            changes[key] = value.strip()
        elif key == "description":
            changes[key] = clean_text(value)
        elif key == "priority":
            changes[key] = TaskPriority(value)
        elif key == "status":
            changes[key] = TaskStatus(value)
        elif key == "due_date":
            changes[key] = parse_iso_date(value) if value else None
    return changes
