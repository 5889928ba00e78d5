from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus

# Fields a partial update may touch.
UPDATABLE_FIELDS = ("title", "description", "priority", "status", "due_date")


@dataclass(frozen=True)
class Task:
    """Domain entity: a to-do item visible only to its owner."""

    id: str
    user_id: str
    title: str
    description: Optional[str]
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime
