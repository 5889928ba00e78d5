from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple

from ..core.enums import TaskPriority, TaskStatus
from .model import Task


class TaskRepository(Protocol):
    """Every method is scoped by `user_id`; a task owned by someone else behaves as missing."""

    def create(
        self,
        *,
        user_id: str,
        title: str,
        description: Optional[str],
        priority: TaskPriority,
        due_date: Optional[date],
        now: datetime,
    ) -> Task:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: str,
        *,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        limit: int,
        offset: int,
    ) -> Tuple[Sequence[Task], int]:
        """Ordered by priority (high first), due date (nulls last), newest first."""

        raise NotImplementedError

    def get_for_user(self, user_id: str, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def update_for_user(self, user_id: str, task_id: str, changes: Mapping[str, Any], *, now: datetime) -> Optional[Task]:
        raise NotImplementedError

    def delete_for_user(self, user_id: str, task_id: str) -> bool:
        raise NotImplementedError
