from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import utc_now
from ..common.pagination import Page, PageRequest
from ..core.constants import DEFAULT_TASK_LIMIT
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import InvalidRequestError, NotFoundError
from .model import UPDATABLE_FIELDS, Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    def create(
        self,
        user_id: str,
        *,
        title: str,
        description: Optional[str] = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Task:
        task = self._tasks.create(
            user_id=user_id,
            title=title.strip(),
            description=description,
            priority=TaskPriority(priority),
            due_date=due_date,
            now=now or utc_now(),
        )
        logger.info("Task created: task_id=%s user_id=%s", task.id, user_id)
        return task

    def list(
        self,
        user_id: str,
        *,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        page: PageRequest = PageRequest(limit=DEFAULT_TASK_LIMIT),
    ) -> Page[Task]:
        tasks, total = self._tasks.list_for_user(
            user_id,
            status=status,
            priority=priority,
            limit=page.limit,
            offset=page.offset,
        )
        return Page(items=tasks, total=total, page=page.page, limit=page.limit)

    def get(self, user_id: str, task_id: str) -> Task:
        task = self._tasks.get_for_user(user_id, task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def update(
        self,
        user_id: str,
        task_id: str,
        changes: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
    ) -> Task:
        """Partial update; keys outside `UPDATABLE_FIELDS` are ignored."""
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not changes:
            raise InvalidRequestError("No valid fields to update")

        task = self._tasks.update_for_user(user_id, task_id, changes, now=now or utc_now())
        if not task:
            raise NotFoundError("Task not found")

        logger.info("Task updated: task_id=%s fields=%s", task.id, ",".join(sorted(changes)))
        return task

    def delete(self, user_id: str, task_id: str) -> None:
        if not self._tasks.delete_for_user(user_id, task_id):
            raise NotFoundError("Task not found")
        logger.info("Task deleted: task_id=%s user_id=%s", task_id, user_id)
