from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.pagination import page_request
from ..common.serialization import to_json
from ..common.validators import run_validators, uuid_value
from ..container import Container
from ..core.constants import DEFAULT_TASK_LIMIT
from ..core.enums import TaskPriority, TaskStatus
from ..web.auth import current_user, login_required
from ..web.requests import json_body
from .validation import (
    TASK_CREATE_RULES,
    TASK_LIST_RULES,
    TASK_UPDATE_RULES,
    task_changes_from_payload,
    task_create_from_payload,
)


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    auth_required = login_required(container.auth_gate)
    service = container.task_service

    def _task_id(value: str) -> str:
        uuid_value(value, field="id", message="Invalid task ID")
        return value

    @app.route(f"{prefix}/tasks", methods=["POST"], endpoint="tasks_create")
    @auth_required
    def create_task():
        payload = json_body()
        run_validators(payload, TASK_CREATE_RULES)

        task = service.create(current_user().id, **task_create_from_payload(payload))
        return jsonify({"success": True, "task": to_json(task)}), 201

    @app.route(f"{prefix}/tasks", methods=["GET"], endpoint="tasks_list")
    @auth_required
    def list_tasks():
        args = request.args.to_dict()
        run_validators(args, TASK_LIST_RULES)

        page = service.list(
            current_user().id,
            status=TaskStatus(args["status"]) if args.get("status") else None,
            priority=TaskPriority(args["priority"]) if args.get("priority") else None,
            page=page_request(args, default_limit=DEFAULT_TASK_LIMIT),
        )
        return jsonify(
            {
                "success": True,
                "total": page.total,
                "page": page.page,
                "limit": page.limit,
                "tasks": to_json(list(page.items)),
            }
        )

    @app.route(f"{prefix}/tasks/<task_id>", methods=["GET"], endpoint="tasks_get")
    @auth_required
    def get_task(task_id: str):
        task = service.get(current_user().id, _task_id(task_id))
        return jsonify({"success": True, "task": to_json(task)})

    @app.route(f"{prefix}/tasks/<task_id>", methods=["PATCH"], endpoint="tasks_update")
    @auth_required
    def update_task(task_id: str):
        task_id = _task_id(task_id)
        payload = json_body()
        run_validators(payload, TASK_UPDATE_RULES)

        task = service.update(current_user().id, task_id, task_changes_from_payload(payload))
        return jsonify({"success": True, "task": to_json(task)})

    @app.route(f"{prefix}/tasks/<task_id>", methods=["DELETE"], endpoint="tasks_delete")
    @auth_required
    def delete_task(task_id: str):
        service.delete(current_user().id, _task_id(task_id))
        return jsonify({"success": True, "message": "Task deleted"})
