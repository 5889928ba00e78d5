from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json
from ..common.validators import run_validators, uuid_value
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..container import Container
from ..web.auth import current_user, login_required, role_required
from ..web.requests import json_body
from .validation import LOGIN_RULES, SET_ACTIVE_RULES, SIGNUP_RULES


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    auth_required = login_required(container.auth_gate)

    @app.route(f"{prefix}/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        payload = json_body()
        run_validators(payload, SIGNUP_RULES)

        result = container.auth_service.signup(
            name=payload["name"],
            email=payload["email"],
            password=payload["password"],
            role=Role(payload.get("role") or Role.EMPLOYEE.value),
        )
        return jsonify({"success": True, "token": result.token, "user": to_json(result.user)}), 201

    @app.route(f"{prefix}/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        payload = json_body()
        run_validators(payload, LOGIN_RULES)

        result = container.auth_service.login(email=payload["email"], password=payload["password"])
        return jsonify({"success": True, "token": result.token, "user": to_json(result.user)})

    @app.route(f"{prefix}/auth/me", methods=["GET"], endpoint="auth_me")
    @auth_required
    def me():
        return jsonify({"success": True, "user": to_json(current_user())})

    @app.route(f"{prefix}/users/<user_id>/active", methods=["PATCH"], endpoint="users_set_active")
    @auth_required
    @role_required(Role.ADMIN)
    def set_active(user_id: str):
        uuid_value(user_id, field="id", message="Invalid user ID")
        payload = json_body()
        run_validators(payload, SET_ACTIVE_RULES)

        if not container.user_service.set_active(user_id, is_active=payload["is_active"]):
            raise NotFoundError("User not found")
        user = container.user_service.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return jsonify({"success": True, "user": to_json(user.to_public())})
