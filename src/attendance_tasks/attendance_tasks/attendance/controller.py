from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.pagination import page_request
from ..common.serialization import to_json
from ..common.validators import run_validators
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..web.auth import current_user, login_required
from ..web.requests import json_body
from .validation import CHECKIN_RULES, HISTORY_RULES, checkin_from_payload


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    auth_required = login_required(container.auth_gate)
    service = container.attendance_service

    @app.route(f"{prefix}/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @auth_required
    def checkin():
        payload = json_body()
        run_validators(payload, CHECKIN_RULES)

        record = service.check_in(current_user().id, **checkin_from_payload(payload))
        return jsonify({"success": True, "attendance": to_json(record)}), 201

    @app.route(f"{prefix}/attendance/checkout", methods=["PATCH"], endpoint="attendance_checkout")
    @auth_required
    def checkout():
        record = service.check_out(current_user().id)
        return jsonify({"success": True, "attendance": to_json(record)})

    @app.route(f"{prefix}/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth_required
    def today():
        record = service.get_today(current_user().id)
        return jsonify({"success": True, "record": to_json(record) if record else None})

    @app.route(f"{prefix}/attendance", methods=["GET"], endpoint="attendance_history")
    @auth_required
    def history():
        args = request.args.to_dict()
        run_validators(args, HISTORY_RULES)

        page = service.history(
            current_user().id,
            start_date=parse_iso_date(args["from"]) if args.get("from") else None,
            end_date=parse_iso_date(args["to"]) if args.get("to") else None,
            page=page_request(args, default_limit=DEFAULT_HISTORY_LIMIT),
        )
        return jsonify(
            {
                "success": True,
                "total": page.total,
                "page": page.page,
                "limit": page.limit,
                "records": to_json(list(page.items)),
            }
        )
