from __future__ import annotations

from flask import request

from ..core.exceptions import ValidationError


def json_body() -> dict:
    """The request's JSON object; a missing body counts as `{}`."""
    if not request.data:
        return {}
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            errors=[{"field": "body", "message": "Request body must be a JSON object"}],
        )
    return payload
