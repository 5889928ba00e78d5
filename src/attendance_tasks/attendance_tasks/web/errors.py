from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException, NotFound

from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, ValidationError):
            return error_response(e.message, e.status_code, errors=e.errors)
        return error_response(e.message, e.status_code)

    @app.errorhandler(NotFound)
    def handle_not_found(_e: NotFound):
        return error_response("Route not found", 404)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
