from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_duration, utc_now
from .common.logging_config import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_PASSWORD_HASH_METHOD, DEFAULT_TOKEN_LIFETIME, MIN_JWT_SECRET_LENGTH
from .database.bootstrap import apply_schema, list_tables
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users
from .web.errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Application factory.

    Without `container`, builds the MySQL-backed container from the settings
    module selected by APP_ENV (the pool is drained at process exit).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        jwt_secret = str(getattr(settings, "JWT_SECRET", "") or "")
        if len(jwt_secret) < MIN_JWT_SECRET_LENGTH:
            raise RuntimeError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters")

        db_config = dict(getattr(settings, "DB_CONFIG"))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            jwt_secret=jwt_secret,
            token_lifetime=parse_duration(getattr(settings, "JWT_EXPIRES_IN", DEFAULT_TOKEN_LIFETIME)),
            password_method=getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
        )
        if container.conn is not None:
            atexit.register(container.conn.close)

    app.extensions["container"] = container
    prefix = str(getattr(settings, "API_PREFIX", "") or "").rstrip("/")

    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.debug("%s %s", request.method, request.path)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok", "timestamp": utc_now().isoformat() + "Z"})

    register_users(app, container, prefix=prefix)
    register_attendance(app, container, prefix=prefix)
    register_tasks(app, container, prefix=prefix)

    logger.info("App ready (settings=%s, prefix=%r)", settings_module, prefix or "/")
    return app
