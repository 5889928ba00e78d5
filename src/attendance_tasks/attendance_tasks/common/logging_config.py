from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# "<package>.common.logging_config" -> "<package>", whichever import path was used.
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call more than once (e.g. one app per test).
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(getattr(h, "_attendance_tasks", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._attendance_tasks = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
    return package_logger
