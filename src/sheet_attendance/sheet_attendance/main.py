from __future__ import annotations

import importlib
import logging
import sys
from datetime import datetime
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container, tasks_for
from .core.exceptions import ConfigurationError
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, settings: Any = None, container: Optional[Container] = None) -> Flask:
    """Flask application factory.

    Raises ConfigurationError when the selected spreadsheet backend lacks
    required settings.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))
    configure_logging(app.config["DEBUG"])

    if container is None:
        container = build_container(
            sheets_config=getattr(settings, "SHEETS_CONFIG"),
            tasks=tasks_for(settings),
            timezone=getattr(settings, "TIMEZONE", "Europe/Moscow"),
            attendance_sync=bool(getattr(settings, "ATTENDANCE_SYNC_ENABLED", False)),
            code_marks=bool(getattr(settings, "CODE_MARKS_ENABLED", False)),
            strict_first_action=bool(getattr(settings, "STRICT_FIRST_ACTION", False)),
            detached_workers=int(getattr(settings, "DETACHED_WORKERS", 4)),
        )
    app.extensions["sheet_attendance"] = container

    register_attendance(app, container)
    register_employees(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "healthy", "timestamp": datetime.now().isoformat()})

    return app


def run() -> None:
    try:
        app = create_app()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    # Startup check only; the server keeps running if the sheet is unreachable.
    try:
        app.extensions["sheet_attendance"].events_repo.read_all_rows()
        logger.info("Spreadsheet connection OK")
    except Exception as e:
        logger.error("Spreadsheet connection failed: %s", e)

    port = app.config["PORT"]
    logger.info("Server listening on port %s", port)
    app.run(host="0.0.0.0", port=port, debug=False)
