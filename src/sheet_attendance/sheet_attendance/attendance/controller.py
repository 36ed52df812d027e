from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import UpstreamError, ValidationError
from ..container import Container
from ..sheets.errors import public_message
from .model import Geolocation, MarkProposal

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    # JSON bodies may carry numbers/bools; the validator only deals in strings.
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"status": "error", "message": message}), status

    @app.route("/api/mark", methods=["POST"], endpoint="api_mark")
    def api_mark():
        """Check-in / check-out. Accepts the name-based body or the code-based one."""
        data = request.get_json(silent=True) or {}
        geo = Geolocation(
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            accuracy=data.get("accuracy"),
        )

        try:
            if data.get("employeeCode") is not None and not data.get("employeeName"):
                result = container.attendance_service.mark_by_code(
                    _text(data.get("employeeCode")),
                    _text(data.get("action")),
                    worksite=_text(data.get("worksite")),
                    geo=geo,
                )
            else:
                result = container.attendance_service.mark(
                    MarkProposal(
                        employee_name=_text(data.get("employeeName")),
                        employee_status=_text(data.get("employeeStatus")),
                        action=_text(data.get("action")),
                        worksite=_text(data.get("worksite")),
                        geo=geo,
                    )
                )
        except ValidationError as e:
            return _error(str(e), 400)
        except UpstreamError as e:
            logger.exception("Saving a mark failed")
            return _error(public_message(e), 500)
        except Exception:
            logger.exception("Unexpected error while saving a mark")
            return _error("Ошибка при сохранении данных", 500)

        return jsonify({"status": "ok", "message": "Отметка сохранена", "timestamp": result.timestamp})

    @app.route("/api/last-mark", methods=["GET"], endpoint="api_last_mark")
    def api_last_mark():
        try:
            last = container.attendance_service.last_mark(request.args.get("employeeName"))
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Reading the last mark failed")
            return _error("Ошибка при получении данных", 500)

        return jsonify(
            {
                "status": "ok",
                "lastAction": last.action,
                "lastStatus": last.employee_status,
                "lastWorksite": last.worksite,
                "timestamp": last.timestamp,
            }
        )
