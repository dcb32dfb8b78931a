from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.time_utils import now_epoch_ms, parse_iso_date, parse_timestamp
from ..common.validators import require_mapping
from ..core.exceptions import ValidationError
from ..container import Container
from .model import SessionSchedule
from .status import classify_session_status, cutoff_epoch_ms, schedule_from_calendar

logger = logging.getLogger(__name__)


def _parse_schedule(data: dict, *, tz: str) -> SessionSchedule:
    is_cancelled = bool(data.get("isCancelled", False))
    is_completed = bool(data.get("isCompleted", False))

    if data.get("startEpochMs") is not None:
        if data.get("endEpochMs") is None:
            raise ValidationError("endEpochMs is required with startEpochMs")
        return SessionSchedule(
            start_epoch_ms=parse_timestamp(data["startEpochMs"], field_name="startEpochMs"),
            end_epoch_ms=parse_timestamp(data["endEpochMs"], field_name="endEpochMs"),
            is_cancelled=is_cancelled,
            is_completed=is_completed,
        )

    start_date = data.get("startDate")
    if not isinstance(start_date, str) or not start_date.strip():
        raise ValidationError("startDate is required")

    return schedule_from_calendar(
        parse_iso_date(start_date),
        data.get("startTime"),
        data.get("endTime"),
        is_cancelled=is_cancelled,
        is_completed=is_completed,
        tz=tz,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/status", methods=["POST"], endpoint="api_session_status")
    def api_session_status():
        try:
            data = require_mapping(request.get_json(silent=True), "body")
            schedule = _parse_schedule(data, tz=container.session_timezone)
            now = parse_timestamp(data["now"], field_name="now") if data.get("now") is not None else now_epoch_ms()

            status = classify_session_status(schedule, now)
            return jsonify({
                "success": True,
                "status": status.value,
                "startEpochMs": schedule.start_epoch_ms,
                "endEpochMs": schedule.end_epoch_ms,
                "cutoffEpochMs": cutoff_epoch_ms(schedule),
            })
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("unexpected error while computing session status")
            return jsonify({"success": False, "message": "Internal error while computing session status"}), 500
