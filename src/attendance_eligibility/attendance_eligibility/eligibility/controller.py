from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.time_utils import now_epoch_ms, parse_timestamp
from ..common.validators import optional_number, require_mapping
from ..core.exceptions import EligibilityError, SensorError, ValidationError
from ..container import Container
from ..geo.model import Coordinate, LocationSample, SessionGeofence
from ..sensors.provider import sensor_error_from_code
from ..sessions.model import SessionTimeWindow
from .service import CONFIGURED

logger = logging.getLogger(__name__)


def _parse_geofence(data: dict) -> SessionGeofence:
    return SessionGeofence(
        coordinate=Coordinate(latitude=data.get("latitude"), longitude=data.get("longitude")),
        radius_meters=data.get("radius"),
    )


def _parse_time_window(data: Optional[dict]) -> Optional[SessionTimeWindow]:
    if data is None:
        return None
    data = require_mapping(data, "timeWindow")
    if data.get("startTime") is None:
        raise ValidationError("timeWindow.startTime is required")

    end = data.get("endTime")
    return SessionTimeWindow(
        start_epoch_ms=parse_timestamp(data["startTime"], field_name="timeWindow.startTime"),
        end_epoch_ms=parse_timestamp(end, field_name="timeWindow.endTime") if end is not None else None,
        early_arrival_minutes=optional_number(data, "earlyArrivalMinutes") or 0,
    )


def _parse_sample(data: dict) -> LocationSample:
    # The client reports sensor failures instead of a position.
    if data.get("error"):
        raise sensor_error_from_code(data.get("error"), data.get("message"))

    captured_at = data.get("timestamp")
    return LocationSample(
        coordinate=Coordinate(latitude=data.get("latitude"), longitude=data.get("longitude")),
        accuracy_meters=data.get("accuracy"),
        captured_at_epoch_ms=parse_timestamp(captured_at) if captured_at is not None else now_epoch_ms(),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/validate", methods=["POST"], endpoint="api_validate_attendance")
    def api_validate_attendance():
        """Validate one location sample against a session's geofence and time window."""
        try:
            data = require_mapping(request.get_json(silent=True), "body")
            session_data = require_mapping(data.get("session"), "session")
            location_data = require_mapping(data.get("location"), "location")

            fence = _parse_geofence(session_data)
            window = _parse_time_window(session_data.get("timeWindow"))
            max_accuracy = optional_number(data, "maxAccuracy") if "maxAccuracy" in data else CONFIGURED
            current_time = data.get("currentTime")
            now = parse_timestamp(current_time, field_name="currentTime") if current_time is not None else None

            sample = _parse_sample(location_data)
            result = container.eligibility_service.validate(
                fence,
                window,
                sample,
                max_accuracy_meters=max_accuracy,
                now_epoch_ms=now,
            )
            return jsonify({"success": True, "result": result.to_dict()})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except SensorError as e:
            logger.info("location sensor failure code=%s", e.code.value)
            return jsonify({"success": False, "error": e.to_dict()}), 422
        except EligibilityError as e:
            return jsonify({"success": False, "error": e.to_dict()}), 422
        except Exception:
            logger.exception("unexpected error while validating attendance")
            return jsonify({"success": False, "message": "Internal error while validating attendance"}), 500
