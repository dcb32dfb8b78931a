from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..common.units import format_distance
from .constants import DEFAULT_SESSION_TIMEZONE
from .enums import FailureCode, SensorErrorCode


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EligibilityError(DomainError):
    """A typed attendance-eligibility failure.

    Subclasses keep the numeric evidence as attributes; ``message`` renders
    it for display and ``to_dict`` serializes it for API clients.
    """

    code: FailureCode

    def __init__(self) -> None:
        super().__init__(self.message)

    @property
    def message(self) -> str:
        raise NotImplementedError

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "details": self.details()}


class MalformedInputError(EligibilityError):
    """Input that can never be valid evidence; indicates a caller or sensor bug."""


class PolicyViolation(EligibilityError):
    """Well-formed input that fails an attendance rule; the user can act on it."""


class InvalidCoordinate(MalformedInputError):
    code = FailureCode.INVALID_COORDINATE

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__()

    @property
    def message(self) -> str:
        return (
            f"Invalid coordinate {self.field}={self.value!r}. "
            "Coordinates must be valid numbers (lat: -90 to 90, lng: -180 to 180)."
        )

    def details(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, float) and not math.isfinite(value):
            value = str(value)
        return {"field": self.field, "value": value}


class InvalidLocationSample(MalformedInputError):
    code = FailureCode.INVALID_LOCATION_SAMPLE

    @property
    def message(self) -> str:
        return "Invalid location detected (0, 0). Please ensure GPS is enabled and try again."


class MissingAccuracy(MalformedInputError):
    code = FailureCode.MISSING_ACCURACY

    def __init__(self, value: Any = None):
        self.value = value
        super().__init__()

    @property
    def message(self) -> str:
        return "GPS accuracy data is missing. Please enable high-accuracy GPS and try again."


class InvalidGeofence(MalformedInputError):
    code = FailureCode.INVALID_GEOFENCE

    def __init__(self, radius_meters: Any):
        self.radius_meters = radius_meters
        super().__init__()

    @property
    def message(self) -> str:
        return f"Session radius must be greater than 0 (got {self.radius_meters!r})."

    def details(self) -> dict[str, Any]:
        return {"radiusMeters": self.radius_meters}


class AccuracyTooLow(PolicyViolation):
    code = FailureCode.ACCURACY_TOO_LOW

    def __init__(self, actual: float, max_allowed: float):
        self.actual = actual
        self.max_allowed = max_allowed
        super().__init__()

    @property
    def message(self) -> str:
        return (
            f"GPS accuracy is too low ({round(self.actual)}m). "
            "Please enable high-accuracy GPS and ensure you have a clear view of the sky. "
            f"Maximum allowed accuracy: {self.max_allowed}m."
        )

    def details(self) -> dict[str, Any]:
        return {"accuracy": self.actual, "maxAccuracy": self.max_allowed}


class OutsideRadius(PolicyViolation):
    code = FailureCode.OUTSIDE_RADIUS

    def __init__(self, distance_meters: float, radius_meters: float):
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters
        super().__init__()

    @property
    def message(self) -> str:
        return (
            "You are outside the attendance area. "
            f"Distance: {format_distance(self.distance_meters)}. "
            f"Allowed radius: {self.radius_meters}m. "
            "Please move closer to the session location."
        )

    def details(self) -> dict[str, Any]:
        return {"distance": self.distance_meters, "allowedRadius": self.radius_meters}


class WindowNotOpenYet(PolicyViolation):
    code = FailureCode.WINDOW_NOT_OPEN_YET

    def __init__(self, minutes_until_open: int):
        self.minutes_until_open = minutes_until_open
        super().__init__()

    @property
    def message(self) -> str:
        unit = "minute" if self.minutes_until_open == 1 else "minutes"
        return f"Attendance is not yet open. Session starts in {self.minutes_until_open} {unit}."

    def details(self) -> dict[str, Any]:
        return {"minutesUntilOpen": self.minutes_until_open}


class WindowClosed(PolicyViolation):
    code = FailureCode.WINDOW_CLOSED

    def __init__(self, closed_at_epoch_ms: int, *, tz: str = DEFAULT_SESSION_TIMEZONE):
        self.closed_at_epoch_ms = closed_at_epoch_ms
        self.tz = tz
        super().__init__()

    @property
    def message(self) -> str:
        closed_at = datetime.fromtimestamp(self.closed_at_epoch_ms / 1000, tz=ZoneInfo(self.tz))
        return f"Attendance window has closed. Session ended at {closed_at.strftime('%H:%M')}."

    def details(self) -> dict[str, Any]:
        return {"closedAtEpochMs": self.closed_at_epoch_ms}


class SensorError(DomainError):
    """Failure reported by the positioning sensor; terminal for the current attempt."""

    code: SensorErrorCode = SensorErrorCode.UNKNOWN_ERROR
    default_message = "Unknown geolocation error. Please try again."
    recoverable = False
    requires_user_action = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "requiresUserAction": self.requires_user_action,
        }


class PermissionDenied(SensorError):
    code = SensorErrorCode.PERMISSION_DENIED
    default_message = (
        "Location permission denied. Please enable location access in your browser settings and try again."
    )
    requires_user_action = True


class PositionUnavailable(SensorError):
    code = SensorErrorCode.POSITION_UNAVAILABLE
    default_message = (
        "Location information is unavailable. Please ensure GPS is enabled on your device and try again."
    )
    recoverable = True


class Timeout(SensorError):
    code = SensorErrorCode.TIMEOUT
    default_message = (
        "Location request timed out. Please ensure you have a clear view of the sky and try again."
    )
    recoverable = True


class UnknownSensorError(SensorError):
    pass
