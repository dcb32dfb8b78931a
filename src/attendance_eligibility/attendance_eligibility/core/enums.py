from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Trạng thái hiển thị của một buổi học, luôn tính lại theo thời điểm hiện tại."""

    UPCOMING = "upcoming"
    LIVE = "live"
    PAST = "past"


class FailureCode(str, Enum):
    """Mã lỗi xác thực điểm danh trả về cho client."""

    INVALID_COORDINATE = "INVALID_COORDINATE"
    INVALID_LOCATION_SAMPLE = "INVALID_LOCATION_SAMPLE"
    MISSING_ACCURACY = "MISSING_ACCURACY"
    INVALID_GEOFENCE = "INVALID_GEOFENCE"
    ACCURACY_TOO_LOW = "ACCURACY_TOO_LOW"
    OUTSIDE_RADIUS = "OUTSIDE_RADIUS"
    WINDOW_NOT_OPEN_YET = "WINDOW_NOT_OPEN_YET"
    WINDOW_CLOSED = "WINDOW_CLOSED"


class SensorErrorCode(str, Enum):
    """Mã lỗi định vị theo chuẩn Geolocation API của trình duyệt."""

    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
