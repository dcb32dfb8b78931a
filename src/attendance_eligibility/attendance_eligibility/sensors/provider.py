from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import SensorErrorCode
from ..core.exceptions import (
    PermissionDenied,
    PositionUnavailable,
    SensorError,
    Timeout,
    UnknownSensorError,
)
from ..geo.model import LocationSample


class LocationProvider(Protocol):
    """Positioning sensor collaborator.

    Implementations return a fresh sample per call or raise a
    ``SensorError`` subclass. Any timeout policy lives here, not in the
    engine.
    """

    def current_sample(self) -> LocationSample:
        raise NotImplementedError


_ERRORS_BY_CODE: dict[SensorErrorCode, type[SensorError]] = {
    SensorErrorCode.PERMISSION_DENIED: PermissionDenied,
    SensorErrorCode.POSITION_UNAVAILABLE: PositionUnavailable,
    SensorErrorCode.TIMEOUT: Timeout,
}


def sensor_error_from_code(code: Optional[str], message: Optional[str] = None) -> SensorError:
    """Map a browser geolocation error code to a typed sensor error."""
    try:
        key = SensorErrorCode(str(code).upper())
    except ValueError:
        key = SensorErrorCode.UNKNOWN_ERROR
    return _ERRORS_BY_CODE.get(key, UnknownSensorError)(message)
