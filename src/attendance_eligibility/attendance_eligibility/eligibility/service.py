from __future__ import annotations

import logging
from typing import Optional

from ..common import time_utils
from ..core.constants import DEFAULT_MAX_ACCURACY_METERS, DEFAULT_SESSION_TIMEZONE
from ..core.exceptions import EligibilityError
from ..geo.geofence import check_geofence
from ..geo.model import LocationSample, SessionGeofence
from ..sensors.provider import LocationProvider
from ..sessions.model import SessionTimeWindow
from ..sessions.time_window import check_time_window
from .model import ValidationChecks, ValidationResult

logger = logging.getLogger(__name__)

# Marker for "use the accuracy threshold the service was configured with".
CONFIGURED = object()


def validate_attendance(
    fence: SessionGeofence,
    window: Optional[SessionTimeWindow],
    sample: LocationSample,
    *,
    max_accuracy_meters: Optional[float] = DEFAULT_MAX_ACCURACY_METERS,
    now_epoch_ms: Optional[int] = None,
    tz: str = DEFAULT_SESSION_TIMEZONE,
) -> ValidationResult:
    """Decide whether ``sample`` is valid attendance evidence for a session.

    The time window (if any) is checked first, then the geofence. The first
    failing check raises its typed error unchanged; a result is only built
    when every check passed.
    """
    now = now_epoch_ms if now_epoch_ms is not None else time_utils.now_epoch_ms()

    time_window_passed: Optional[bool] = None
    if window is not None:
        time_window_passed = check_time_window(window, now, tz=tz).passed

    geofence = check_geofence(sample, fence, max_accuracy_meters)

    return ValidationResult(
        is_within_radius=geofence.distance_check_passed,
        distance_meters=geofence.distance_meters,
        accuracy_meters=float(sample.accuracy_meters),
        user_coordinate=sample.coordinate,
        evaluated_at_epoch_ms=now,
        checks=ValidationChecks(
            accuracy_check_passed=geofence.accuracy_check_passed,
            distance_check_passed=geofence.distance_check_passed,
            time_window_check_passed=time_window_passed,
        ),
    )


class EligibilityService:
    """Entry point used by controllers: the orchestrator plus configured defaults and logging."""

    def __init__(
        self,
        *,
        max_accuracy_meters: Optional[float] = DEFAULT_MAX_ACCURACY_METERS,
        session_timezone: str = DEFAULT_SESSION_TIMEZONE,
    ):
        self._max_accuracy_meters = max_accuracy_meters
        self._session_timezone = session_timezone

    @property
    def max_accuracy_meters(self) -> Optional[float]:
        return self._max_accuracy_meters

    def validate(
        self,
        fence: SessionGeofence,
        window: Optional[SessionTimeWindow],
        sample: LocationSample,
        *,
        max_accuracy_meters: object = CONFIGURED,
        now_epoch_ms: Optional[int] = None,
    ) -> ValidationResult:
        max_accuracy = self._max_accuracy_meters if max_accuracy_meters is CONFIGURED else max_accuracy_meters
        try:
            result = validate_attendance(
                fence,
                window,
                sample,
                max_accuracy_meters=max_accuracy,
                now_epoch_ms=now_epoch_ms,
                tz=self._session_timezone,
            )
        except EligibilityError as e:
            logger.warning("attendance rejected code=%s details=%s", e.code.value, e.details())
            raise

        logger.info(
            "attendance accepted distance=%.1fm accuracy=%.1fm radius=%sm",
            result.distance_meters,
            result.accuracy_meters,
            fence.radius_meters,
        )
        return result

    def acquire_and_validate(
        self,
        provider: LocationProvider,
        fence: SessionGeofence,
        window: Optional[SessionTimeWindow] = None,
        *,
        now_epoch_ms: Optional[int] = None,
    ) -> ValidationResult:
        """Read one fresh sample from ``provider`` and validate it.

        Sensor errors propagate to the caller; a retry means calling this
        again, which reads a new sample.
        """
        sample = provider.current_sample()
        return self.validate(fence, window, sample, now_epoch_ms=now_epoch_ms)
