from __future__ import annotations

import logging
import math

import pytest

from src.attendance_eligibility.attendance_eligibility.common import time_utils
from src.attendance_eligibility.attendance_eligibility.core.exceptions import (
    AccuracyTooLow,
    InvalidCoordinate,
    InvalidLocationSample,
    MalformedInputError,
    MissingAccuracy,
    OutsideRadius,
    PermissionDenied,
    PolicyViolation,
    Timeout,
    ValidationError,
    WindowClosed,
    WindowNotOpenYet,
)
from src.attendance_eligibility.attendance_eligibility.eligibility.service import (
    EligibilityService,
    validate_attendance,
)
from src.attendance_eligibility.attendance_eligibility.geo.model import Coordinate, LocationSample, SessionGeofence
from src.attendance_eligibility.attendance_eligibility.sessions.model import SessionTimeWindow

T0 = 1_767_776_400_000
MINUTE = 60_000

FENCE = SessionGeofence(coordinate=Coordinate(19.9975, 73.7898), radius_meters=100)


def _sample(lat=19.9980, lon=73.7900, accuracy=20.0) -> LocationSample:
    return LocationSample(coordinate=Coordinate(lat, lon), accuracy_meters=accuracy, captured_at_epoch_ms=T0)


class FakeProvider:
    def __init__(self, *samples_or_errors):
        self._queue = list(samples_or_errors)
        self.calls = 0

    def current_sample(self) -> LocationSample:
        self.calls += 1
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_nearby_sample_is_accepted_without_window():
    result = validate_attendance(FENCE, None, _sample(), now_epoch_ms=T0)

    assert result.is_within_radius is True
    assert 50 < result.distance_meters < 70
    assert result.accuracy_meters == 20
    assert result.user_coordinate == Coordinate(19.9980, 73.7900)
    assert result.evaluated_at_epoch_ms == T0
    assert result.checks.accuracy_check_passed is True
    assert result.checks.distance_check_passed is True
    assert result.checks.time_window_check_passed is None


def test_time_window_check_present_when_window_supplied():
    window = SessionTimeWindow(start_epoch_ms=T0, end_epoch_ms=T0 + 60 * MINUTE)
    result = validate_attendance(FENCE, window, _sample(), now_epoch_ms=T0 + MINUTE)

    assert result.checks.time_window_check_passed is True
    assert result.to_dict()["validationDetails"]["timeWindowCheckPassed"] is True


def test_to_dict_omits_time_window_key_without_window():
    data = validate_attendance(FENCE, None, _sample(), now_epoch_ms=T0).to_dict()

    assert "timeWindowCheckPassed" not in data["validationDetails"]
    assert data["userLocation"] == {"latitude": 19.9980, "longitude": 73.7900}
    assert data["timestamp"] == T0


def test_default_max_accuracy_is_thirty_meters():
    with pytest.raises(AccuracyTooLow) as exc:
        validate_attendance(FENCE, None, _sample(accuracy=45), now_epoch_ms=T0)

    assert (exc.value.actual, exc.value.max_allowed) == (45, 30)


def test_accuracy_check_can_be_disabled():
    result = validate_attendance(FENCE, None, _sample(accuracy=45), max_accuracy_meters=None, now_epoch_ms=T0)
    assert result.accuracy_meters == 45


def test_time_window_is_checked_before_geofence():
    window = SessionTimeWindow(start_epoch_ms=T0, end_epoch_ms=T0 + 60 * MINUTE)
    far_and_bad = _sample(lat=0, lon=0, accuracy=None)

    with pytest.raises(WindowClosed):
        validate_attendance(FENCE, window, far_and_bad, now_epoch_ms=T0 + 61 * MINUTE)

    with pytest.raises(WindowNotOpenYet):
        validate_attendance(FENCE, window, far_and_bad, now_epoch_ms=T0 - MINUTE)


def test_geofence_failure_after_window_passes():
    window = SessionTimeWindow(start_epoch_ms=T0)
    with pytest.raises(InvalidLocationSample):
        validate_attendance(FENCE, window, _sample(lat=0, lon=0), now_epoch_ms=T0)


def test_outside_radius_propagates_unchanged():
    with pytest.raises(OutsideRadius) as exc:
        validate_attendance(FENCE, None, _sample(lat=20.0075), now_epoch_ms=T0)

    assert exc.value.radius_meters == 100


def test_now_defaults_to_wall_clock(monkeypatch):
    monkeypatch.setattr(time_utils, "now_epoch_ms", lambda: T0 + 42)

    result = validate_attendance(FENCE, None, _sample())

    assert result.evaluated_at_epoch_ms == T0 + 42


def test_service_uses_configured_threshold():
    svc = EligibilityService(max_accuracy_meters=50)

    result = svc.validate(FENCE, None, _sample(accuracy=45), now_epoch_ms=T0)
    assert result.checks.accuracy_check_passed


def test_service_threshold_can_be_overridden_per_call():
    svc = EligibilityService(max_accuracy_meters=50)

    with pytest.raises(AccuracyTooLow):
        svc.validate(FENCE, None, _sample(accuracy=45), max_accuracy_meters=10, now_epoch_ms=T0)

    assert svc.validate(FENCE, None, _sample(accuracy=45), max_accuracy_meters=None, now_epoch_ms=T0)


def test_service_logs_rejections(caplog):
    svc = EligibilityService()

    with caplog.at_level(logging.WARNING):
        with pytest.raises(AccuracyTooLow):
            svc.validate(FENCE, None, _sample(accuracy=99), now_epoch_ms=T0)

    assert "ACCURACY_TOO_LOW" in caplog.text


def test_acquire_and_validate_reads_one_fresh_sample():
    provider = FakeProvider(_sample())
    svc = EligibilityService()

    result = svc.acquire_and_validate(provider, FENCE, now_epoch_ms=T0)

    assert provider.calls == 1
    assert result.is_within_radius


def test_sensor_errors_propagate_without_retry():
    provider = FakeProvider(Timeout(), _sample())
    svc = EligibilityService()

    with pytest.raises(Timeout):
        svc.acquire_and_validate(provider, FENCE, now_epoch_ms=T0)
    assert provider.calls == 1

    # Caller-driven retry reads the next sample.
    assert svc.acquire_and_validate(provider, FENCE, now_epoch_ms=T0).is_within_radius


def test_permission_denied_propagates():
    svc = EligibilityService()
    with pytest.raises(PermissionDenied):
        svc.acquire_and_validate(FakeProvider(PermissionDenied()), FENCE, now_epoch_ms=T0)


def test_failures_split_into_malformed_input_and_policy_violations():
    assert issubclass(InvalidCoordinate, MalformedInputError)
    assert issubclass(InvalidLocationSample, MalformedInputError)
    assert issubclass(MissingAccuracy, MalformedInputError)
    for policy_error in (AccuracyTooLow, OutsideRadius, WindowNotOpenYet, WindowClosed):
        assert issubclass(policy_error, PolicyViolation)


def test_nan_accuracy_threshold_does_not_disable_the_gate():
    with pytest.raises(ValidationError):
        validate_attendance(FENCE, None, _sample(accuracy=500), max_accuracy_meters=math.nan, now_epoch_ms=T0)

    svc = EligibilityService(max_accuracy_meters=30)
    with pytest.raises(ValidationError):
        svc.validate(FENCE, None, _sample(accuracy=500), max_accuracy_meters=math.nan, now_epoch_ms=T0)


def test_window_closed_message_uses_session_timezone():
    window = SessionTimeWindow(start_epoch_ms=T0, end_epoch_ms=T0 + 60 * MINUTE)
    svc = EligibilityService(session_timezone="UTC")

    with pytest.raises(WindowClosed) as exc:
        svc.validate(FENCE, window, _sample(), now_epoch_ms=T0 + 61 * MINUTE)

    assert exc.value.tz == "UTC"
    assert exc.value.message.endswith("Session ended at 10:00.")
