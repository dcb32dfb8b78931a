from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..common.validators import is_finite_number, require_coordinate
from ..core.exceptions import (
    AccuracyTooLow,
    InvalidGeofence,
    InvalidLocationSample,
    MissingAccuracy,
    OutsideRadius,
    ValidationError,
)
from .distance import haversine_distance
from .model import LocationSample, SessionGeofence


@dataclass(frozen=True)
class GeofenceCheck:
    distance_meters: float
    accuracy_check_passed: bool
    distance_check_passed: bool


def _require_valid_fence(fence: SessionGeofence) -> None:
    if not is_finite_number(fence.radius_meters) or fence.radius_meters <= 0:
        raise InvalidGeofence(fence.radius_meters)


def _require_valid_threshold(max_accuracy_meters: Optional[float]) -> None:
    if max_accuracy_meters is not None and not is_finite_number(max_accuracy_meters):
        raise ValidationError(f"max_accuracy_meters must be a finite number or None (got {max_accuracy_meters!r})")


def _require_accuracy(sample: LocationSample) -> float:
    accuracy = sample.accuracy_meters
    if not isinstance(accuracy, (int, float)) or isinstance(accuracy, bool):
        raise MissingAccuracy(accuracy)
    if math.isnan(accuracy) or accuracy < 0:
        raise MissingAccuracy(accuracy)
    return float(accuracy)


def check_geofence(
    sample: LocationSample,
    fence: SessionGeofence,
    max_accuracy_meters: Optional[float],
) -> GeofenceCheck:
    """Check a location sample against a session geofence.

    Order is fixed so the same sample always yields the same error:
    (0, 0) sentinel, then accuracy, then distance. The sentinel wins over
    any fence or threshold problem. A failing step raises
    and later steps are not evaluated, e.g. a low-accuracy sample never
    gets a distance computed.

    ``max_accuracy_meters=None`` disables the accuracy threshold (the
    accuracy value itself is still mandatory).
    """
    coord = sample.coordinate
    if coord.latitude == 0 and coord.longitude == 0:
        raise InvalidLocationSample()

    _require_valid_fence(fence)
    _require_valid_threshold(max_accuracy_meters)

    accuracy = _require_accuracy(sample)
    if max_accuracy_meters is not None and accuracy > max_accuracy_meters:
        raise AccuracyTooLow(actual=accuracy, max_allowed=max_accuracy_meters)

    require_coordinate(coord, "location")
    require_coordinate(fence.coordinate, "session")
    distance = haversine_distance(coord, fence.coordinate)
    if distance > fence.radius_meters:
        raise OutsideRadius(distance_meters=distance, radius_meters=fence.radius_meters)

    return GeofenceCheck(
        distance_meters=distance,
        accuracy_check_passed=True,
        distance_check_passed=True,
    )
