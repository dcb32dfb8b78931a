"""Great-circle distance between two coordinates.

A spherical-earth Haversine is accurate to a few meters at the distances a
geofence cares about, so we avoid pulling in a GIS dependency.
"""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..common.units import format_distance
from ..common.validators import require_coordinate_component
from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate

__all__ = ["haversine_distance", "format_distance"]


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between ``a`` and ``b``.

    Raises ``InvalidCoordinate`` if any component is not a finite number
    within its valid range.
    """
    lat1 = require_coordinate_component(a.latitude, "a.latitude", 90)
    lon1 = require_coordinate_component(a.longitude, "a.longitude", 180)
    lat2 = require_coordinate_component(b.latitude, "b.latitude", 90)
    lon2 = require_coordinate_component(b.longitude, "b.longitude", 180)

    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)

    h = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_M * c
