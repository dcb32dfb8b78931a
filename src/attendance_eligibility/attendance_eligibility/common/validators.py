from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import InvalidCoordinate, ValidationError


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def require_coordinate_component(value: Any, field_name: str, limit: float) -> float:
    """Return ``value`` as float if it is finite and within ``[-limit, limit]``."""
    if not is_finite_number(value) or not -limit <= value <= limit:
        raise InvalidCoordinate(field_name, value)
    return float(value)


def optional_number(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if not is_finite_number(value):
        raise ValidationError(f"{key} is invalid")
    return float(value)


def require_mapping(data: Any, field_name: str) -> dict:
    if not isinstance(data, dict):
        raise ValidationError(f"{field_name} is invalid")
    return data


def require_coordinate(coordinate: Any, prefix: str) -> None:
    """Validate both components, naming them ``<prefix>.latitude`` / ``<prefix>.longitude``."""
    require_coordinate_component(coordinate.latitude, f"{prefix}.latitude", 90)
    require_coordinate_component(coordinate.longitude, f"{prefix}.longitude", 180)
