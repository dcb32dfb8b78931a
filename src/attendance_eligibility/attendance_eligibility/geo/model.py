from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    """Cặp (vĩ độ, kinh độ) tính bằng độ."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class LocationSample:
    """Một lần đọc GPS từ thiết bị, dùng đúng một lần cho một lượt xác thực.

    ``accuracy_meters`` is kept Optional because sensors do report samples
    without it; the geofence check rejects those.
    """

    coordinate: Coordinate
    accuracy_meters: Optional[float]
    captured_at_epoch_ms: int


@dataclass(frozen=True)
class SessionGeofence:
    """Vùng điểm danh hợp lệ của buổi học: tâm + bán kính (mét)."""

    coordinate: Coordinate
    radius_meters: float
