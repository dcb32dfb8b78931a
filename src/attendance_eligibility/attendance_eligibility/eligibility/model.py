from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geo.model import Coordinate


@dataclass(frozen=True)
class ValidationChecks:
    accuracy_check_passed: bool
    distance_check_passed: bool
    # None when the session has no time window.
    time_window_check_passed: Optional[bool] = None


@dataclass(frozen=True)
class ValidationResult:
    """Kết quả xác thực điểm danh thành công (chỉ được tạo khi mọi kiểm tra đều đạt)."""

    is_within_radius: bool
    distance_meters: float
    accuracy_meters: float
    user_coordinate: Coordinate
    evaluated_at_epoch_ms: int
    checks: ValidationChecks

    def to_dict(self) -> dict:
        details = {
            "accuracyCheckPassed": self.checks.accuracy_check_passed,
            "distanceCheckPassed": self.checks.distance_check_passed,
        }
        if self.checks.time_window_check_passed is not None:
            details["timeWindowCheckPassed"] = self.checks.time_window_check_passed

        return {
            "isWithinRadius": self.is_within_radius,
            "distance": self.distance_meters,
            "accuracy": self.accuracy_meters,
            "userLocation": self.user_coordinate.to_dict(),
            "timestamp": self.evaluated_at_epoch_ms,
            "validationDetails": details,
        }
