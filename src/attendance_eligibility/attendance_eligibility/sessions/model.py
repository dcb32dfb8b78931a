from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional

from ..core.constants import DEFAULT_EARLY_ARRIVAL_MINUTES


@dataclass(frozen=True)
class SessionTimeWindow:
    """Khoảng thời gian được phép nộp điểm danh (khác với trạng thái hiển thị)."""

    start_epoch_ms: int
    end_epoch_ms: Optional[int] = None
    early_arrival_minutes: float = DEFAULT_EARLY_ARRIVAL_MINUTES

    def __post_init__(self) -> None:
        # None, negative or non-finite means no early arrival.
        early = self.early_arrival_minutes
        if not isinstance(early, (int, float)) or not math.isfinite(early) or early <= 0:
            object.__setattr__(self, "early_arrival_minutes", 0)


@dataclass(frozen=True)
class SessionSchedule:
    """Lịch của một buổi học, dùng để phân loại upcoming/live/past."""

    start_epoch_ms: int
    end_epoch_ms: int
    is_cancelled: bool = False
    is_completed: bool = False
