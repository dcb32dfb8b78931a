from __future__ import annotations

import math
from dataclasses import dataclass

from ..common.time_utils import minutes_to_ms
from ..core.constants import DEFAULT_SESSION_TIMEZONE, MS_PER_MINUTE
from ..core.exceptions import WindowClosed, WindowNotOpenYet
from .model import SessionTimeWindow


@dataclass(frozen=True)
class TimeWindowCheck:
    passed: bool = True


def effective_start_epoch_ms(window: SessionTimeWindow) -> int:
    return window.start_epoch_ms - minutes_to_ms(window.early_arrival_minutes)


def check_time_window(
    window: SessionTimeWindow,
    now_epoch_ms: int,
    *,
    tz: str = DEFAULT_SESSION_TIMEZONE,
) -> TimeWindowCheck:
    """Raise unless ``now`` is inside ``[start - early arrival, end]``.

    The end bound is inclusive; a window without an end never closes.
    ``tz`` is the session timezone used to render the closing time.
    """
    effective_start = effective_start_epoch_ms(window)
    if now_epoch_ms < effective_start:
        minutes = math.ceil((effective_start - now_epoch_ms) / MS_PER_MINUTE)
        raise WindowNotOpenYet(minutes_until_open=minutes)

    if window.end_epoch_ms is not None and now_epoch_ms > window.end_epoch_ms:
        raise WindowClosed(closed_at_epoch_ms=window.end_epoch_ms, tz=tz)

    return TimeWindowCheck(passed=True)
