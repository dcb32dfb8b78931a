"""Session status classification.

Status is never stored: it is recomputed from the schedule and the current
instant on every query. Comparisons are done on epoch milliseconds only, so
an overnight session (end on the next calendar day) needs no special case
once its schedule has been built.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.time_utils import local_epoch_ms, parse_hhmm
from ..core.constants import (
    DEFAULT_SESSION_END_TIME,
    DEFAULT_SESSION_START_TIME,
    DEFAULT_SESSION_TIMEZONE,
    SESSION_BUFFER_MS,
)
from ..core.enums import SessionStatus
from .model import SessionSchedule


def cutoff_epoch_ms(schedule: SessionSchedule) -> int:
    """Last instant at which the session still counts as live."""
    return schedule.end_epoch_ms + SESSION_BUFFER_MS


def classify_session_status(schedule: SessionSchedule, now_epoch_ms: int) -> SessionStatus:
    if schedule.is_cancelled or schedule.is_completed:
        return SessionStatus.PAST

    if now_epoch_ms < schedule.start_epoch_ms:
        return SessionStatus.UPCOMING
    if now_epoch_ms <= cutoff_epoch_ms(schedule):
        return SessionStatus.LIVE
    return SessionStatus.PAST


def is_session_live(schedule: SessionSchedule, now_epoch_ms: int) -> bool:
    return classify_session_status(schedule, now_epoch_ms) == SessionStatus.LIVE


def is_session_past(schedule: SessionSchedule, now_epoch_ms: int) -> bool:
    return classify_session_status(schedule, now_epoch_ms) == SessionStatus.PAST


def is_session_upcoming(schedule: SessionSchedule, now_epoch_ms: int) -> bool:
    return classify_session_status(schedule, now_epoch_ms) == SessionStatus.UPCOMING


def schedule_from_calendar(
    session_date: date,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    *,
    is_cancelled: bool = False,
    is_completed: bool = False,
    tz: str = DEFAULT_SESSION_TIMEZONE,
) -> SessionSchedule:
    """Build a schedule from a session's date and ``HH:MM`` times in ``tz``.

    Missing start means start of day, missing end means 23:59. When the end
    time is earlier than the start time the session ends the next day.
    """
    start_clock = parse_hhmm(start_time or DEFAULT_SESSION_START_TIME)
    end_clock = parse_hhmm(end_time or DEFAULT_SESSION_END_TIME)

    day_offset = 1 if end_clock < start_clock else 0

    return SessionSchedule(
        start_epoch_ms=local_epoch_ms(session_date, start_clock, tz),
        end_epoch_ms=local_epoch_ms(session_date, end_clock, tz, day_offset=day_offset),
        is_cancelled=bool(is_cancelled),
        is_completed=bool(is_completed),
    )
