from __future__ import annotations

import math
import time as _time
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def now_epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return int(_time.time() * 1000)


def to_epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        raise ValidationError("datetime must be timezone-aware")
    return int(value.timestamp() * 1000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into date."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_hhmm(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time (expected HH:MM): {value!r}") from None


def parse_timestamp(value: Union[int, float, str], *, field_name: str = "timestamp") -> int:
    """Accept epoch milliseconds or an ISO-8601 string with offset; return epoch ms."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValidationError(f"{field_name} is invalid")
        return int(value)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"{field_name} is invalid") from None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return to_epoch_ms(parsed)
    raise ValidationError(f"{field_name} is invalid")


def local_epoch_ms(day: date, wall_clock: time, tz: str, *, day_offset: int = 0) -> int:
    """Epoch ms of ``wall_clock`` on ``day`` (+ ``day_offset`` days) in timezone ``tz``."""
    local = datetime.combine(day + timedelta(days=day_offset), wall_clock, tzinfo=ZoneInfo(tz))
    return to_epoch_ms(local)


def minutes_to_ms(minutes: Optional[float]) -> int:
    return int((minutes or 0) * 60 * 1000)
