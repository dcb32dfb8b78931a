from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_MAX_ACCURACY_METERS, DEFAULT_SESSION_TIMEZONE
from .eligibility.service import EligibilityService


@dataclass(frozen=True)
class Container:
    eligibility_service: EligibilityService
    session_timezone: str


def build_container(*, settings: dict) -> Container:
    max_accuracy = settings.get("max_accuracy_meters", DEFAULT_MAX_ACCURACY_METERS)
    session_timezone = str(settings.get("session_timezone") or DEFAULT_SESSION_TIMEZONE)
    eligibility_service = EligibilityService(
        max_accuracy_meters=float(max_accuracy) if max_accuracy is not None else None,
        session_timezone=session_timezone,
    )

    return Container(
        eligibility_service=eligibility_service,
        session_timezone=session_timezone,
    )
