"""Example: call the eligibility engine directly (no Flask).

Controllers are a thin layer; every decision lives in the service/engine.
"""

import importlib

from config import get_settings_module

from src.attendance_eligibility.attendance_eligibility.container import build_container
from src.attendance_eligibility.attendance_eligibility.core.exceptions import EligibilityError
from src.attendance_eligibility.attendance_eligibility.geo.model import Coordinate, LocationSample, SessionGeofence


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings={"max_accuracy_meters": settings.MAX_ACCURACY_METERS})

    fence = SessionGeofence(coordinate=Coordinate(19.9975, 73.7898), radius_meters=100)
    for accuracy in (20, 45):
        sample = LocationSample(
            coordinate=Coordinate(19.9980, 73.7900),
            accuracy_meters=accuracy,
            captured_at_epoch_ms=0,
        )
        try:
            result = container.eligibility_service.validate(fence, None, sample)
            print(result.to_dict())
        except EligibilityError as e:
            print(e.to_dict())


if __name__ == "__main__":
    main()
