from __future__ import annotations


def format_distance(meters: float) -> str:
    """Render a distance for messages: ``"450 m"`` below 1 km, ``"1.25 km"`` above."""
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.2f} km"
