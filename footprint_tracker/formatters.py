"""Human-readable distance, speed and duration strings (English units)."""

from __future__ import annotations

from .checks import require_finite, require_non_negative


def _trim(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_distance(distance_m: float) -> str:
    """Format metres as ``"250 m"`` or, from 1 km up, ``"1.5 km"``."""

    require_finite(distance_m, "distanceInMeters", "Distance")
    require_non_negative(distance_m, "distanceInMeters", "Distance")
    if distance_m < 1000:
        return f"{_trim(distance_m)} m"
    return f"{_trim(round(distance_m / 1000 * 10) / 10)} km"


def format_speed(speed_kmh: float) -> str:
    require_finite(speed_kmh, "speedInKmh", "Speed")
    require_non_negative(speed_kmh, "speedInKmh", "Speed")
    return f"{_trim(round(speed_kmh * 10) / 10)} km/h"


def format_duration(seconds: float) -> str:
    """Format seconds as ``Xh Ym Zs``, omitting zero parts (``"0s"`` for zero)."""

    require_finite(seconds, "durationInSeconds", "Duration")
    require_non_negative(seconds, "durationInSeconds", "Duration")
    if seconds == 0:
        return "0s"
    hours, rest = divmod(seconds, 3600)
    mins, secs = divmod(rest, 60)
    parts = []
    if hours > 0:
        parts.append(f"{int(hours)}h")
    if mins > 0:
        parts.append(f"{int(mins)}m")
    if secs > 0:
        parts.append(f"{_trim(secs)}s")
    return " ".join(parts)
