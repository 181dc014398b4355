"""Route summary metrics (distance, duration, speeds) computed with numpy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .formatters import format_distance, format_duration, format_speed
from .geometry import EARTH_RADIUS_M, speed_kmh
from .models import LocationPoint, Route

MetricArray = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class RouteSummary:
    """Totals for a single route."""

    distance_m: float
    duration_s: float
    average_speed_kmh: Optional[float]
    max_recorded_speed: Optional[float]


def segment_distances(points: Sequence[LocationPoint]) -> MetricArray:
    """Haversine length (m) of every consecutive pair of points."""

    if len(points) < 2:
        return np.zeros(0, dtype=float)
    lats = np.radians(np.asarray([p.latitude for p in points], dtype=float))
    lons = np.radians(np.asarray([p.longitude for p in points], dtype=float))
    dphi = np.diff(lats)
    dlmb = np.diff(lons)
    a = (
        np.sin(dphi / 2) ** 2
        + np.cos(lats[:-1]) * np.cos(lats[1:]) * np.sin(dlmb / 2) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def cumulative_distances(points: Sequence[LocationPoint]) -> MetricArray:
    """Distance travelled (m) at each point, starting at 0."""

    if not points:
        return np.zeros(0, dtype=float)
    return np.concatenate(([0.0], np.cumsum(segment_distances(points))))


def summarize_route(route: Route) -> RouteSummary:
    points = route.location_points
    total = float(cumulative_distances(points)[-1]) if points else 0.0
    duration = (route.end_time - route.start_time).total_seconds()
    average = speed_kmh(total, duration) if duration > 0 else None
    speeds = [p.speed for p in points if p.speed is not None]
    max_speed = float(np.max(speeds)) if speeds else None
    return RouteSummary(
        distance_m=total,
        duration_s=duration,
        average_speed_kmh=average,
        max_recorded_speed=max_speed,
    )


def describe_route(summary: RouteSummary) -> Dict[str, str]:
    """Display strings for ``summary``; speeds that are unknown read ``"n/a"``.

    Recorded speeds are m/s and are shown in km/h like the average.
    """

    average = summary.average_speed_kmh
    top = summary.max_recorded_speed
    return {
        "distance": format_distance(summary.distance_m),
        "duration": format_duration(summary.duration_s),
        "average_speed": format_speed(average) if average is not None else "n/a",
        "max_speed": format_speed(top * 3.6) if top is not None else "n/a",
    }
