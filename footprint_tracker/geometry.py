"""Great-circle distance, bearing and speed helpers for GPS coordinates.

All functions are pure and deterministic. Inputs are anything exposing
``latitude``/``longitude`` (``LocationPoint``, ``Coordinate``) or a mapping
with those keys. Invalid inputs raise a :class:`~footprint_tracker.errors.FootprintError`
subclass carrying the offending field name; nothing is clamped.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, Optional, Tuple

from .errors import ErrorKind, LocationError, ValidationError
from .results import ValidationResult
from .checks import require_finite, require_non_negative, require_positive

# Mean Earth radius (IUGG) in metres.
EARTH_RADIUS_M = 6371008.8

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0

# Absolute tolerance (degrees) under which two points are considered the same.
POINT_EPSILON = 1e-10


def is_valid_latitude(latitude: float) -> bool:
    return abs(latitude) <= MAX_LATITUDE


def is_valid_longitude(longitude: float) -> bool:
    return abs(longitude) <= MAX_LONGITUDE


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    return is_valid_latitude(latitude) and is_valid_longitude(longitude)


def _read_coordinates(point: Any) -> Optional[Tuple[Any, Any]]:
    if point is None:
        return None
    if isinstance(point, Mapping):
        if "latitude" not in point or "longitude" not in point:
            return None
        return point["latitude"], point["longitude"]
    try:
        return point.latitude, point.longitude
    except AttributeError:
        return None


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_coordinate_point(point: Any, label: str) -> ValidationResult:
    """Check that ``point`` is a finite, in-range latitude/longitude pair.

    ``label`` names the argument in the reported field (``"from.latitude"``).
    """

    coords = _read_coordinates(point)
    if coords is None or not all(_is_number(value) for value in coords):
        return ValidationResult.fail(
            ErrorKind.INVALID_TYPE,
            f"{label} must be a valid coordinate point",
            label,
        )
    latitude, longitude = coords
    if not math.isfinite(latitude):
        return ValidationResult.fail(
            ErrorKind.INVALID_NUMBER,
            f"{label}.latitude must be a valid finite number",
            f"{label}.latitude",
        )
    if not math.isfinite(longitude):
        return ValidationResult.fail(
            ErrorKind.INVALID_NUMBER,
            f"{label}.longitude must be a valid finite number",
            f"{label}.longitude",
        )
    if not is_valid_latitude(latitude):
        return ValidationResult.fail(
            ErrorKind.LATITUDE_OUT_OF_RANGE,
            f"Invalid latitude: {latitude}. Must be between -90 and 90.",
            f"{label}.latitude",
        )
    if not is_valid_longitude(longitude):
        return ValidationResult.fail(
            ErrorKind.LONGITUDE_OUT_OF_RANGE,
            f"Invalid longitude: {longitude}. Must be between -180 and 180.",
            f"{label}.longitude",
        )
    return ValidationResult.ok()


def _require_coordinates(point: Any, label: str) -> Tuple[Any, Any]:
    coords = _read_coordinates(point)
    if coords is None:
        raise ValidationError(
            ErrorKind.INVALID_TYPE,
            f"{label} must be a valid coordinate point",
            label,
        )
    return coords


def points_equal(a: Any, b: Any) -> bool:
    """Return True when both axes differ by less than :data:`POINT_EPSILON`.

    Raises :class:`ValidationError` (``INVALID_TYPE``) for non-point inputs.
    """

    lat1, lon1 = _require_coordinates(a, "a")
    lat2, lon2 = _require_coordinates(b, "b")
    return _coords_equal(lat1, lon1, lat2, lon2)


def _as_coordinate(point: Any, label: str) -> Tuple[float, float]:
    validate_coordinate_point(point, label).raise_if_invalid()
    latitude, longitude = _read_coordinates(point)  # type: ignore[misc]
    return float(latitude), float(longitude)


def _round6(value: float) -> float:
    return round(value * 1_000_000) / 1_000_000


def distance(from_point: Any, to_point: Any) -> float:
    """Return the haversine distance in metres between two points."""

    lat1, lon1 = _as_coordinate(from_point, "from")
    lat2, lon2 = _as_coordinate(to_point, "to")
    if _coords_equal(lat1, lon1, lat2, lon2):
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    sin_dphi = math.sin(math.radians(lat2 - lat1) / 2)
    sin_dlmb = math.sin(math.radians(lon2 - lon1) / 2)
    a = sin_dphi * sin_dphi + math.cos(phi1) * math.cos(phi2) * sin_dlmb * sin_dlmb
    central_angle = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return max(0.0, EARTH_RADIUS_M * central_angle)


def bearing(from_point: Any, to_point: Any) -> float:
    """Return the initial bearing in degrees ``[0, 360)`` from one point to another."""

    lat1, lon1 = _as_coordinate(from_point, "from")
    lat2, lon2 = _as_coordinate(to_point, "to")
    if _coords_equal(lat1, lon1, lat2, lon2):
        raise LocationError(
            ErrorKind.IDENTICAL_POINTS,
            "Cannot calculate direction for identical points",
        )

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlmb = math.radians(lon2 - lon1)
    y = math.sin(dlmb) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        dlmb
    )
    normalized = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
    # Rounding can push 359.9999999 up to 360.0.
    return _round6(normalized) % 360.0


def speed_kmh(distance_m: float, seconds: float) -> float:
    """Convert a distance (m) covered in ``seconds`` into km/h."""

    require_finite(distance_m, "distanceInMeters", "Distance")
    require_finite(seconds, "timeInSeconds", "Time")
    require_non_negative(distance_m, "distanceInMeters", "Distance")
    require_positive(seconds, "timeInSeconds", "Time")
    return _round6(distance_m / seconds * 3600 / 1000)


def _coords_equal(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    return abs(lat1 - lat2) < POINT_EPSILON and abs(lon1 - lon2) < POINT_EPSILON

