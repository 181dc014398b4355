"""Structural validation of GPS samples and accuracy tiers.

Checks run in a fixed order and stop at the first failure so the reported
error is deterministic: latitude, longitude, accuracy, speed, heading.
"""

from __future__ import annotations

from typing import Any

from .errors import ErrorKind
from .geometry import is_valid_latitude, is_valid_longitude
from .models import GpsAccuracy, LocationPoint
from .results import ValidationResult

MAX_HEADING = 360.0

VALID_GPS_ACCURACIES = frozenset(level.value for level in GpsAccuracy)


def validate_location_point(location: LocationPoint) -> ValidationResult:
    """Validate every field of ``location`` and describe the first failure."""

    if not is_valid_latitude(location.latitude):
        return ValidationResult.fail(
            ErrorKind.LATITUDE_OUT_OF_RANGE,
            f"Invalid latitude: {location.latitude}. Must be between -90 and 90.",
            "latitude",
        )
    if not is_valid_longitude(location.longitude):
        return ValidationResult.fail(
            ErrorKind.LONGITUDE_OUT_OF_RANGE,
            f"Invalid longitude: {location.longitude}. Must be between -180 and 180.",
            "longitude",
        )
    if not location.accuracy >= 0:
        return ValidationResult.fail(
            ErrorKind.NEGATIVE_ACCURACY,
            f"Invalid accuracy: {location.accuracy}. Must be non-negative.",
            "accuracy",
        )
    if location.speed is not None and not location.speed >= 0:
        return ValidationResult.fail(
            ErrorKind.NEGATIVE_SPEED,
            f"Invalid speed: {location.speed}. Must be non-negative or null.",
            "speed",
        )
    if location.heading is not None and not 0 <= location.heading <= MAX_HEADING:
        return ValidationResult.fail(
            ErrorKind.INVALID_HEADING,
            f"Invalid heading: {location.heading}. Must be between 0 and 360 or null.",
            "heading",
        )
    return ValidationResult.ok()


def is_valid_location_point(location: LocationPoint) -> bool:
    return validate_location_point(location).is_valid


def is_valid_gps_accuracy(level: Any) -> bool:
    """Return True when ``level`` names one of the :class:`GpsAccuracy` tiers."""

    if isinstance(level, GpsAccuracy):
        return True
    return isinstance(level, str) and level in VALID_GPS_ACCURACIES


def validate_gps_accuracy(level: Any) -> ValidationResult:
    if is_valid_gps_accuracy(level):
        return ValidationResult.ok()
    allowed = ", ".join(item.value for item in GpsAccuracy)
    return ValidationResult.fail(
        ErrorKind.INVALID_GPS_ACCURACY_LEVEL,
        f"Invalid GPS accuracy: {level}. Must be one of: {allowed}.",
        "accuracy",
    )
