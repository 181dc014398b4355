"""Central error types used across the application."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error codes attached to every raised or reported failure."""

    INVALID_TYPE = "INVALID_TYPE"
    INVALID_NUMBER = "INVALID_VALUE"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    NON_POSITIVE_VALUE = "ZERO_OR_NEGATIVE_VALUE"
    LATITUDE_OUT_OF_RANGE = "LOCATION.LATITUDE_OUT_OF_RANGE"
    LONGITUDE_OUT_OF_RANGE = "LOCATION.LONGITUDE_OUT_OF_RANGE"
    NEGATIVE_ACCURACY = "LOCATION.NEGATIVE_ACCURACY"
    NEGATIVE_SPEED = "LOCATION.NEGATIVE_SPEED"
    INVALID_HEADING = "LOCATION.INVALID_HEADING"
    IDENTICAL_POINTS = "LOCATION.IDENTICAL_POINTS"
    INVALID_GPS_ACCURACY_LEVEL = "LOCATION.INVALID_GPS_ACCURACY"
    INVALID_ROUTE_NAME = "ROUTE.INVALID_NAME"
    NOT_INITIALIZED = "STORAGE.NOT_INITIALIZED"
    LOCATION_UNAVAILABLE = "LOCATION_SERVICE.LOCATION_UNAVAILABLE"
    SERVICE_UNAVAILABLE = "LOCATION_SERVICE.SERVICE_UNAVAILABLE"
    PERMISSION_DENIED = "LOCATION_SERVICE.PERMISSION_DENIED"
    CONFIGURATION_ERROR = "LOCATION_SERVICE.CONFIGURATION_ERROR"


class FootprintError(RuntimeError):
    """Base error carrying an :class:`ErrorKind` and the offending field name."""

    def __init__(
        self, kind: ErrorKind, message: str, field: str | None = None
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.message = message


class ValidationError(FootprintError):
    """Raised for generic numeric or type checks (NaN, negative, zero)."""


class LocationError(FootprintError):
    """Raised when coordinates or GPS sample fields are invalid."""


class StorageNotInitializedError(FootprintError):
    """Raised when the footprint store is used before ``initialize``."""

    def __init__(self, message: str = "Database not initialized") -> None:
        super().__init__(ErrorKind.NOT_INITIALIZED, message)


class LocationServiceError(FootprintError):
    """Reported by the location service for provider or permission failures."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(kind, message)
        self.cause = cause


_LOCATION_KINDS = {
    ErrorKind.LATITUDE_OUT_OF_RANGE,
    ErrorKind.LONGITUDE_OUT_OF_RANGE,
    ErrorKind.NEGATIVE_ACCURACY,
    ErrorKind.NEGATIVE_SPEED,
    ErrorKind.INVALID_HEADING,
    ErrorKind.IDENTICAL_POINTS,
    ErrorKind.INVALID_GPS_ACCURACY_LEVEL,
}


def error_class_for(kind: ErrorKind) -> type[FootprintError]:
    """Return the exception class used to raise ``kind``."""

    if kind in _LOCATION_KINDS:
        return LocationError
    return ValidationError


__all__ = [
    "ErrorKind",
    "FootprintError",
    "ValidationError",
    "LocationError",
    "StorageNotInitializedError",
    "LocationServiceError",
    "error_class_for",
]
