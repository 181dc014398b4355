"""GPS walking-route recorder: geometry, validation, sessions and saved routes."""

from .catalog import RouteCatalog, create_route_catalog
from .errors import (
    ErrorKind,
    FootprintError,
    LocationError,
    StorageNotInitializedError,
    ValidationError,
)
from .geometry import bearing, distance, points_equal, speed_kmh
from .models import Coordinate, GpsAccuracy, LocationPoint, Route
from .results import ValidationIssue, ValidationResult
from .session import CollectionSession, create_collection_session

__all__ = [
    "RouteCatalog",
    "create_route_catalog",
    "ErrorKind",
    "FootprintError",
    "LocationError",
    "StorageNotInitializedError",
    "ValidationError",
    "bearing",
    "distance",
    "points_equal",
    "speed_kmh",
    "Coordinate",
    "GpsAccuracy",
    "LocationPoint",
    "Route",
    "ValidationIssue",
    "ValidationResult",
    "CollectionSession",
    "create_collection_session",
]
