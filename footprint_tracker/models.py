from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class GpsAccuracy(str, Enum):
    """Accuracy tiers trading positional precision for power consumption."""

    BEST_FOR_NAVIGATION = "best-for-navigation"
    BEST = "best"
    NEAREST_TEN_METERS = "nearest-ten-meters"
    HUNDRED_METERS = "hundred-meters"
    KILOMETER = "kilometer"
    THREE_KILOMETERS = "three-kilometers"


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class LocationPoint:
    """A single GPS fix. Speed is in m/s, heading in degrees from true north."""

    latitude: float
    longitude: float
    timestamp: datetime
    accuracy: float
    speed: Optional[float] = None
    heading: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Route:
    """A saved route: every fix recorded under one title, oldest first."""

    id: str
    name: str
    location_points: Tuple[LocationPoint, ...]
    start_time: datetime
    end_time: datetime
    point_count: int


@dataclass(frozen=True, slots=True)
class FootprintRow:
    """One persisted footprint row as read back from storage."""

    id: int
    title: str
    latitude: float
    longitude: float
    accuracy: Optional[float]
    speed: Optional[float]
    direction: Optional[float]
    timestamp: datetime
