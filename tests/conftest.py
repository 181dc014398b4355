"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable factories for GPS samples,
persisted rows, routes, an in-memory store and a scripted location provider.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Mapping

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from footprint_tracker.models import FootprintRow, LocationPoint, Route
from footprint_tracker.storage import FootprintStorage

T0 = datetime(2025, 1, 1, 8, 0, 0, tzinfo=timezone.utc)

TOKYO_STATION = (35.6812, 139.7671)
SHIBUYA_STATION = (35.6580, 139.7016)
UENO_STATION = (35.7138, 139.7774)


# --- Factory helpers -------------------------------------------------
def make_point(
    latitude: float = TOKYO_STATION[0],
    longitude: float = TOKYO_STATION[1],
    seconds: float = 0,
    accuracy: float = 5.0,
    speed: float | None = 1.2,
    heading: float | None = 90.0,
) -> LocationPoint:
    return LocationPoint(
        latitude=latitude,
        longitude=longitude,
        timestamp=T0 + timedelta(seconds=seconds),
        accuracy=accuracy,
        speed=speed,
        heading=heading,
    )


def make_row(row_id: int, title: str, seconds: float, **overrides: Any) -> FootprintRow:
    values = dict(
        id=row_id,
        title=title,
        latitude=TOKYO_STATION[0],
        longitude=TOKYO_STATION[1],
        accuracy=5.0,
        speed=1.0,
        direction=45.0,
        timestamp=T0 + timedelta(seconds=seconds),
    )
    values.update(overrides)
    return FootprintRow(**values)


def make_route(name: str, start_offset_s: float, route_id: str | None = None) -> Route:
    points = (
        make_point(seconds=start_offset_s),
        make_point(*SHIBUYA_STATION, seconds=start_offset_s + 600),
    )
    return Route(
        id=route_id or f"{name.lower().replace(' ', '-')}-{int(start_offset_s)}",
        name=name,
        location_points=points,
        start_time=points[0].timestamp,
        end_time=points[-1].timestamp,
        point_count=len(points),
    )


def make_payload(
    latitude: Any = TOKYO_STATION[0],
    longitude: Any = TOKYO_STATION[1],
    timestamp: Any = 1_735_718_400_000,
    **coords: Any,
) -> dict:
    return {
        "coords": {"latitude": latitude, "longitude": longitude, **coords},
        "timestamp": timestamp,
    }


class FakeSubscription:
    def __init__(self) -> None:
        self.removed = False

    def remove(self) -> None:
        self.removed = True


class FakeProvider:
    """Scripted location provider; ``push`` delivers a payload to the watcher."""

    def __init__(
        self,
        services_enabled: bool = True,
        foreground: str = "granted",
        background: str = "granted",
        current: Mapping[str, Any] | None = None,
    ) -> None:
        self.services_enabled = services_enabled
        self.foreground = foreground
        self.background = background
        self.current = current
        self.watch_options: Mapping[str, Any] | None = None
        self.callback: Callable[[Any], None] | None = None
        self.subscription: FakeSubscription | None = None
        self.background_requests = 0

    def has_services_enabled(self) -> bool:
        return self.services_enabled

    def request_foreground_permission(self) -> str:
        return self.foreground

    def request_background_permission(self) -> str:
        self.background_requests += 1
        return self.background

    def watch_position(self, options, callback):
        self.watch_options = options
        self.callback = callback
        self.subscription = FakeSubscription()
        return self.subscription

    def get_current_position(self, options):
        self.watch_options = options
        return self.current

    def push(self, payload: Any) -> None:
        assert self.callback is not None, "watch_position was never called"
        self.callback(payload)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def storage():
    store = FootprintStorage("sqlite://")
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def walk_points() -> List[LocationPoint]:
    return [
        make_point(*TOKYO_STATION, seconds=0, speed=1.0),
        make_point(*UENO_STATION, seconds=300, speed=1.5),
        make_point(*SHIBUYA_STATION, seconds=900, speed=None, heading=None),
    ]


@pytest.fixture
def point_factory():
    return make_point


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def route_factory():
    return make_route


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def provider_factory():
    return FakeProvider
