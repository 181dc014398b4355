"""Tests for the location provider adapter."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

import pytest

from footprint_tracker.errors import ErrorKind, LocationServiceError
from footprint_tracker.location import (
    LocationService,
    LocationServiceConfig,
    LocationServiceEvents,
    LocationServiceStatus,
    PermissionStatus,
    transform_location_data,
    validate_config,
    validate_location_data,
)
from footprint_tracker.models import GpsAccuracy, LocationPoint


class Recorder:
    def __init__(self) -> None:
        self.points: List[LocationPoint] = []
        self.statuses: List[LocationServiceStatus] = []
        self.errors: List[LocationServiceError] = []

    def events(self) -> LocationServiceEvents:
        return LocationServiceEvents(
            on_location_update=self.points.append,
            on_status_change=self.statuses.append,
            on_error=self.errors.append,
        )


@pytest.fixture
def seen() -> Recorder:
    return Recorder()


def test_validate_location_data(payload_factory) -> None:
    assert validate_location_data(payload_factory())
    assert not validate_location_data(None)
    assert not validate_location_data({"timestamp": 1})
    assert not validate_location_data(payload_factory(latitude=95))
    assert not validate_location_data(payload_factory(longitude=float("nan")))
    assert not validate_location_data(payload_factory(latitude="35.0"))
    assert not validate_location_data(payload_factory(timestamp=0))
    assert not validate_location_data(payload_factory(timestamp=-5))
    assert not validate_location_data(payload_factory(timestamp=None))


@pytest.mark.parametrize(
    "coords",
    [
        {"speed": "fast"},
        {"heading": {}},
        {"accuracy": "5"},
        {"speed": True},
    ],
)
def test_validate_location_data_rejects_non_numeric_optional_fields(
    payload_factory, coords
) -> None:
    assert not validate_location_data(payload_factory(**coords))


def test_bad_optional_fields_are_reported_not_raised(provider, seen, payload_factory) -> None:
    service = LocationService(provider, seen.events())
    service.handle_location_update(payload_factory(speed="fast", heading={}))
    assert seen.points == []
    assert [err.kind for err in seen.errors] == [ErrorKind.LOCATION_UNAVAILABLE]


def test_transform_location_data(payload_factory) -> None:
    point = transform_location_data(
        payload_factory(accuracy=8, speed=1.4, heading=180, timestamp=1_735_718_400_000)
    )
    assert point == LocationPoint(
        latitude=35.6812,
        longitude=139.7671,
        timestamp=datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc),
        accuracy=8.0,
        speed=1.4,
        heading=180.0,
    )


def test_transform_defaults_missing_accuracy(payload_factory) -> None:
    point = transform_location_data(payload_factory(speed=None, heading=None))
    assert point.accuracy == 0.0
    assert point.speed is None
    assert point.heading is None


def test_validate_config() -> None:
    assert validate_config(LocationServiceConfig())
    assert validate_config(LocationServiceConfig(accuracy="kilometer", time_interval=0))
    assert not validate_config(LocationServiceConfig(accuracy="ultra"))
    assert not validate_config(LocationServiceConfig(distance_interval=-1))
    assert not validate_config(LocationServiceConfig(enable_background="yes"))
    assert not validate_config({"accuracy": "best"})


def test_configure_rejects_invalid(provider, seen) -> None:
    service = LocationService(provider, seen.events())
    assert service.configure(LocationServiceConfig(accuracy="ultra")) is False
    assert service.config is None
    assert seen.errors[0].kind is ErrorKind.CONFIGURATION_ERROR


def test_configure_normalizes_accuracy(provider) -> None:
    service = LocationService(provider)
    service.configure(LocationServiceConfig(accuracy="hundred-meters"))
    assert service.config.accuracy is GpsAccuracy.HUNDRED_METERS
    assert service.provider_accuracy("hundred-meters") == 4
    assert service.provider_accuracy(GpsAccuracy.BEST_FOR_NAVIGATION) == 1


def test_start_tracking_runs_and_forwards_fixes(provider, seen, payload_factory) -> None:
    service = LocationService(provider, seen.events())
    config = LocationServiceConfig(
        accuracy=GpsAccuracy.NEAREST_TEN_METERS, distance_interval=5, time_interval=1000
    )
    assert service.start_tracking(config) is True
    assert service.status is LocationServiceStatus.RUNNING
    assert seen.statuses == [LocationServiceStatus.STARTING, LocationServiceStatus.RUNNING]
    assert provider.watch_options == {
        "accuracy": 3,
        "distance_interval": 5,
        "time_interval": 1000,
    }

    provider.push(payload_factory(speed=1.1))
    provider.push(payload_factory(latitude=120))
    assert len(seen.points) == 1
    assert seen.points[0].speed == 1.1
    assert seen.errors[0].kind is ErrorKind.LOCATION_UNAVAILABLE


def test_start_tracking_without_config(provider, seen) -> None:
    service = LocationService(provider, seen.events())
    assert service.start_tracking(None) is False
    assert seen.errors[0].kind is ErrorKind.CONFIGURATION_ERROR
    assert service.status is LocationServiceStatus.STOPPED


def test_start_tracking_services_disabled(provider_factory, seen) -> None:
    service = LocationService(provider_factory(services_enabled=False), seen.events())
    assert service.start_tracking(LocationServiceConfig()) is False
    assert service.status is LocationServiceStatus.ERROR
    assert seen.errors[0].kind is ErrorKind.SERVICE_UNAVAILABLE


def test_start_tracking_permission_denied(provider_factory, seen) -> None:
    provider = provider_factory(foreground="denied")
    service = LocationService(provider, seen.events())
    assert service.start_tracking(LocationServiceConfig()) is False
    assert service.status is LocationServiceStatus.ERROR
    assert provider.callback is None


def test_request_permissions_background_only_after_foreground(provider_factory, seen) -> None:
    provider = provider_factory(foreground="undetermined")
    service = LocationService(provider, seen.events())
    result = service.request_permissions(enable_background=True)
    assert result.foreground is PermissionStatus.UNDETERMINED
    assert result.background is None
    assert provider.background_requests == 0

    provider.foreground = "granted"
    provider.background = "denied"
    result = service.request_permissions(enable_background=True)
    assert result.background is PermissionStatus.DENIED


def test_request_permissions_provider_failure(provider, seen) -> None:
    def boom() -> str:
        raise RuntimeError("no permission api")

    provider.request_foreground_permission = boom
    service = LocationService(provider, seen.events())
    result = service.request_permissions(enable_background=False)
    assert result.foreground is PermissionStatus.DENIED
    assert seen.errors[0].kind is ErrorKind.PERMISSION_DENIED
    assert isinstance(seen.errors[0].cause, RuntimeError)


def test_stop_tracking_removes_subscription(provider, seen) -> None:
    service = LocationService(provider, seen.events())
    service.start_tracking(LocationServiceConfig())
    subscription = provider.subscription
    service.stop_tracking()
    assert subscription.removed
    assert service.status is LocationServiceStatus.STOPPED
    assert seen.statuses[-2:] == [
        LocationServiceStatus.STOPPING,
        LocationServiceStatus.STOPPED,
    ]


def test_get_current_location(provider_factory, payload_factory, seen) -> None:
    provider = provider_factory(current=payload_factory(accuracy=3))
    service = LocationService(provider, seen.events())
    point = service.get_current_location()
    assert point is not None and point.accuracy == 3.0
    assert provider.watch_options == {"accuracy": 2}

    provider.current = payload_factory(timestamp=0)
    assert service.get_current_location() is None
