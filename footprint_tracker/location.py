"""Adapter between a platform location provider and the collection session.

The provider (device GPS, simulator, replay file...) is injected and only has
to satisfy :class:`LocationProvider`. Raw payloads are validated and turned
into :class:`LocationPoint` values here so nothing untyped reaches the core.
Failures are reported through the ``on_error`` callback, never raised from a
provider callback.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from .errors import ErrorKind, LocationServiceError
from .geometry import is_valid_coordinate
from .models import GpsAccuracy, LocationPoint
from .utils import from_epoch_millis
from .validation import is_valid_gps_accuracy

LOGGER = logging.getLogger(__name__)

# Provider accuracy levels, most to least precise.
PROVIDER_ACCURACY_LEVELS: Dict[GpsAccuracy, int] = {
    GpsAccuracy.BEST_FOR_NAVIGATION: 1,
    GpsAccuracy.BEST: 2,
    GpsAccuracy.NEAREST_TEN_METERS: 3,
    GpsAccuracy.HUNDRED_METERS: 4,
    GpsAccuracy.KILOMETER: 5,
    GpsAccuracy.THREE_KILOMETERS: 6,
}

OPTIONAL_COORD_FIELDS = ("accuracy", "speed", "heading")


class LocationServiceStatus(str, Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    ERROR = "error"


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class Subscription(Protocol):
    def remove(self) -> None: ...


class LocationProvider(Protocol):
    """What the service needs from a platform location API."""

    def has_services_enabled(self) -> bool: ...

    def request_foreground_permission(self) -> str: ...

    def request_background_permission(self) -> str: ...

    def watch_position(
        self, options: Mapping[str, Any], callback: Callable[[Any], None]
    ) -> Subscription: ...

    def get_current_position(self, options: Mapping[str, Any]) -> Any: ...


@dataclass(slots=True)
class LocationServiceConfig:
    accuracy: GpsAccuracy | str = GpsAccuracy.BEST
    enable_background: bool = False
    # Metres between updates.
    distance_interval: Optional[float] = None
    # Milliseconds between updates.
    time_interval: Optional[float] = None


@dataclass(slots=True)
class LocationServiceEvents:
    on_location_update: Callable[[LocationPoint], None] = lambda _point: None
    on_status_change: Callable[[LocationServiceStatus], None] = lambda _s: None
    on_error: Callable[[LocationServiceError], None] = lambda _err: None


@dataclass(slots=True)
class PermissionResult:
    foreground: PermissionStatus
    background: Optional[PermissionStatus] = None


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def validate_location_data(payload: Any) -> bool:
    """Return True for ``{coords: {latitude, longitude, ...}, timestamp}`` payloads
    with finite in-range coordinates, numeric (or absent) accuracy, speed and
    heading, and a positive epoch-millis timestamp."""

    if not isinstance(payload, Mapping):
        return False
    coords = payload.get("coords")
    if not isinstance(coords, Mapping):
        return False
    latitude = coords.get("latitude")
    longitude = coords.get("longitude")
    timestamp = payload.get("timestamp")
    if not (_is_number(latitude) and _is_number(longitude)):
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    if not is_valid_coordinate(latitude, longitude):
        return False
    for key in OPTIONAL_COORD_FIELDS:
        value = coords.get(key)
        if value is not None and not _is_number(value):
            return False
    return _is_number(timestamp) and math.isfinite(timestamp) and timestamp > 0


def transform_location_data(payload: Mapping[str, Any]) -> LocationPoint:
    """Map a validated provider payload to a :class:`LocationPoint`.

    A missing accuracy becomes ``0``; speed and heading pass through.
    """

    coords = payload["coords"]
    return LocationPoint(
        latitude=float(coords["latitude"]),
        longitude=float(coords["longitude"]),
        timestamp=from_epoch_millis(payload["timestamp"]),
        accuracy=float(coords.get("accuracy") or 0.0),
        speed=_optional_float(coords.get("speed")),
        heading=_optional_float(coords.get("heading")),
    )


def validate_config(config: Any) -> bool:
    if not isinstance(config, LocationServiceConfig):
        return False
    if not is_valid_gps_accuracy(config.accuracy):
        return False
    if not isinstance(config.enable_background, bool):
        return False
    for interval in (config.distance_interval, config.time_interval):
        if interval is not None and (not _is_number(interval) or interval < 0):
            return False
    return True


def _map_permission(status: Any) -> PermissionStatus:
    if status == PermissionStatus.GRANTED.value:
        return PermissionStatus.GRANTED
    if status == PermissionStatus.DENIED.value:
        return PermissionStatus.DENIED
    return PermissionStatus.UNDETERMINED


class LocationService:
    """Drive a :class:`LocationProvider` and forward validated fixes."""

    def __init__(
        self,
        provider: LocationProvider,
        events: LocationServiceEvents | None = None,
    ) -> None:
        self._provider = provider
        self._events = events or LocationServiceEvents()
        self._config: Optional[LocationServiceConfig] = None
        self._status = LocationServiceStatus.STOPPED
        self._subscription: Optional[Subscription] = None

    @property
    def status(self) -> LocationServiceStatus:
        return self._status

    @property
    def config(self) -> Optional[LocationServiceConfig]:
        return replace(self._config) if self._config is not None else None

    def set_event_handlers(self, events: LocationServiceEvents) -> None:
        self._events = events

    def provider_accuracy(self, accuracy: GpsAccuracy | str) -> int:
        return PROVIDER_ACCURACY_LEVELS[GpsAccuracy(accuracy)]

    def configure(self, config: LocationServiceConfig) -> bool:
        """Store ``config``; an invalid one is reported and leaves state as is."""

        if not validate_config(config):
            self._emit_error(
                ErrorKind.CONFIGURATION_ERROR,
                "Invalid location service configuration",
            )
            return False
        self._config = replace(config, accuracy=GpsAccuracy(config.accuracy))
        return True

    def request_permissions(self, enable_background: bool) -> PermissionResult:
        try:
            foreground = _map_permission(
                self._provider.request_foreground_permission()
            )
            result = PermissionResult(foreground=foreground)
            if enable_background and foreground is PermissionStatus.GRANTED:
                result.background = _map_permission(
                    self._provider.request_background_permission()
                )
            return result
        except Exception as exc:
            self._emit_error(
                ErrorKind.PERMISSION_DENIED,
                "Failed to request location permissions",
                exc,
            )
            return PermissionResult(
                foreground=PermissionStatus.DENIED,
                background=PermissionStatus.DENIED,
            )

    def check_location_services(self) -> bool:
        try:
            enabled = bool(self._provider.has_services_enabled())
        except Exception as exc:
            self._emit_error(
                ErrorKind.SERVICE_UNAVAILABLE,
                "Failed to check location services",
                exc,
            )
            return False
        if not enabled:
            self._emit_error(
                ErrorKind.SERVICE_UNAVAILABLE, "Location services are disabled"
            )
        return enabled

    def handle_location_update(self, payload: Any) -> None:
        if not validate_location_data(payload):
            self._emit_error(
                ErrorKind.LOCATION_UNAVAILABLE,
                "Invalid location data received",
            )
            return
        self._events.on_location_update(transform_location_data(payload))

    def get_current_location(self) -> Optional[LocationPoint]:
        """One-shot fix at the configured accuracy (``best`` when unconfigured)."""

        accuracy = self._config.accuracy if self._config else GpsAccuracy.BEST
        try:
            payload = self._provider.get_current_position(
                {"accuracy": self.provider_accuracy(accuracy)}
            )
        except Exception as exc:
            self._emit_error(
                ErrorKind.LOCATION_UNAVAILABLE, "Failed to get current location", exc
            )
            return None
        if validate_location_data(payload):
            return transform_location_data(payload)
        return None

    def start_tracking(self, config: LocationServiceConfig | None) -> bool:
        """Configure, check services and permissions, then watch positions.

        Returns True once the provider subscription is running.
        """

        if config is None:
            self._emit_error(
                ErrorKind.CONFIGURATION_ERROR,
                "Configuration required to start tracking",
            )
            return False
        if not self.configure(config):
            return False
        active = self._config
        if active is None:
            return False
        self._set_status(LocationServiceStatus.STARTING)

        if not self.check_location_services():
            self._set_status(LocationServiceStatus.ERROR)
            return False
        permissions = self.request_permissions(active.enable_background)
        if permissions.foreground is not PermissionStatus.GRANTED:
            self._set_status(LocationServiceStatus.ERROR)
            return False

        options = {
            "accuracy": self.provider_accuracy(active.accuracy),
            "distance_interval": active.distance_interval,
            "time_interval": active.time_interval,
        }
        try:
            self._subscription = self._provider.watch_position(
                options, self.handle_location_update
            )
        except Exception as exc:
            self._emit_error(
                ErrorKind.LOCATION_UNAVAILABLE,
                "Failed to start location tracking",
                exc,
            )
            self._set_status(LocationServiceStatus.ERROR)
            return False
        self._set_status(LocationServiceStatus.RUNNING)
        return True

    def stop_tracking(self) -> None:
        self._set_status(LocationServiceStatus.STOPPING)
        subscription, self._subscription = self._subscription, None
        try:
            if subscription is not None:
                subscription.remove()
        except Exception as exc:
            self._emit_error(
                ErrorKind.CONFIGURATION_ERROR,
                "Failed to stop location tracking",
                exc,
            )
            self._set_status(LocationServiceStatus.ERROR)
            return
        self._set_status(LocationServiceStatus.STOPPED)

    def _set_status(self, status: LocationServiceStatus) -> None:
        if status is not self._status:
            LOGGER.debug("Location service %s -> %s", self._status.value, status.value)
        self._status = status
        self._events.on_status_change(status)

    def _emit_error(
        self, kind: ErrorKind, message: str, cause: BaseException | None = None
    ) -> None:
        if cause is not None:
            LOGGER.warning("%s: %s", message, cause)
        else:
            LOGGER.warning(message)
        self._events.on_error(LocationServiceError(kind, message, cause))
