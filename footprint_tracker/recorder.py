"""Application-level workflow: record a walk, save it, review and export routes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from . import config
from .catalog import RouteCatalog
from .errors import ErrorKind, FootprintError, ValidationError
from .export import PathInput, write_csv
from .location import LocationService, LocationServiceConfig
from .models import LocationPoint, Route
from .session import CollectionSession
from .stats import RouteSummary, summarize_route
from .storage import FootprintStorage
from .validation import validate_location_point

LOGGER = logging.getLogger(__name__)


def validate_route_name(title: Optional[str]) -> str:
    """Return ``title`` unchanged, raising for empty or blank titles."""

    if title is None or not title.strip():
        raise ValidationError(
            ErrorKind.INVALID_ROUTE_NAME,
            "Invalid route data: name is required",
            "title",
        )
    return title


def default_location_config() -> LocationServiceConfig:
    return LocationServiceConfig(
        accuracy=config.DEFAULT_GPS_ACCURACY,
        enable_background=config.LOCATION_ENABLE_BACKGROUND,
        distance_interval=config.LOCATION_DISTANCE_INTERVAL_M,
        time_interval=config.LOCATION_TIME_INTERVAL_MS,
    )


class FootprintRecorder:
    """Owns the shared session, catalog and storage for one application.

    When a :class:`LocationService` is supplied its fixes are routed to
    :meth:`on_location_update`; otherwise the host calls that method itself.
    """

    def __init__(
        self,
        session: CollectionSession,
        storage: FootprintStorage,
        catalog: RouteCatalog,
        location_service: LocationService | None = None,
    ) -> None:
        self.session = session
        self.storage = storage
        self.catalog = catalog
        self.location_service = location_service
        self.last_error: Optional[FootprintError] = None
        self.rejected_samples = 0

    # -- collection ---------------------------------------------------------
    def start_collection(
        self, location_config: LocationServiceConfig | None = None
    ) -> bool:
        """Start a fresh session and, when wired, the location provider."""

        self.last_error = None
        self.rejected_samples = 0
        self.session.start()
        if self.location_service is None:
            return True
        started = self.location_service.start_tracking(
            location_config or default_location_config()
        )
        if not started:
            self.session.reset()
        return started

    def on_location_update(self, point: LocationPoint) -> bool:
        """Validate ``point`` and append it to the session; False if rejected."""

        issue = validate_location_point(point).issue
        if issue is None:
            self.session.add_sample(point)
            return True
        self.rejected_samples += 1
        self.last_error = issue.to_error()
        LOGGER.warning("Rejected GPS sample: %s", issue.message)
        return False

    def on_location_error(self, error: FootprintError) -> None:
        self.last_error = error

    def stop_collection(self, title: str) -> int:
        """Stop recording and save the collected fixes under ``title``.

        Returns the number of rows written (0 when nothing was collected).
        The session keeps its samples until the save succeeds, so a failed
        save can be retried.
        """

        validate_route_name(title)
        if self.location_service is not None:
            self.location_service.stop_tracking()
        samples = self.session.samples
        if not samples:
            self.session.stop()
            LOGGER.info("No GPS samples collected; nothing saved for %r", title)
            return 0
        written = self.storage.create_footprint(title, samples)
        self.session.stop()
        self._refresh_title(title)
        return written

    def discard_collection(self) -> None:
        if self.location_service is not None:
            self.location_service.stop_tracking()
        self.session.reset()

    # -- saved routes -------------------------------------------------------
    def load_routes(self) -> List[Route]:
        """Rebuild the catalog from storage and return it newest first."""

        routes = self.storage.fetch_footprints()
        self.catalog.clear()
        for route in routes:
            self.catalog.add_route(route)
        LOGGER.info("Loaded %d routes", self.catalog.get_route_count())
        return list(self.catalog.get_all_routes())

    def route_details(self, title: str) -> List[LocationPoint]:
        routes = self.storage.fetch_footprints_by_title(title)
        return list(routes[0].location_points) if routes else []

    def route_summary(self, title: str) -> Optional[RouteSummary]:
        """Distance, duration and speeds of the route saved as ``title``."""

        routes = self.storage.fetch_footprints_by_title(title)
        return summarize_route(routes[0]) if routes else None

    def delete_route(self, title: str) -> bool:
        validate_route_name(title)
        removed = self.storage.delete(title)
        in_catalog = self.catalog.delete_route_by_title(title)
        return removed > 0 or in_catalog

    def route_count(self) -> int:
        return self.storage.count_footprints()

    def export_routes(
        self, title: str | None = None, directory: PathInput | None = None
    ) -> Path:
        """Write the CSV for one title (or every saved route) and return its path."""

        if title is None:
            routes = self.storage.fetch_footprints()
        else:
            routes = self.storage.fetch_footprints_by_title(title)
            if not routes:
                raise ValidationError(
                    ErrorKind.INVALID_ROUTE_NAME,
                    "No route found with the specified title",
                    "title",
                )
        return write_csv(routes, directory)

    def _refresh_title(self, title: str) -> None:
        self.catalog.delete_route_by_title(title)
        for route in self.storage.fetch_footprints_by_title(title):
            self.catalog.add_route(route)
