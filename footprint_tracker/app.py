"""Wiring for a running application: one session, catalog and store, shared."""

from __future__ import annotations

import logging

from .catalog import create_route_catalog
from .location import LocationProvider, LocationService, LocationServiceEvents
from .recorder import FootprintRecorder
from .session import create_collection_session
from .storage import FootprintStorage


def setup_logging(level: int = logging.INFO) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def build_recorder(
    database_url: str | None = None,
    provider: LocationProvider | None = None,
) -> FootprintRecorder:
    """Create and initialise the application's single recorder."""

    storage = FootprintStorage(database_url)
    storage.initialize()
    location_service = LocationService(provider) if provider is not None else None
    recorder = FootprintRecorder(
        session=create_collection_session(),
        storage=storage,
        catalog=create_route_catalog(),
        location_service=location_service,
    )
    if location_service is not None:
        location_service.set_event_handlers(
            LocationServiceEvents(
                on_location_update=recorder.on_location_update,
                on_error=recorder.on_location_error,
            )
        )
    recorder.load_routes()
    return recorder
