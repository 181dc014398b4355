"""SQLAlchemy-backed persistence of recorded footprints.

Every GPS fix is one row of the ``footprints`` table, tagged with the route
title it was recorded under. Routes are never stored as such; they are
materialized from the rows on every fetch.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping

from sqlalchemy import (
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete as sql_delete,
    distinct,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.sql import Select

from .config import FOOTPRINT_DATABASE_ECHO, FOOTPRINT_DATABASE_URL
from .errors import StorageNotInitializedError
from .materialize import materialize_routes
from .models import FootprintRow, LocationPoint, Route
from .utils import parse_storage_timestamp, to_storage_timestamp

LOGGER = logging.getLogger(__name__)

METADATA = MetaData()

footprints_table = Table(
    "footprints",
    METADATA,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String, nullable=False, index=True),
    Column("latitude", Float, nullable=False),
    Column("longitude", Float, nullable=False),
    Column("accuracy", Float),
    Column("speed", Float),
    Column("direction", Float),
    Column("timestamp", String, nullable=False),
)


def _row_from_mapping(mapping: Mapping[str, Any]) -> FootprintRow:
    return FootprintRow(
        id=int(mapping["id"]),
        title=mapping["title"],
        latitude=float(mapping["latitude"]),
        longitude=float(mapping["longitude"]),
        accuracy=mapping["accuracy"],
        speed=mapping["speed"],
        direction=mapping["direction"],
        timestamp=parse_storage_timestamp(mapping["timestamp"]),
    )


def _point_to_values(title: str, point: LocationPoint) -> dict[str, Any]:
    return {
        "title": title,
        "latitude": point.latitude,
        "longitude": point.longitude,
        "accuracy": point.accuracy,
        "speed": point.speed,
        "direction": point.heading,
        "timestamp": to_storage_timestamp(point.timestamp),
    }


class FootprintStorage:
    """Footprint table access: insert, fetch as routes, delete, count."""

    def __init__(
        self, database_url: str | None = None, *, echo: bool | None = None
    ) -> None:
        self._database_url = database_url or FOOTPRINT_DATABASE_URL
        self._echo = FOOTPRINT_DATABASE_ECHO if echo is None else echo
        self._engine: Engine | None = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def initialize(self) -> None:
        """Open the database and create the footprints table if missing."""

        if self._engine is not None:
            return
        engine = create_engine(self._database_url, echo=self._echo)
        METADATA.create_all(engine)
        self._engine = engine
        LOGGER.info(
            "Footprint storage ready (%s)",
            engine.url.render_as_string(hide_password=True),
        )

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def create_footprint(self, title: str, points: Iterable[LocationPoint]) -> int:
        """Insert one row per point under ``title``; returns rows written."""

        engine = self._require_engine()
        values = [_point_to_values(title, point) for point in points]
        if not values:
            return 0
        with engine.begin() as conn:
            conn.execute(insert(footprints_table), values)
        LOGGER.info("Saved %d footprints for route %r", len(values), title)
        return len(values)

    def fetch_footprints(self) -> List[Route]:
        table = footprints_table
        stmt = select(table).order_by(table.c.title, table.c.timestamp, table.c.id)
        return materialize_routes(self._fetch_rows(stmt))

    def fetch_footprints_by_title(self, title: str) -> List[Route]:
        table = footprints_table
        stmt = (
            select(table)
            .where(table.c.title == title)
            .order_by(table.c.timestamp, table.c.id)
        )
        return materialize_routes(self._fetch_rows(stmt))

    def delete(self, title: str) -> int:
        """Delete every footprint recorded under ``title``; returns rows removed."""

        engine = self._require_engine()
        with engine.begin() as conn:
            result = conn.execute(
                sql_delete(footprints_table).where(footprints_table.c.title == title)
            )
            removed = result.rowcount or 0
        LOGGER.info("Deleted %d footprints for route %r", removed, title)
        return removed

    def count_footprints(self) -> int:
        """Return the number of distinct route titles stored."""

        engine = self._require_engine()
        stmt = select(func.count(distinct(footprints_table.c.title)))
        with engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def _fetch_rows(self, stmt: Select) -> List[FootprintRow]:
        engine = self._require_engine()
        with engine.connect() as conn:
            mappings = conn.execute(stmt).mappings().all()
        return [_row_from_mapping(mapping) for mapping in mappings]

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise StorageNotInitializedError()
        return self._engine
