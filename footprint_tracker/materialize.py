"""Group persisted footprint rows into :class:`Route` aggregates.

Pure transformation: rows in, routes out. Rows must already be sorted by
timestamp (then row id) within each title; the storage queries do this.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .models import FootprintRow, LocationPoint, Route

_WHITESPACE_RE = re.compile(r"\s+")


def route_id(title: str, first_row_id: int) -> str:
    """Return ``"<slug>-<first row id>"``, e.g. ``"morning-walk-12"``."""

    slug = _WHITESPACE_RE.sub("-", title).lower()
    return f"{slug}-{first_row_id}"


def row_to_location_point(row: FootprintRow) -> LocationPoint:
    # Rows store heading as "direction".
    return LocationPoint(
        latitude=row.latitude,
        longitude=row.longitude,
        timestamp=row.timestamp,
        accuracy=row.accuracy if row.accuracy is not None else 0.0,
        speed=row.speed,
        heading=row.direction,
    )


def materialize_routes(rows: Iterable[FootprintRow]) -> List[Route]:
    """Build one route per distinct title, keeping the input row order."""

    grouped: Dict[str, List[FootprintRow]] = {}
    for row in rows:
        grouped.setdefault(row.title, []).append(row)

    routes: List[Route] = []
    for title, title_rows in grouped.items():
        points = tuple(row_to_location_point(row) for row in title_rows)
        timestamps = [point.timestamp for point in points]
        routes.append(
            Route(
                id=route_id(title, title_rows[0].id),
                name=title,
                location_points=points,
                start_time=min(timestamps),
                end_time=max(timestamps),
                point_count=len(points),
            )
        )
    return routes
