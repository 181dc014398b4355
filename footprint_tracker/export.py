"""CSV export of saved routes.

One row per GPS fix. Null speed/heading become empty fields and text with
commas, quotes or newlines is quoted with inner quotes doubled.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from os import PathLike
from pathlib import Path
from typing import Any, Iterable, List

import pandas as pd

from .models import Route
from .utils import to_iso_millis

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Route",
    "Latitude",
    "Longitude",
    "Timestamp",
    "Accuracy",
    "Speed",
    "Heading",
]

PathInput = str | Path | PathLike[str]


def _route_rows(routes: Iterable[Route]) -> List[dict[str, Any]]:
    rows: List[dict[str, Any]] = []
    for route in routes:
        for point in route.location_points:
            rows.append(
                {
                    "Route": route.name,
                    "Latitude": point.latitude,
                    "Longitude": point.longitude,
                    "Timestamp": to_iso_millis(point.timestamp),
                    "Accuracy": point.accuracy,
                    "Speed": point.speed,
                    "Heading": point.heading,
                }
            )
    return rows


def routes_to_frame(routes: Iterable[Route]) -> pd.DataFrame:
    """Flatten routes into a DataFrame with the export columns."""

    return pd.DataFrame(_route_rows(routes), columns=CSV_COLUMNS)


def make_csv_data(routes: Iterable[Route]) -> str:
    """Return the CSV text for ``routes``; the header is always present."""

    frame = routes_to_frame(routes)
    return frame.to_csv(
        index=False,
        na_rep="",
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
    )


def _resolve_export_path(directory: PathInput, prefix: str, stamped: bool) -> Path:
    name = prefix
    if stamped:
        name = f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return Path(directory) / f"{name}.csv"


def write_csv(
    routes: Iterable[Route],
    directory: PathInput | None = None,
    prefix: str | None = None,
    *,
    timestamped: bool | None = None,
) -> Path:
    """Write the CSV export to disk and return the file path."""

    from . import config

    target_dir = Path(directory if directory is not None else config.EXPORT_DIRECTORY)
    target_dir.mkdir(parents=True, exist_ok=True)
    stamped = (
        config.EXPORT_FILE_TIMESTAMP_ENABLED if timestamped is None else timestamped
    )
    path = _resolve_export_path(
        target_dir, prefix or config.EXPORT_FILE_PREFIX, stamped
    )
    payload = make_csv_data(routes)
    path.write_text(payload, encoding="utf-8", newline="")
    LOGGER.info("Exported routes to %s", path)
    return path
