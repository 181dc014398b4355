"""Central configuration for the footprint tracker.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every value can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------
# SQLAlchemy database URL for the footprints table. Relative sqlite paths are
# resolved against the working directory.
FOOTPRINT_DATABASE_URL = os.getenv(
    "FOOTPRINT_DATABASE_URL", "sqlite:///footprints.db"
)

# Echo SQL statements through the sqlalchemy.engine logger.
FOOTPRINT_DATABASE_ECHO = _env_bool("FOOTPRINT_DATABASE_ECHO", False)


# ---------------------------------------------------------------------------
# Location tracking
# ---------------------------------------------------------------------------
# Accuracy tier requested from the location provider when none is given.
DEFAULT_GPS_ACCURACY = os.getenv("DEFAULT_GPS_ACCURACY", "best")

# Minimum distance (metres) between consecutive location updates.
LOCATION_DISTANCE_INTERVAL_M = _env_float("LOCATION_DISTANCE_INTERVAL_M", 5.0)

# Minimum time (milliseconds) between consecutive location updates.
LOCATION_TIME_INTERVAL_MS = _env_int("LOCATION_TIME_INTERVAL_MS", 1000)

# Ask the provider for background permission as well as foreground.
LOCATION_ENABLE_BACKGROUND = _env_bool("LOCATION_ENABLE_BACKGROUND", False)


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------
# Directory (absolute or relative) receiving exported CSV files.
EXPORT_DIRECTORY = os.getenv("EXPORT_DIRECTORY", ".")
EXPORT_FILE_PREFIX = os.getenv("EXPORT_FILE_PREFIX", "routes")

# Append _YYYYMMDD_HHMMSS to the export file name when True.
EXPORT_FILE_TIMESTAMP_ENABLED = _env_bool("EXPORT_FILE_TIMESTAMP_ENABLED", True)
