"""General utility helpers shared across modules."""

from __future__ import annotations

from datetime import datetime, timezone


def to_utc_aware(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are taken as UTC)."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_timestamp(value: datetime) -> str:
    """Fixed-width ISO-8601 UTC text; sorts lexicographically in time order."""

    return to_utc_aware(value).isoformat(timespec="microseconds")


def parse_storage_timestamp(raw: str | datetime) -> datetime:
    if isinstance(raw, datetime):
        return to_utc_aware(raw)
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc_aware(datetime.fromisoformat(text))


def to_iso_millis(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    stamp = to_utc_aware(value).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def from_epoch_millis(millis: float) -> datetime:
    return datetime.fromtimestamp(millis / 1000.0, tz=timezone.utc)
