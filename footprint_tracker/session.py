"""In-memory GPS collection session.

The session is a plain object: the application builds exactly one and hands
it to whoever records fixes. Tests build as many isolated copies as they
need through :func:`create_collection_session`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from .models import LocationPoint

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CollectionSession:
    """Two-state (idle/collecting) recorder of validated GPS fixes.

    ``add_sample`` does not validate; callers run
    :func:`footprint_tracker.validation.validate_location_point` first.
    Fixes arriving while idle are dropped silently, since a late callback
    racing a user-triggered stop is expected.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or _utc_now
        self._is_collecting = False
        self._start_time: Optional[datetime] = None
        self._samples: List[LocationPoint] = []
        self._current_sample: Optional[LocationPoint] = None
        self._current_speed: Optional[float] = None

    @property
    def is_collecting(self) -> bool:
        return self._is_collecting

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def samples(self) -> Tuple[LocationPoint, ...]:
        return tuple(self._samples)

    @property
    def current_sample(self) -> Optional[LocationPoint]:
        return self._current_sample

    @property
    def current_speed(self) -> Optional[float]:
        return self._current_speed

    def start(self) -> None:
        """Begin collecting. Calling it again while collecting starts over."""

        self._clear()
        self._is_collecting = True
        self._start_time = self._clock()

    def stop(self) -> Tuple[LocationPoint, ...]:
        """Return to idle, clearing everything; returns the samples collected."""

        collected = tuple(self._samples)
        self._clear()
        return collected

    def reset(self) -> None:
        self._clear()

    def add_sample(self, sample: LocationPoint) -> None:
        if not self._is_collecting:
            return
        self._samples.append(sample)
        self._current_sample = sample
        self._current_speed = sample.speed

    def _clear(self) -> None:
        self._is_collecting = False
        self._start_time = None
        self._samples = []
        self._current_sample = None
        self._current_speed = None


def create_collection_session(clock: Clock | None = None) -> CollectionSession:
    return CollectionSession(clock=clock)
