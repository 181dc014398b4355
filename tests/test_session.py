"""Tests for the idle/collecting session state machine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from footprint_tracker.session import CollectionSession, create_collection_session


class StepClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 3, 1, 7, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


def assert_idle(session: CollectionSession) -> None:
    assert session.is_collecting is False
    assert session.start_time is None
    assert session.samples == ()
    assert session.current_sample is None
    assert session.current_speed is None


def test_new_session_is_idle() -> None:
    assert_idle(create_collection_session())


def test_add_sample_while_idle_is_ignored(point_factory) -> None:
    session = create_collection_session()
    session.add_sample(point_factory())
    assert_idle(session)


def test_start_then_add_sample(point_factory) -> None:
    clock = StepClock()
    session = create_collection_session(clock=clock)
    session.start()
    assert session.is_collecting
    assert session.start_time == datetime(2025, 3, 1, 7, 30, tzinfo=timezone.utc)

    sample = point_factory(speed=1.7)
    session.add_sample(sample)
    assert session.samples == (sample,)
    assert session.current_sample is sample
    assert session.current_speed == 1.7


def test_samples_keep_arrival_order_and_mirror_latest(point_factory) -> None:
    session = create_collection_session()
    session.start()
    first = point_factory(seconds=10, speed=1.0)
    second = point_factory(seconds=5, speed=None)
    session.add_sample(first)
    session.add_sample(second)
    assert session.samples == (first, second)
    assert session.current_sample is second
    assert session.current_speed is None


def test_stop_resets_everything_and_returns_samples(point_factory) -> None:
    session = create_collection_session()
    session.start()
    points = [point_factory(seconds=i) for i in range(5)]
    for point in points:
        session.add_sample(point)
    assert session.stop() == tuple(points)
    assert_idle(session)
    session.add_sample(point_factory())
    assert_idle(session)


def test_reset_matches_stop(point_factory) -> None:
    session = create_collection_session()
    session.start()
    session.add_sample(point_factory())
    session.reset()
    assert_idle(session)
    session.reset()
    assert_idle(session)


def test_repeat_start_starts_over(point_factory) -> None:
    clock = StepClock()
    session = create_collection_session(clock=clock)
    session.start()
    session.add_sample(point_factory())
    session.start()
    assert session.is_collecting
    assert session.samples == ()
    assert session.current_sample is None
    assert session.start_time == datetime(2025, 3, 1, 7, 31, tzinfo=timezone.utc)


def test_samples_view_is_a_copy(point_factory) -> None:
    session = create_collection_session()
    session.start()
    session.add_sample(point_factory())
    snapshot = session.samples
    session.add_sample(point_factory(seconds=1))
    assert len(snapshot) == 1
    assert len(session.samples) == 2


def test_sessions_are_isolated(point_factory) -> None:
    a = create_collection_session()
    b = create_collection_session()
    a.start()
    a.add_sample(point_factory())
    assert_idle(b)
