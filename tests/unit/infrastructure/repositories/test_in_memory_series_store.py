from __future__ import annotations

import pytest

from src.domain.entities.errors import (
    AmbiguousPointError,
    PointNotFoundError,
    SeriesNotFoundError,
)
from src.domain.entities.series import FACTOR_RANGE, Point, SeriesDescriptor, SeriesKind
from src.infrastructure.repositories.in_memory_series_store import InMemorySeriesStore

_RAW = SeriesDescriptor(1, "risk factor 1", SeriesKind.FACTOR, 1, FACTOR_RANGE)


def _store_with_points(*offsets: float) -> InMemorySeriesStore:
    store = InMemorySeriesStore()
    store.register(_RAW)
    for offset in offsets:
        store.add_point(1, Point(1, offset, 100, 10.0 + offset))
    return store


def test_register_is_idempotent() -> None:
    store = _store_with_points(-2.0, -1.0)
    store.register(_RAW)
    assert len(store.points(1)) == 2
    assert store.descriptors() == [_RAW]
    assert not store.is_empty()


def test_unknown_series_raises() -> None:
    store = InMemorySeriesStore()
    assert store.is_empty()
    with pytest.raises(SeriesNotFoundError):
        store.points(42)
    with pytest.raises(SeriesNotFoundError):
        store.add_point(42, Point(42, -1.0, 100, 1.0))


def test_points_at_finds_single_match() -> None:
    store = _store_with_points(-3.0, -2.0, -1.0)
    assert store.points_at(1, -2.0).value == 8.0
    with pytest.raises(PointNotFoundError):
        store.points_at(1, 5.0)


def test_points_at_detects_duplicates() -> None:
    store = _store_with_points(-1.0, -1.0)
    with pytest.raises(AmbiguousPointError) as exc_info:
        store.points_at(1, -1.0)
    assert exc_info.value.matches == 2


def test_remove_where_and_shift_all() -> None:
    store = _store_with_points(-3.0, -2.0, -1.0)
    store.add_point(1, Point(1, 0.0, 100, 1.0, 0.0, 2.0))

    removed = store.remove_where(1, lambda point: point.is_predicted)
    store.shift_all(1, -1.0)

    assert removed == 1
    assert sorted(point.day_offset for point in store.points(1)) == [-4.0, -3.0, -2.0]


def test_points_returns_a_copy() -> None:
    store = _store_with_points(-1.0)
    store.points(1).clear()
    assert len(store.points(1)) == 1


def test_snapshot_is_immutable_copy() -> None:
    store = _store_with_points(-1.0)
    snapshot = store.snapshot()

    store.add_point(1, Point(1, -2.0, 100, 1.0))

    assert len(snapshot.get(1).points) == 1
    assert len(store.snapshot().get(1).points) == 2


def test_transaction_commits_on_success() -> None:
    store = _store_with_points(-1.0)
    version = store.version

    with store.transaction() as staged:
        staged.add_point(1, Point(1, -2.0, 100, 1.0))
        assert len(store.points(1)) == 1

    assert len(store.points(1)) == 2
    assert store.version == version + 1


def test_transaction_discards_on_failure() -> None:
    store = _store_with_points(-1.0)
    before = store.snapshot()

    with pytest.raises(RuntimeError):
        with store.transaction() as staged:
            staged.shift_all(1, -1.0)
            staged.add_point(1, Point(1, -1.0, 100, 99.0))
            raise RuntimeError("boom")

    assert store.snapshot() == before
