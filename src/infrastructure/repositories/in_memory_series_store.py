"""
Infrastructure Repository - In-memory Series Store

Holds every tracked series in process memory. Reads return copies, and
multi-step updates go through ``transaction()`` so consumers only ever see
a state where all steps were applied or none.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

import structlog

from src.domain.entities.errors import (
    AmbiguousPointError,
    PointNotFoundError,
    SeriesNotFoundError,
)
from src.domain.entities.series import (
    AggregateSnapshot,
    Point,
    SeriesDescriptor,
    SeriesSnapshot,
)
from src.domain.repositories.series_store import ISeriesStore, PointPredicate

logger = structlog.get_logger(__name__)


class InMemorySeriesStore(ISeriesStore):
    """Series store backed by plain dictionaries guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._descriptors: Dict[int, SeriesDescriptor] = {}
        self._points: Dict[int, List[Point]] = {}
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def register(self, descriptor: SeriesDescriptor) -> None:
        with self._lock:
            self._descriptors[descriptor.series_id] = descriptor
            self._points.setdefault(descriptor.series_id, [])

    def descriptors(self) -> List[SeriesDescriptor]:
        with self._lock:
            return list(self._descriptors.values())

    def points(self, series_id: int) -> List[Point]:
        with self._lock:
            return list(self._series(series_id))

    def add_point(self, series_id: int, point: Point) -> None:
        with self._lock:
            self._series(series_id).append(point)

    def remove_where(self, series_id: int, predicate: PointPredicate) -> int:
        with self._lock:
            points = self._series(series_id)
            kept = [point for point in points if not predicate(point)]
            removed = len(points) - len(kept)
            self._points[series_id] = kept
            return removed

    def shift_all(self, series_id: int, delta: float) -> None:
        with self._lock:
            self._points[series_id] = [
                point.shifted(delta) for point in self._series(series_id)
            ]

    def points_at(self, series_id: int, day_offset: float) -> Point:
        with self._lock:
            matches = [
                point
                for point in self._series(series_id)
                if point.at_offset(day_offset)
            ]
        if not matches:
            raise PointNotFoundError(series_id, day_offset)
        if len(matches) > 1:
            raise AmbiguousPointError(series_id, day_offset, len(matches))
        return matches[0]

    def snapshot(self) -> AggregateSnapshot:
        with self._lock:
            return AggregateSnapshot(
                version=self._version,
                series=tuple(
                    SeriesSnapshot(
                        descriptor=descriptor,
                        points=tuple(self._points[series_id]),
                    )
                    for series_id, descriptor in self._descriptors.items()
                ),
            )

    def is_empty(self) -> bool:
        with self._lock:
            return not any(self._points.values())

    @contextmanager
    def transaction(self) -> Iterator["InMemorySeriesStore"]:
        """Yield a staged copy and commit it if the block succeeds.

        A single writer is assumed: writes made to the live store while a
        transaction is open are overwritten by the commit.
        """
        staged = self._copy()
        try:
            yield staged
        except Exception:
            logger.debug("series_store.transaction.rolled_back", version=self._version)
            raise
        self._commit(staged)

    def _copy(self) -> "InMemorySeriesStore":
        staged = InMemorySeriesStore()
        with self._lock:
            staged._descriptors = dict(self._descriptors)
            staged._points = {
                series_id: list(points) for series_id, points in self._points.items()
            }
            staged._version = self._version
        return staged

    def _commit(self, staged: "InMemorySeriesStore") -> None:
        with self._lock:
            self._descriptors = dict(staged._descriptors)
            self._points = {
                series_id: list(points)
                for series_id, points in staged._points.items()
            }
            self._version += 1
            logger.debug("series_store.transaction.committed", version=self._version)

    def _series(self, series_id: int) -> List[Point]:
        points: Optional[List[Point]] = self._points.get(series_id)
        if points is None:
            raise SeriesNotFoundError(series_id)
        return points
