"""
Series Store Interface

This module defines the interface for the store holding every tracked
risk series. It abstracts the in-memory state so the orchestration use
cases never depend on a specific implementation.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Callable, List

from src.domain.entities.series import AggregateSnapshot, Point, SeriesDescriptor

PointPredicate = Callable[[Point], bool]


class ISeriesStore(ABC):
    """Interface for Series Store implementations."""

    @abstractmethod
    def register(self, descriptor: SeriesDescriptor) -> None:
        """
        Register a series so points can be added to it.

        Registering an id that already exists replaces its descriptor and
        keeps its points.
        """
        pass

    @abstractmethod
    def descriptors(self) -> List[SeriesDescriptor]:
        """Return the registered descriptors in registration order."""
        pass

    @abstractmethod
    def points(self, series_id: int) -> List[Point]:
        """
        Return a copy of the points of a series in insertion order.

        Raises:
            SeriesNotFoundError: If the series is not registered
        """
        pass

    @abstractmethod
    def add_point(self, series_id: int, point: Point) -> None:
        """Append a point to a series."""
        pass

    @abstractmethod
    def remove_where(self, series_id: int, predicate: PointPredicate) -> int:
        """
        Remove every point matching the predicate.

        Returns:
            Number of removed points
        """
        pass

    @abstractmethod
    def shift_all(self, series_id: int, delta: float) -> None:
        """Add ``delta`` to the day offset of every point of a series."""
        pass

    @abstractmethod
    def points_at(self, series_id: int, day_offset: float) -> Point:
        """
        Return the single point of a series at a day offset.

        Raises:
            PointNotFoundError: If no point sits at the offset
            AmbiguousPointError: If more than one point sits at the offset
        """
        pass

    @abstractmethod
    def snapshot(self) -> AggregateSnapshot:
        """Return an immutable copy of the whole store."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Whether no series holds any point."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager["ISeriesStore"]:
        """
        Stage changes on a private copy of the store.

        The staged copy replaces the live state when the block exits
        normally and is discarded when it raises.
        """
        pass
