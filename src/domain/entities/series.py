"""
Domain Entities - Risk Series

Value objects describing the tracked risk metrics: individual points,
series descriptors with their valid value ranges, and the immutable
aggregate snapshot handed to consumers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

DAY_OFFSET_TOLERANCE = 1e-6
TODAY_OFFSET = -1.0


class SeriesKind(str, Enum):
    """Role of a series within a tracked risk entity."""

    FACTOR = "factor"
    BASE_FACTOR = "base_factor"
    IMPACT = "impact"
    ENTITY_IMPACT = "entity_impact"


@dataclass(frozen=True, slots=True)
class ValueRange:
    """Valid range of a generated series and its random walk parameters."""

    lower: float
    upper: float
    step_coefficient: float
    band_scale: float

    @property
    def span(self) -> float:
        return self.upper - self.lower

    def clamp(self, value: float) -> float:
        if value > self.upper:
            return self.upper
        if value < self.lower:
            return self.lower
        return value


FACTOR_RANGE = ValueRange(lower=0.0, upper=100.0, step_coefficient=0.03, band_scale=1.0)
BASE_FACTOR_RANGE = ValueRange(
    lower=0.0, upper=10.0, step_coefficient=0.01, band_scale=0.1
)


@dataclass(frozen=True, slots=True)
class Point:
    """A single sample of a series.

    Negative ``day_offset`` values are history (``-1`` is today), offsets
    ``0..N-1`` are forecast and carry confidence bounds.
    """

    series_id: int
    day_offset: float
    sample_count: int
    value: float
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None

    @property
    def is_predicted(self) -> bool:
        return self.lower_bound is not None and self.upper_bound is not None

    @property
    def is_historical(self) -> bool:
        return self.day_offset < 0

    def at_offset(self, day_offset: float) -> bool:
        return abs(self.day_offset - day_offset) < DAY_OFFSET_TOLERANCE

    def shifted(self, delta: float) -> "Point":
        return replace(self, day_offset=self.day_offset + delta)


@dataclass(frozen=True, slots=True)
class SeriesDescriptor:
    """Identity of a tracked series."""

    series_id: int
    name: str
    kind: SeriesKind
    factor_index: Optional[int] = None
    value_range: Optional[ValueRange] = None

    @property
    def is_forecast_source(self) -> bool:
        """Whether the series is generated and forecast (not derived)."""
        return self.kind in (SeriesKind.FACTOR, SeriesKind.BASE_FACTOR)

    def require_range(self) -> ValueRange:
        if self.value_range is None:
            raise ValueError(f"Series {self.series_id} has no value range")
        return self.value_range


@dataclass(frozen=True, slots=True)
class SeriesSnapshot:
    """Immutable copy of one series."""

    descriptor: SeriesDescriptor
    points: Tuple[Point, ...]

    @property
    def history(self) -> List[Point]:
        return sorted(
            (point for point in self.points if point.is_historical),
            key=lambda point: point.day_offset,
        )

    @property
    def forecast(self) -> List[Point]:
        return sorted(
            (point for point in self.points if point.is_predicted),
            key=lambda point: point.day_offset,
        )

    def by_offset(self) -> Dict[float, Point]:
        return {point.day_offset: point for point in self.points}


@dataclass(frozen=True, slots=True)
class AggregateSnapshot:
    """Every tracked series at one instant.

    ``version`` counts the committed writes that produced this state.
    """

    version: int
    series: Tuple[SeriesSnapshot, ...]

    def __iter__(self) -> Iterator[SeriesSnapshot]:
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)

    def get(self, series_id: int) -> SeriesSnapshot:
        for item in self.series:
            if item.descriptor.series_id == series_id:
                return item
        raise KeyError(series_id)
