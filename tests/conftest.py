from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Iterable, List, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.domain.entities.forecast import ForecastParameters, ForecastResult  # noqa: E402
from src.domain.entities.series import Point, ValueRange  # noqa: E402
from src.domain.services.derived_series import combine_impact, sum_impacts  # noqa: E402
from src.domain.services.risk_catalog import RiskCatalog, build_risk_catalog  # noqa: E402
from src.infrastructure.repositories.in_memory_series_store import (  # noqa: E402
    InMemorySeriesStore,
)
from src.infrastructure.services.random_source import SeededRandomSource  # noqa: E402


class ConstantRandomSource:
    """Always draws the same value; 50 makes every walk step zero."""

    def __init__(self, value: int = 50) -> None:
        self.value = value
        self.calls = 0

    def next(self, min_value: int, max_value: int) -> int:
        self.calls += 1
        return self.value


class ScriptedRandomSource:
    """Replays a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, draws: Sequence[int]) -> None:
        self._draws = list(draws)
        self._index = 0

    def next(self, min_value: int, max_value: int) -> int:
        value = self._draws[self._index % len(self._draws)]
        self._index += 1
        return value


class FailingForecastEngine:
    """Fails on the ``fail_on``-th call (1-based), succeeds with a flat line otherwise."""

    def __init__(self, fail_on: int = 1, error: Exception | None = None) -> None:
        self.fail_on = fail_on
        self.error = error or RuntimeError("engine exploded")
        self.calls = 0
        self._lock = threading.Lock()

    def fit_and_forecast(self, history, *, horizon, **kwargs) -> ForecastResult:
        with self._lock:
            self.calls += 1
            call = self.calls
        if call == self.fail_on:
            raise self.error
        last = float(history[-1])
        return ForecastResult(
            forecast=tuple([last] * horizon),
            lower_bound=tuple([last - 1.0] * horizon),
            upper_bound=tuple([last + 1.0] * horizon),
        )


class ShortForecastEngine:
    """Returns one step fewer than requested."""

    def fit_and_forecast(self, history, *, horizon, **kwargs) -> ForecastResult:
        steps = max(horizon - 1, 0)
        return ForecastResult(
            forecast=tuple([1.0] * steps),
            lower_bound=tuple([0.0] * steps),
            upper_bound=tuple([2.0] * steps),
        )


def seed_constant_history(
    store: InMemorySeriesStore,
    catalog: RiskCatalog,
    *,
    raw_value: float = 50.0,
    base_value: float = 5.0,
    length: int = 100,
    sample_count: int = 100,
) -> None:
    """Register the catalog and fill it with a flat history ending today."""
    offsets = [float(day) for day in range(-length, 0)]
    for descriptor in catalog.descriptors:
        store.register(descriptor)

    for factor in catalog.factors:
        for offset in offsets:
            raw = Point(factor.raw.series_id, offset, sample_count, raw_value)
            base = Point(factor.base.series_id, offset, sample_count, base_value)
            store.add_point(factor.raw.series_id, raw)
            store.add_point(factor.base.series_id, base)
            store.add_point(
                factor.impact.series_id,
                combine_impact(raw, base, factor.impact.series_id),
            )

    entity_id = catalog.entity_impact.series_id
    for offset in offsets:
        impacts = [
            store.points_at(factor.impact.series_id, offset)
            for factor in catalog.factors
        ]
        store.add_point(entity_id, sum_impacts(impacts, entity_id))


def offsets_of(points: Iterable[Point]) -> List[float]:
    return sorted(point.day_offset for point in points)


def within(value_range: ValueRange, value: float) -> bool:
    return value_range.lower <= value <= value_range.upper


@pytest.fixture()
def catalog() -> RiskCatalog:
    return build_risk_catalog(factor_count=2)


@pytest.fixture()
def store() -> InMemorySeriesStore:
    return InMemorySeriesStore()


@pytest.fixture()
def random_source() -> SeededRandomSource:
    return SeededRandomSource(seed=12345)


@pytest.fixture()
def forecast_parameters() -> ForecastParameters:
    return ForecastParameters()


@pytest.fixture()
def constant_store(
    store: InMemorySeriesStore, catalog: RiskCatalog
) -> InMemorySeriesStore:
    seed_constant_history(store, catalog)
    return store
