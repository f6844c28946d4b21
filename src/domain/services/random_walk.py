"""
Bounded random walk generator.

Seeds every raw and base series with a synthetic history and a synthetic
future stub. The walk takes steps of ``step_coefficient * (n - 50)`` with
``n`` drawn uniformly from ``[0, 100)`` and clamps the result into the
series' value range. The draw is off-center by half a unit: noise runs from
``-50`` to ``+49`` times the coefficient, so the unclamped walk drifts down
by ``0.5 * step_coefficient`` per step on average rather than being a
martingale.
"""

from __future__ import annotations

from typing import Dict, List

from src.domain.entities.series import Point, SeriesDescriptor, ValueRange
from src.domain.ports.random_source import IRandomSource
from src.domain.services.derived_series import combine_impact, sum_impacts
from src.domain.services.risk_catalog import RiskCatalog

_DRAW_MIN = 0
_DRAW_MAX = 100
_DRAW_CENTER = 50


class BoundedRandomWalkGenerator:
    """Produces bounded random walks from an injected random source."""

    def __init__(self, random_source: IRandomSource, sample_count: int = 100):
        self._random = random_source
        self._sample_count = sample_count

    def initial_value(self, value_range: ValueRange) -> float:
        draw = self._random.next(_DRAW_MIN, _DRAW_MAX)
        return value_range.lower + value_range.span * draw / _DRAW_MAX

    def step(self, previous: float, value_range: ValueRange) -> float:
        """Take one clamped step of the walk from ``previous``."""
        draw = self._random.next(_DRAW_MIN, _DRAW_MAX)
        noise = value_range.step_coefficient * (draw - _DRAW_CENTER)
        return value_range.clamp(previous + noise)

    def generate(
        self, catalog: RiskCatalog, history_length: int, horizon: int
    ) -> Dict[int, List[Point]]:
        """Generate history and future stub for every series of the catalog.

        Returns:
            Points keyed by series id, ordered by day offset.
        """
        sources = catalog.forecast_sources
        series: Dict[int, List[Point]] = {
            descriptor.series_id: [] for descriptor in catalog.descriptors
        }

        lags = {
            descriptor.series_id: self.initial_value(descriptor.require_range())
            for descriptor in sources
        }
        for i in range(history_length):
            day_offset = float(i - history_length)
            for descriptor in sources:
                value = self.step(lags[descriptor.series_id], descriptor.require_range())
                lags[descriptor.series_id] = value
                series[descriptor.series_id].append(
                    self._point(descriptor.series_id, day_offset, value)
                )

        raw_first = [factor.raw for factor in catalog.factors] + [
            factor.base for factor in catalog.factors
        ]
        for i in range(horizon):
            for descriptor in raw_first:
                series[descriptor.series_id].append(
                    self._stub_point(descriptor, float(i), band_width=i + 1)
                )

        self._derive(catalog, series)
        return series

    def _point(self, series_id: int, day_offset: float, value: float) -> Point:
        return Point(
            series_id=series_id,
            day_offset=day_offset,
            sample_count=self._sample_count,
            value=value,
        )

    def _stub_point(
        self, descriptor: SeriesDescriptor, day_offset: float, band_width: int
    ) -> Point:
        value_range = descriptor.require_range()
        value = self.initial_value(value_range)
        margin = band_width * value_range.band_scale
        return Point(
            series_id=descriptor.series_id,
            day_offset=day_offset,
            sample_count=self._sample_count,
            value=value,
            lower_bound=value_range.clamp(value - margin),
            upper_bound=value_range.clamp(value + margin),
        )

    def _derive(self, catalog: RiskCatalog, series: Dict[int, List[Point]]) -> None:
        entity_id = catalog.entity_impact.series_id
        for factor in catalog.factors:
            series[factor.impact.series_id] = [
                combine_impact(raw, base, factor.impact.series_id)
                for raw, base in zip(
                    series[factor.raw.series_id], series[factor.base.series_id]
                )
            ]
        impacts_by_step = zip(
            *(series[factor.impact.series_id] for factor in catalog.factors)
        )
        series[entity_id] = [
            sum_impacts(list(impacts), entity_id) for impacts in impacts_by_step
        ]
