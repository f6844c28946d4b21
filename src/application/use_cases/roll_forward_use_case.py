"""
Application Use Case - Roll Forward

Advances the simulated "now" by one day. A cycle:
  * Prunes every forecast point and the oldest historical point
  * Reads yesterday's value of each raw and base factor
  * Shifts every remaining point one day into the past
  * Synthesizes today's values from yesterday's with bounded noise
  * Re-forecasts every raw and base factor in parallel
  * Re-derives impact and entity impact from the new forecasts

The whole cycle runs on a staged copy of the store, so a failure leaves
the published snapshot untouched.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import structlog

from src.application.dtos.roll_forward_dto import RollForwardResultDTO
from src.domain.entities.cycle import CycleOutcome, CycleRecord
from src.domain.entities.errors import CycleAbortedError, ForecastFailedError
from src.domain.entities.forecast import ForecastParameters, ForecastResult
from src.domain.entities.series import TODAY_OFFSET, Point
from src.domain.ports.forecast_engine import IForecastEngine
from src.domain.ports.random_source import IRandomSource
from src.domain.repositories.series_store import ISeriesStore
from src.domain.services.derived_series import combine_impact, sum_impacts
from src.domain.services.random_walk import BoundedRandomWalkGenerator
from src.domain.services.risk_catalog import RiskCatalog

logger = structlog.get_logger(__name__)


class RollForwardUseCase:
    """Runs roll-forward cycles one at a time against the series store."""

    def __init__(
        self,
        series_store: ISeriesStore,
        forecast_engine: IForecastEngine,
        random_source: IRandomSource,
        catalog: RiskCatalog,
        forecast_parameters: Optional[ForecastParameters] = None,
        sample_count: int = 100,
    ) -> None:
        self.series_store = series_store
        self.forecast_engine = forecast_engine
        self.catalog = catalog
        self.forecast_parameters = forecast_parameters or ForecastParameters()
        self.sample_count = sample_count
        self._walk = BoundedRandomWalkGenerator(random_source, sample_count)
        self._lock = asyncio.Lock()
        self._completed_cycles = 0
        self._last_cycle: Optional[CycleRecord] = None

    @property
    def completed_cycles(self) -> int:
        return self._completed_cycles

    @property
    def last_cycle(self) -> Optional[CycleRecord]:
        return self._last_cycle

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def execute(self) -> RollForwardResultDTO:
        """Run one cycle, waiting for any cycle already in flight.

        Raises:
            CycleAbortedError: If any step fails; no change is published.
        """
        async with self._lock:
            cycle = self._completed_cycles + 1
            started_at = datetime.now(timezone.utc)
            logger.info("roll_forward.start", cycle=cycle)

            try:
                with self.series_store.transaction() as staged:
                    self._prune(staged)
                    lags = self._fetch_lags(staged)
                    self._shift(staged)
                    self._synthesize_today(staged, lags)
                    forecasts = await self._reforecast(staged)
                    self._insert_forecasts(staged, forecasts)
                    self._recompute_derived(staged)
            except Exception as exc:
                self._last_cycle = CycleRecord(
                    cycle=cycle,
                    outcome=CycleOutcome.ABORTED,
                    started_at=started_at,
                    finished_at=datetime.now(timezone.utc),
                    version=self.series_store.snapshot().version,
                    error=str(exc),
                )
                logger.error(
                    "roll_forward.aborted", cycle=cycle, error=str(exc), exc_info=exc
                )
                raise CycleAbortedError(cycle, str(exc)) from exc

            self._completed_cycles = cycle
            record = CycleRecord(
                cycle=cycle,
                outcome=CycleOutcome.COMPLETED,
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
                version=self.series_store.snapshot().version,
            )
            self._last_cycle = record

            logger.info(
                "roll_forward.completed",
                cycle=cycle,
                version=record.version,
                duration_ms=round(record.duration_ms, 2),
            )

            return RollForwardResultDTO.from_domain(
                record,
                forecast_series=len(self.catalog.forecast_sources),
                horizon=self.forecast_parameters.horizon,
            )

    def _prune(self, store: ISeriesStore) -> None:
        for descriptor in store.descriptors():
            series_id = descriptor.series_id
            store.remove_where(series_id, lambda point: point.is_predicted)
            remaining = store.points(series_id)
            if not remaining:
                continue
            oldest = min(remaining, key=lambda point: point.day_offset)
            store.remove_where(series_id, lambda point: point is oldest)

    def _fetch_lags(self, store: ISeriesStore) -> Dict[int, float]:
        return {
            descriptor.series_id: store.points_at(
                descriptor.series_id, TODAY_OFFSET
            ).value
            for descriptor in self.catalog.forecast_sources
        }

    def _shift(self, store: ISeriesStore) -> None:
        for descriptor in store.descriptors():
            store.shift_all(descriptor.series_id, -1.0)

    def _synthesize_today(self, store: ISeriesStore, lags: Dict[int, float]) -> None:
        for descriptor in self.catalog.forecast_sources:
            value = self._walk.step(
                lags[descriptor.series_id], descriptor.require_range()
            )
            store.add_point(
                descriptor.series_id,
                Point(
                    series_id=descriptor.series_id,
                    day_offset=TODAY_OFFSET,
                    sample_count=self.sample_count,
                    value=value,
                ),
            )
        self._derive_at(store, TODAY_OFFSET)

    async def _reforecast(self, store: ISeriesStore) -> Dict[int, ForecastResult]:
        sources = self.catalog.forecast_sources
        histories = {
            descriptor.series_id: _history_values(store.points(descriptor.series_id))
            for descriptor in sources
        }
        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self._forecast_series,
                    descriptor.series_id,
                    histories[descriptor.series_id],
                )
                for descriptor in sources
            )
        )
        return {
            descriptor.series_id: result
            for descriptor, result in zip(sources, results)
        }

    def _forecast_series(self, series_id: int, history: Sequence[float]) -> ForecastResult:
        try:
            result = self.forecast_engine.fit_and_forecast(
                history, **self.forecast_parameters.as_kwargs()
            )
        except Exception as exc:
            raise ForecastFailedError(series_id, str(exc)) from exc
        if result.horizon != self.forecast_parameters.horizon:
            raise ForecastFailedError(
                series_id,
                f"expected {self.forecast_parameters.horizon} steps, "
                f"got {result.horizon}",
            )
        return result

    def _insert_forecasts(
        self, store: ISeriesStore, forecasts: Dict[int, ForecastResult]
    ) -> None:
        for descriptor in self.catalog.forecast_sources:
            value_range = descriptor.require_range()
            result = forecasts[descriptor.series_id]
            for step, (value, lower, upper) in enumerate(
                zip(result.forecast, result.lower_bound, result.upper_bound)
            ):
                store.add_point(
                    descriptor.series_id,
                    Point(
                        series_id=descriptor.series_id,
                        day_offset=float(step),
                        sample_count=self.sample_count,
                        value=value_range.clamp(value),
                        lower_bound=value_range.clamp(lower),
                        upper_bound=value_range.clamp(upper),
                    ),
                )

    def _recompute_derived(self, store: ISeriesStore) -> None:
        for step in range(self.forecast_parameters.horizon):
            self._derive_at(store, float(step))

    def _derive_at(self, store: ISeriesStore, day_offset: float) -> None:
        impacts: List[Point] = []
        for factor in self.catalog.factors:
            impact = combine_impact(
                store.points_at(factor.raw.series_id, day_offset),
                store.points_at(factor.base.series_id, day_offset),
                factor.impact.series_id,
            )
            store.add_point(factor.impact.series_id, impact)
            impacts.append(impact)

        entity_id = self.catalog.entity_impact.series_id
        store.add_point(entity_id, sum_impacts(impacts, entity_id))


def _history_values(points: Sequence[Point]) -> List[float]:
    history = sorted(
        (point for point in points if point.is_historical),
        key=lambda point: point.day_offset,
    )
    return [point.value for point in history]
