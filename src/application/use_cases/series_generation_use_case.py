"""
Application Use Case - Risk Series Generation

Seeds the series store with the synthetic history and future stub of
every series in the risk catalog. Runs once at start-up.
"""

from __future__ import annotations

import structlog

from src.domain.entities.series import AggregateSnapshot
from src.domain.ports.random_source import IRandomSource
from src.domain.repositories.series_store import ISeriesStore
from src.domain.services.random_walk import BoundedRandomWalkGenerator
from src.domain.services.risk_catalog import RiskCatalog

logger = structlog.get_logger(__name__)


class GenerateRiskSeriesUseCase:
    """Registers the catalog and fills it with bounded random walks."""

    def __init__(
        self,
        series_store: ISeriesStore,
        random_source: IRandomSource,
        catalog: RiskCatalog,
        history_length: int = 100,
        horizon: int = 20,
        sample_count: int = 100,
    ) -> None:
        if history_length <= 0:
            raise ValueError("History length must be greater than 0.")
        if horizon <= 0:
            raise ValueError("Horizon must be greater than 0.")
        self.series_store = series_store
        self.catalog = catalog
        self.history_length = history_length
        self.horizon = horizon
        self._generator = BoundedRandomWalkGenerator(random_source, sample_count)

    async def execute(self, force: bool = False) -> AggregateSnapshot:
        """Seed the store unless it already holds data.

        Args:
            force: Replace existing data with a freshly generated set.
        """
        if not force and not self.series_store.is_empty():
            logger.info("series.generation.skipped", reason="store_not_empty")
            return self.series_store.snapshot()

        generated = self._generator.generate(
            self.catalog, history_length=self.history_length, horizon=self.horizon
        )

        with self.series_store.transaction() as staged:
            for descriptor in self.catalog.descriptors:
                staged.register(descriptor)
                staged.remove_where(descriptor.series_id, lambda point: True)
                for point in generated[descriptor.series_id]:
                    staged.add_point(descriptor.series_id, point)

        snapshot = self.series_store.snapshot()
        logger.info(
            "series.generation.completed",
            series=len(snapshot),
            history_length=self.history_length,
            horizon=self.horizon,
            version=snapshot.version,
        )
        return snapshot
