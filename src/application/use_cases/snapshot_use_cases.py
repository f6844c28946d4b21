"""Use case exposing the current state of every tracked series."""

from src.domain.entities.series import AggregateSnapshot
from src.domain.repositories.series_store import ISeriesStore


class GetRiskSnapshotUseCase:
    """Return an immutable copy of the store as last committed.

    Readers never observe a roll-forward cycle in progress: the store only
    publishes staged state once a cycle commits.
    """

    def __init__(self, series_store: ISeriesStore) -> None:
        self.series_store = series_store

    async def execute(self) -> AggregateSnapshot:
        return self.series_store.snapshot()
