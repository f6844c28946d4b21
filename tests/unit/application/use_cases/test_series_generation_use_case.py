from __future__ import annotations

import pytest

from src.application.use_cases.series_generation_use_case import (
    GenerateRiskSeriesUseCase,
)
from src.infrastructure.repositories.in_memory_series_store import InMemorySeriesStore
from src.infrastructure.services.random_source import SeededRandomSource
from tests.conftest import ConstantRandomSource, offsets_of


@pytest.mark.asyncio
async def test_generation_seeds_every_series(store, catalog, random_source) -> None:
    use_case = GenerateRiskSeriesUseCase(store, random_source, catalog)

    snapshot = await use_case.execute()

    assert snapshot.version == 1
    assert len(snapshot) == 7
    for series in snapshot:
        assert len(series.history) == 100
        assert len(series.forecast) == 20
        assert offsets_of(series.points)[0] == -100.0
        assert offsets_of(series.points)[-1] == 19.0


@pytest.mark.asyncio
async def test_generation_skips_populated_store(store, catalog) -> None:
    source = ConstantRandomSource()
    use_case = GenerateRiskSeriesUseCase(store, source, catalog, history_length=10)
    await use_case.execute()
    draws = source.calls

    snapshot = await use_case.execute()

    assert source.calls == draws
    assert snapshot.version == 1


@pytest.mark.asyncio
async def test_forced_generation_replaces_data(store, catalog) -> None:
    use_case = GenerateRiskSeriesUseCase(
        store, SeededRandomSource(1), catalog, history_length=10, horizon=3
    )
    await use_case.execute()

    snapshot = await use_case.execute(force=True)

    assert snapshot.version == 2
    assert all(len(series.points) == 13 for series in snapshot)


@pytest.mark.asyncio
async def test_same_seed_generates_same_snapshot(catalog) -> None:
    first = await GenerateRiskSeriesUseCase(
        InMemorySeriesStore(), SeededRandomSource(99), catalog
    ).execute()
    second = await GenerateRiskSeriesUseCase(
        InMemorySeriesStore(), SeededRandomSource(99), catalog
    ).execute()

    assert first == second


def test_invalid_lengths_are_rejected(store, catalog, random_source) -> None:
    with pytest.raises(ValueError):
        GenerateRiskSeriesUseCase(store, random_source, catalog, history_length=0)
    with pytest.raises(ValueError):
        GenerateRiskSeriesUseCase(store, random_source, catalog, horizon=0)
