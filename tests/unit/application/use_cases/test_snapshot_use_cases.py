from __future__ import annotations

import pytest

from src.application.use_cases.snapshot_use_cases import GetRiskSnapshotUseCase
from src.domain.entities.series import Point


@pytest.mark.asyncio
async def test_snapshot_reflects_store(constant_store) -> None:
    snapshot = await GetRiskSnapshotUseCase(constant_store).execute()

    assert len(snapshot) == 7
    assert snapshot.version == constant_store.version
    assert len(snapshot.get(7).points) == 100


@pytest.mark.asyncio
async def test_snapshot_is_not_affected_by_later_writes(constant_store) -> None:
    use_case = GetRiskSnapshotUseCase(constant_store)
    snapshot = await use_case.execute()

    constant_store.add_point(1, Point(1, 0.0, 100, 1.0, 0.0, 2.0))

    assert len(snapshot.get(1).points) == 100
    assert len((await use_case.execute()).get(1).points) == 101


@pytest.mark.asyncio
async def test_snapshot_of_empty_store(store) -> None:
    snapshot = await GetRiskSnapshotUseCase(store).execute()
    assert len(snapshot) == 0
    assert snapshot.version == 0
