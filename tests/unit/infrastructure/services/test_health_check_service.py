from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from src.domain.entities.cycle import CycleOutcome, CycleRecord
from src.domain.entities.health import DependencyStatus, ServiceStatus
from src.infrastructure.repositories.in_memory_series_store import InMemorySeriesStore
from src.infrastructure.services.health_check_service import HealthCheckService
from tests.conftest import seed_constant_history


def _roll_forward_stub(last_cycle=None, completed=0):
    return SimpleNamespace(
        last_cycle=last_cycle, completed_cycles=completed, is_running=False
    )


def _record(outcome: CycleOutcome, error=None) -> CycleRecord:
    now = datetime.now(timezone.utc)
    return CycleRecord(
        cycle=4,
        outcome=outcome,
        started_at=now,
        finished_at=now,
        version=5,
        error=error,
    )


def test_aggregate_status_priority() -> None:
    service = HealthCheckService(InMemorySeriesStore())
    statuses = [
        DependencyStatus(name="series_store", status=ServiceStatus.UP),
        DependencyStatus(name="roll_forward", status=ServiceStatus.DEGRADED),
    ]
    assert service._aggregate_status(statuses) is ServiceStatus.DEGRADED
    statuses.append(DependencyStatus(name="other", status=ServiceStatus.DOWN))
    assert service._aggregate_status(statuses) is ServiceStatus.DOWN
    assert (
        service._aggregate_status(
            [DependencyStatus(name="x", status=ServiceStatus.UNKNOWN)]
        )
        is ServiceStatus.UNKNOWN
    )


@pytest.mark.asyncio
async def test_empty_store_is_down() -> None:
    service = HealthCheckService(InMemorySeriesStore(), _roll_forward_stub())

    health = await service.evaluate()

    assert health.status is ServiceStatus.DOWN
    store_status = health.dependencies[0]
    assert store_status.name == "series_store"
    assert store_status.status is ServiceStatus.DOWN


@pytest.mark.asyncio
async def test_seeded_store_is_up(catalog) -> None:
    store = InMemorySeriesStore()
    seed_constant_history(store, catalog)
    service = HealthCheckService(
        store, _roll_forward_stub(), expected_series=len(catalog.descriptors)
    )

    health = await service.evaluate()

    assert health.status is ServiceStatus.UP
    store_status, roll_status = health.dependencies
    assert store_status.details["series"] == 7
    assert store_status.details["points"] == 700
    assert roll_status.message == "No cycle has run yet"


@pytest.mark.asyncio
async def test_missing_series_is_degraded(catalog) -> None:
    store = InMemorySeriesStore()
    seed_constant_history(store, catalog)
    service = HealthCheckService(store, _roll_forward_stub(), expected_series=9)

    health = await service.evaluate()

    assert health.status is ServiceStatus.DEGRADED


@pytest.mark.asyncio
async def test_aborted_cycle_degrades_roll_forward(catalog) -> None:
    store = InMemorySeriesStore()
    seed_constant_history(store, catalog)
    roll_forward = _roll_forward_stub(
        _record(CycleOutcome.ABORTED, error="boom"), completed=3
    )
    service = HealthCheckService(store, roll_forward)

    health = await service.evaluate()

    roll_status = health.dependencies[1]
    assert health.status is ServiceStatus.DEGRADED
    assert roll_status.status is ServiceStatus.DEGRADED
    assert roll_status.details["last_error"] == "boom"
    assert roll_status.details["completed_cycles"] == 3


@pytest.mark.asyncio
async def test_completed_cycle_is_up(catalog) -> None:
    store = InMemorySeriesStore()
    seed_constant_history(store, catalog)
    service = HealthCheckService(
        store, _roll_forward_stub(_record(CycleOutcome.COMPLETED), completed=4)
    )

    health = await service.evaluate()

    assert health.status is ServiceStatus.UP
    assert health.dependencies[1].details["last_outcome"] == "completed"


@pytest.mark.asyncio
async def test_missing_orchestrator_is_unknown(catalog) -> None:
    store = InMemorySeriesStore()
    seed_constant_history(store, catalog)

    health = await HealthCheckService(store).evaluate()

    assert health.status is ServiceStatus.UNKNOWN
