"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from src.application.use_cases.roll_forward_use_case import RollForwardUseCase
from src.domain.entities.cycle import CycleOutcome
from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from src.domain.ports.health_check import IHealthCheckService
from src.domain.repositories.series_store import ISeriesStore


class HealthCheckService(IHealthCheckService):
    """Collect health information for the in-process forecasting core."""

    def __init__(
        self,
        series_store: ISeriesStore,
        roll_forward: Optional[RollForwardUseCase] = None,
        *,
        expected_series: int = 0,
    ) -> None:
        self._series_store = series_store
        self._roll_forward = roll_forward
        self._expected_series = expected_series

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""

        checks = {
            "series_store": asyncio.create_task(self._check_series_store()),
            "roll_forward": asyncio.create_task(self._check_roll_forward()),
        }

        dependency_statuses: List[DependencyStatus] = []

        for name, task in checks.items():
            try:
                dependency_statuses.append(await task)
            except Exception as exc:  # pragma: no cover - defensive fallback
                dependency_statuses.append(
                    DependencyStatus(
                        name=name,
                        status=ServiceStatus.DOWN,
                        message=str(exc),
                    )
                )

        overall_status = self._aggregate_status(dependency_statuses)
        return SystemHealth(status=overall_status, dependencies=dependency_statuses)

    def _aggregate_status(self, statuses: Iterable[DependencyStatus]) -> ServiceStatus:
        has_unknown = False
        has_degraded = False

        for status in statuses:
            if status.status == ServiceStatus.DOWN:
                return ServiceStatus.DOWN
            if status.status == ServiceStatus.DEGRADED:
                has_degraded = True
            if status.status == ServiceStatus.UNKNOWN:
                has_unknown = True

        if has_degraded:
            return ServiceStatus.DEGRADED
        if has_unknown:
            return ServiceStatus.UNKNOWN
        return ServiceStatus.UP

    async def _check_series_store(self) -> DependencyStatus:
        snapshot = self._series_store.snapshot()
        series_count = len(snapshot)
        point_count = sum(len(series.points) for series in snapshot)
        details = {
            "version": snapshot.version,
            "series": series_count,
            "points": point_count,
        }

        if series_count == 0 or point_count == 0:
            return DependencyStatus(
                name="series_store",
                status=ServiceStatus.DOWN,
                message="Series store has not been seeded.",
                details=details,
            )
        if self._expected_series and series_count < self._expected_series:
            return DependencyStatus(
                name="series_store",
                status=ServiceStatus.DEGRADED,
                message=(
                    f"{series_count} of {self._expected_series} series registered"
                ),
                details=details,
            )
        return DependencyStatus(
            name="series_store",
            status=ServiceStatus.UP,
            message=f"{series_count} series loaded",
            details=details,
        )

    async def _check_roll_forward(self) -> DependencyStatus:
        if self._roll_forward is None:
            return DependencyStatus(
                name="roll_forward",
                status=ServiceStatus.UNKNOWN,
                message="Roll-forward orchestrator not configured.",
            )

        last_cycle = self._roll_forward.last_cycle
        details = {
            "completed_cycles": self._roll_forward.completed_cycles,
            "running": self._roll_forward.is_running,
        }

        if last_cycle is None:
            return DependencyStatus(
                name="roll_forward",
                status=ServiceStatus.UP,
                message="No cycle has run yet",
                details=details,
            )

        details.update(
            {
                "last_cycle": last_cycle.cycle,
                "last_outcome": last_cycle.outcome.value,
                "last_finished_at": last_cycle.finished_at.isoformat(),
            }
        )
        if last_cycle.outcome == CycleOutcome.ABORTED:
            details["last_error"] = last_cycle.error
            return DependencyStatus(
                name="roll_forward",
                status=ServiceStatus.DEGRADED,
                message=f"Cycle {last_cycle.cycle} aborted",
                details=details,
            )
        return DependencyStatus(
            name="roll_forward",
            status=ServiceStatus.UP,
            message=f"Cycle {last_cycle.cycle} completed",
            details=details,
        )
