"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Interface for reporting the health of the forecasting core."""

    async def evaluate(self) -> SystemHealth:
        """Inspect the in-process components and aggregate their status."""
        ...
