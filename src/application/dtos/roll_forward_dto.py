"""DTOs for roll-forward cycle responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities.cycle import CycleOutcome, CycleRecord


class RollForwardResultDTO(BaseModel):
    """Summary of a completed roll-forward cycle."""

    cycle: int = Field(ge=1, description="Sequence number of the cycle")
    status: CycleOutcome = Field(description="Outcome of the cycle")
    version: int = Field(description="Snapshot version produced by the cycle")
    started_at: datetime
    finished_at: datetime
    duration_ms: float = Field(ge=0, description="Wall-clock duration")
    forecast_series: int = Field(description="Number of series re-forecast")
    horizon: int = Field(description="Number of forecast steps per series")

    @classmethod
    def from_domain(
        cls, record: CycleRecord, *, forecast_series: int, horizon: int
    ) -> "RollForwardResultDTO":
        return cls(
            cycle=record.cycle,
            status=record.outcome,
            version=record.version,
            started_at=record.started_at,
            finished_at=record.finished_at,
            duration_ms=max(0.0, record.duration_ms),
            forecast_series=forecast_series,
            horizon=horizon,
        )
