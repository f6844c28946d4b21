"""
Application DTOs - Risk Series

Data Transfer Objects exposing the aggregate snapshot of every tracked
risk series to the presentation layer.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.series import (
    AggregateSnapshot,
    Point,
    SeriesKind,
    SeriesSnapshot,
)


class PointDTO(BaseModel):
    """Represents one sample of a series."""

    day: float = Field(
        description="Day offset: negative for history, -1 for today, 0+ forecast"
    )
    count: int = Field(description="Number of samples behind the value")
    value: float = Field(description="Observed or forecast value")
    min: Optional[float] = Field(
        default=None, description="Lower confidence bound (forecast only)"
    )
    max: Optional[float] = Field(
        default=None, description="Upper confidence bound (forecast only)"
    )

    @classmethod
    def from_domain(cls, point: Point) -> "PointDTO":
        return cls(
            day=point.day_offset,
            count=point.sample_count,
            value=point.value,
            min=point.lower_bound,
            max=point.upper_bound,
        )


class SeriesDTO(BaseModel):
    """Represents a tracked series with its points ordered by day."""

    series_id: int
    name: str
    kind: SeriesKind
    factor: Optional[int] = Field(
        default=None, description="Index of the risk factor the series belongs to"
    )
    lower_limit: Optional[float] = Field(
        default=None, description="Lowest valid value of generated series"
    )
    upper_limit: Optional[float] = Field(
        default=None, description="Highest valid value of generated series"
    )
    points: List[PointDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, series: SeriesSnapshot) -> "SeriesDTO":
        descriptor = series.descriptor
        value_range = descriptor.value_range
        ordered = sorted(series.points, key=lambda point: point.day_offset)
        return cls(
            series_id=descriptor.series_id,
            name=descriptor.name,
            kind=descriptor.kind,
            factor=descriptor.factor_index,
            lower_limit=value_range.lower if value_range else None,
            upper_limit=value_range.upper if value_range else None,
            points=[PointDTO.from_domain(point) for point in ordered],
        )


class RiskSnapshotDTO(BaseModel):
    """DTO returned by the risk snapshot endpoint."""

    version: int = Field(description="Number of committed updates behind the state")
    series: List[SeriesDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, snapshot: AggregateSnapshot) -> "RiskSnapshotDTO":
        return cls(
            version=snapshot.version,
            series=[SeriesDTO.from_domain(series) for series in snapshot],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "version": 3,
                "series": [
                    {
                        "series_id": 1,
                        "name": "risk factor 1",
                        "kind": "factor",
                        "factor": 1,
                        "lower_limit": 0.0,
                        "upper_limit": 100.0,
                        "points": [
                            {"day": -1.0, "count": 100, "value": 42.7},
                            {
                                "day": 0.0,
                                "count": 100,
                                "value": 42.9,
                                "min": 40.1,
                                "max": 45.7,
                            },
                        ],
                    }
                ],
            }
        }
    }
