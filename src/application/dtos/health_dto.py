"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    """Serializable representation of a component health check."""

    name: str = Field(description="Component identifier")
    status: ServiceStatus = Field(description="Aggregated status for the component")
    message: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    checked_at: datetime = Field(description="Timestamp of the check")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Additional metrics"
    )

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            details=status.details,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "series_store",
                "status": "up",
                "message": "7 series loaded",
                "checked_at": "2024-09-09T12:00:00Z",
                "details": {"version": 4, "points": 840},
            }
        }
    }


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Detailed component information"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current deployment environment")
    git_commit: str = Field(description="Git commit hash")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    status: ServiceStatus = Field(description="Overall system status")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Component status snapshot"
    )
    simulation: Dict[str, Any] = Field(
        default_factory=dict,
        description="Simulation and forecasting parameters in effect",
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
            simulation=info.simulation,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Risk Forecast Dashboard",
                "description": "SSA forecasts of synthetic risk metrics",
                "version": "1.0.0",
                "environment": "development",
                "git_commit": "abcdef1",
                "build_time": "2024-09-09T11:30:00Z",
                "started_at": "2024-09-09T12:00:00Z",
                "uptime_seconds": 3600.5,
                "status": "up",
                "dependencies": [],
                "simulation": {
                    "factor_count": 2,
                    "history_length": 100,
                    "forecast": {"window_size": 50, "horizon": 20},
                },
            }
        }
    }
