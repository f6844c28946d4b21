"""
Health domain entities.

Value objects reporting the state of the in-process components (series
store, roll-forward orchestrator) and the metadata surfaced by /info.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a component or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single component."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the application."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)
    simulation: Dict[str, Any] = field(default_factory=dict)
