"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .cycle import CycleOutcome, CycleRecord
from .errors import (
    AmbiguousPointError,
    CycleAbortedError,
    DomainError,
    ForecastDivergedError,
    ForecastFailedError,
    InsufficientHistoryError,
    InvalidParameterError,
    NotFoundError,
    PointNotFoundError,
    SeriesNotFoundError,
)
from .forecast import ForecastParameters, ForecastResult
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .series import (
    BASE_FACTOR_RANGE,
    FACTOR_RANGE,
    AggregateSnapshot,
    Point,
    SeriesDescriptor,
    SeriesKind,
    SeriesSnapshot,
    ValueRange,
)

__all__ = [
    "Point",
    "SeriesKind",
    "SeriesDescriptor",
    "SeriesSnapshot",
    "AggregateSnapshot",
    "ValueRange",
    "FACTOR_RANGE",
    "BASE_FACTOR_RANGE",
    "ForecastParameters",
    "ForecastResult",
    "CycleOutcome",
    "CycleRecord",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "InsufficientHistoryError",
    "InvalidParameterError",
    "NotFoundError",
    "SeriesNotFoundError",
    "PointNotFoundError",
    "AmbiguousPointError",
    "ForecastDivergedError",
    "ForecastFailedError",
    "CycleAbortedError",
]
