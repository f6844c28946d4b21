"""
Domain Errors

This module defines custom error classes for the risk forecasting domain.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InsufficientHistoryError(DomainError):
    """Raised when a series is too short to fit a forecasting model."""

    def __init__(
        self,
        available: int,
        required: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.available = available
        self.required = required
        message = (
            f"History holds {available} points but at least {required} are required"
        )
        super().__init__(message, details)


class InvalidParameterError(DomainError):
    """Raised when forecasting parameters violate their constraints."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NotFoundError(DomainError):
    """Raised when a requested series or point does not exist."""


class SeriesNotFoundError(NotFoundError):
    """Raised when a series id is not registered in the store."""

    def __init__(self, series_id: int, details: Optional[Dict[str, Any]] = None):
        self.series_id = series_id
        super().__init__(f"Series {series_id} is not registered", details)


class PointNotFoundError(NotFoundError):
    """Raised when no point of a series sits at the requested day offset."""

    def __init__(
        self,
        series_id: int,
        day_offset: float,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.series_id = series_id
        self.day_offset = day_offset
        message = f"Series {series_id} has no point at day offset {day_offset:g}"
        super().__init__(message, details)


class AmbiguousPointError(DomainError):
    """Raised when more than one point shares a day offset within a series.

    Day offsets are unique per series, so this signals corrupted state.
    """

    def __init__(
        self,
        series_id: int,
        day_offset: float,
        matches: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.series_id = series_id
        self.day_offset = day_offset
        self.matches = matches
        message = (
            f"Series {series_id} has {matches} points at day offset {day_offset:g}"
        )
        super().__init__(message, details)


class ForecastDivergedError(DomainError):
    """Raised when a fitted model produces non-finite forecasts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ForecastFailedError(DomainError):
    """Raised when the forecast engine fails for one series."""

    def __init__(self, series_id: int, reason: str):
        self.series_id = series_id
        super().__init__(
            f"Forecast failed for series {series_id}: {reason}",
            details={"series_id": series_id, "reason": reason},
        )


class CycleAbortedError(DomainError):
    """Raised when a roll-forward cycle fails and its changes are discarded."""

    def __init__(self, cycle: int, reason: str):
        self.cycle = cycle
        super().__init__(
            f"Roll-forward cycle {cycle} aborted: {reason}",
            details={"cycle": cycle, "reason": reason},
        )
