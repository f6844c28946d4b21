"""Domain port for the forecasting model behind every roll-forward."""

from __future__ import annotations

from typing import Protocol, Sequence

from src.domain.entities.forecast import ForecastResult


class IForecastEngine(Protocol):
    """Fits a model on a history and extrapolates it with confidence bounds."""

    def fit_and_forecast(
        self,
        history: Sequence[float],
        *,
        window_size: int,
        series_length: int,
        train_fraction: float,
        horizon: int,
        confidence_level: float,
    ) -> ForecastResult:
        """Fit a fresh model on ``history`` and forecast ``horizon`` steps.

        Raises:
            InsufficientHistoryError: If ``history`` is shorter than
                ``series_length``.
            InvalidParameterError: If a parameter violates its constraints.
        """
        ...
