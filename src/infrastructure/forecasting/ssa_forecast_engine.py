"""
Infrastructure Forecasting - Singular Spectrum Analysis

Fits an SSA model on the trailing training portion of a history and
extrapolates it with the linear recurrence formula (LRF) derived from the
leading eigenvectors of the trajectory matrix:
  * Embedding of the training values with window length L
  * SVD and selection of the leading components
  * Reconstruction by diagonal averaging
  * Recurrent forecasting with confidence bounds that widen with depth

A model is fitted from scratch for every forecast and discarded after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from statistics import NormalDist
from typing import Optional, Sequence

import numpy as np
import structlog
from numpy.lib.stride_tricks import sliding_window_view

from src.domain.entities.errors import (
    ForecastDivergedError,
    InsufficientHistoryError,
    InvalidParameterError,
)
from src.domain.entities.forecast import ForecastResult
from src.domain.ports.forecast_engine import IForecastEngine
from src.domain.services.forecast_validator import validate_forecast_parameters

logger = structlog.get_logger(__name__)

_ZERO_ENERGY = 1e-12
_MAX_VERTICALITY = 1.0 - 1e-9


@dataclass(frozen=True, eq=False)
class SSAModel:
    """Fitted SSA model, valid for a single forecast."""

    window_size: int
    rank: int
    coefficients: np.ndarray
    residual_std: float
    tail: np.ndarray

    def forecast(self, horizon: int, confidence_level: float) -> ForecastResult:
        lag_count = self.window_size - 1
        values = np.concatenate([self.tail, np.zeros(horizon)])
        for step in range(horizon):
            values[lag_count + step] = float(
                self.coefficients @ values[step : step + lag_count]
            )
        forecast = values[lag_count:]

        z_score = NormalDist().inv_cdf(0.5 + confidence_level / 2.0)
        impulse = self.impulse_response(horizon)
        margins = z_score * self.residual_std * np.sqrt(np.cumsum(impulse**2))

        if not (np.all(np.isfinite(forecast)) and np.all(np.isfinite(margins))):
            raise ForecastDivergedError(
                "SSA forecast produced non-finite values",
                details={"rank": self.rank, "window_size": self.window_size},
            )

        return ForecastResult(
            forecast=tuple(float(value) for value in forecast),
            lower_bound=tuple(float(value) for value in forecast - margins),
            upper_bound=tuple(float(value) for value in forecast + margins),
        )

    def impulse_response(self, horizon: int) -> np.ndarray:
        """Weights of past shocks in each forecast step of the LRF."""
        lags = self.coefficients[::-1]
        response = np.zeros(horizon)
        response[0] = 1.0
        for step in range(1, horizon):
            depth = min(step, lags.size)
            response[step] = float(lags[:depth] @ response[step - 1 :: -1][:depth])
        return response


class SSAForecastEngine(IForecastEngine):
    """Forecast engine based on singular spectrum analysis."""

    def __init__(self, rank: Optional[int] = None, energy_threshold: float = 0.9):
        if not 0.0 < energy_threshold <= 1.0:
            raise InvalidParameterError(
                "Energy threshold must be between 0 (exclusive) and 1 (inclusive).",
                details={"energy_threshold": energy_threshold},
            )
        self.rank = rank
        self.energy_threshold = float(energy_threshold)

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
        validate_forecast_parameters(
            window_size=window_size,
            series_length=series_length,
            train_fraction=train_fraction,
            horizon=horizon,
            confidence_level=confidence_level,
            rank=self.rank,
        )
        model = self.fit(
            history,
            window_size=window_size,
            series_length=series_length,
            train_fraction=train_fraction,
        )
        return model.forecast(horizon, confidence_level)

    def fit(
        self,
        history: Sequence[float],
        *,
        window_size: int,
        series_length: int,
        train_fraction: float,
    ) -> SSAModel:
        """Fit a model on the trailing training portion of ``history``."""
        values = np.asarray(history, dtype=np.float64)
        if values.size < series_length:
            raise InsufficientHistoryError(values.size, series_length)

        training_size = int(round(train_fraction * series_length))
        train = values[-series_length:][-training_size:]
        lag_count = window_size - 1

        trajectory = sliding_window_view(train, window_size).T
        left, singular, right = np.linalg.svd(trajectory, full_matrices=False)
        energy = singular**2

        if energy.sum() <= _ZERO_ENERGY:
            logger.debug("forecast.ssa.zero_energy", training_size=training_size)
            return SSAModel(
                window_size=window_size,
                rank=0,
                coefficients=np.zeros(lag_count),
                residual_std=0.0,
                tail=np.zeros(lag_count),
            )

        rank = self._select_rank(energy)
        eigenvectors = left[:, :rank]
        last_row = eigenvectors[-1, :]
        verticality = float(last_row @ last_row)
        if verticality >= _MAX_VERTICALITY:
            raise ForecastDivergedError(
                "Leading eigenvectors do not admit a recurrence formula",
                details={"rank": rank, "verticality": verticality},
            )
        coefficients = (eigenvectors[:-1, :] @ last_row) / (1.0 - verticality)

        approximation = (eigenvectors * singular[:rank]) @ right[:rank, :]
        reconstructed = _diagonal_average(approximation)

        # One-step-ahead errors of the recurrence over the observed values.
        lagged = sliding_window_view(train, lag_count)[:-1]
        errors = train[lag_count:] - lagged @ coefficients
        residual_std = float(np.sqrt(np.mean(errors**2)))

        logger.debug(
            "forecast.ssa.fitted",
            rank=rank,
            window_size=window_size,
            training_size=training_size,
            residual_std=residual_std,
        )

        return SSAModel(
            window_size=window_size,
            rank=rank,
            coefficients=coefficients,
            residual_std=residual_std,
            tail=reconstructed[-lag_count:],
        )

    def _select_rank(self, energy: np.ndarray) -> int:
        available = energy.size
        if self.rank is not None:
            return min(self.rank, available)
        cumulative = np.cumsum(energy) / energy.sum()
        rank = int(np.searchsorted(cumulative, self.energy_threshold)) + 1
        return min(rank, available)


def _diagonal_average(matrix: np.ndarray) -> np.ndarray:
    """Hankelize an L x K matrix back into a series of length L + K - 1."""
    rows, columns = matrix.shape
    sums = np.zeros(rows + columns - 1)
    counts = np.zeros(rows + columns - 1)
    for column in range(columns):
        sums[column : column + rows] += matrix[:, column]
        counts[column : column + rows] += 1
    return sums / counts
