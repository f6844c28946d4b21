"""Forecasting engines implementing the domain forecast port."""

from .ssa_forecast_engine import SSAForecastEngine, SSAModel

__all__ = ["SSAForecastEngine", "SSAModel"]
