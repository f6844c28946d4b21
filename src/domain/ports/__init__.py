"""Domain ports package."""

from .forecast_engine import IForecastEngine
from .health_check import IHealthCheckService
from .random_source import IRandomSource

__all__ = ["IForecastEngine", "IHealthCheckService", "IRandomSource"]
