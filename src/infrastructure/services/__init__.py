"""Infrastructure services package."""

from .health_check_service import HealthCheckService
from .random_source import SeededRandomSource
from .roll_forward_scheduler import RollForwardScheduler

__all__ = ["HealthCheckService", "RollForwardScheduler", "SeededRandomSource"]
