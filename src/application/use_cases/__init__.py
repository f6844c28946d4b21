"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .roll_forward_use_case import RollForwardUseCase
from .series_generation_use_case import GenerateRiskSeriesUseCase
from .snapshot_use_cases import GetRiskSnapshotUseCase

__all__ = [
    "GenerateRiskSeriesUseCase",
    "RollForwardUseCase",
    "GetRiskSnapshotUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
