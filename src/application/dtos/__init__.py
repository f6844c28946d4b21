"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO
from .roll_forward_dto import RollForwardResultDTO
from .series_dto import PointDTO, RiskSnapshotDTO, SeriesDTO

__all__ = [
    "PointDTO",
    "SeriesDTO",
    "RiskSnapshotDTO",
    "RollForwardResultDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
