"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .series_store import ISeriesStore, PointPredicate

__all__ = ["ISeriesStore", "PointPredicate"]
