"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: the in-memory series store, the SSA forecast engine,
the seeded random source and the background scheduler.
"""

from src.infrastructure import forecasting, repositories, services

__all__ = ["forecasting", "repositories", "services"]
