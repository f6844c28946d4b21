"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. The series store keeps every
tracked series in process memory.
"""

from .in_memory_series_store import InMemorySeriesStore

__all__ = ["InMemorySeriesStore"]
