"""Seeded pseudo-random source backed by numpy's generator."""

from __future__ import annotations

import threading
from typing import Optional

import numpy as np

from src.domain.ports.random_source import IRandomSource


class SeededRandomSource(IRandomSource):
    """Reproducible integer draws for the synthetic random walks."""

    def __init__(self, seed: Optional[int] = 12345) -> None:
        self._seed = seed
        self._generator = np.random.default_rng(seed)
        self._lock = threading.Lock()

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def next(self, min_value: int, max_value: int) -> int:
        if max_value <= min_value:
            raise ValueError("max_value must be greater than min_value")
        with self._lock:
            return int(self._generator.integers(min_value, max_value))
