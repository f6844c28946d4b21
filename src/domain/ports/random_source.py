"""Domain port for the pseudo-random source driving the simulation."""

from __future__ import annotations

from typing import Protocol


class IRandomSource(Protocol):
    """Supplies integers for the synthetic random walks."""

    def next(self, min_value: int, max_value: int) -> int:
        """Return an integer in ``[min_value, max_value)``."""
        ...
