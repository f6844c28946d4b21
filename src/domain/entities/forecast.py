"""Domain entities for forecast requests and results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True, slots=True)
class ForecastParameters:
    """Parameters shared by every forecast of a roll-forward cycle."""

    window_size: int = 50
    series_length: int = 100
    train_fraction: float = 0.8
    horizon: int = 20
    confidence_level: float = 0.95

    @property
    def training_size(self) -> int:
        return int(round(self.train_fraction * self.series_length))

    def as_kwargs(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ForecastResult:
    """Forecast values with their confidence bounds, one entry per step."""

    forecast: Tuple[float, ...]
    lower_bound: Tuple[float, ...]
    upper_bound: Tuple[float, ...]

    def __post_init__(self) -> None:
        if not len(self.forecast) == len(self.lower_bound) == len(self.upper_bound):
            raise ValueError("Forecast and bounds must have the same length")

    @property
    def horizon(self) -> int:
        return len(self.forecast)

    @property
    def margins(self) -> List[float]:
        return [upper - value for value, upper in zip(self.forecast, self.upper_bound)]
