"""Domain entities describing roll-forward cycles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class CycleOutcome(str, Enum):
    """Result of a roll-forward cycle."""

    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(slots=True)
class CycleRecord:
    """Outcome of the most recent roll-forward attempt."""

    cycle: int
    outcome: CycleOutcome
    started_at: datetime
    finished_at: datetime
    version: int
    error: Optional[str] = None

    @property
    def duration_ms(self) -> float:
        return (self.finished_at - self.started_at).total_seconds() * 1000
