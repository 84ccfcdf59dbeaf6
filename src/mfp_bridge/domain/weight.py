"""Weight tracking models."""

from dataclasses import dataclass
from typing import Literal

WeightUnit = Literal["kg", "lb"]


@dataclass(frozen=True)
class WeightEntry:
    """A single weigh-in."""

    date: str
    weight: float
    unit: WeightUnit


@dataclass(frozen=True)
class WeightHistoryResponse:
    """Weigh-ins plus current, goal and starting weight."""

    entries: list[WeightEntry]
    unit: WeightUnit
    current: float | None = None
    goal: float | None = None
    start_weight: float | None = None
