"""Models for nutrition summaries over a date range."""

from dataclasses import dataclass, field

from mfp_bridge.domain.nutrition import NutritionTotals


@dataclass(frozen=True)
class SummaryPeriod:
    """Inclusive date range."""

    start: str
    end: str


@dataclass(frozen=True)
class Compliance:
    """How logged days compare with the calorie goal."""

    days_logged: int
    days_under_goal: int
    days_over_goal: int
    days_at_goal: int = 0


@dataclass(frozen=True)
class NutritionSummaryResponse:
    """Totals and averages across the logged days of a period."""

    period: SummaryPeriod
    days: int
    averages: NutritionTotals
    totals: NutritionTotals
    compliance: Compliance
    failed_days: list[str] = field(default_factory=list)
