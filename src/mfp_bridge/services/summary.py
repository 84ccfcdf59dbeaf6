"""Nutrition summary over a date range."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from mfp_bridge.dates import days_between
from mfp_bridge.domain.nutrition import NutritionTotals, round_half_up
from mfp_bridge.domain.summary import (
    Compliance,
    NutritionSummaryResponse,
    SummaryPeriod,
)
from mfp_bridge.errors import MfpError
from mfp_bridge.services.diary import DiaryService
from mfp_bridge.services.goals import GoalsService

_logger = logging.getLogger(__name__)


@dataclass
class NutritionSummaryService:
    """Walks the diary day by day and folds the logged days together."""

    diary_service: DiaryService
    goals_service: GoalsService
    delay_seconds: float = 0.2
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    async def get_summary(
        self, start_date: str, end_date: str
    ) -> NutritionSummaryResponse:
        """Return totals, averages and goal compliance for the range."""
        days = days_between(start_date, end_date)
        goals = await self.goals_service.get_goals()

        totals = _empty_totals()
        days_logged = 0
        under = over = at_goal = 0
        failed: list[str] = []

        for index, day in enumerate(days):
            if index > 0 and self.delay_seconds > 0:
                await self.sleep(self.delay_seconds)
            try:
                diary = await self.diary_service.get_diary(day)
            except (MfpError, httpx.HTTPError) as exc:
                _logger.warning("Failed to load diary for %s: %s", day, exc)
                failed.append(day)
                continue
            if not diary.has_entries:
                continue

            days_logged += 1
            totals = totals.plus(diary.totals)
            if diary.totals.calories < goals.calories:
                under += 1
            elif diary.totals.calories > goals.calories:
                over += 1
            else:
                at_goal += 1

        return NutritionSummaryResponse(
            period=SummaryPeriod(start=start_date, end=end_date),
            days=len(days),
            averages=_average(totals, max(days_logged, 1)),
            totals=totals,
            compliance=Compliance(
                days_logged=days_logged,
                days_under_goal=under,
                days_over_goal=over,
                days_at_goal=at_goal,
            ),
            failed_days=failed,
        )


def _empty_totals() -> NutritionTotals:
    return NutritionTotals(
        calories=0.0, carbs=0.0, fat=0.0, protein=0.0, sodium=0.0, sugar=0.0, fiber=0.0
    )


def _average(totals: NutritionTotals, divisor: int) -> NutritionTotals:
    return NutritionTotals(
        calories=round_half_up(totals.calories / divisor),
        carbs=round_half_up(totals.carbs / divisor),
        fat=round_half_up(totals.fat / divisor),
        protein=round_half_up(totals.protein / divisor),
        sodium=round_half_up((totals.sodium or 0.0) / divisor),
        sugar=round_half_up((totals.sugar or 0.0) / divisor),
        fiber=round_half_up((totals.fiber or 0.0) / divisor),
    )
