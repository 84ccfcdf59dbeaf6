"""Nutrition goals service."""

import logging
from dataclasses import dataclass, replace

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.domain.goals import GoalsResponse
from mfp_bridge.parsers.fallbacks import ExtractionReport
from mfp_bridge.parsers.goals import (
    build_goals,
    parse_goal_figures,
    parse_goals_page_calories,
)

DIARY_PATH = "/food/diary"
GOALS_PAGE_PATH = "/account/my-goals"

_logger = logging.getLogger(__name__)


@dataclass
class GoalsService:
    """Reads daily goals from the diary, falling back to the goals page."""

    client: MfpHttpClient

    async def get_goals(self, report: ExtractionReport | None = None) -> GoalsResponse:
        """Return calorie and macro goals with derived percentages."""
        html = await self.client.get(DIARY_PATH)
        figures = parse_goal_figures(html, report)
        if figures.calories == 0:
            _logger.debug("No calorie goal on diary page, reading %s", GOALS_PAGE_PATH)
            page = await self.client.get(GOALS_PAGE_PATH)
            figures = replace(figures, calories=parse_goals_page_calories(page, report))
        return build_goals(figures)
