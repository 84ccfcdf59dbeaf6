"""Adding a food to the diary."""

import logging
from dataclasses import dataclass
from urllib.parse import quote

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.dates import today
from mfp_bridge.domain.foods import LogFoodEntry, LogFoodResponse
from mfp_bridge.domain.nutrition import MEAL_NAMES
from mfp_bridge.errors import ReadOnlyModeError
from mfp_bridge.parsers.food_item import parse_food_item

FOOD_ITEM_PATH = "/food/item/{food_id}"
ADD_TO_DIARY_PATH = "/food/add_to_diary"

MEAL_INDEX = {name: index for index, name in enumerate(MEAL_NAMES)}

_logger = logging.getLogger(__name__)


@dataclass
class LogFoodService:
    """Submits the add-to-diary form for a food item."""

    client: MfpHttpClient
    read_only: bool = False

    async def log_food(
        self,
        food_id: str,
        meal: str,
        servings: float = 1,
        date: str | None = None,
    ) -> LogFoodResponse:
        """Add a food to a meal.

        Success only means the form submission did not fail; the response is
        not read back, so the returned calorie figure is always zero.
        """
        if self.read_only:
            raise ReadOnlyModeError()
        if meal not in MEAL_INDEX:
            raise ValueError(f"Unknown meal: {meal}. Expected one of {MEAL_NAMES}")
        target = date or today()

        item_path = FOOD_ITEM_PATH.format(food_id=quote(food_id, safe=""))

        try:
            page = await self.client.get(item_path)
            form = parse_food_item(page)
            await self.client.post(
                ADD_TO_DIARY_PATH,
                {
                    "authenticity_token": form.token,
                    "food_entry": food_id,
                    "meal": str(MEAL_INDEX[meal]),
                    "date": target,
                    "quantity": _format_quantity(servings),
                },
            )
        except Exception as exc:
            _logger.exception("Failed to log food %s to %s", food_id, meal)
            return LogFoodResponse(
                success=False, error=str(exc) or "Failed to log food"
            )

        _logger.info("Logged food %s to %s on %s", food_id, meal, target)
        return LogFoodResponse(
            success=True,
            entry=LogFoodEntry(
                id=food_id, name=form.name, calories=0.0, serving=form.serving
            ),
        )


def _format_quantity(servings: float) -> str:
    if float(servings).is_integer():
        return str(int(servings))
    return str(servings)
