"""Tool registry exposing the diary operations to tool-calling clients."""

import dataclasses
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from mfp_bridge.errors import MfpError, ReadOnlyModeError
from mfp_bridge.services.diary import DiaryService
from mfp_bridge.services.food_search import FoodSearchService
from mfp_bridge.services.goals import GoalsService
from mfp_bridge.services.log_food import LogFoodService
from mfp_bridge.services.summary import NutritionSummaryService
from mfp_bridge.services.weight import WeightService

WRITE_TOOLS = frozenset({"log_food"})

_logger = logging.getLogger(__name__)


class ToolInput(BaseModel):
    """Base for tool arguments, accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GetDiaryInput(ToolInput):
    date: str | None = Field(
        default=None, description="Date in YYYY-MM-DD format (defaults to today)"
    )


class GetGoalsInput(ToolInput):
    pass


class SearchFoodInput(ToolInput):
    query: str = Field(description="Search term")
    page: int = Field(default=1, ge=1, description="Page number (default: 1)")


class GetWeightHistoryInput(ToolInput):
    start_date: str | None = Field(
        default=None, description="Start date in YYYY-MM-DD format"
    )
    end_date: str | None = Field(
        default=None, description="End date in YYYY-MM-DD format"
    )
    limit: int = Field(
        default=30, ge=1, description="Maximum entries to return (default: 30)"
    )


class GetNutritionSummaryInput(ToolInput):
    start_date: str = Field(description="Start date in YYYY-MM-DD format")
    end_date: str = Field(description="End date in YYYY-MM-DD format")


class LogFoodInput(ToolInput):
    food_id: str = Field(description="Food ID from search results")
    meal: Literal["Breakfast", "Lunch", "Dinner", "Snacks"] = Field(
        description="Meal to add food to"
    )
    servings: float = Field(
        default=1, gt=0, description="Number of servings (default: 1)"
    )
    date: str | None = Field(
        default=None, description="Date in YYYY-MM-DD format (defaults to today)"
    )


@dataclass(frozen=True)
class ToolSpec:
    """A named operation with its argument model."""

    name: str
    description: str
    input_model: type[ToolInput]

    def definition(self) -> dict[str, object]:
        """Return the tool definition advertised to clients."""
        schema = self.input_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        for prop in schema["properties"].values():
            prop.pop("title", None)
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": schema,
        }


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "get_diary",
        "Get food diary entries for a specific date, including meals, "
        "nutrition totals, and goals",
        GetDiaryInput,
    ),
    ToolSpec(
        "get_goals",
        "Get user's daily nutrition goals including calories and macros",
        GetGoalsInput,
    ),
    ToolSpec(
        "search_food",
        "Search the MyFitnessPal food database",
        SearchFoodInput,
    ),
    ToolSpec(
        "get_weight_history",
        "Get weight tracking history",
        GetWeightHistoryInput,
    ),
    ToolSpec(
        "get_nutrition_summary",
        "Get aggregated nutrition data over a date range with averages and "
        "compliance stats",
        GetNutritionSummaryInput,
    ),
    ToolSpec(
        "log_food",
        "Add a food entry to the diary",
        LogFoodInput,
    ),
)


def to_payload(value: object) -> object:
    """Convert records to JSON-ready data with camelCase keys."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(item.name): to_payload(getattr(value, item.name))
            for item in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {str(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_payload(item) for item in value]
    return value


def text_result(text: str, is_error: bool = False) -> dict[str, object]:
    """Wrap text in a tool result."""
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


@dataclass
class ToolRegistry:
    """Lists tools and dispatches calls to the matching service."""

    diary_service: DiaryService
    goals_service: GoalsService
    food_search_service: FoodSearchService
    weight_service: WeightService
    summary_service: NutritionSummaryService
    log_food_service: LogFoodService
    read_only: bool = False

    def list_tools(self) -> list[dict[str, object]]:
        """Return tool definitions, hiding write tools in read-only mode."""
        return [
            spec.definition()
            for spec in TOOL_SPECS
            if not (self.read_only and spec.name in WRITE_TOOLS)
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, object] | None = None
    ) -> dict[str, object]:
        """Run a tool and return its JSON text result or an error result."""
        handler = self._handlers().get(name)
        if handler is None:
            return text_result(f"Unknown tool: {name}", is_error=True)
        try:
            if self.read_only and name in WRITE_TOOLS:
                raise ReadOnlyModeError()
            result = await handler(arguments or {})
        except (MfpError, ValidationError, ValueError) as exc:
            _logger.warning("Tool %s failed: %s", name, exc)
            return text_result(f"Error: {_error_message(exc)}", is_error=True)
        except Exception as exc:
            _logger.exception("Tool %s raised unexpectedly", name)
            return text_result(f"Error: {exc}", is_error=True)
        return text_result(json.dumps(to_payload(result), indent=2))

    def _handlers(
        self,
    ) -> dict[str, Callable[[dict[str, object]], Awaitable[object]]]:
        return {
            "get_diary": self._get_diary,
            "get_goals": self._get_goals,
            "search_food": self._search_food,
            "get_weight_history": self._get_weight_history,
            "get_nutrition_summary": self._get_nutrition_summary,
            "log_food": self._log_food,
        }

    async def _get_diary(self, arguments: dict[str, object]) -> object:
        args = GetDiaryInput.model_validate(arguments)
        return await self.diary_service.get_diary(args.date)

    async def _get_goals(self, arguments: dict[str, object]) -> object:
        GetGoalsInput.model_validate(arguments)
        return await self.goals_service.get_goals()

    async def _search_food(self, arguments: dict[str, object]) -> object:
        args = SearchFoodInput.model_validate(arguments)
        return await self.food_search_service.search(args.query, args.page)

    async def _get_weight_history(self, arguments: dict[str, object]) -> object:
        args = GetWeightHistoryInput.model_validate(arguments)
        return await self.weight_service.get_weight_history(
            start_date=args.start_date, end_date=args.end_date, limit=args.limit
        )

    async def _get_nutrition_summary(self, arguments: dict[str, object]) -> object:
        args = GetNutritionSummaryInput.model_validate(arguments)
        return await self.summary_service.get_summary(args.start_date, args.end_date)

    async def _log_food(self, arguments: dict[str, object]) -> object:
        args = LogFoodInput.model_validate(arguments)
        return await self.log_food_service.log_food(
            args.food_id, args.meal, servings=args.servings, date=args.date
        )


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return "Invalid arguments: " + "; ".join(problems)
    return str(exc)
