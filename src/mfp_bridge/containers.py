"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mfp_bridge.adapters.mfp_http_client import HttpxMfpClient, MfpHttpClient
from mfp_bridge.config import Settings, validate_cookie
from mfp_bridge.errors import AuthenticationError
from mfp_bridge.services.diary import DiaryService
from mfp_bridge.services.food_search import FoodSearchService
from mfp_bridge.services.goals import GoalsService
from mfp_bridge.services.log_food import LogFoodService
from mfp_bridge.services.summary import NutritionSummaryService
from mfp_bridge.services.tools import ToolRegistry
from mfp_bridge.services.weight import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    mfp_client: MfpHttpClient
    diary_service: DiaryService
    goals_service: GoalsService
    food_search_service: FoodSearchService
    weight_service: WeightService
    summary_service: NutritionSummaryService
    log_food_service: LogFoodService
    tool_registry: ToolRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    mfp_client: MfpHttpClient | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if mfp_client is None:
        if not validate_cookie(resolved_settings.mfp_cookie):
            raise AuthenticationError(
                "MFP_COOKIE environment variable is not set. "
                "Please set it with your MyFitnessPal cookie."
            )
        mfp_client = HttpxMfpClient.create(
            cookie=resolved_settings.mfp_cookie,
            base_url=resolved_settings.mfp_base_url,
            timeout=resolved_settings.mfp_request_timeout,
            max_redirects=resolved_settings.mfp_max_redirects,
        )

    diary_service = DiaryService(mfp_client)
    goals_service = GoalsService(mfp_client)
    food_search_service = FoodSearchService(mfp_client)
    weight_service = WeightService(mfp_client)
    summary_service = NutritionSummaryService(
        diary_service=diary_service,
        goals_service=goals_service,
        delay_seconds=resolved_settings.mfp_summary_delay_seconds,
    )
    log_food_service = LogFoodService(
        mfp_client, read_only=resolved_settings.mfp_read_only
    )
    tool_registry = ToolRegistry(
        diary_service=diary_service,
        goals_service=goals_service,
        food_search_service=food_search_service,
        weight_service=weight_service,
        summary_service=summary_service,
        log_food_service=log_food_service,
        read_only=resolved_settings.mfp_read_only,
    )

    async def close_resources() -> None:
        await mfp_client.close()

    return AppContainer(
        settings=resolved_settings,
        mfp_client=mfp_client,
        diary_service=diary_service,
        goals_service=goals_service,
        food_search_service=food_search_service,
        weight_service=weight_service,
        summary_service=summary_service,
        log_food_service=log_food_service,
        tool_registry=tool_registry,
        close_resources=close_resources,
    )
