"""Food database search service."""

from dataclasses import dataclass
from urllib.parse import urlencode

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.domain.foods import FoodSearchResponse
from mfp_bridge.parsers.fallbacks import ExtractionReport
from mfp_bridge.parsers.food_search import parse_search_results

SEARCH_PATH = "/food/search"


@dataclass
class FoodSearchService:
    """Searches the MyFitnessPal food database."""

    client: MfpHttpClient

    async def search(
        self, query: str, page: int = 1, report: ExtractionReport | None = None
    ) -> FoodSearchResponse:
        """Return one page of search results."""
        params = urlencode({"search": query, "page": page})
        html = await self.client.get(f"{SEARCH_PATH}?{params}")
        return parse_search_results(html, page, report)
