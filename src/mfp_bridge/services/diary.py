"""Food diary service."""

from dataclasses import dataclass
from urllib.parse import urlencode

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.dates import today
from mfp_bridge.domain.diary import DiaryResponse
from mfp_bridge.parsers.diary import parse_diary
from mfp_bridge.parsers.fallbacks import ExtractionReport

DIARY_PATH = "/food/diary"


@dataclass
class DiaryService:
    """Fetches and parses a day of the food diary."""

    client: MfpHttpClient

    async def get_diary(
        self, date: str | None = None, report: ExtractionReport | None = None
    ) -> DiaryResponse:
        """Return the diary for a date, defaulting to today."""
        target = date or today()
        html = await self.client.get(f"{DIARY_PATH}?{urlencode({'date': target})}")
        return parse_diary(html, target, report)
