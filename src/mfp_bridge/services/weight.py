"""Weight history service."""

import logging
from dataclasses import dataclass

import httpx

from mfp_bridge.adapters.mfp_http_client import MfpHttpClient
from mfp_bridge.domain.weight import WeightHistoryResponse
from mfp_bridge.errors import MfpError
from mfp_bridge.parsers.fallbacks import ExtractionReport
from mfp_bridge.parsers.weight import DEFAULT_UNIT, parse_weight_history

PROGRESS_PATH = "/reports/results/progress/default"

_logger = logging.getLogger(__name__)


@dataclass
class WeightService:
    """Reads weigh-ins from the progress report, best effort."""

    client: MfpHttpClient

    async def get_weight_history(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 30,
        report: ExtractionReport | None = None,
    ) -> WeightHistoryResponse:
        """Return weigh-ins, or an empty history when the report is unavailable."""
        try:
            html = await self.client.get(PROGRESS_PATH)
        except (MfpError, httpx.HTTPError) as exc:
            _logger.warning("Weight report unavailable: %s", exc)
            return WeightHistoryResponse(entries=[], unit=DEFAULT_UNIT)
        return parse_weight_history(
            html,
            limit=limit,
            start_date=start_date,
            end_date=end_date,
            report=report,
        )
