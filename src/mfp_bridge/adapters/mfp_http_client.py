"""Cookie-authenticated MyFitnessPal HTTP client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from mfp_bridge.errors import (
    AuthenticationError,
    RateLimitError,
    SessionExpiredError,
    TooManyRedirectsError,
    TransportError,
)

DEFAULT_BASE_URL = "https://www.myfitnesspal.com"

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

_REDIRECT_STATUSES = {301, 302, 303, 307, 308}
_LOGIN_FORM_MARKERS = ('action="/account/login"', 'id="login"')
_DIARY_MARKERS = ("diary", "food-diary", "Breakfast")

_logger = logging.getLogger(__name__)


class MfpHttpClient(Protocol):
    """Interface for fetching MyFitnessPal pages."""

    async def get(self, path: str) -> str:
        """Fetch a page and return its body."""

    async def post(self, path: str, data: dict[str, str]) -> str:
        """Submit a form and return the response body."""

    async def validate_session(self) -> bool:
        """Return whether the session cookie still opens the diary."""

    async def close(self) -> None:
        """Release network resources."""


@dataclass
class HttpxMfpClient(MfpHttpClient):
    """HTTPX-backed client that chases redirects itself."""

    cookie: str
    http_client: httpx.AsyncClient
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 15.0
    max_redirects: int = 5

    def __post_init__(self) -> None:
        if not self.cookie or not self.cookie.strip():
            raise AuthenticationError(
                "MFP_COOKIE is not set. Provide your MyFitnessPal session cookie."
            )
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def create(
        cls,
        cookie: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        max_redirects: int = 5,
    ) -> "HttpxMfpClient":
        """Create a client with a managed httpx session."""
        return cls(
            cookie=cookie,
            http_client=httpx.AsyncClient(follow_redirects=False),
            base_url=base_url,
            timeout=timeout,
            max_redirects=max_redirects,
        )

    async def get(self, path: str) -> str:
        """Fetch a page."""
        return await self._request("GET", path)

    async def post(self, path: str, data: dict[str, str]) -> str:
        """Submit a form-encoded POST."""
        return await self._request("POST", path, data=data)

    async def validate_session(self) -> bool:
        """Probe the diary page and check it is not the login form."""
        try:
            body = await self.get("/food/diary")
        except (AuthenticationError, SessionExpiredError):
            return False
        has_login_form = any(marker in body for marker in _LOGIN_FORM_MARKERS)
        has_diary = any(marker in body for marker in _DIARY_MARKERS)
        return not has_login_form and has_diary

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _headers(self, method: str) -> dict[str, str]:
        headers = {**DEFAULT_HEADERS, "Cookie": self.cookie}
        if method == "POST":
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        return headers

    async def _request(
        self, method: str, path: str, data: dict[str, str] | None = None
    ) -> str:
        hops = 0
        while True:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(method),
                data=data,
                timeout=self.timeout,
            )
            status = response.status_code
            _logger.debug("MFP %s %s -> %s", method, path, status)

            if status in _REDIRECT_STATUSES:
                location = response.headers.get("location", "")
                if "login" in location.lower():
                    raise SessionExpiredError()
                if not location:
                    return response.text
                hops += 1
                if hops > self.max_redirects:
                    raise TooManyRedirectsError(self.max_redirects)
                path = self._relative_path(response.url, location)
                _logger.debug("MFP redirect hop %s -> %s", hops, path)
                continue

            if status in {401, 403}:
                raise AuthenticationError()
            if status == 429:
                raise RateLimitError()
            if not response.is_success:
                raise TransportError(
                    f"HTTP error: {status} {response.reason_phrase}".strip(),
                    status_code=status,
                )
            return response.text

    def _relative_path(self, current: httpx.URL, location: str) -> str:
        """Resolve a redirect target against the current URL to a path and query.

        Off-host targets are re-requested against the base host.
        """
        target = current.join(location)
        return target.raw_path.decode("ascii")
