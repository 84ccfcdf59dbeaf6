"""Error types raised when talking to MyFitnessPal."""


class MfpError(Exception):
    """Base error carrying a stable code and an optional HTTP status."""

    def __init__(
        self, message: str, code: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class AuthenticationError(MfpError):
    """Missing or rejected session credential."""

    def __init__(
        self, message: str = "Authentication required. Please re-authenticate."
    ) -> None:
        super().__init__(message, "AUTH_REQUIRED", 401)


class SessionExpiredError(MfpError):
    """The upstream redirected the request to its login page."""

    def __init__(
        self, message: str = "Session expired. Please re-authenticate."
    ) -> None:
        super().__init__(message, "SESSION_EXPIRED", 401)


class RateLimitError(MfpError):
    """The upstream answered with HTTP 429."""

    def __init__(
        self, message: str = "Rate limit exceeded. Please try again later."
    ) -> None:
        super().__init__(message, "RATE_LIMITED", 429)


class ReadOnlyModeError(MfpError):
    """A write operation was attempted while writes are disabled."""

    def __init__(
        self,
        message: str = "Server is in read-only mode. Write operations are disabled.",
    ) -> None:
        super().__init__(message, "READ_ONLY_MODE", 403)


class TransportError(MfpError):
    """Any other unsuccessful HTTP response."""

    def __init__(
        self, message: str, status_code: int | None = None, code: str = "HTTP_ERROR"
    ) -> None:
        super().__init__(message, code, status_code)


class TooManyRedirectsError(TransportError):
    """Redirect chain exceeded the configured hop limit."""

    def __init__(self, hops: int) -> None:
        super().__init__(
            f"Too many redirects (more than {hops})", code="TOO_MANY_REDIRECTS"
        )
        self.hops = hops
