"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    mfp_cookie: str = ""
    mfp_base_url: str = "https://www.myfitnesspal.com"
    mfp_read_only: bool = False
    mfp_request_timeout: float = 15.0
    mfp_max_redirects: int = 5
    mfp_summary_delay_seconds: float = 0.2
    mfp_validate_on_startup: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def validate_cookie(raw: str | None) -> bool:
    """Return whether a session cookie value is usable."""
    if raw is None:
        return False
    return bool(raw.strip())
