"""Configuration settings for the Hikewise backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("hikewise.config")

# Shared SSM client for secret reads. Default to a region so imports do not
# fail in environments without AWS configuration (e.g. CI test runners).
_ssm_client = boto3.client(
    "ssm",
    region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
)

PASSWORD_PEPPER_PARAMETER = "/hikewise/password_pepper"


def _get_list(env_var: str, default: str) -> list[str]:
    """Parse a comma separated environment variable into a list."""

    raw = os.getenv(env_var, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_password_pepper() -> str:
    """Fetch the password pepper from AWS SSM Parameter Store.

    The value is cached in-memory to avoid repeated SSM calls. Any failure to
    retrieve the pepper results in a runtime error so callers fail fast.
    """

    try:
        response = _ssm_client.get_parameter(
            Name=PASSWORD_PEPPER_PARAMETER, WithDecryption=True
        )
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load password pepper from SSM: %s", exc)
        raise RuntimeError("Unable to load password pepper from SSM") from exc

    if not value:
        logger.error("Received empty password pepper from SSM")
        raise RuntimeError("Password pepper not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    hikewise_env: str = os.getenv("HIKEWISE_ENV", "local")
    log_level: str = os.getenv("HIKEWISE_LOG_LEVEL", "INFO")

    # Upstream providers
    forecast_base_url: str = os.getenv(
        "FORECAST_BASE_URL", "https://api.open-meteo.com/v1/forecast"
    )
    air_quality_base_url: str = os.getenv(
        "AIR_QUALITY_BASE_URL",
        "https://air-quality-api.open-meteo.com/v1/air-quality",
    )
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10.0"))

    # Derived outputs
    display_timezone: str = os.getenv("DISPLAY_TIMEZONE", "Asia/Jakarta")
    rain_forecast_hours: int = int(os.getenv("RAIN_FORECAST_HOURS", "6"))

    # HTTP surface
    cors_allow_origins: list[str] | None = None

    # Credential store
    allowed_email_domain: str = os.getenv("ALLOWED_EMAIL_DOMAIN", "gmail.com")
    password_pepper: str = os.getenv("HIKEWISE_PASSWORD_PEPPER", "")
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    def __post_init__(self) -> None:
        if self.cors_allow_origins is None:
            self.cors_allow_origins = _get_list("CORS_ALLOW_ORIGINS", "*")


settings = Settings()

# Fall back to SSM only when the pepper was not supplied through the environment
if not settings.password_pepper:
    try:
        settings.password_pepper = get_password_pepper()
    except RuntimeError:
        logger.warning("Password pepper not available at import time")

__all__ = ["settings", "Settings", "get_password_pepper"]
