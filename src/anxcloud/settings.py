"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Name of the environment variable that should contain the API token.
TOKEN_ENV_NAME = "ANEXIA_TOKEN"  # noqa: S105 - this is a name, not a secret
# Enables integration tests if present.
INTEGRATION_TEST_ENV_NAME = "ANEXIA_INTEGRATION_TESTS_ON"

DEFAULT_BASE_URL = "https://engine.anexia-it.com"
# Suggested timeout for API calls, in seconds.
DEFAULT_REQUEST_TIMEOUT = 10.0


class AnxcloudSettings(BaseSettings):
    """anxcloud client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ANEXIA_",
        extra="ignore",
    )

    token: str | None = Field(default=None, repr=False)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)


def get_settings() -> AnxcloudSettings:
    """Load settings fresh from the current environment."""
    return AnxcloudSettings()
