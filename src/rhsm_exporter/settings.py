"""
Configuration for rhsm-exporter.

Values come from ``RH_*`` environment variables and from command-line
flags. An environment variable, when set to a non-empty value, wins over
the corresponding flag.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = (
    "https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token"
)
DEFAULT_API_URL = "https://api.access.redhat.com/management/v1/subscriptions"
DEFAULT_FETCH_INTERVAL = 30


class Settings(BaseSettings):
    """
    Exporter settings using Pydantic for validation
    and environment variable support.
    """

    # Credentials and endpoints
    offline_token: Optional[str] = Field(
        default=None, description="Offline (refresh) token for the subscription API"
    )
    token_url: str = Field(
        default=DEFAULT_TOKEN_URL, description="OAuth2 token endpoint"
    )
    api_url: str = Field(
        default=DEFAULT_API_URL, description="Subscription listing endpoint"
    )
    client_id: str = Field(default="rhsm-api", description="OAuth2 client id")

    # Polling
    fetch_interval: int = Field(
        default=DEFAULT_FETCH_INTERVAL, description="Seconds to sleep between fetches"
    )
    page_size: int = Field(default=50, description="Records requested per page")
    max_pages: Optional[int] = Field(
        default=None, description="Stop with an error after this many full pages"
    )
    request_timeout: Optional[float] = Field(
        default=None, description="Outbound request timeout in seconds"
    )

    # Export / import
    export: Optional[Path] = Field(default=None, description="Export json to file")
    import_url: Optional[str] = Field(default=None, description="Import data from url")
    import_username: Optional[str] = Field(
        default=None, description="Username for import_url"
    )
    import_password: Optional[str] = Field(
        default=None, description="Password for import_url"
    )

    # Server and general settings
    listen_port: int = Field(default=2112, description="Port serving /metrics")
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "RH_",
        "case_sensitive": False,
        "env_ignore_empty": True,
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        # Environment before init kwargs: env overrides command-line flags.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("fetch_interval", mode="before")
    @classmethod
    def parse_fetch_interval(cls, v):
        try:
            interval = int(v)
        except (TypeError, ValueError):
            logger.warning(
                "Invalid fetch interval %r, using %d seconds", v, DEFAULT_FETCH_INTERVAL
            )
            return DEFAULT_FETCH_INTERVAL
        return max(interval, 0)

    @field_validator("page_size")
    @classmethod
    def check_page_size(cls, v):
        if v < 1:
            raise ValueError("page_size must be positive")
        return v

    @property
    def import_mode(self) -> bool:
        """True when records are imported from a JSON document."""
        return bool(self.import_url)
