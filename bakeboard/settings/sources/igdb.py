"""IGDB / Twitch configuration settings.

Primary source for daily game releases.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PC_PLATFORMS: frozenset[str] = frozenset(
    {"PC (Microsoft Windows)", "Mac", "Linux"}
)
"""IGDB platform names eligible for a Steam store-id backfill."""


class IGDBSettings(BaseSettings):
    """IGDB API configuration.

    Attributes:
        client_id: Twitch application client id (required).
        client_secret: Twitch application client secret (required).
        base_url: IGDB API base URL.
        token_url: Twitch OAuth token endpoint.
        release_limit: Maximum games returned by the daily query.
        pc_platforms: Platform names that trigger a Steam search.
    """

    client_id: str = Field(default="", alias="TWITCH_CLIENT_ID")
    client_secret: str = Field(default="", alias="TWITCH_CLIENT_SECRET")
    base_url: str = Field(default="https://api.igdb.com/v4", alias="IGDB_BASE_URL")
    token_url: str = Field(
        default="https://id.twitch.tv/oauth2/token",
        alias="TWITCH_TOKEN_URL",
    )
    release_limit: int = Field(default=50, ge=1, le=500, alias="IGDB_RELEASE_LIMIT")
    pc_platforms: frozenset[str] = Field(default=PC_PLATFORMS)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if Twitch credentials are configured."""
        return bool(self.client_id and self.client_secret)
