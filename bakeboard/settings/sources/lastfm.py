"""Last.fm configuration settings.

Source for artist popularity and the top charts aggregate.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CHART_GENRES: tuple[str, ...] = (
    "rock",
    "pop",
    "hip-hop",
    "electronic",
    "indie",
    "metal",
    "jazz",
    "r&b",
)
"""Genre tags sampled round-robin for the top albums list."""

TOP_ALBUMS_COUNT = 20
"""Size of the diversified top albums list."""

CHARTS_TTL_SECONDS = 600.0
"""Lifetime of the cached charts payload."""


class LastFMSettings(BaseSettings):
    """Last.fm API configuration.

    Attributes:
        api_key: Last.fm API key (required).
        base_url: Web service endpoint.
        requests_per_period: Rate limit capacity.
        period_seconds: Rate limit window.
        chart_genres: Tags whose top albums feed the charts.
        top_albums_count: Albums kept in the charts.
        charts_ttl_seconds: Charts cache lifetime.
    """

    api_key: str = Field(default="", alias="LASTFM_API_KEY")
    base_url: str = Field(
        default="https://ws.audioscrobbler.com/2.0/",
        alias="LASTFM_BASE_URL",
    )

    # Rate limiting
    requests_per_period: int = Field(default=5, ge=1, alias="LASTFM_REQUESTS_PER_PERIOD")
    period_seconds: float = Field(default=1.0, gt=0, alias="LASTFM_PERIOD_SECONDS")

    # Charts
    chart_genres: tuple[str, ...] = Field(default=CHART_GENRES)
    chart_limit: int = Field(default=50, ge=1, alias="LASTFM_CHART_LIMIT")
    top_albums_count: int = Field(default=TOP_ALBUMS_COUNT, ge=1, alias="LASTFM_TOP_ALBUMS")
    charts_ttl_seconds: float = Field(default=CHARTS_TTL_SECONDS, gt=0, alias="LASTFM_CHARTS_TTL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if Last.fm API key is configured."""
        return bool(self.api_key)
