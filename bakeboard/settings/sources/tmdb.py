"""TMDB API configuration settings.

Source for weekly theatrical releases, now-playing titles, and
director filmographies.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HORROR_GENRE_ID = 27
"""TMDB genre id flagged for client-side display."""

NOW_PLAYING_MAX_PAGES = 10
"""Upper bound on now-playing pages fetched per run."""

STALE_AFTER_MONTHS = 6
"""Now-playing titles older than this sort to the bottom."""

CAST_LIMIT = 4
"""Number of billed cast members kept per title."""


class TMDBSettings(BaseSettings):
    """TMDB API configuration.

    Attributes:
        api_key: TMDB API key (required).
        base_url: TMDB API base URL.
        image_base_url: TMDB image CDN base URL (without size segment).
        site_url: Public TMDB site used for item links.
        region: Release region for discover and now-playing.
        release_types: Discover release-type filter (theatrical).
    """

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_BASE_URL",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p",
        alias="TMDB_IMAGE_BASE_URL",
    )
    site_url: str = Field(default="https://www.themoviedb.org", alias="TMDB_SITE_URL")
    region: str = Field(default="US", alias="TMDB_REGION")
    release_types: str = Field(default="2|3", alias="TMDB_RELEASE_TYPES")

    horror_genre_id: int = Field(default=HORROR_GENRE_ID, alias="TMDB_HORROR_GENRE_ID")
    now_playing_max_pages: int = Field(
        default=NOW_PLAYING_MAX_PAGES,
        ge=1,
        alias="TMDB_NOW_PLAYING_MAX_PAGES",
    )
    stale_after_months: int = Field(
        default=STALE_AFTER_MONTHS,
        ge=1,
        alias="TMDB_STALE_AFTER_MONTHS",
    )
    cast_limit: int = Field(default=CAST_LIMIT, ge=0, alias="TMDB_CAST_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if TMDB API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")
