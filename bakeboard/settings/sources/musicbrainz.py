"""MusicBrainz configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MusicBrainzSettings(BaseSettings):
    """MusicBrainz release-search configuration.

    MusicBrainz asks anonymous clients for at most one request per second
    and a descriptive User-Agent.

    Attributes:
        base_url: Web service base URL.
        cover_art_url: Cover Art Archive base URL.
        user_agent: Contact User-Agent required by MusicBrainz.
        min_request_delay: Minimum seconds between two requests.
        search_limit: Releases requested per search.
    """

    base_url: str = Field(
        default="https://musicbrainz.org/ws/2",
        alias="MUSICBRAINZ_BASE_URL",
    )
    cover_art_url: str = Field(
        default="https://coverartarchive.org",
        alias="COVER_ART_ARCHIVE_URL",
    )
    user_agent: str = Field(
        default="BakeBoard/1.0 (contact@email.com)",
        alias="MUSICBRAINZ_USER_AGENT",
    )
    min_request_delay: float = Field(default=1.0, ge=0, alias="MUSICBRAINZ_MIN_REQUEST_DELAY")
    search_limit: int = Field(default=100, ge=1, le=100, alias="MUSICBRAINZ_SEARCH_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
