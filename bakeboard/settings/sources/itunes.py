"""iTunes Search API configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ITunesSettings(BaseSettings):
    """iTunes Search API configuration (artwork, release dates, previews).

    Attributes:
        search_url: Search endpoint.
        artwork_size: Edge length requested for album artwork.
    """

    search_url: str = Field(
        default="https://itunes.apple.com/search",
        alias="ITUNES_SEARCH_URL",
    )
    artwork_size: int = Field(default=600, ge=100, le=3000, alias="ITUNES_ARTWORK_SIZE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
