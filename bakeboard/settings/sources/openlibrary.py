"""Open Library configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenLibrarySettings(BaseSettings):
    """Open Library search configuration.

    Attributes:
        search_url: Search endpoint.
        covers_url: Cover image CDN base URL.
        search_limit: Books returned per search.
    """

    search_url: str = Field(
        default="https://openlibrary.org/search.json",
        alias="OPENLIBRARY_SEARCH_URL",
    )
    covers_url: str = Field(
        default="https://covers.openlibrary.org",
        alias="OPENLIBRARY_COVERS_URL",
    )
    search_limit: int = Field(default=10, ge=1, le=100, alias="OPENLIBRARY_SEARCH_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
