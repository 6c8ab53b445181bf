"""Steam storefront configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SteamSettings(BaseSettings):
    """Steam store API configuration.

    Steam's public store endpoints need no key.

    Attributes:
        store_url: Store base URL (search, reviews, app details).
        country: Storefront country code for search.
        language: Storefront language for search and descriptions.
    """

    store_url: str = Field(
        default="https://store.steampowered.com",
        alias="STEAM_STORE_URL",
    )
    country: str = Field(default="US", alias="STEAM_COUNTRY")
    language: str = Field(default="english", alias="STEAM_LANGUAGE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
