"""Centralized configuration for BakeBoard feeds.

Configuration strategy:
- CREDENTIALS (Twitch, TMDB, Last.fm, Spotify): empty by default. A feed
  that needs a missing credential fails when it is requested, not at import.
- INFRASTRUCTURE settings (logging, timeouts, limiter windows): safe
  defaults, override via .env as needed.

All configuration values are sourced from environment variables (.env file).

Usage:
    from bakeboard.settings import settings

    settings.tmdb.api_key
    settings.http.item_timeout
"""

from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bakeboard.settings.base import HTTPSettings, LoggingSettings, PathsSettings, get_env_file
from bakeboard.settings.sources import (
    IGDBSettings,
    ITunesSettings,
    LastFMSettings,
    MusicBrainzSettings,
    OpenLibrarySettings,
    SpotifySettings,
    SteamSettings,
    TMDBSettings,
    WeatherSettings,
)

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "PathsSettings",
    "LoggingSettings",
    "HTTPSettings",
    # Sources
    "IGDBSettings",
    "SteamSettings",
    "TMDBSettings",
    "MusicBrainzSettings",
    "LastFMSettings",
    "SpotifySettings",
    "ITunesSettings",
    "OpenLibrarySettings",
    "WeatherSettings",
    # Utilities
    "get_masked_settings",
    "sources_status",
]


# Project-root .env, whatever the working directory
load_dotenv(get_env_file())


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from bakeboard.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Paths, logging, HTTP
    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)

    # Games
    igdb: IGDBSettings = Field(default_factory=IGDBSettings)
    steam: SteamSettings = Field(default_factory=SteamSettings)

    # Movies
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)

    # Music
    musicbrainz: MusicBrainzSettings = Field(default_factory=MusicBrainzSettings)
    lastfm: LastFMSettings = Field(default_factory=LastFMSettings)
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    itunes: ITunesSettings = Field(default_factory=ITunesSettings)

    # Dashboard widgets
    openlibrary: OpenLibrarySettings = Field(default_factory=OpenLibrarySettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings(source: Settings | None = None) -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Args:
        source: Settings to dump (defaults to the singleton).

    Returns:
        Configuration dictionary safe for logging.
    """
    config = (source or settings).model_dump()
    mask = "***MASKED***"

    # Paths to mask (section, key)
    secrets = [
        ("igdb", "client_secret"),
        ("tmdb", "api_key"),
        ("lastfm", "api_key"),
        ("spotify", "client_secret"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config


def sources_status(source: Settings | None = None) -> dict[str, bool]:
    """Report which credentialed sources are configured.

    Args:
        source: Settings to inspect (defaults to the singleton).

    Returns:
        Mapping of source name to configuration flag.
    """
    current = source or settings
    return {
        "igdb": current.igdb.is_configured,
        "tmdb": current.tmdb.is_configured,
        "lastfm": current.lastfm.is_configured,
        "spotify": current.spotify.is_configured,
    }
