"""Spotify OAuth configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SPOTIFY_SCOPES = "user-top-read user-read-recently-played"


class SpotifySettings(BaseSettings):
    """Spotify Web API configuration.

    Only used to tag albums by artists from the user's listening library.

    Attributes:
        client_id: Spotify application client id.
        client_secret: Spotify application client secret.
        redirect_uri: OAuth redirect registered with the application.
        accounts_url: Spotify accounts service base URL.
        api_url: Spotify Web API base URL.
    """

    client_id: str = Field(default="", alias="SPOTIFY_CLIENT_ID")
    client_secret: str = Field(default="", alias="SPOTIFY_CLIENT_SECRET")
    redirect_uri: str = Field(
        default="http://127.0.0.1:5173/api/spotify/callback",
        alias="SPOTIFY_REDIRECT_URI",
    )
    accounts_url: str = Field(
        default="https://accounts.spotify.com",
        alias="SPOTIFY_ACCOUNTS_URL",
    )
    api_url: str = Field(default="https://api.spotify.com/v1", alias="SPOTIFY_API_URL")
    scopes: str = Field(default=SPOTIFY_SCOPES)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if Spotify client credentials are configured."""
        return bool(self.client_id and self.client_secret)
