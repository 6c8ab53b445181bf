"""IGDB API client with Twitch client-credentials authentication.

IGDB queries are POSTed as Apicalypse text bodies and require a Twitch
app access token, cached here until shortly before it expires.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from bakeboard.feeds.http import FetchClient, SourceAuthError, SourceClientError

logger = logging.getLogger(__name__)

TOKEN_EXPIRY_MARGIN = 60.0
"""Seconds before expiry at which a cached token is renewed."""

RELEASE_FIELDS = (
    "name",
    "cover.url",
    "platforms.name",
    "external_games.category",
    "external_games.uid",
    "websites.url",
    "websites.category",
    "hypes",
    "follows",
    "first_release_date",
)


class TwitchTokenProvider:
    """Cache for a Twitch app access token.

    Attributes:
        client_id: Twitch application client id.
    """

    def __init__(
        self,
        fetcher: FetchClient,
        client_id: str,
        client_secret: str,
        token_url: str,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._fetcher = fetcher
        self._clock = clock
        self._token: str | None = None
        self._expires_at = 0.0

    async def get_token(self) -> str:
        """Return a valid access token, requesting a new one when needed.

        Raises:
            SourceAuthError: When Twitch refuses or the call fails.
        """
        now = self._clock()
        if self._token and now < self._expires_at - TOKEN_EXPIRY_MARGIN:
            return self._token

        try:
            payload = await self._fetcher.post_json(
                self._token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self._client_secret,
                    "grant_type": "client_credentials",
                },
            )
        except SourceClientError as e:
            raise SourceAuthError(f"Twitch OAuth failed: {e}", source="twitch") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise SourceAuthError("Twitch OAuth returned no access token", source="twitch")

        self._token = token
        self._expires_at = now + float(payload.get("expires_in", 0))
        logger.debug("Twitch token renewed")
        return token


class IGDBClient:
    """HTTP client for the IGDB v4 games endpoint."""

    def __init__(
        self,
        fetcher: FetchClient,
        tokens: TwitchTokenProvider,
        base_url: str,
        release_limit: int = 50,
    ) -> None:
        self._fetcher = fetcher
        self._tokens = tokens
        self._base_url = base_url.rstrip("/")
        self._release_limit = release_limit

    @staticmethod
    def build_release_query(start: int, end: int, limit: int) -> str:
        """Build the Apicalypse body selecting games first released in [start, end).

        Args:
            start: Window start (unix seconds, inclusive).
            end: Window end (unix seconds, exclusive).
            limit: Maximum number of games.

        Returns:
            Query text.
        """
        return (
            f"fields {','.join(RELEASE_FIELDS)};\n"
            f"where first_release_date >= {start} & first_release_date < {end};\n"
            f"limit {limit};"
        )

    async def fetch_releases_between(self, start: int, end: int) -> list[dict[str, Any]]:
        """Fetch raw IGDB games first released within a time window.

        Args:
            start: Window start (unix seconds, inclusive).
            end: Window end (unix seconds, exclusive).

        Returns:
            Raw game objects.

        Raises:
            SourceAuthError: When no token can be obtained.
            SourceClientError: When the IGDB call fails.
        """
        token = await self._tokens.get_token()
        payload = await self._fetcher.post_json(
            f"{self._base_url}/games",
            headers={
                "Client-ID": self._tokens.client_id,
                "Authorization": f"Bearer {token}",
                "Content-Type": "text/plain",
            },
            content=self.build_release_query(start, end, self._release_limit),
        )
        if not isinstance(payload, list):
            raise SourceClientError("IGDB returned an unexpected payload", source="igdb")
        return payload
