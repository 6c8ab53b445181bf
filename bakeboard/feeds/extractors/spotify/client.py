"""Spotify OAuth and listening-library client.

Only used to tag album releases by artists the user listens to. The
authorization-code flow stores tokens through SpotifyTokenStore; access
tokens are refreshed when they are within a minute of expiry.
"""

import asyncio
import base64
import logging
import secrets
import time
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

from bakeboard.feeds.extractors.spotify.tokens import SpotifyTokens, SpotifyTokenStore
from bakeboard.feeds.http import FetchClient, SourceAuthError, SourceClientError

logger = logging.getLogger(__name__)

TOKEN_EXPIRY_MARGIN = 60.0
"""Seconds before expiry at which the access token is refreshed."""

LIBRARY_LIMIT = 50


class SpotifyAuth:
    """Authorization-code flow helpers and token refresh."""

    def __init__(
        self,
        fetcher: FetchClient,
        store: SpotifyTokenStore,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        accounts_url: str,
        scopes: str,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._accounts_url = accounts_url.rstrip("/")
        self._scopes = scopes
        self._clock = clock

    def is_authenticated(self) -> bool:
        """True when tokens are stored."""
        return self._store.load() is not None

    def clear_tokens(self) -> bool:
        """Forget stored tokens."""
        return self._store.clear()

    def get_auth_url(self) -> tuple[str, str]:
        """Build the authorization URL.

        Returns:
            Tuple (url, state); the caller checks `state` on callback.
        """
        state = secrets.token_hex(16)
        params = {
            "response_type": "code",
            "client_id": self._client_id,
            "scope": self._scopes,
            "redirect_uri": self._redirect_uri,
            "state": state,
        }
        return f"{self._accounts_url}/authorize?{urlencode(params)}", state

    def _basic_auth_header(self) -> dict[str, str]:
        raw = f"{self._client_id}:{self._client_secret}".encode()
        return {"Authorization": f"Basic {base64.b64encode(raw).decode()}"}

    async def _token_request(self, form: dict[str, str]) -> dict[str, Any]:
        try:
            payload = await self._fetcher.post_json(
                f"{self._accounts_url}/api/token",
                headers=self._basic_auth_header(),
                data=form,
            )
        except SourceClientError as e:
            raise SourceAuthError(f"Spotify token request failed: {e}", source="spotify") from e
        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise SourceAuthError("Spotify returned no access token", source="spotify")
        return payload

    async def exchange_code(self, code: str) -> SpotifyTokens:
        """Exchange an authorization code for tokens and store them."""
        payload = await self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._redirect_uri,
            }
        )
        tokens = SpotifyTokens(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token", ""),
            expires_at=self._clock() + float(payload.get("expires_in", 0)),
        )
        self._store.save(tokens)
        return tokens

    async def ensure_valid_token(self) -> str:
        """Return a usable access token, refreshing it when close to expiry.

        Raises:
            SourceAuthError: When no tokens are stored or refresh fails.
        """
        tokens = self._store.load()
        if tokens is None:
            raise SourceAuthError("No Spotify tokens found", source="spotify")

        if self._clock() < tokens.expires_at - TOKEN_EXPIRY_MARGIN:
            return tokens.access_token

        payload = await self._token_request(
            {"grant_type": "refresh_token", "refresh_token": tokens.refresh_token}
        )
        refreshed = SpotifyTokens(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or tokens.refresh_token,
            expires_at=self._clock() + float(payload.get("expires_in", 0)),
        )
        self._store.save(refreshed)
        logger.info("Spotify access token refreshed")
        return refreshed.access_token


class SpotifyClient:
    """Web API client for the user's listening library."""

    def __init__(self, fetcher: FetchClient, api_url: str) -> None:
        self._fetcher = fetcher
        self._api_url = api_url.rstrip("/")

    async def fetch_library_artist_names(self, access_token: str) -> set[str]:
        """Lowercased artist names from top artists and recent plays.

        Combines short-term top, medium-term top and recently played
        artists. An endpoint that fails contributes nothing.

        Args:
            access_token: Valid Spotify bearer token.

        Returns:
            Set of lowercased artist names.
        """
        headers = {"Authorization": f"Bearer {access_token}"}
        short_term, medium_term, recent = await asyncio.gather(
            self._fetcher.try_get_json(
                f"{self._api_url}/me/top/artists",
                params={"time_range": "short_term", "limit": LIBRARY_LIMIT},
                headers=headers,
            ),
            self._fetcher.try_get_json(
                f"{self._api_url}/me/top/artists",
                params={"time_range": "medium_term", "limit": LIBRARY_LIMIT},
                headers=headers,
            ),
            self._fetcher.try_get_json(
                f"{self._api_url}/me/player/recently-played",
                params={"limit": LIBRARY_LIMIT},
                headers=headers,
            ),
        )

        names: set[str] = set()
        for payload in (short_term, medium_term):
            for artist in (payload or {}).get("items") or []:
                if artist.get("name"):
                    names.add(artist["name"].lower())

        for item in (recent or {}).get("items") or []:
            for artist in (item.get("track") or {}).get("artists") or []:
                if artist.get("name"):
                    names.add(artist["name"].lower())

        return names
