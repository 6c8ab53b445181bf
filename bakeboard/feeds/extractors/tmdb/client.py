"""TMDB API client.

Thin async wrapper over the TMDB v3 endpoints used by the movie feeds.
Every method raises on failure; the pipelines decide which calls are
required and which are tolerated.
"""

import logging
from datetime import date
from typing import Any

from bakeboard.feeds.http import FetchClient, SourceClientError

logger = logging.getLogger(__name__)


class TMDBClientError(SourceClientError):
    """Raised when TMDB returns an unusable payload."""

    pass


class TMDBClient:
    """HTTP client for TMDB API.

    Attributes:
        region: Release region for discover and now-playing.
    """

    def __init__(
        self,
        fetcher: FetchClient,
        api_key: str,
        base_url: str,
        region: str = "US",
        release_types: str = "2|3",
    ) -> None:
        """Initialize TMDB client.

        Args:
            fetcher: Fetch client for TMDB.
            api_key: TMDB API key.
            base_url: TMDB API base URL.
            region: Release region.
            release_types: Discover release-type filter.
        """
        self.region = region
        self._fetcher = fetcher
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._release_types = release_types

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Execute GET request with the API key.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.
            timeout: Optional deadline override.

        Returns:
            JSON response as dictionary.
        """
        request_params: dict[str, Any] = {"api_key": self._api_key}
        if params:
            request_params.update(params)

        payload = await self._fetcher.get_json(
            f"{self._base_url}{endpoint}",
            params=request_params,
            timeout=timeout,
        )
        if not isinstance(payload, dict):
            raise TMDBClientError(f"Unexpected TMDB payload: {endpoint}", source="tmdb")
        return payload

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def discover_theatrical(self, week_start: date, friday: date) -> dict[str, Any]:
        """Discover theatrical releases within a release week.

        Args:
            week_start: First day of the window (inclusive).
            friday: Release Friday (inclusive).

        Returns:
            Discover response with results.
        """
        params = {
            "primary_release_date.gte": week_start.isoformat(),
            "primary_release_date.lte": friday.isoformat(),
            "sort_by": "popularity.desc",
            "region": self.region,
            "with_release_type": self._release_types,
        }
        return await self._get("/discover/movie", params)

    async def now_playing(self, page: int = 1) -> dict[str, Any]:
        """Get a page of titles currently in theaters.

        Args:
            page: Page number (1-based).

        Returns:
            Now-playing response with results and total_pages.
        """
        params: dict[str, Any] = {"region": self.region}
        if page > 1:
            params["page"] = page
        return await self._get("/movie/now_playing", params)

    async def get_movie_credits(self, movie_id: int, timeout: float | None = None) -> dict[str, Any]:
        """Get movie cast and crew.

        Args:
            movie_id: TMDB movie ID.
            timeout: Optional deadline override.

        Returns:
            Credits response with cast and crew.
        """
        return await self._get(f"/movie/{movie_id}/credits", timeout=timeout)

    async def get_movie_with_credits(
        self,
        movie_id: int,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Get movie details with credits appended (single request).

        Args:
            movie_id: TMDB movie ID.
            timeout: Optional deadline override.

        Returns:
            Movie details including a `credits` object.
        """
        params = {"append_to_response": "credits"}
        return await self._get(f"/movie/{movie_id}", params, timeout=timeout)

    async def get_person_movie_credits(self, person_id: int) -> dict[str, Any]:
        """Get the movie credits of a person.

        Args:
            person_id: TMDB person ID.

        Returns:
            Credits response with cast and crew entries.
        """
        return await self._get(f"/person/{person_id}/movie_credits")
