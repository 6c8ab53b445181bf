"""Rate-limited JSON fetch client shared by every source adapter.

Wraps a shared httpx.AsyncClient with an optional per-source rate limiter
and a cooperative per-call deadline.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from bakeboard.feeds.http.limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


class SourceClientError(Exception):
    """Base exception for upstream source errors.

    Attributes:
        source: Name of the upstream that failed.
    """

    def __init__(self, message: str, *, source: str = "upstream") -> None:
        super().__init__(message)
        self.source = source


class SourceHTTPError(SourceClientError):
    """Raised when an upstream answers with a non-2xx status."""

    def __init__(self, message: str, *, source: str = "upstream", status_code: int) -> None:
        super().__init__(message, source=source)
        self.status_code = status_code


class SourceTimeoutError(SourceClientError):
    """Raised when an upstream call exceeds its deadline."""

    pass


class SourceAuthError(SourceClientError):
    """Raised when an OAuth token cannot be obtained."""

    pass


class FetchClient:
    """HTTP JSON client for a single upstream source.

    Primary list calls use `get_json`/`post_json` and raise on failure;
    enrichment calls use `try_get_json`, which turns every failure into
    None ("no data") and logs it.

    Attributes:
        source: Upstream name used in errors and logs.
        timeout: Default deadline in seconds.
    """

    def __init__(
        self,
        source: str,
        http: httpx.AsyncClient,
        *,
        limiter: SlidingWindowRateLimiter | None = None,
        timeout: float = 5.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize client for one source.

        Args:
            source: Upstream name.
            http: Shared async HTTP client (owned by the caller).
            limiter: Optional rate limiter for this source.
            timeout: Default per-call deadline in seconds.
            headers: Headers sent with every request.
        """
        self.source = source
        self.timeout = timeout
        self._http = http
        self._limiter = limiter
        self._headers = dict(headers or {})

    @property
    def limiter(self) -> SlidingWindowRateLimiter | None:
        """Rate limiter guarding this source, if any."""
        return self._limiter

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        content: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Execute a request and decode its JSON body.

        Args:
            method: HTTP method.
            url: Absolute URL.
            params: Query parameters.
            headers: Extra headers for this call.
            data: Form body.
            content: Raw text body.
            timeout: Deadline override in seconds.

        Returns:
            Decoded JSON payload.

        Raises:
            SourceTimeoutError: When the deadline is exceeded.
            SourceHTTPError: On non-2xx responses.
            SourceClientError: On transport or decoding errors.
        """
        if self._limiter is not None:
            await self._limiter.acquire()

        deadline = timeout if timeout is not None else self.timeout
        request_headers = {**self._headers, **(headers or {})}

        try:
            async with asyncio.timeout(deadline):
                response = await self._http.request(
                    method,
                    url,
                    params=params,
                    headers=request_headers,
                    data=data,
                    content=content,
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            msg = f"{self.source} request timed out after {deadline:.1f}s: {url}"
            raise SourceTimeoutError(msg, source=self.source) from e
        except httpx.HTTPError as e:
            msg = f"{self.source} request failed: {url} ({e})"
            raise SourceClientError(msg, source=self.source) from e

        return self._handle_response(response, url)

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """GET a JSON resource, raising on any failure."""
        return await self.request_json("GET", url, params=params, headers=headers, timeout=timeout)

    async def post_json(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        content: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """POST a form or text body and decode the JSON answer."""
        return await self.request_json(
            "POST",
            url,
            headers=headers,
            data=data,
            content=content,
            timeout=timeout,
        )

    async def try_get_json(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any | None:
        """GET a JSON resource, returning None on any failure.

        Network errors, non-2xx statuses and timeouts all mean
        "no information" for enrichment callers.
        """
        try:
            return await self.get_json(url, params=params, headers=headers, timeout=timeout)
        except SourceClientError as e:
            logger.warning(f"{self.source}: no data ({e})")
            return None

    def _handle_response(self, response: httpx.Response, url: str) -> Any:
        """Check status and decode JSON.

        Args:
            response: HTTP response object.
            url: Requested URL (for messages).

        Returns:
            Decoded JSON payload.
        """
        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                msg = f"{self.source} returned invalid JSON: {url}"
                raise SourceClientError(msg, source=self.source) from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "?")
            logger.warning(f"{self.source} rate limited. Retry after {retry_after}s")

        msg = f"{self.source} API error {response.status_code}: {url}"
        raise SourceHTTPError(msg, source=self.source, status_code=response.status_code)
