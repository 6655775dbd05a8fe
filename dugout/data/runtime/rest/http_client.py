"""HTTP client helper."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ...core.exceptions import MalformedResponseError, ProviderError, RateLimitError

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper.

    Every request carries a total timeout. Timeouts, connection failures and
    non-2xx responses are all raised as ``ProviderError`` so callers can treat
    them uniformly for retry purposes.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body."""
        url = self._url(url)
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                await self._raise_for_status(response)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(f"GET {url} returned a non-JSON body") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            if isinstance(e, aiohttp.ClientResponseError):
                raise ProviderError(str(e), status_code=e.status) from e
            raise ProviderError(f"GET {url} failed: {type(e).__name__}: {e}") from e

    async def post_form(
        self,
        url: str,
        data: dict[str, str],
        *,
        auth: aiohttp.BasicAuth | None = None,
        headers: dict[str, str] | None = None,
    ) -> tuple[int, Any]:
        """POST an urlencoded form.

        Returns the status code and the decoded JSON body (None when the body
        is not JSON). Status handling is left to the caller because OAuth
        endpoints report errors in the body.
        """
        url = self._url(url)
        try:
            async with self.session.post(url, data=data, auth=auth, headers=headers) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                return response.status, body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"POST {url} failed: {type(e).__name__}: {e}") from e

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if response.status < 400:
            return
        try:
            detail = await response.text()
        except aiohttp.ClientError:
            detail = ""
        message = f"HTTP {response.status} from {response.url}: {detail[:200]}"
        logger.warning(message)
        if response.status == 429:
            retry_after = response.headers.get("Retry-After", "60")
            raise RateLimitError(message, retry_after=int(retry_after) if retry_after.isdigit() else 60)
        raise ProviderError(message, status_code=response.status)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
