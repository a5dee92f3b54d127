"""
Async HTTP client for the remote documentation content API.
"""

import asyncio
import logging

import aiohttp
from rich.markup import escape

from docfetch.exceptions import NetworkError

log = logging.getLogger(__name__)


class ContentAPIClient:
    """
    Minimal async client that retrieves one document per request.

    A single session is shared for the lifetime of a run. Each fetch is a
    single best-effort attempt: there are no retries.
    """

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        user_agent: str | None = None,
    ):
        """
        Initializes the client.

        Args:
            connect_timeout: Seconds allowed to establish a connection.
            read_timeout: Seconds allowed between received chunks.
            user_agent: Value for the User-Agent header.
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "ContentAPIClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            headers = {"Accept-Encoding": "gzip, deflate"}
            if self.user_agent:
                headers["User-Agent"] = self.user_agent
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(
                    total=None,
                    sock_connect=self.connect_timeout,
                    sock_read=self.read_timeout,
                ),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("Content API session closed.")

    async def fetch(self, url: str) -> bytes:
        """
        Performs a GET request and returns the full response body.

        Redirects are followed. The body is read completely before returning,
        so callers never see a partial document.

        Raises:
            NetworkError: On any transport error, timeout, or non-2xx status.
        """
        await self._initialize_session()
        try:
            async with self._session.get(
                url, allow_redirects=True, raise_for_status=True
            ) as response:
                body = await response.read()
        except aiohttp.ClientResponseError as e:
            raise NetworkError(f"HTTP {e.status} for {url}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Request to {url} failed: {e!r}") from e

        log.debug(f"Fetched {len(body)} bytes from {escape(url)}")
        return body
