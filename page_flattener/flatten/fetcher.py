"""
HTTP fetcher for pages and their resources.

Uses aiohttp for asynchronous GET requests. Anything that is not a 2xx
response is reported as a NetworkError.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

import aiohttp
from aiohttp import ClientError, ClientTimeout

from ..config import FlattenConfig, get_default_config
from ..utils.log import get_logger
from .errors import NetworkError


@dataclass
class FetchResponse:
    """Raw result of a successful GET request."""

    url: str
    status: int
    body: bytes
    charset: Optional[str] = None

    def text(self) -> str:
        """Decode the body using the declared charset, falling back to UTF-8."""
        encoding = self.charset or 'utf-8'
        try:
            return self.body.decode(encoding, errors='replace')
        except LookupError:
            return self.body.decode('utf-8', errors='replace')


class Fetcher(Protocol):
    """Anything able to retrieve a URL for the flattener."""

    async def fetch(self, url: str) -> FetchResponse:
        ...


class HttpFetcher:
    """
    Retrieves URLs with a shared aiohttp session.

    Can be used as an async context manager, in which case it owns the
    session and closes it on exit.
    """

    def __init__(
        self,
        config: Optional[FlattenConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the fetcher.

        Args:
            config: Configuration providing timeout and user agent
            session: Existing aiohttp session to use instead of creating one
        """
        self.config = config or get_default_config()
        self.timeout = ClientTimeout(total=self.config.timeout)
        self.logger = get_logger("fetcher")

        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpFetcher":
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": self.config.user_agent}
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this fetcher created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET a URL and return its body.

        Args:
            url: Absolute URL to retrieve

        Returns:
            FetchResponse with status and raw bytes

        Raises:
            NetworkError: On connection failure, timeout or non-2xx status
        """
        if self._session is None:
            raise RuntimeError("HttpFetcher must be used inside 'async with'")

        try:
            async with self._session.get(
                url,
                allow_redirects=True,
                timeout=self.timeout,
                headers={"User-Agent": self.config.user_agent}
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(url, f"HTTP {response.status}", status=response.status)

                body = await response.read()
                self.logger.debug(f"Fetched {url} ({len(body)} bytes)")

                return FetchResponse(
                    url=str(response.url),
                    status=response.status,
                    body=body,
                    charset=response.charset
                )

        except asyncio.TimeoutError as e:
            raise NetworkError(url, f"timed out after {self.config.timeout}s") from e
        except ClientError as e:
            raise NetworkError(url, str(e) or e.__class__.__name__) from e
        except ValueError as e:
            # yarl rejects URLs it cannot parse
            raise NetworkError(url, f"invalid URL: {e}") from e
