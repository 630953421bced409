"""
Page renderer producing flattened HTML for a URL.

Fetches the page, parses it, and runs the document flattener over it.
"""

import asyncio
from typing import Optional

from ..config import FlattenConfig, get_default_config
from ..utils.log import get_logger
from .document import parse_document
from .errors import NetworkError
from .fetcher import Fetcher, HttpFetcher
from .flattener import DocumentFlattener, FlattenResult
from .normalizer import ensure_base_url


class PageRenderer:
    """
    Renders a page URL into a single self-contained HTML document.

    When no fetcher is supplied an :class:`HttpFetcher` is opened for the
    duration of each render.
    """

    def __init__(
        self,
        config: Optional[FlattenConfig] = None,
        fetcher: Optional[Fetcher] = None
    ):
        """
        Initialize the page renderer.

        Args:
            config: Flattening configuration
            fetcher: Fetcher shared by the page and resource requests
        """
        self.config = config or get_default_config()
        self.fetcher = fetcher
        self.logger = get_logger("renderer")

    async def render(self, page_url: str) -> FlattenResult:
        """
        Fetch and flatten a page.

        Args:
            page_url: URL of the page, with or without a scheme

        Returns:
            FlattenResult for the page

        Raises:
            NetworkError: If the page itself cannot be fetched
            ParseError: If the page is not parseable HTML
        """
        if self.fetcher is not None:
            return await self._render(page_url, self.fetcher)

        async with HttpFetcher(self.config) as fetcher:
            return await self._render(page_url, fetcher)

    async def _render(self, page_url: str, fetcher: Fetcher) -> FlattenResult:
        base_url = ensure_base_url(page_url)
        # Fetch the page itself without the slash added for the base
        target = base_url if page_url.strip().endswith('/') else base_url[:-1]

        self.logger.info(f"Fetching page: {target}")
        try:
            response = await asyncio.wait_for(fetcher.fetch(target), timeout=self.config.timeout)
        except asyncio.TimeoutError as e:
            raise NetworkError(target, f"timed out after {self.config.timeout}s") from e

        # Without a header charset, let the parser sniff the encoding from the bytes
        markup = response.text() if response.charset else response.body
        document = parse_document(markup, target)

        flattener = DocumentFlattener(fetcher, self.config)
        return await flattener.flatten(document, base_url)


async def render_flattened(
    page_url: str,
    config: Optional[FlattenConfig] = None,
    fetcher: Optional[Fetcher] = None
) -> str:
    """
    Return the flattened HTML for a page URL.

    Example:
        >>> html = await render_flattened("https://example.org")
    """
    result = await PageRenderer(config, fetcher).render(page_url)
    return result.html
