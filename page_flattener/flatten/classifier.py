"""
URL classifier for resource references.

Maps a raw ``src``/``href`` string to exactly one URL shape. Rules are tried
in a fixed precedence order and the first one that accepts the string wins:

    1. ABSOLUTE_URL         http://example.org/app.js
    2. SCHEME_RELATIVE_URL  //cdn.example.org/app.js
    3. BARE_HOST_URL        example.org/app.js
    4. ROOT_RELATIVE_PATH   /app.js, /static/js/app.js?v=2
    5. BARE_RESOURCE_NAME   app.js, css/site.css

A bare host and a bare file name look alike (``example.org`` versus
``app.js``). BARE_HOST_URL rejects any string whose host part ends in a
resource extension, so ``app.js`` falls through to BARE_RESOURCE_NAME while
``example.org/app.js`` stays a host URL.
"""

from enum import Enum
from typing import Callable, Optional, Tuple

from ..config import FlattenConfig, get_default_config
from .errors import ClassificationError


class UrlShape(Enum):
    """The shapes a resource reference can take."""

    ABSOLUTE_URL = "absolute_url"
    SCHEME_RELATIVE_URL = "scheme_relative_url"
    BARE_HOST_URL = "bare_host_url"
    ROOT_RELATIVE_PATH = "root_relative_path"
    BARE_RESOURCE_NAME = "bare_resource_name"


class UrlClassifier:
    """
    Classifies reference strings using the patterns of a FlattenConfig.
    """

    def __init__(self, config: Optional[FlattenConfig] = None):
        """
        Initialize the classifier.

        Args:
            config: Configuration holding the compiled shape patterns
        """
        self.config = config or get_default_config()
        patterns = self.config.patterns

        # Precedence order; do not reorder
        self._rules: Tuple[Tuple[UrlShape, Callable[[str], bool]], ...] = (
            (UrlShape.ABSOLUTE_URL, lambda url: bool(patterns.absolute_url.match(url))),
            (UrlShape.SCHEME_RELATIVE_URL, lambda url: bool(patterns.scheme_relative_url.match(url))),
            (UrlShape.BARE_HOST_URL, self._is_bare_host),
            (UrlShape.ROOT_RELATIVE_PATH, lambda url: bool(patterns.root_relative_path.match(url))),
            (UrlShape.BARE_RESOURCE_NAME, lambda url: bool(patterns.bare_resource_name.match(url))),
        )

    def _is_bare_host(self, url: str) -> bool:
        """Match host[/path] whose host does not end in a resource extension."""
        match = self.config.patterns.bare_host_url.match(url)
        if not match:
            return False
        return match.group("tld").lower() not in self.config.resource_extensions

    def classify(self, url: str) -> UrlShape:
        """
        Determine the shape of a reference string.

        Args:
            url: Raw reference string

        Returns:
            The matching UrlShape

        Raises:
            ClassificationError: If no shape matches
        """
        candidate = (url or "").strip()

        for shape, accepts in self._rules:
            if candidate and accepts(candidate):
                return shape

        raise ClassificationError(url)


def classify(url: str, config: Optional[FlattenConfig] = None) -> UrlShape:
    """
    Classify a reference string with the default (or given) configuration.

    Example:
        >>> classify("//code.jquery.com/jquery.js")
        <UrlShape.SCHEME_RELATIVE_URL: 'scheme_relative_url'>
    """
    return UrlClassifier(config).classify(url)
