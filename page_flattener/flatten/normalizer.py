"""
URL normalizer for resource references.

Turns a classified reference into an absolute, fetchable URL relative to the
page being flattened.
"""

import re
from typing import Optional

from ..config import FlattenConfig
from .classifier import UrlClassifier, UrlShape
from .errors import ClassificationError, NormalizationError

_SCHEME_PATTERN = re.compile(r'^[a-z][a-z0-9+.-]*://', re.IGNORECASE)


def ensure_base_url(base_url: str) -> str:
    """
    Prepare a page URL for use as a concatenation base.

    Injects ``http://`` when no scheme is present and makes the URL end with
    exactly one trailing slash.

    Args:
        base_url: Page URL, e.g. ``example.org`` or ``https://example.org/``

    Returns:
        Base URL such as ``http://example.org/``
    """
    base = base_url.strip()
    if not _SCHEME_PATTERN.match(base):
        base = f"http://{base.lstrip('/')}"
    return base.rstrip('/') + '/'


def base_scheme(base_url: str) -> str:
    """Return ``https`` if the base URL's scheme token contains it, else ``http``."""
    match = _SCHEME_PATTERN.match(base_url.strip())
    if match and 'https' in match.group(0).lower():
        return 'https'
    return 'http'


class UrlNormalizer:
    """
    Resolves reference strings against a base page URL.
    """

    def __init__(
        self,
        config: Optional[FlattenConfig] = None,
        classifier: Optional[UrlClassifier] = None
    ):
        """
        Initialize the normalizer.

        Args:
            config: Configuration used to build a classifier when none is given
            classifier: Classifier instance to share
        """
        self.classifier = classifier or UrlClassifier(config)

    def normalize(self, reference: str, base_url: str) -> str:
        """
        Build the absolute URL for a reference.

        Args:
            reference: Raw ``src``/``href`` value
            base_url: URL of the page containing the reference

        Returns:
            Absolute URL string

        Raises:
            NormalizationError: If the reference cannot be classified
        """
        shape = self.shape_of(reference, base_url)
        return self.resolve(reference.strip(), shape, base_url)

    def shape_of(self, reference: str, base_url: str) -> UrlShape:
        """
        Classify a reference, reporting failure as a NormalizationError.

        Raises:
            NormalizationError: If the reference cannot be classified
        """
        try:
            return self.classifier.classify(reference)
        except ClassificationError as e:
            raise NormalizationError(reference, base_url, str(e)) from e

    def resolve(self, reference: str, shape: UrlShape, base_url: str) -> str:
        """
        Apply the transform for an already classified reference.

        Args:
            reference: Stripped reference string
            shape: Shape returned by the classifier
            base_url: URL of the page containing the reference

        Returns:
            Absolute URL string
        """
        if shape is UrlShape.ABSOLUTE_URL:
            return reference

        base = ensure_base_url(base_url)
        scheme = base_scheme(base)

        if shape is UrlShape.SCHEME_RELATIVE_URL:
            return f"{scheme}:{reference}"

        if shape is UrlShape.BARE_HOST_URL:
            return f"{scheme}://{reference}"

        if shape is UrlShape.ROOT_RELATIVE_PATH:
            return base + reference[1:]

        if shape is UrlShape.BARE_RESOURCE_NAME:
            return base + reference

        raise NormalizationError(reference, base_url, f"unsupported shape {shape}")


def normalize(reference: str, base_url: str, config: Optional[FlattenConfig] = None) -> str:
    """
    Normalize a reference with the default (or given) configuration.

    Example:
        >>> normalize("/script.js", "http://example.org")
        'http://example.org/script.js'
    """
    return UrlNormalizer(config).normalize(reference, base_url)
