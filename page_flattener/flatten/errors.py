"""
Exceptions raised while flattening a page.

Failures on the page itself (``NetworkError``, ``ParseError``) abort the whole
operation. Failures on a single resource are recorded on its reference and the
element is left untouched.
"""

from typing import Optional


class FlattenError(Exception):
    """Base class for all flattening errors."""


class ClassificationError(FlattenError):
    """A reference string matches none of the known URL shapes."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Unrecognised URL: {url!r}")


class NormalizationError(FlattenError):
    """A reference could not be resolved against the base URL."""

    def __init__(self, reference: str, base_url: str, reason: Optional[str] = None):
        self.reference = reference
        self.base_url = base_url
        message = f"Cannot resolve {reference!r} against {base_url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NetworkError(FlattenError):
    """A page or resource could not be retrieved."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(FlattenError):
    """Fetched page content could not be parsed as HTML."""

    def __init__(self, reason: str, url: Optional[str] = None):
        self.url = url
        self.reason = reason
        where = f" from {url}" if url else ""
        super().__init__(f"Cannot parse document{where}: {reason}")
