"""
Flattening engine.

Contains components for classifying and normalizing resource URLs,
fetching pages and resources, and inlining them into the document.
"""

from .classifier import UrlClassifier, UrlShape, classify
from .normalizer import UrlNormalizer, normalize, ensure_base_url
from .fetcher import Fetcher, FetchResponse, HttpFetcher
from .document import parse_document, serialize_document
from .flattener import (
    DocumentFlattener,
    FlattenResult,
    ReferenceState,
    ResourceReference,
    flatten,
)
from .renderer import PageRenderer, render_flattened
from .errors import (
    FlattenError,
    ClassificationError,
    NormalizationError,
    NetworkError,
    ParseError,
)

__all__ = [
    "UrlClassifier",
    "UrlShape",
    "classify",
    "UrlNormalizer",
    "normalize",
    "ensure_base_url",
    "Fetcher",
    "FetchResponse",
    "HttpFetcher",
    "parse_document",
    "serialize_document",
    "DocumentFlattener",
    "FlattenResult",
    "ReferenceState",
    "ResourceReference",
    "flatten",
    "PageRenderer",
    "render_flattened",
    "FlattenError",
    "ClassificationError",
    "NormalizationError",
    "NetworkError",
    "ParseError",
]
