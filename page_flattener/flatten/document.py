"""
HTML parsing and serialization for flattened documents.

Uses BeautifulSoup with the lxml parser, falling back to the builtin
html.parser when lxml is not installed.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound

from .errors import ParseError


def parse_document(markup: Union[str, bytes], url: Optional[str] = None) -> BeautifulSoup:
    """
    Parse page content into a mutable document tree.

    Args:
        markup: HTML text or raw bytes
        url: Page URL, used in error messages

    Returns:
        BeautifulSoup document

    Raises:
        ParseError: If the content is empty or cannot be parsed
    """
    if markup is None or not markup.strip():
        raise ParseError("document is empty", url)

    try:
        try:
            return BeautifulSoup(markup, 'lxml')
        except FeatureNotFound:
            return BeautifulSoup(markup, 'html.parser')
    except (ValueError, TypeError, AssertionError) as e:
        raise ParseError(str(e) or e.__class__.__name__, url) from e


def serialize_document(document: BeautifulSoup) -> str:
    """Serialize a document tree back to an HTML string."""
    return str(document)
