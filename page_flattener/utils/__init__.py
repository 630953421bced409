"""
Utility modules for the page flattener.

Contains logging, output path handling, and constants.
"""

from .log import setup_logger, get_logger, set_level
from .paths import url_to_filename, ensure_parent_dir, resolve_output_path
from .constants import (
    DEFAULT_USER_AGENT,
    DEFAULT_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_RESOURCE_EXTENSIONS,
    DEFAULT_SCRIPT_TYPES,
    DEFAULT_STYLESHEET_RELS,
    DEFAULT_HOST,
    DEFAULT_PORT,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "set_level",
    "url_to_filename",
    "ensure_parent_dir",
    "resolve_output_path",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_RESOURCE_EXTENSIONS",
    "DEFAULT_SCRIPT_TYPES",
    "DEFAULT_STYLESHEET_RELS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
]
