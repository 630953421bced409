"""
Configuration for the page flattener.

The URL shape patterns, accepted MIME aliases and fetch limits are built once
into an immutable :class:`FlattenConfig` and handed by reference to the
classifier, normalizer, fetcher and flattener.
"""

import os
import re
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Mapping, Optional, Pattern, Tuple

from .utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_RESOURCE_EXTENSIONS,
    DEFAULT_SCRIPT_TYPES,
    DEFAULT_STYLESHEET_RELS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

# Building blocks shared by the URL shape patterns
_DOMAIN = r"(?:www\.)?[-a-z0-9@%._+~#=]{1,256}\.[a-z]{2,6}"
_IPV4 = r"\d{1,3}(?:\.\d{1,3}){3}"
_HOST = rf"(?:{_DOMAIN}|localhost|{_IPV4})(?::\d{{1,5}})?"
_PATH = r"(?:/[-a-z0-9@:%_+.~#?&/=;,!$'()*]*)?"
_NAME = r"[-a-z0-9@:%_+~=][-a-z0-9@:%._+~=]{0,255}"
_SEGMENTS = r"(?:[-a-z0-9@:%._+~=!$&'()*,;]+/)*"
_SUFFIX = r"(?:[?#][^\s]*)?"


@dataclass(frozen=True)
class UrlPatterns:
    """Compiled regular expressions for each URL shape."""

    absolute_url: Pattern
    scheme_relative_url: Pattern
    bare_host_url: Pattern
    root_relative_path: Pattern
    bare_resource_name: Pattern

    @classmethod
    def build(cls, resource_extensions: Tuple[str, ...]) -> "UrlPatterns":
        """
        Compile the shape patterns for a set of resource extensions.

        Args:
            resource_extensions: Extensions (without dots) that mark a
                resource file name

        Returns:
            UrlPatterns instance
        """
        exts = "|".join(re.escape(ext) for ext in resource_extensions)
        flags = re.IGNORECASE

        return cls(
            absolute_url=re.compile(rf"^https?://{_HOST}{_PATH}$", flags),
            scheme_relative_url=re.compile(rf"^//{_HOST}{_PATH}$", flags),
            # The tld group is the last dotted segment of the host part
            bare_host_url=re.compile(
                rf"^(?P<host>(?:www\.)?[-a-z0-9@%._+~#=]{{1,256}}\.(?P<tld>[a-z]{{2,6}})){_PATH}$",
                flags,
            ),
            # Any number of directories, a resource file name, then an optional query or fragment
            root_relative_path=re.compile(rf"^/{_SEGMENTS}{_NAME}\.(?:{exts}){_SUFFIX}$", flags),
            bare_resource_name=re.compile(rf"^{_SEGMENTS}{_NAME}\.(?:{exts}){_SUFFIX}$", flags),
        )


@dataclass(frozen=True)
class FlattenConfig:
    """
    Immutable settings for one or many flatten operations.

    Attributes:
        resource_extensions: Extensions treated as resource file names
        script_types: Accepted ``<script type>`` values (empty is always accepted)
        stylesheet_rels: Accepted ``<link rel>`` values
        timeout: Per-fetch timeout in seconds
        max_concurrency: Maximum number of resource fetches in flight
        user_agent: User-Agent header sent with every request
        annotate_source: Prefix inlined content with a comment naming its URL
    """

    resource_extensions: Tuple[str, ...] = DEFAULT_RESOURCE_EXTENSIONS
    script_types: Tuple[str, ...] = DEFAULT_SCRIPT_TYPES
    stylesheet_rels: Tuple[str, ...] = DEFAULT_STYLESHEET_RELS
    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = DEFAULT_CONCURRENCY
    user_agent: str = DEFAULT_USER_AGENT
    annotate_source: bool = True
    patterns: UrlPatterns = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {self.max_concurrency}")
        if not self.resource_extensions:
            raise ValueError("resource_extensions must not be empty")

        # Normalise to lowercase tuples so lookups are case-insensitive
        object.__setattr__(
            self, "resource_extensions",
            tuple(ext.lower().lstrip(".") for ext in self.resource_extensions)
        )
        object.__setattr__(
            self, "script_types", tuple(t.strip().lower() for t in self.script_types)
        )
        object.__setattr__(
            self, "stylesheet_rels", tuple(r.strip().lower() for r in self.stylesheet_rels)
        )
        object.__setattr__(self, "patterns", UrlPatterns.build(self.resource_extensions))

    def with_overrides(self, **changes) -> "FlattenConfig":
        """Return a copy of this config with some fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FlattenConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Recognised variables: ``FLATTENER_TIMEOUT``, ``FLATTENER_CONCURRENCY``
        and ``FLATTENER_USER_AGENT``.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if env.get("FLATTENER_TIMEOUT"):
            kwargs["timeout"] = float(env["FLATTENER_TIMEOUT"])
        if env.get("FLATTENER_CONCURRENCY"):
            kwargs["max_concurrency"] = int(env["FLATTENER_CONCURRENCY"])
        if env.get("FLATTENER_USER_AGENT"):
            kwargs["user_agent"] = env["FLATTENER_USER_AGENT"]

        return cls(**kwargs)


@lru_cache(maxsize=1)
def get_default_config() -> FlattenConfig:
    """Return the process-wide default configuration."""
    return FlattenConfig()
