"""
Document flattener.

Finds external scripts and stylesheets in a parsed page, resolves their
references, fetches them concurrently and replaces each element with an
inline ``<script>`` or ``<style>`` carrying the fetched text.
"""

import asyncio
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import Script, Stylesheet

from ..config import FlattenConfig, get_default_config
from ..utils.log import get_logger
from .classifier import UrlShape
from .document import serialize_document
from .errors import FlattenError, NetworkError, NormalizationError
from .fetcher import Fetcher
from .normalizer import UrlNormalizer, ensure_base_url


class ReferenceState(Enum):
    """Lifecycle of a single resource reference."""

    DISCOVERED = "discovered"
    NORMALIZED = "normalized"
    FETCHING = "fetching"
    INLINED = "inlined"
    FAILED = "failed"


@dataclass
class ResourceReference:
    """An external script or stylesheet found in the document."""

    element: Tag
    kind: str  # 'script' or 'stylesheet'
    raw: str
    shape: Optional[UrlShape] = None
    url: Optional[str] = None
    state: ReferenceState = ReferenceState.DISCOVERED
    error: Optional[FlattenError] = None

    def fail(self, error: FlattenError) -> None:
        """Mark the reference as failed, leaving its element untouched."""
        self.state = ReferenceState.FAILED
        self.error = error


@dataclass
class FlattenResult:
    """The flattened document and what happened to each reference."""

    document: BeautifulSoup
    base_url: str
    references: List[ResourceReference] = field(default_factory=list)

    @property
    def html(self) -> str:
        """Serialized HTML of the flattened document."""
        return serialize_document(self.document)

    @property
    def inlined(self) -> List[ResourceReference]:
        return [r for r in self.references if r.state is ReferenceState.INLINED]

    @property
    def failed(self) -> List[ResourceReference]:
        return [r for r in self.references if r.state is ReferenceState.FAILED]

    def summary(self) -> Dict[str, int]:
        """Count references by outcome."""
        return {
            'discovered': len(self.references),
            'inlined': len(self.inlined),
            'failed': len(self.failed),
        }


class DocumentFlattener:
    """
    Inlines external scripts and stylesheets into a document tree.

    Each call to :meth:`flatten` owns its document and its own concurrency
    primitives; nothing is shared between calls except the configuration
    and the fetcher.
    """

    # Attributes carried over to the inline replacement
    SCRIPT_ATTRS = ('type', 'id', 'nonce')
    STYLE_ATTRS = ('media', 'id', 'nonce', 'title')

    # Closing tags that would end an inline element early
    CLOSING_TAG_PATTERNS = {
        'script': re.compile(r'</(script)', re.IGNORECASE),
        'style': re.compile(r'</(style)', re.IGNORECASE),
    }

    def __init__(
        self,
        fetcher: Fetcher,
        config: Optional[FlattenConfig] = None,
        normalizer: Optional[UrlNormalizer] = None
    ):
        """
        Initialize the flattener.

        Args:
            fetcher: Object used to retrieve resource bodies
            config: Flattening configuration
            normalizer: URL normalizer to share
        """
        self.fetcher = fetcher
        self.config = config or get_default_config()
        self.normalizer = normalizer or UrlNormalizer(self.config)
        self.logger = get_logger("flattener")

    def discover(self, document: BeautifulSoup) -> List[ResourceReference]:
        """
        Find every inlineable script and stylesheet in document order.

        Args:
            document: Parsed document

        Returns:
            List of discovered references
        """
        references = []

        for element in document.find_all(['script', 'link']):
            if element.name == 'script':
                reference = self._script_reference(element)
            else:
                reference = self._stylesheet_reference(element)

            if reference:
                references.append(reference)

        return references

    def _script_reference(self, script: Tag) -> Optional[ResourceReference]:
        """Build a reference for an external JavaScript element."""
        src = script.get('src')
        if src is None or not src.strip():
            # Already inline
            return None

        script_type = (script.get('type') or '').strip().lower()
        if script_type and script_type not in self.config.script_types:
            self.logger.debug(f"Skipping script of type {script_type!r}: {src}")
            return None

        return ResourceReference(element=script, kind='script', raw=src.strip())

    def _stylesheet_reference(self, link: Tag) -> Optional[ResourceReference]:
        """Build a reference for a stylesheet link element."""
        href = link.get('href')
        if href is None or not href.strip():
            return None

        # BeautifulSoup returns rel as a list of values
        rel_value = link.get('rel') or []
        if isinstance(rel_value, str):
            rel_value = rel_value.split()
        rel = ' '.join(v.lower() for v in rel_value)

        if rel not in self.config.stylesheet_rels:
            return None

        return ResourceReference(element=link, kind='stylesheet', raw=href.strip())

    async def flatten(self, document: BeautifulSoup, base_url: str) -> FlattenResult:
        """
        Inline every external script and stylesheet of a document.

        Resources that cannot be resolved or fetched are left as they were.

        Args:
            document: Parsed document; mutated in place
            base_url: URL of the page the document came from

        Returns:
            FlattenResult wrapping the mutated document
        """
        base = ensure_base_url(base_url)
        result = FlattenResult(document=document, base_url=base)
        result.references = self.discover(document)

        # Group by absolute URL so each resource is fetched once
        pending: Dict[str, List[ResourceReference]] = {}

        for reference in result.references:
            try:
                reference.shape = self.normalizer.shape_of(reference.raw, base)
                reference.url = self.normalizer.resolve(reference.raw, reference.shape, base)
            except NormalizationError as e:
                self.logger.warning(f"Leaving {reference.kind} {reference.raw!r} as-is: {e}")
                reference.fail(e)
                continue

            reference.state = ReferenceState.NORMALIZED
            pending.setdefault(reference.url, []).append(reference)

        if pending:
            semaphore = asyncio.Semaphore(self.config.max_concurrency)
            mutation_lock = asyncio.Lock()

            await asyncio.gather(*(
                self._inline_resource(document, url, references, semaphore, mutation_lock)
                for url, references in pending.items()
            ))

        summary = result.summary()
        self.logger.info(
            f"Flattened {base}: {summary['inlined']} inlined, "
            f"{summary['failed']} failed of {summary['discovered']} references"
        )

        return result

    async def _inline_resource(
        self,
        document: BeautifulSoup,
        url: str,
        references: List[ResourceReference],
        semaphore: asyncio.Semaphore,
        mutation_lock: asyncio.Lock
    ) -> None:
        """Fetch one resource and substitute it for every element referencing it."""
        async with semaphore:
            for reference in references:
                reference.state = ReferenceState.FETCHING

            try:
                response = await asyncio.wait_for(
                    self.fetcher.fetch(url),
                    timeout=self.config.timeout
                )
            except asyncio.TimeoutError:
                error = NetworkError(url, f"timed out after {self.config.timeout}s")
            except NetworkError as e:
                error = e
            else:
                error = None

        if error is not None:
            self.logger.warning(f"Leaving {len(references)} reference(s) to {url} as-is: {error}")
            for reference in references:
                reference.fail(error)
            return

        content = response.text()

        async with mutation_lock:
            for reference in references:
                self._substitute(document, reference, content)

        self.logger.debug(f"Inlined {url} into {len(references)} element(s)")

    def _substitute(self, document: BeautifulSoup, reference: ResourceReference, content: str) -> None:
        """Replace a reference's element with an inline equivalent."""
        if reference.kind == 'script':
            tag_name, keep, string_class = 'script', self.SCRIPT_ATTRS, Script
        else:
            tag_name, keep, string_class = 'style', self.STYLE_ATTRS, Stylesheet

        replacement = document.new_tag(tag_name)
        for attr in keep:
            value = reference.element.get(attr)
            if value:
                replacement[attr] = value

        body = self.CLOSING_TAG_PATTERNS[tag_name].sub(r'<\\/\1', content)
        if self.config.annotate_source:
            source = reference.url.replace('*/', '*\\/')
            body = f"/* Inlined from {source} */\n{body}"

        replacement.string = string_class(body)
        reference.element.replace_with(replacement)

        reference.element = replacement
        reference.state = ReferenceState.INLINED


async def flatten(
    document: BeautifulSoup,
    base_url: str,
    fetcher: Fetcher,
    config: Optional[FlattenConfig] = None
) -> FlattenResult:
    """Flatten a document with a one-off DocumentFlattener."""
    return await DocumentFlattener(fetcher, config).flatten(document, base_url)
