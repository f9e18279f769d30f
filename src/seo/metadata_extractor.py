"""SEO metadata extraction from converted markup.

Parses converted block markup with BeautifulSoup and collects the
information search engines and link previews care about: title,
description, headings, images, links, word count and embedded structured
data.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 160

WORD_PATTERN = re.compile(r"\w+(?:['’-]\w+)*")


@dataclass
class SEOHeading:
    text: str
    level: int


@dataclass
class SEOImage:
    url: str
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class SEOLink:
    url: str
    text: str
    is_external: bool


@dataclass
class SEOMetadata:
    """Metadata extracted from a document.

    Attributes:
        title: Text of the first h1, or of the first h2 without an h1
        description: First substantial paragraph, truncated to 160 characters
        headings: All headings in document order
        images: Images with their alt text and dimensions
        links: Hyperlinks, flagged external when pointing to another host
        word_count: Number of words of visible text
        has_schema: True if JSON-LD structured data is present
        schema: Parsed JSON-LD objects
    """
    title: Optional[str] = None
    description: Optional[str] = None
    headings: List[SEOHeading] = field(default_factory=list)
    images: List[SEOImage] = field(default_factory=list)
    links: List[SEOLink] = field(default_factory=list)
    word_count: int = 0
    has_schema: bool = False
    schema: List[Any] = field(default_factory=list)


def _dimension(value: Optional[str]) -> Optional[int]:
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


def _clean_text(text: str) -> str:
    return " ".join(text.split())


def truncate_description(text: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Truncate text to max_length characters, ending with '...' if cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3].rstrip() + "..."


class MetadataExtractor:
    """Extracts SEOMetadata from markup."""

    def __init__(self, site_url: Optional[str] = None):
        """Initialize the extractor.

        Args:
            site_url: URL of the site the markup belongs to; links to other
                hosts count as external. Without it every absolute http(s)
                link is external.
        """
        self.site_host = urlsplit(site_url).hostname if site_url else None

    def extract(self, markup: str) -> SEOMetadata:
        """Extract metadata from converted markup."""
        metadata = SEOMetadata()
        if not markup:
            return metadata
        soup = BeautifulSoup(markup, "html.parser")

        self._extract_schema(soup, metadata)
        for element in soup(["script", "style", "template"]):
            element.decompose()

        for heading in soup.find_all(re.compile(r"^h[1-6]$")):
            text = _clean_text(heading.get_text(" "))
            if text:
                metadata.headings.append(SEOHeading(text=text, level=int(heading.name[1])))
        metadata.title = self._title(metadata.headings)

        for paragraph in soup.find_all("p"):
            text = _clean_text(paragraph.get_text(" "))
            if len(text) > DESCRIPTION_MIN_LENGTH:
                metadata.description = truncate_description(text)
                break

        for image in soup.find_all("img"):
            src = image.get("src")
            if not src:
                continue
            metadata.images.append(SEOImage(
                url=src,
                alt=image.get("alt", ""),
                width=_dimension(image.get("width")),
                height=_dimension(image.get("height")),
            ))

        for link in soup.find_all("a", href=True):
            href = link["href"]
            metadata.links.append(SEOLink(
                url=href,
                text=_clean_text(link.get_text(" ")),
                is_external=self._is_external(href),
            ))

        metadata.word_count = len(WORD_PATTERN.findall(soup.get_text(" ")))
        return metadata

    def extract_from_blocks(self, blocks: Any, converter: Any = None) -> SEOMetadata:
        """Convert blocks to HTML and extract metadata from the result.

        Args:
            blocks: Conversion input
            converter: BlockConverter to use (a default one if None)
        """
        if converter is None:
            from src.conversion.engine import BlockConverter
            converter = BlockConverter()
        markup = converter.convert(blocks, {"output_target": "html"})
        return self.extract(markup)

    @staticmethod
    def _title(headings: List[SEOHeading]) -> Optional[str]:
        for level in (1, 2):
            for heading in headings:
                if heading.level == level:
                    return heading.text
        return None

    def _is_external(self, href: str) -> bool:
        parts = urlsplit(href.strip())
        if parts.scheme not in ("http", "https") or not parts.hostname:
            return False
        if self.site_host is None:
            return True
        return parts.hostname.lower() != self.site_host.lower()

    @staticmethod
    def _extract_schema(soup: BeautifulSoup, metadata: SEOMetadata) -> None:
        for script in soup.find_all("script", type="application/ld+json"):
            metadata.has_schema = True
            try:
                metadata.schema.append(json.loads(script.string or ""))
            except json.JSONDecodeError as e:
                logger.debug(f"Ignoring invalid JSON-LD block: {e}")
