"""Text rewriting rules of the SSR document stage.

Elements are found with BeautifulSoup; removals and attribute edits are
spliced into the original text so that untouched markup keeps its bytes.
Every rule is idempotent: applying it to its own output changes nothing.
"""

import logging
import re
from typing import List, Optional, Set, Tuple
from urllib.parse import urlsplit

from bs4 import Tag

from src.markup.html_utils import (
    RAW_TEXT_ELEMENTS,
    StartTag,
    locate_comments,
    locate_elements,
    locate_start_tags,
    parse_markup,
    rewrite_start_tags,
    splice,
)

logger = logging.getLogger(__name__)

DATA_SCRIPT_TYPES = frozenset({"application/json", "application/ld+json"})

# ASCII whitespace only; a non-breaking space is content
WHITESPACE_PATTERN = re.compile(r"[ \t\n\r\f\v]+")

BLOCK_LEVEL_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "body", "details", "dialog",
    "dd", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer",
    "form", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hr", "html",
    "li", "link", "main", "meta", "nav", "ol", "p", "pre", "section", "summary",
    "table", "tbody", "td", "tfoot", "th", "thead", "title", "tr", "ul",
    "video", "audio", "iframe", "source", "picture",
})

# Stashed markup is replaced by a numbered placeholder. Block-level
# placeholders use a different delimiter so that the spacing rule sees them.
_INLINE = "\x00"
_BLOCK = "\x01"
_PLACEHOLDER_PATTERN = re.compile(r"([\x00\x01])(\d+)\1")

BLOCK_TAG_SPACING = re.compile(
    r" ?(\x01\d+\x01|</(?:" + "|".join(sorted(BLOCK_LEVEL_TAGS)) + r")\s*>) ?",
    re.IGNORECASE,
)

PRECONNECT_TAGS = ["img", "video", "audio", "source", "iframe", "script", "embed"]
PRECONNECT_ATTRIBUTES = ("src", "srcset", "poster")
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


def _protect(html: str, start_tags: bool = False) -> Tuple[str, List[str]]:
    """Replace preformatted and raw-text elements (and optionally every
    other opening tag) with placeholders."""
    spans = [(start, end, element.name) for start, end, element in locate_elements(html, RAW_TEXT_ELEMENTS)]
    if start_tags:
        protected = list(spans)
        for start, end, element in locate_start_tags(html):
            if not any(s <= start < e for s, e, _ in protected):
                spans.append((start, end, element.name))
        spans.sort()

    saved: List[str] = []
    replacements = []
    for start, end, name in spans:
        marker = _BLOCK if name in BLOCK_LEVEL_TAGS else _INLINE
        replacements.append((start, end, f"{marker}{len(saved)}{marker}"))
        saved.append(html[start:end])
    return splice(html, replacements), saved


def _restore(html: str, saved: List[str]) -> str:
    return _PLACEHOLDER_PATTERN.sub(lambda match: saved[int(match.group(2))], html)


def strip_comments(html: str) -> str:
    """Remove HTML comments outside preformatted and raw-text elements."""
    text, saved = _protect(html)
    comments = locate_comments(text)
    return _restore(splice(text, [(start, end, "") for start, end in comments]), saved)


def strip_client_scripts(html: str) -> str:
    """Remove executable scripts and inline event handler attributes.

    JSON data scripts (including structured data) are kept.
    """
    removals = []
    for start, end, element in locate_elements(html, ("script",)):
        script_type = (element.get("type") or "").strip().lower()
        if script_type not in DATA_SCRIPT_TYPES:
            removals.append((start, end, ""))
    html = splice(html, removals)

    def drop_handlers(tag: StartTag) -> None:
        for name in tag.attribute_names():
            if name.startswith("on"):
                tag.remove(name)

    return rewrite_start_tags(html, drop_handlers)


def remove_duplicate_styles(html: str, seen: Optional[Set[str]] = None) -> str:
    """Collapse repeated style blocks and repeated class tokens.

    Args:
        html: Markup to rewrite
        seen: Normalized style blocks already emitted; updated in place so
            that deduplication can span several calls

    Returns:
        Markup keeping only the first occurrence of each style block
    """
    if seen is None:
        seen = set()

    removals = []
    for start, end, _ in locate_elements(html, ("style",)):
        key = " ".join(html[start:end].split())
        if key in seen:
            removals.append((start, end, ""))
        else:
            seen.add(key)
    html = splice(html, removals)

    def dedupe_classes(tag: StartTag) -> None:
        tokens = tag.classes()
        unique = list(dict.fromkeys(tokens))
        if unique != tokens:
            tag.set("class", " ".join(unique))

    return rewrite_start_tags(html, dedupe_classes)


def _origin(url: str) -> Optional[str]:
    url = url.strip()
    if url.startswith("//"):
        url = "https:" + url
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    if parts.hostname in LOCAL_HOSTS:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def _resource_urls(element: Tag) -> List[str]:
    urls = []
    for attribute in PRECONNECT_ATTRIBUTES:
        value = element.get(attribute, "")
        if not value:
            continue
        if attribute == "srcset":
            urls.extend(candidate.split()[0] for candidate in value.split(",") if candidate.split())
        else:
            urls.append(value)
    return urls


def find_external_origins(html: str) -> List[str]:
    """External origins referenced by media and script tags, in order."""
    soup = parse_markup(html)
    origins: List[str] = []
    for element in soup.find_all(PRECONNECT_TAGS):
        for url in _resource_urls(element):
            origin = _origin(url)
            if origin and origin not in origins:
                origins.append(origin)
    return origins


def hinted_origins(html: str) -> Set[str]:
    """Origins that already have a preconnect link."""
    soup = parse_markup(html)
    hinted = set()
    for link in soup.find_all("link"):
        rel = link.get("rel", "").lower().split()
        href = link.get("href", "")
        if "preconnect" in rel and href:
            hinted.add(href.rstrip("/"))
    return hinted


def add_preconnect_hints(html: str, emitted: Optional[Set[str]] = None) -> str:
    """Prefix the markup with preconnect links for external origins.

    Args:
        html: Markup to scan
        emitted: Origins hinted earlier (updated in place)

    Returns:
        Markup with new hints prepended
    """
    if emitted is None:
        emitted = set()
    emitted |= hinted_origins(html)
    links = []
    for origin in find_external_origins(html):
        if origin in emitted:
            continue
        emitted.add(origin)
        links.append(f'<link rel="preconnect" href="{origin}" crossorigin>')
    if links:
        logger.debug(f"Adding {len(links)} preconnect hint(s)")
    return "".join(links) + html


def minify_html(html: str, trim: bool = True) -> str:
    """Collapse whitespace in text between tags.

    Preformatted and raw-text elements and every opening tag (with its
    attribute values) are left as they are. Whitespace runs become one
    space and whitespace next to block-level tags is dropped. The result is
    never longer than the input.

    Args:
        html: Markup to minify
        trim: Also drop leading and trailing whitespace. Off for pieces of
            a larger document, whose edges may separate words.
    """
    text, saved = _protect(html, start_tags=True)
    text = WHITESPACE_PATTERN.sub(" ", text)
    text = BLOCK_TAG_SPACING.sub(r"\1", text)
    if trim:
        text = text.strip(" ")
    return _restore(text, saved)
