"""Document head tags built from extracted SEO metadata.

Produces the <title>, description, Open Graph, Twitter card, canonical,
robots and JSON-LD tags for a page, one tag per line.
"""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urljoin

from src.markup.html_utils import create_element, escape_html

from .metadata_extractor import SEOMetadata

logger = logging.getLogger(__name__)


@dataclass
class HeadOptions:
    """Site-level settings for head generation.

    Attributes:
        base_url: Absolute site URL; page and image URLs are resolved against it
        site_name: Value of og:site_name
        twitter_card: Twitter card type
        twitter_site: Twitter handle of the site, with or without '@'
        facebook_app_id: Value of fb:app_id
        include_schema: Emit JSON-LD found in the content
        include_robots: Emit a robots meta tag
        include_canonical: Emit a canonical link
        should_index: Let search engines index and follow the page
    """
    base_url: str = ""
    site_name: Optional[str] = None
    twitter_card: str = "summary_large_image"
    twitter_site: Optional[str] = None
    facebook_app_id: Optional[str] = None
    include_schema: bool = True
    include_robots: bool = True
    include_canonical: bool = True
    should_index: bool = True


def canonical_url(base_url: str, relative_path: str = "") -> str:
    """Join the site URL and a page path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{relative_path.lstrip('/')}"


def _meta(key: str, name: str, content: Optional[str]) -> Optional[str]:
    if content is None or content == "":
        return None
    return create_element("meta", {key: name, "content": str(content)})


def _json_ld(schema: Sequence) -> str:
    data = schema[0] if len(schema) == 1 else list(schema)
    # "</" would end the script element early
    text = json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
    return create_element("script", {"type": "application/ld+json"}, text)


def generate_head(metadata: SEOMetadata, options: Optional[HeadOptions] = None,
                  relative_path: str = "", keywords: Optional[Sequence[str]] = None) -> str:
    """Build the head tags for a page.

    Args:
        metadata: Metadata extracted from the page content
        options: Site settings (defaults to HeadOptions())
        relative_path: Path of the page below the site URL
        keywords: Optional keywords for the keywords meta tag

    Returns:
        Tags joined by newlines; attribute values and the title are escaped
    """
    options = options or HeadOptions()
    url = canonical_url(options.base_url, relative_path)
    title = metadata.title or options.site_name or ""
    description = metadata.description
    image = metadata.images[0] if metadata.images else None
    image_url = urljoin(options.base_url.rstrip("/") + "/", image.url) if image else None

    tags: List[Optional[str]] = [
        f"<title>{escape_html(title)}</title>" if title else None,
        _meta("name", "title", title),
        _meta("name", "description", description),
        _meta("name", "keywords", ", ".join(keywords) if keywords else None),
        _meta("property", "og:title", title),
        _meta("property", "og:description", description),
        _meta("property", "og:url", url),
        _meta("property", "og:site_name", options.site_name),
        _meta("property", "og:type", "article"),
    ]
    if image is not None:
        tags += [
            _meta("property", "og:image", image_url),
            _meta("property", "og:image:alt", image.alt),
            _meta("property", "og:image:width", image.width),
            _meta("property", "og:image:height", image.height),
        ]

    twitter_site = options.twitter_site
    if twitter_site and not twitter_site.startswith("@"):
        twitter_site = "@" + twitter_site
    tags += [
        _meta("name", "twitter:card", options.twitter_card),
        _meta("name", "twitter:site", twitter_site),
        _meta("name", "twitter:title", title),
        _meta("name", "twitter:description", description),
    ]
    if image is not None:
        tags += [
            _meta("name", "twitter:image", image_url),
            _meta("name", "twitter:image:alt", image.alt),
        ]
    tags.append(_meta("property", "fb:app_id", options.facebook_app_id))

    if options.include_canonical:
        tags.append(create_element("link", {"rel": "canonical", "href": url}))
    if options.include_robots:
        robots = "index, follow" if options.should_index else "noindex, nofollow"
        tags.append(_meta("name", "robots", robots))
    if options.include_schema and metadata.schema:
        tags.append(_json_ld(metadata.schema))

    lines = [tag for tag in tags if tag]
    logger.debug(f"Generated {len(lines)} head tag(s) for {url}")
    return "\n".join(lines)
