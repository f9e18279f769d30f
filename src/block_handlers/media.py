"""Handlers for media blocks."""

import re
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit

from src.markup.html_utils import escape_html
from src.models.attributes import get_bool, get_int, get_number, get_string
from src.models.block import Block

from .base import ElementHandler, merge_root_style


def _caption(block: Block, context: Any) -> str:
    caption = get_string(block.attributes, "caption")
    return context.create_element("figcaption", {}, caption) if caption else ""


class ImageHandler(ElementHandler):
    """Image in a figure, built from url/alt/caption when there is no markup."""

    tag = "figure"
    accepted_tags = ("img",)

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if inner.strip():
            return inner
        attributes = block.attributes
        url = get_string(attributes, "url") or get_string(attributes, "src")
        if not url:
            return ""
        image_attributes = {"src": url, "alt": get_string(attributes, "alt", "")}
        for key in ("width", "height"):
            value = attributes.get(key)
            if value is not None:
                image_attributes[key] = str(get_number(attributes, key))
        image = context.create_element("img", image_attributes)
        href = get_string(attributes, "href")
        if href:
            image = context.create_element("a", {"href": href}, image)
        return image + _caption(block, context)


class GalleryHandler(ElementHandler):
    tag = "figure"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        columns = get_int(block.attributes, "columns")
        return {"data-columns": str(columns)} if columns else {}

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        return inner + _caption(block, context)


class _PlayerHandler(ElementHandler):
    """Video and audio players wrapped in a figure."""

    tag = "figure"
    player = "video"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if inner.strip():
            return inner
        src = get_string(block.attributes, "src")
        if not src:
            return ""
        player_attributes: Dict[str, Optional[str]] = {"src": src, "controls": None}
        for flag in ("autoplay", "loop", "muted", "playsInline"):
            if get_bool(block.attributes, flag):
                player_attributes[flag.lower()] = None
        poster = get_string(block.attributes, "poster")
        if poster:
            player_attributes["poster"] = poster
        preload = get_string(block.attributes, "preload")
        if preload:
            player_attributes["preload"] = preload
        player = context.create_element(self.player, player_attributes)
        return player + _caption(block, context)


class VideoHandler(_PlayerHandler):
    player = "video"


class AudioHandler(_PlayerHandler):
    player = "audio"


YOUTUBE_ID = re.compile(r"^[\w-]{11}$")


def embed_url(url: str, provider: str) -> Optional[str]:
    """Iframe URL for providers that support one, else None."""
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    if provider == "youtube" or host.endswith("youtube.com") or host == "youtu.be":
        if host == "youtu.be":
            video_id = parts.path.lstrip("/")
        else:
            video_id = (parse_qs(parts.query).get("v") or [""])[0]
        if YOUTUBE_ID.match(video_id):
            return f"https://www.youtube.com/embed/{video_id}"
    if provider == "vimeo" or host.endswith("vimeo.com"):
        video_id = parts.path.strip("/").split("/")[-1]
        if video_id.isdigit():
            return f"https://player.vimeo.com/video/{video_id}"
    return None


class EmbedHandler(ElementHandler):
    """oEmbed-style embed; iframes for known video providers, a link otherwise."""

    tag = "figure"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        provider = get_string(block.attributes, "providerNameSlug", "")
        attributes = {}
        if provider:
            attributes["data-provider"] = provider
        return attributes

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if inner.strip():
            return inner
        url = get_string(block.attributes, "url")
        if not url:
            return ""
        provider = get_string(block.attributes, "providerNameSlug", "")
        src = embed_url(url, provider)
        if src:
            body = context.create_element("iframe", {
                "src": src,
                "title": get_string(block.attributes, "title", provider or "Embedded content"),
                "allowfullscreen": None,
            })
        else:
            body = context.create_element("a", {"href": url}, escape_html(url))
        wrapper = context.create_element("div", {"class": "wp-block-embed__wrapper"}, body)
        return wrapper + _caption(block, context)


class CoverHandler(ElementHandler):
    """Cover block: background image, dimming overlay and inner container."""

    tag = "div"

    def _style(self, block: Block) -> str:
        attributes = block.attributes
        declarations = []
        url = get_string(attributes, "url")
        if url:
            declarations.append(f"background-image: url({url});")
        min_height = get_number(attributes, "minHeight")
        if min_height:
            unit = get_string(attributes, "minHeightUnit", "px")
            declarations.append(f"min-height: {min_height:g}{unit};")
        return " ".join(declarations)

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        style = self._style(block)
        return {"style": style} if style else {}

    def adapt(self, markup: str, block: Block, context: Any) -> str:
        if get_string(block.attributes, "url") and "background-image" not in markup and "<img" not in markup:
            return merge_root_style(markup, self._style(block))
        return markup

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        dim_ratio = get_number(block.attributes, "dimRatio", 50)
        overlay_style = f"opacity: {dim_ratio / 100:g};"
        color = get_string(block.attributes, "customOverlayColor")
        if color:
            overlay_style = f"background-color: {color}; {overlay_style}"
        overlay = context.create_element("span", {
            "aria-hidden": "true",
            "class": "wp-block-cover__background",
            "style": overlay_style,
        })
        container = context.create_element("div", {"class": "wp-block-cover__inner-container"}, inner)
        return overlay + container


class FileHandler(ElementHandler):
    """File download: a link to the file and an optional download button."""

    tag = "div"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if inner.strip():
            return inner
        attributes = block.attributes
        href = get_string(attributes, "href")
        if not href:
            return ""
        parts = []
        file_name = get_string(attributes, "fileName")
        if file_name:
            link = get_string(attributes, "textLinkHref") or href
            parts.append(context.create_element("a", {"href": link}, escape_html(file_name)))
        if get_bool(attributes, "showDownloadButton", True):
            text = get_string(attributes, "downloadButtonText", "Download")
            parts.append(context.create_element("a", {"href": href, "download": None}, escape_html(text)))
        return "".join(parts)


class MediaTextHandler(ElementHandler):
    """Media next to content; `mediaPosition` right puts the media second."""

    tag = "div"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        return {"data-media-position": get_string(block.attributes, "mediaPosition", "left")}

    def _media(self, block: Block, context: Any) -> str:
        attributes = block.attributes
        url = get_string(attributes, "mediaUrl")
        if not url:
            return ""
        if get_string(attributes, "mediaType", "image") == "video":
            return context.create_element("video", {"src": url, "controls": None})
        return context.create_element("img", {"src": url, "alt": get_string(attributes, "mediaAlt", "")})

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if "wp-block-media-text__media" in inner:
            return inner
        width = get_number(block.attributes, "mediaWidth", 50)
        media = context.create_element("div", {
            "class": "wp-block-media-text__media",
            "style": f"flex-basis: {width:g}%;",
        }, self._media(block, context))
        content = context.create_element("div", {"class": "wp-block-media-text__content"}, inner)
        if get_string(block.attributes, "mediaPosition", "left") == "right":
            return content + media
        return media + content


MEDIA_HANDLERS = {
    "core/image": ImageHandler,
    "core/gallery": GalleryHandler,
    "core/video": VideoHandler,
    "core/audio": AudioHandler,
    "core/embed": EmbedHandler,
    "core/cover": CoverHandler,
    "core/file": FileHandler,
    "core/media-text": MediaTextHandler,
}
