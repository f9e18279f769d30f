"""Handlers for layout and design blocks."""

from typing import Any, Dict, Optional

from src.markup.html_utils import escape_html
from src.models.attributes import get_bool, get_mapping, get_number, get_string
from src.models.block import Block

from .base import ElementHandler, merge_root_style

GROUP_TAGS = ("div", "section", "main", "article", "aside", "header", "footer", "nav")


class GroupHandler(ElementHandler):
    """Group container; `tagName` selects the element (default div)."""

    accepted_tags = GROUP_TAGS

    def root_tag(self, block: Block) -> str:
        tag_name = get_string(block.attributes, "tagName", "div")
        return tag_name if tag_name in GROUP_TAGS else "div"


class ColumnsHandler(ElementHandler):
    tag = "div"


class ColumnHandler(ElementHandler):
    """Column; a `width` attribute becomes its flex-basis."""

    tag = "div"

    def _style(self, block: Block) -> str:
        width = block.attributes.get("width")
        if width is None:
            return ""
        if isinstance(width, str):
            return f"flex-basis: {width};" if width.strip() else ""
        return f"flex-basis: {get_number(block.attributes, 'width'):g}%;"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        style = self._style(block)
        return {"style": style} if style else {}

    def adapt(self, markup: str, block: Block, context: Any) -> str:
        return merge_root_style(markup, self._style(block))


class ButtonsHandler(ElementHandler):
    tag = "div"
    interactive = True


class ButtonHandler(ElementHandler):
    """Single button: a link built from url/text/linkTarget/rel."""

    tag = "a"
    accepted_tags = ("button", "div")
    interactive = True

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        attributes = {"href": get_string(block.attributes, "url", "#")}
        target = get_string(block.attributes, "linkTarget")
        if target:
            attributes["target"] = target
        rel = get_string(block.attributes, "rel")
        if rel:
            attributes["rel"] = rel
        return attributes

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        return get_string(block.attributes, "text") or inner or "Button"


class SeparatorHandler(ElementHandler):
    tag = "hr"


class SpacerHandler(ElementHandler):
    """Vertical spacer; `height` in pixels (default 100)."""

    tag = "div"

    def _style(self, block: Block) -> str:
        height = block.attributes.get("height")
        if isinstance(height, str) and height.strip():
            return f"height: {height.strip()};"
        return f"height: {get_number(block.attributes, 'height', 100):g}px;"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        return {"style": self._style(block), "aria-hidden": "true"}

    def adapt(self, markup: str, block: Block, context: Any) -> str:
        if "height" in block.attributes:
            return merge_root_style(markup, self._style(block))
        return markup


class MoreHandler(ElementHandler):
    """Read-more marker."""

    tag = "div"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        no_teaser = get_bool(block.attributes, "noTeaser")
        return {"data-no-teaser": "true" if no_teaser else "false"}

    def build(self, inner: str, block: Block, context: Any) -> str:
        text = get_string(block.attributes, "customText", "Read more")
        return context.create_element(
            "div", self.attributes(block), f"<span>{escape_html(text)}</span>"
        )


class NextPageHandler(ElementHandler):
    """Page break marker."""

    tag = "div"

    def build(self, inner: str, block: Block, context: Any) -> str:
        return context.create_element("div", {"data-page-break": "true"}, "<span>Page Break</span>")


SOCIAL_SERVICE_LABELS = {
    "facebook": "Facebook",
    "twitter": "Twitter",
    "x": "X",
    "instagram": "Instagram",
    "linkedin": "LinkedIn",
    "pinterest": "Pinterest",
    "youtube": "YouTube",
    "github": "GitHub",
    "tumblr": "Tumblr",
    "mastodon": "Mastodon",
    "tiktok": "TikTok",
    "telegram": "Telegram",
    "reddit": "Reddit",
    "snapchat": "Snapchat",
    "whatsapp": "WhatsApp",
}


def social_label(service: str) -> str:
    return SOCIAL_SERVICE_LABELS.get(service.lower(), service.capitalize())


class SocialLinksHandler(ElementHandler):
    """List of social links; size and layout are exposed as data attributes."""

    tag = "ul"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        attributes = {}
        size = get_string(block.attributes, "size")
        if size:
            attributes["data-size"] = size
        layout = get_mapping(block.attributes, "layout")
        attributes["data-layout"] = layout.get("type") or "horizontal"
        return attributes


class SocialLinkHandler(ElementHandler):
    """One social link; renders nothing without a `url`."""

    tag = "li"

    def build(self, inner: str, block: Block, context: Any) -> str:
        url = get_string(block.attributes, "url")
        if not url:
            return ""
        service = get_string(block.attributes, "service", "")
        label = get_string(block.attributes, "label") or social_label(service) or url
        link_attributes = {"class": f"wp-social-link-{service}"} if service else {}
        link_attributes.update({
            "href": url,
            "aria-label": label,
            "target": "_blank",
            "rel": "noopener noreferrer",
        })
        link = context.create_element("a", link_attributes, escape_html(label))
        return context.create_element("li", {"class": "wp-social-link"}, link)


LAYOUT_HANDLERS = {
    "core/group": GroupHandler,
    "core/columns": ColumnsHandler,
    "core/column": ColumnHandler,
    "core/buttons": ButtonsHandler,
    "core/button": ButtonHandler,
    "core/separator": SeparatorHandler,
    "core/spacer": SpacerHandler,
    "core/more": MoreHandler,
    "core/nextpage": NextPageHandler,
    "core/social-links": SocialLinksHandler,
    "core/social-link": SocialLinkHandler,
}
