"""Handlers for text blocks."""

from typing import Any, Dict, Optional

from src.markup.html_utils import escape_html, find_root_tag
from src.models.attributes import get_bool, get_int, get_string
from src.models.block import Block

from .base import ElementHandler

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class ParagraphHandler(ElementHandler):
    tag = "p"


class HeadingHandler(ElementHandler):
    """Headings use the `level` attribute (default 2) for the built tag.

    Pre-rendered markup keeps its own heading level.
    """

    tag = "h2"
    accepted_tags = HEADING_TAGS

    def root_tag(self, block: Block) -> str:
        level = get_int(block.attributes, "level", 2)
        return f"h{min(max(level, 1), 6)}"


class ListHandler(ElementHandler):
    accepted_tags = ("ul", "ol")

    def root_tag(self, block: Block) -> str:
        return "ol" if get_bool(block.attributes, "ordered") else "ul"

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        attributes = {}
        if get_bool(block.attributes, "reversed"):
            attributes["reversed"] = None
        start = get_int(block.attributes, "start")
        if start is not None:
            attributes["start"] = str(start)
        return attributes


class ListItemHandler(ElementHandler):
    tag = "li"


class QuoteHandler(ElementHandler):
    tag = "blockquote"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        citation = get_string(block.attributes, "citation")
        if citation:
            inner += f"<cite>{citation}</cite>"
        return inner


class PullquoteHandler(ElementHandler):
    """Pullquotes are a figure around a blockquote."""

    tag = "figure"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if not inner.lstrip().startswith("<blockquote"):
            citation = get_string(block.attributes, "citation")
            if citation:
                inner += f"<cite>{citation}</cite>"
            inner = context.create_element("blockquote", {}, inner)
        return inner


class CodeHandler(ElementHandler):
    """Code renders as <pre><code>; `content` is used when there is no markup."""

    tag = "pre"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if not inner.strip():
            inner = get_string(block.attributes, "content", "")
        if inner.lstrip().startswith("<code"):
            return inner
        return context.create_element("code", {}, inner)


class PreformattedHandler(ElementHandler):
    tag = "pre"

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        if not inner.strip():
            return get_string(block.attributes, "content", "")
        return inner


class VerseHandler(PreformattedHandler):
    pass


class DetailsHandler(ElementHandler):
    """Collapsible details element with a summary line."""

    tag = "details"
    interactive = True

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        return {"open": None} if get_bool(block.attributes, "showContent") else {}

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        summary = get_string(block.attributes, "summary", "Details")
        return f"<summary>{escape_html(summary)}</summary>{inner}"


class TableHandler(ElementHandler):
    """Table; a `caption` attribute is added when the markup has no caption.

    Editor output wraps the table in a figure, which is kept as the root.
    """

    tag = "table"
    accepted_tags = ("figure",)

    def adapt(self, markup: str, block: Block, context: Any) -> str:
        caption = get_string(block.attributes, "caption")
        if not caption or "<caption" in markup or "<figcaption" in markup:
            return markup
        match = find_root_tag(markup)
        if match.group(0).lower().startswith("<table"):
            return markup[:match.end()] + context.create_element("caption", {}, caption) + markup[match.end():]
        close = markup.lower().rfind("</figure")
        if close == -1:
            return markup
        return markup[:close] + context.create_element("figcaption", {}, caption) + markup[close:]

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        caption = get_string(block.attributes, "caption")
        if caption and "<caption" not in inner:
            inner = context.create_element("caption", {}, caption) + inner
        return inner


TEXT_HANDLERS = {
    "core/paragraph": ParagraphHandler,
    "core/heading": HeadingHandler,
    "core/list": ListHandler,
    "core/list-item": ListItemHandler,
    "core/quote": QuoteHandler,
    "core/pullquote": PullquoteHandler,
    "core/code": CodeHandler,
    "core/preformatted": PreformattedHandler,
    "core/verse": VerseHandler,
    "core/details": DetailsHandler,
    "core/table": TableHandler,
}
