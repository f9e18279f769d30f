"""Handlers for raw content and widget blocks."""

from typing import Any, Dict, Optional

from src.markup.html_utils import escape_html
from src.models.attributes import get_bool, get_string
from src.models.block import Block

from .base import ElementHandler
from .registry import BlockHandler


class HtmlHandler(BlockHandler):
    """Custom HTML is emitted as authored."""

    def transform(self, block: Block, context: Any) -> str:
        markup = context.content.markup
        if not markup.strip():
            markup = get_string(block.attributes, "content", "")
        return markup


class FreeformHandler(BlockHandler):
    """Classic-editor content and nameless fragments pass through unchanged."""

    def transform(self, block: Block, context: Any) -> str:
        return context.content.markup


class ShortcodeHandler(ElementHandler):
    """Shortcodes are kept as text for server-side expansion."""

    tag = "div"

    def transform(self, block: Block, context: Any) -> str:
        text = get_string(block.attributes, "text") or context.content.markup
        return context.create_element("div", {"data-shortcode": "true"}, text)


class SearchHandler(ElementHandler):
    """Search form; the button is placed per `buttonPosition`."""

    tag = "div"
    accepted_tags = ("form",)
    interactive = True

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        return {
            "data-button-position": get_string(block.attributes, "buttonPosition", "button-outside"),
            "data-button-use-icon": "true" if get_bool(block.attributes, "buttonUseIcon") else "false",
        }

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        attributes = block.attributes
        parts = []
        if get_bool(attributes, "showLabel", True):
            label = get_string(attributes, "label", "Search")
            parts.append(f"<label>{escape_html(label)}</label>")
        parts.append(context.create_element("input", {
            "type": "search",
            "name": "s",
            "placeholder": get_string(attributes, "placeholder", "Search..."),
            "value": "",
        }))
        position = get_string(attributes, "buttonPosition", "button-outside")
        if position != "no-button":
            text = get_string(attributes, "buttonText", "Search")
            parts.append(f'<button type="submit">{escape_html(text)}</button>')
        form = context.create_element(
            "form", {"role": "search", "method": "get", "action": "#"}, "".join(parts)
        )
        return form


WIDGET_HANDLERS = {
    "core/html": HtmlHandler,
    "core/freeform": FreeformHandler,
    "core/shortcode": ShortcodeHandler,
    "core/search": SearchHandler,
}
