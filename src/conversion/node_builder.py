"""Builds framework-neutral node trees from converted markup.

Markup is parsed with BeautifulSoup's html.parser. The React target
renames DOM attributes to their JSX prop names and turns inline styles into
camelCased mappings; other targets keep attribute names as written.
"""

import re
from typing import Any, Dict, List

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, ProcessingInstruction, Tag

from src.models.nodes import ElementNode, Node, TextNode

from .options import OutputTarget

REACT_PROP_NAMES = {
    "class": "className",
    "for": "htmlFor",
    "tabindex": "tabIndex",
    "readonly": "readOnly",
    "maxlength": "maxLength",
    "colspan": "colSpan",
    "rowspan": "rowSpan",
    "srcset": "srcSet",
    "crossorigin": "crossOrigin",
    "fetchpriority": "fetchPriority",
    "allowfullscreen": "allowFullScreen",
    "autoplay": "autoPlay",
    "playsinline": "playsInline",
    "frameborder": "frameBorder",
    "contenteditable": "contentEditable",
    "datetime": "dateTime",
    "enctype": "encType",
    "accesskey": "accessKey",
    "referrerpolicy": "referrerPolicy",
}

BOOLEAN_ATTRIBUTES = frozenset({
    "allowfullscreen", "async", "autofocus", "autoplay", "checked", "controls",
    "default", "defer", "disabled", "hidden", "loop", "multiple", "muted",
    "novalidate", "open", "playsinline", "readonly", "required", "reversed",
    "selected",
})

_SKIPPED_STRINGS = (Comment, Doctype, ProcessingInstruction)


def parse_style(style: str) -> Dict[str, str]:
    """Parse an inline style into a camelCased property mapping.

    Custom properties (--name) keep their names.

    Examples:
        >>> parse_style("background-color: red; min-height: 10px")
        {'backgroundColor': 'red', 'minHeight': '10px'}
    """
    result = {}
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        name = name.strip()
        if not sep or not name:
            continue
        if not name.startswith("--"):
            name = re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name.lower())
            if name.startswith("Ms"):
                name = "ms" + name[2:]
        result[name] = value.strip()
    return result


def react_props(attributes: Dict[str, Any]) -> Dict[str, Any]:
    """Rename DOM attributes to React prop names."""
    props = {}
    for name, value in attributes.items():
        lowered = name.lower()
        if lowered == "style":
            props["style"] = parse_style(value or "")
            continue
        if lowered.startswith(("data-", "aria-")):
            props[lowered] = value
            continue
        prop = REACT_PROP_NAMES.get(lowered, lowered)
        if lowered in BOOLEAN_ATTRIBUTES and value in ("", None, lowered):
            value = True
        props[prop] = value
    return props


class NodeBuilder:
    """Converts markup strings into node lists for a target."""

    def __init__(self, target: OutputTarget):
        self.target = target

    def build(self, markup: str) -> List[Node]:
        """Parse markup into top-level nodes, in document order."""
        if not markup:
            return []
        soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
        return self._children(soup)

    def _children(self, parent: Tag) -> List[Node]:
        nodes: List[Node] = []
        for child in parent.children:
            if isinstance(child, Tag):
                nodes.append(self._element(child))
            elif isinstance(child, NavigableString) and not isinstance(child, _SKIPPED_STRINGS):
                nodes.append(TextNode(str(child)))
        return nodes

    def _element(self, tag: Tag) -> ElementNode:
        attributes = {name: ("" if value is None else value) for name, value in tag.attrs.items()}
        if self.target is OutputTarget.REACT:
            props = react_props(attributes)
        else:
            props = attributes
        return ElementNode(tag=tag.name, props=props, children=self._children(tag))
