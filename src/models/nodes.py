"""Framework-neutral node tree produced for non-markup output targets.

Framework adapters translate these nodes into component invocations of a
specific UI framework.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class TextNode:
    """A run of text."""
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass
class ElementNode:
    """An element with props and ordered children.

    Attributes:
        tag: Element tag name (lowercase)
        props: Element properties, already renamed for the target framework
        children: Child nodes in document order
    """
    tag: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "element",
            "tag": self.tag,
            "props": dict(self.props),
            "children": [child.to_dict() for child in self.children],
        }

    def text_content(self) -> str:
        """Concatenate all descendant text."""
        parts = []
        for child in self.children:
            if isinstance(child, TextNode):
                parts.append(child.text)
            else:
                parts.append(child.text_content())
        return "".join(parts)


Node = Union[ElementNode, TextNode]
