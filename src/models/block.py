"""Block data model.

A block is a named, attributed, recursively nested content unit as serialized
by a block-based content editor. Its `inner_content` is a template: every
None entry is a placeholder consumed, in order, by the next inner block.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .attributes import is_attribute_value
from .errors import InvalidInputError, MalformedBlockError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """A single content block.

    Attributes:
        name: Namespaced block name (e.g. "core/paragraph"); empty for
            freeform HTML fragments
        attributes: JSON-like attribute values
        inner_blocks: Child blocks, in document order
        inner_content: Template of literal markup fragments and None
            placeholders (one per child block)
        rendered_html: Pre-rendered HTML from the origin system, if any
        error: Set when the block could not be parsed; such a block
            always fails validation
    """

    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    inner_blocks: Tuple["Block", ...] = ()
    inner_content: Tuple[Optional[str], ...] = ()
    rendered_html: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def invalid(cls, name: str, reason: str) -> "Block":
        """Create a placeholder block for input that could not be parsed."""
        return cls(name=name if isinstance(name, str) else "", error=reason)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Block":
        """Build a block tree from its serialized form.

        Accepts the editor's keys (blockName, attrs, innerBlocks,
        innerContent, innerHTML) as well as the snake_case names used by
        this package. Malformed children are replaced with invalid
        placeholder blocks so that one bad child does not spoil its parent.

        Args:
            data: Serialized block mapping

        Returns:
            Block instance

        Raises:
            MalformedBlockError: If the mapping itself is malformed
        """
        if isinstance(data, Block):
            return data
        if not isinstance(data, Mapping):
            raise MalformedBlockError("", f"expected a mapping, got {type(data).__name__}")

        name = _first_present(data, ("blockName", "name"))
        if name is None:
            name = ""
        if not isinstance(name, str):
            raise MalformedBlockError("", f"block name must be a string, got {type(name).__name__}")

        attributes = _first_present(data, ("attrs", "attributes"))
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, Mapping):
            raise MalformedBlockError(name, "attributes must be a mapping")
        for key, value in attributes.items():
            if not isinstance(key, str) or not is_attribute_value(value):
                raise MalformedBlockError(
                    name, f"attribute '{key}' is not a JSON-like value"
                )

        raw_children = _first_present(data, ("innerBlocks", "inner_blocks"))
        if raw_children is None:
            raw_children = []
        if isinstance(raw_children, (str, bytes)) or not isinstance(raw_children, Sequence):
            raise MalformedBlockError(name, "innerBlocks must be a list")
        children = tuple(_parse_child(child) for child in raw_children)

        inner_html = data.get("innerHTML")
        rendered = _first_present(data, ("renderedHtml", "rendered_html", "rendered"))
        if rendered is None and inner_html is not None and not children:
            # innerHTML lacks nested markup, so it only stands in for the
            # rendered HTML of leaf blocks.
            rendered = inner_html
        if rendered is not None and not isinstance(rendered, str):
            raise MalformedBlockError(name, "rendered HTML must be a string")

        raw_content = _first_present(data, ("innerContent", "inner_content"))
        if raw_content is None:
            if children:
                raw_content = [None] * len(children)
            elif isinstance(inner_html, str):
                raw_content = [inner_html]
            else:
                raw_content = []
        if isinstance(raw_content, (str, bytes)) or not isinstance(raw_content, Sequence):
            raise MalformedBlockError(name, "innerContent must be a list")
        for entry in raw_content:
            if entry is not None and not isinstance(entry, str):
                raise MalformedBlockError(
                    name, "innerContent entries must be strings or null"
                )

        return cls(
            name=name,
            attributes=dict(attributes),
            inner_blocks=children,
            inner_content=tuple(raw_content),
            rendered_html=rendered,
        )

    @property
    def placeholder_count(self) -> int:
        """Number of None placeholders in the template."""
        return sum(1 for entry in self.inner_content if entry is None)

    @property
    def is_leaf(self) -> bool:
        """True when the block has no inner blocks."""
        return not self.inner_blocks

    def validate(self) -> None:
        """Check the block's own invariants (children are checked separately).

        Raises:
            MalformedBlockError: If the block was unparsable or its
                placeholder count does not match its inner blocks
        """
        if self.error:
            raise MalformedBlockError(self.name, self.error)
        if self.placeholder_count != len(self.inner_blocks):
            raise MalformedBlockError(
                self.name,
                f"{self.placeholder_count} placeholders in innerContent "
                f"but {len(self.inner_blocks)} inner blocks",
            )

    def iter_template(self) -> Iterator[Union[str, "Block"]]:
        """Yield literal fragments and child blocks in document order."""
        children = iter(self.inner_blocks)
        for entry in self.inner_content:
            if entry is None:
                yield next(children)
            else:
                yield entry

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the editor's key names."""
        data = {
            "blockName": self.name or None,
            "attrs": dict(self.attributes),
            "innerBlocks": [child.to_dict() for child in self.inner_blocks],
            "innerContent": list(self.inner_content),
        }
        if self.rendered_html is not None:
            data["renderedHtml"] = self.rendered_html
        return data


def _first_present(data: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_child(data: Any) -> Block:
    try:
        return Block.from_dict(data)
    except MalformedBlockError as e:
        logger.debug(f"Replacing malformed child block: {e}")
        return Block.invalid(e.block_name, e.reason)


def parse_blocks(data: Any) -> List[Block]:
    """Normalize conversion input into an ordered list of blocks.

    Accepts a Block, a block mapping, a `{"blocks": [...]}` mapping, or a
    sequence of blocks/mappings. Entries that cannot be parsed become
    invalid placeholder blocks so that the engine can report them and
    continue with their siblings.

    Raises:
        InvalidInputError: If the input is none of the accepted shapes
    """
    if isinstance(data, Block):
        return [data]
    if isinstance(data, Mapping):
        if "blocks" in data and not _looks_like_block(data):
            items = data["blocks"]
            if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
                raise InvalidInputError(items)
            return [_parse_child(item) for item in items]
        return [_parse_child(data)]
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise InvalidInputError(data)
    return [_parse_child(item) for item in data]


def iter_blocks(data: Any) -> Iterator[Block]:
    """Lazily normalize an iterable of blocks/mappings.

    Unlike parse_blocks, this accepts any iterable (including generators),
    which lets the chunked pipeline consume its source incrementally.
    """
    if isinstance(data, (Block, Mapping)):
        yield from parse_blocks(data)
        return
    if isinstance(data, (str, bytes)):
        raise InvalidInputError(data)
    try:
        iterator = iter(data)
    except TypeError:
        raise InvalidInputError(data)
    for item in iterator:
        yield _parse_child(item)


def _looks_like_block(data: Mapping[str, Any]) -> bool:
    return any(key in data for key in ("blockName", "name", "innerContent", "attrs"))
