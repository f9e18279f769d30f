"""Base class for handlers that render one root element."""

from typing import Any, Dict, Optional, Tuple

from src.markup.html_utils import edit_root_tag, root_tag_name
from src.models.block import Block

from .registry import BlockHandler


class ElementHandler(BlockHandler):
    """Renders a block as a single root element.

    Reconciled markup that already has the expected root element is kept
    (and adapted through adapt()); anything else is wrapped in, or rebuilt
    as, a new root element built from the block's attributes.

    Attributes:
        tag: Root element tag name
        accepted_tags: Other root tags that count as already rendered
    """

    tag: str = "div"
    accepted_tags: Tuple[str, ...] = ()

    def root_tag(self, block: Block) -> str:
        return self.tag

    def transform(self, block: Block, context: Any) -> str:
        markup = context.content.markup
        tag = self.root_tag(block)
        existing = root_tag_name(markup)
        if existing is not None and (existing == tag or existing in self.accepted_tags):
            return self.adapt(markup, block, context)
        return self.build(markup, block, context)

    def adapt(self, markup: str, block: Block, context: Any) -> str:
        """Adjust markup that already has the expected root element."""
        return markup

    def build(self, inner: str, block: Block, context: Any) -> str:
        """Build the root element around the reconciled markup."""
        return context.create_element(
            self.root_tag(block), self.attributes(block), self.inner_markup(inner, block, context)
        )

    def attributes(self, block: Block) -> Dict[str, Optional[str]]:
        return {}

    def inner_markup(self, inner: str, block: Block, context: Any) -> str:
        return inner


def merge_root_style(markup: str, declarations: str) -> str:
    """Append CSS declarations to the root element's style attribute."""
    declarations = declarations.strip()
    if not declarations:
        return markup

    def edit(tag):
        existing = (tag.get("style") or "").strip()
        if declarations in existing:
            return
        if existing and not existing.endswith(";"):
            existing += ";"
        tag.set("style", f"{existing} {declarations}".strip())

    return edit_root_tag(markup, edit)
