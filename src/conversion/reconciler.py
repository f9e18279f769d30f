"""Content reconciliation.

Decides where a block's markup comes from: the pre-rendered HTML of the
origin system, or the block's innerContent template with converted
children substituted into its placeholders.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from src.markup.html_utils import has_content
from src.models.block import Block

from .options import ContentHandling

logger = logging.getLogger(__name__)

SOURCE_RENDERED = "rendered"
SOURCE_TEMPLATE = "template"


@dataclass(frozen=True)
class ReconciledContent:
    """Markup chosen for a block, before its handler runs.

    Attributes:
        markup: The reconciled markup
        source: "rendered" or "template"
        owns_root: False when the markup starts with a child's output, in
            which case its root element belongs to the child
    """
    markup: str
    source: str
    owns_root: bool = True


class ContentReconciler:
    """Chooses between pre-rendered HTML and the innerContent template.

    raw: always the template; pre-rendered HTML is discarded.
    rendered: the pre-rendered HTML when present, else the template.
    hybrid: the pre-rendered HTML for leaf blocks only; blocks with
        children are rebuilt from the template so that their children are
        converted (and get their classes) too.
    """

    def reconcile(self, block: Block, mode: ContentHandling,
                  render_child: Callable[[int, Block], str]) -> ReconciledContent:
        """Reconcile one block.

        Args:
            block: Block to reconcile
            mode: Content handling mode
            render_child: Renders the i-th child block to markup

        Returns:
            ReconciledContent
        """
        if block.rendered_html is not None and self._use_rendered(block, mode):
            logger.debug(f"Using pre-rendered HTML for '{block.name}' ({mode.value})")
            return ReconciledContent(markup=block.rendered_html, source=SOURCE_RENDERED)
        return self._from_template(block, render_child)

    def _use_rendered(self, block: Block, mode: ContentHandling) -> bool:
        if mode is ContentHandling.RENDERED:
            return True
        if mode is ContentHandling.HYBRID:
            return block.is_leaf
        return False

    def _from_template(self, block: Block, render_child: Callable[[int, Block], str]) -> ReconciledContent:
        parts = []
        owns_root = True
        seen_content = False
        index = 0
        for entry in block.iter_template():
            if isinstance(entry, Block):
                if not seen_content:
                    owns_root = False
                    seen_content = True
                parts.append(render_child(index, entry))
                index += 1
            else:
                if has_content(entry):
                    seen_content = True
                parts.append(entry)
        return ReconciledContent(markup="".join(parts), source=SOURCE_TEMPLATE, owns_root=owns_root)
