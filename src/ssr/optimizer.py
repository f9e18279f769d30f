"""SSR optimization pass.

The pass runs in two stages:

Tree stage (optimize_block): applied to each top-level block's markup in
document order, while the block structure is still known. Classifies the
block as critical or not, marks or defers it, and adds loading hints to
its media.

Document stage (optimize_fragment): text rewriting in a fixed order
(comments, client scripts, duplicate styles, preconnect hints,
minification), between the caller's pre and post hooks. It runs on each
top-level block's markup after the tree stage, sharing one
OptimizationContext, so a document converted in chunks gets the same bytes
as one converted in a single call.
"""

import logging
from typing import Optional

from src.markup.html_utils import StartTag, rewrite_start_tags, set_root_attributes
from src.models.block import Block

from .critical_path import OptimizationContext
from .options import SSRFlags, SSROptions
from .rewriters import (
    add_preconnect_hints,
    minify_html,
    remove_duplicate_styles,
    strip_client_scripts,
    strip_comments,
)

logger = logging.getLogger(__name__)

MEDIA_TAGS = ("img", "iframe", "video", "audio")


class SSROptimizer:
    """Applies SSR optimizations according to SSROptions."""

    def __init__(self, options: Optional[SSROptions] = None):
        self.options = options or SSROptions()
        self.flags: SSRFlags = self.options.resolve_flags()

    def create_context(self) -> OptimizationContext:
        """Create fresh per-conversion state."""
        return OptimizationContext.from_options(self.options)

    def optimize_block(self, markup: str, block: Block, context: OptimizationContext) -> str:
        """Run the tree stage on one top-level block's markup.

        Args:
            markup: Converted markup of the block
            block: The top-level block it came from
            context: Per-conversion optimization state

        Returns:
            Rewritten markup ("" for a dropped non-critical block)
        """
        flags = self.flags
        critical = context.classify(block)

        if not critical and flags.critical_path_only and not flags.defer_non_critical:
            logger.debug(f"Dropping non-critical block '{block.name}'")
            return ""

        if critical and flags.prioritize_above_the_fold:
            markup = set_root_attributes(markup, {"data-priority": "high"})

        if not critical and flags.defer_non_critical:
            markup = set_root_attributes(markup, {"data-defer": "true"})
            return self._apply_media_hints(markup, context, critical=False, lazy=True)

        if flags.lazy_load_media or flags.preserve_first_image:
            markup = self._apply_media_hints(markup, context, critical=critical,
                                             lazy=flags.lazy_load_media)
        return markup

    def _apply_media_hints(self, markup: str, context: OptimizationContext,
                           critical: bool, lazy: bool) -> str:
        preserve = self.flags.preserve_first_image and critical

        def edit(tag: StartTag) -> None:
            if tag.name == "img" and preserve and not context.first_image_preserved:
                context.first_image_preserved = True
                if (tag.get("loading") or "").strip().lower() == "lazy":
                    tag.remove("loading")
                if not tag.has("loading") and not tag.has("fetchpriority"):
                    tag.set("fetchpriority", "high")
                return
            if not lazy:
                return
            if tag.name in ("img", "iframe"):
                if not tag.has("fetchpriority"):
                    tag.set_default("loading", "lazy")
            else:
                tag.set_default("preload", "none")

        return rewrite_start_tags(markup, edit, MEDIA_TAGS)

    def run_document_stage(self, html: str, context: OptimizationContext,
                           trim: bool = True) -> str:
        """Apply the document-stage rules in their fixed order (no hooks)."""
        flags = self.flags
        if flags.strip_comments:
            html = strip_comments(html)
        if flags.strip_client_scripts:
            html = strip_client_scripts(html)
        if flags.remove_duplicate_styles:
            html = remove_duplicate_styles(html, context.seen_styles)
        if flags.preconnect:
            html = add_preconnect_hints(html, context.preconnected)
        if flags.minify_output:
            html = minify_html(html, trim=trim)
        return html

    def optimize_fragment(self, html: str, context: OptimizationContext) -> str:
        """Run the pre hook, the document stage and the post hook on one
        top-level fragment.

        Preconnect links for origins first seen in the fragment are put in
        front of it. Minification keeps the fragment's edge whitespace
        (collapsed), since it may separate words of adjacent fragments.
        """
        if self.options.pre_process is not None:
            html = self.options.pre_process(html)
        html = self.run_document_stage(html, context, trim=False)
        if self.options.post_process is not None:
            html = self.options.post_process(html)
        return html

    def optimize_markup(self, html: str) -> str:
        """Optimize arbitrary markup as a single critical unit.

        Applies the media hints and the document stage, without
        classification and without hooks. Running it on its own output
        changes nothing.
        """
        context = self.create_context()
        if self.flags.lazy_load_media or self.flags.preserve_first_image:
            html = self._apply_media_hints(html, context, critical=True,
                                           lazy=self.flags.lazy_load_media)
        return self.run_document_stage(html, context)
