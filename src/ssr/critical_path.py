"""Critical path classification.

There is no layout information on the server, so "above the fold" is
approximated by document position: top-level blocks are critical until a
budget is spent, and every block spends one unit plus one per nested block
down to the configured optimization depth.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Set

from src.models.block import Block

from .options import SSRFlags, SSROptions

logger = logging.getLogger(__name__)


def block_weight(block: Block, max_depth: Optional[int], depth: int = 0) -> int:
    """Count a block and its descendants down to max_depth (None = all)."""
    weight = 1
    if max_depth is None or depth < max_depth:
        for child in block.inner_blocks:
            weight += block_weight(child, max_depth, depth + 1)
    return weight


@dataclass
class OptimizationContext:
    """Per-conversion state of the SSR pass.

    One context is created per convert() call or per chunk stream and
    discarded afterwards, so conversions never share it.

    Attributes:
        flags: Resolved optimization flags
        fold_budget: Weighted number of blocks considered above the fold
        max_depth: Nesting depth counted toward the budget (None = unbounded)
        position: Number of top-level blocks classified so far
        budget_used: Budget spent so far
        first_image_preserved: The first critical image has been seen
        seen_styles: Normalized style blocks already emitted
        preconnected: Origins already given a preconnect hint
    """
    flags: SSRFlags
    fold_budget: int = 5
    max_depth: Optional[int] = None
    position: int = 0
    budget_used: int = 0
    first_image_preserved: bool = False
    seen_styles: Set[str] = field(default_factory=set)
    preconnected: Set[str] = field(default_factory=set)

    @classmethod
    def from_options(cls, options: SSROptions) -> "OptimizationContext":
        return cls(
            flags=options.resolve_flags(),
            fold_budget=options.fold_budget,
            max_depth=options.optimization_depth.max_depth,
        )

    @property
    def budget_exhausted(self) -> bool:
        return self.budget_used >= self.fold_budget

    def classify(self, block: Block) -> bool:
        """Classify the next top-level block and spend its weight.

        Returns:
            True if the block is critical
        """
        self.position += 1
        if not self.flags.classification_enabled:
            return True
        critical = not self.budget_exhausted
        self.budget_used += block_weight(block, self.max_depth)
        logger.debug(
            f"Block #{self.position} '{block.name}' is "
            f"{'critical' if critical else 'non-critical'} "
            f"(budget {self.budget_used}/{self.fold_budget})"
        )
        return critical
