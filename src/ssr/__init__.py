"""Server-side rendering optimization pass.

Key classes:
    SSROptimizer: Runs the tree and document stages
    SSROptions: Level, flag overrides and hooks
    OptimizationContext: Per-conversion state of the pass
"""

from .critical_path import OptimizationContext, block_weight
from .optimizer import SSROptimizer
from .options import (
    LEVEL_PRESETS,
    OptimizationDepth,
    OptimizationLevel,
    SSRFlags,
    SSROptions,
)

__all__ = [
    "SSROptimizer",
    "SSROptions",
    "SSRFlags",
    "OptimizationLevel",
    "OptimizationDepth",
    "OptimizationContext",
    "LEVEL_PRESETS",
    "block_weight",
]
