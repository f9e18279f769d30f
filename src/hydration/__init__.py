"""Hydration marker contract shared with the external hydration runtime."""

from .markers import (
    BLOCK_ATTRIBUTE,
    HYDRATE_ATTRIBUTE,
    STRATEGY_ATTRIBUTE,
    HydrationStrategy,
    Hydrator,
    hydration_attributes,
)

__all__ = [
    "BLOCK_ATTRIBUTE",
    "HYDRATE_ATTRIBUTE",
    "STRATEGY_ATTRIBUTE",
    "HydrationStrategy",
    "Hydrator",
    "hydration_attributes",
]
