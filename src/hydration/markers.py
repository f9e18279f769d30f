"""Hydration marker contract.

Hydration (attaching interactivity to rendered markup in a live document)
happens outside this package. The converter's only obligation is to emit
stable markers on interactive blocks so that a hydration runtime can find
them later. This module defines those markers and the runtime's interface.
"""

from enum import Enum
from typing import Any, Dict, Optional, Protocol

BLOCK_ATTRIBUTE = "data-wp-block"
HYDRATE_ATTRIBUTE = "data-wp-hydrate"
STRATEGY_ATTRIBUTE = "data-wp-strategy"


class HydrationStrategy(Enum):
    """When the hydration runtime should attach interactivity."""

    IMMEDIATE = "immediate"
    VIEWPORT = "viewport"
    INTERACTION = "interaction"
    IDLE = "idle"


def hydration_attributes(
    block_name: str,
    block_id: str,
    strategy: Optional[HydrationStrategy] = None,
) -> Dict[str, str]:
    """Build the marker attributes for an interactive block.

    Args:
        block_name: Namespaced block name
        block_id: Stable identifier derived from the block's tree position
        strategy: Optional hydration strategy hint

    Returns:
        Ordered attribute name -> value mapping
    """
    attributes = {
        BLOCK_ATTRIBUTE: block_name,
        HYDRATE_ATTRIBUTE: block_id,
    }
    if strategy is not None:
        attributes[STRATEGY_ATTRIBUTE] = strategy.value
    return attributes


class Hydrator(Protocol):
    """Interface of an external hydration runtime.

    Consumes a live element handle, the original block data and a strategy.
    Returns nothing observable to the converter, which never calls it.
    """

    def hydrate(self, element: Any, block: Any, strategy: HydrationStrategy) -> None:
        ...
