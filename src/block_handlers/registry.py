"""Block handler registry and dispatch.

A registry maps block names to handlers. Resolution never fails: names
without a handler resolve to the shared fallback handler, which passes the
reconciled content through.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from src.models.block import Block

logger = logging.getLogger(__name__)


class BlockHandler:
    """Base class of block handlers.

    A handler turns one block into markup. It receives a render context
    (see src.conversion.engine.RenderContext) giving access to the
    options, the reconciled content, the resolved classes and the rendered
    children. Resolved classes are injected into the root element after
    transform() returns, so handlers only add them when building nested
    elements that need them.

    Attributes:
        interactive: Emit hydration markers for blocks of this type
    """

    interactive: bool = False

    def transform(self, block: Block, context: Any) -> str:
        raise NotImplementedError


class CallableHandler(BlockHandler):
    """Adapts a plain `(block, context) -> str` function to BlockHandler."""

    def __init__(self, func: Callable[[Block, Any], str], interactive: bool = False):
        self.func = func
        self.interactive = interactive

    def transform(self, block: Block, context: Any) -> str:
        return self.func(block, context)

    def __repr__(self) -> str:
        return f"CallableHandler({getattr(self.func, '__name__', self.func)!r})"


class FallbackHandler(BlockHandler):
    """Handler for block names without a registered handler.

    Returns the reconciled content unchanged: the pre-rendered HTML when
    the reconciler chose it, otherwise the template with the converted
    children in its placeholders.
    """

    def transform(self, block: Block, context: Any) -> str:
        return context.content.markup


HandlerLike = Union[BlockHandler, Callable[[Block, Any], str]]


def as_handler(handler: HandlerLike) -> BlockHandler:
    """Wrap plain callables; BlockHandler-like objects are returned as is."""
    if isinstance(handler, BlockHandler):
        return handler
    if callable(getattr(handler, "transform", None)):
        return handler
    if callable(handler):
        return CallableHandler(handler)
    raise TypeError(f"Handler must be callable or define transform(), got {type(handler).__name__}")


class BlockHandlerRegistry:
    """Mapping from block name to handler.

    Registries are plain instances handed to the converter; registration is
    expected to finish before conversions start.
    """

    def __init__(self, fallback: Optional[BlockHandler] = None):
        self._handlers: Dict[str, BlockHandler] = {}
        self.fallback = fallback or FallbackHandler()

    def register(self, name: str, handler: HandlerLike) -> None:
        """Store (or overwrite) the handler for a block name.

        Args:
            name: Namespaced block name
            handler: BlockHandler instance or `(block, context) -> str` callable

        Raises:
            TypeError: If the handler is neither
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Block name must be a non-empty string")
        if name in self._handlers:
            logger.debug(f"Overwriting handler for '{name}'")
        self._handlers[name] = as_handler(handler)

    def unregister(self, name: str) -> bool:
        """Remove a handler. Returns True if one was registered."""
        return self._handlers.pop(name, None) is not None

    def has(self, name: str) -> bool:
        return name in self._handlers

    def get(self, name: str) -> Optional[BlockHandler]:
        """Registered handler for a name, or None."""
        return self._handlers.get(name)

    def names(self) -> List[str]:
        return sorted(self._handlers)

    def resolve(self, name: str) -> BlockHandler:
        """Return the registered handler, or the fallback handler."""
        handler = self._handlers.get(name)
        if handler is None:
            return self.fallback
        return handler

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._handlers)
