"""Block handlers and the handler registry.

Key classes:
    BlockHandlerRegistry: Block name -> handler mapping with fallback
    BlockHandler: Base class of handlers
    ElementHandler: Handler rendering a single root element
"""

from .base import ElementHandler
from .layout import LAYOUT_HANDLERS
from .media import MEDIA_HANDLERS
from .registry import (
    BlockHandler,
    BlockHandlerRegistry,
    CallableHandler,
    FallbackHandler,
    as_handler,
)
from .text import TEXT_HANDLERS
from .widgets import WIDGET_HANDLERS

BUILTIN_HANDLERS = {
    **TEXT_HANDLERS,
    **MEDIA_HANDLERS,
    **LAYOUT_HANDLERS,
    **WIDGET_HANDLERS,
}


def register_builtin_handlers(registry: BlockHandlerRegistry) -> BlockHandlerRegistry:
    """Register a fresh instance of every built-in handler."""
    for name, handler_class in BUILTIN_HANDLERS.items():
        registry.register(name, handler_class())
    return registry


def create_default_registry() -> BlockHandlerRegistry:
    """Create a new registry seeded with the built-in handlers."""
    return register_builtin_handlers(BlockHandlerRegistry())


__all__ = [
    "BlockHandler",
    "BlockHandlerRegistry",
    "CallableHandler",
    "ElementHandler",
    "FallbackHandler",
    "BUILTIN_HANDLERS",
    "as_handler",
    "create_default_registry",
    "register_builtin_handlers",
]
