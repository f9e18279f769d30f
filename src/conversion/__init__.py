"""Block conversion: options, reconciliation and the conversion engine.

Key classes:
    BlockConverter: Converts block trees to markup, markdown or node trees
    ConversionOptions: Immutable conversion configuration
    ContentReconciler: Chooses pre-rendered HTML or the content template
    OptionsLoader: Reads options and class maps from YAML
"""

from src.models.errors import (
    AttributeTypeError,
    BlockConverterError,
    ConfigError,
    FilesystemError,
    HandlerError,
    InvalidInputError,
    InvalidOptionsError,
    MalformedBlockError,
    StreamConsumedError,
)

from .engine import BlockConverter, RenderContext, RenderState, convert_blocks
from .options import ContentHandling, ConversionOptions, OutputTarget, StreamingOptions
from .options_loader import OptionsLoader
from .reconciler import ContentReconciler, ReconciledContent

__all__ = [
    "BlockConverter",
    "RenderContext",
    "RenderState",
    "convert_blocks",
    "ConversionOptions",
    "ContentHandling",
    "OutputTarget",
    "StreamingOptions",
    "OptionsLoader",
    "ContentReconciler",
    "ReconciledContent",
    "BlockConverterError",
    "MalformedBlockError",
    "AttributeTypeError",
    "HandlerError",
    "InvalidOptionsError",
    "InvalidInputError",
    "ConfigError",
    "FilesystemError",
    "StreamConsumedError",
]
