"""Data models for blocks, conversion results and node trees."""

from src.models.block import Block, parse_blocks, iter_blocks
from src.models.conversion_result import ConversionResult, Diagnostic, DiagnosticKind
from src.models.nodes import ElementNode, Node, TextNode

__all__ = [
    'Block',
    'parse_blocks',
    'iter_blocks',
    'ConversionResult',
    'Diagnostic',
    'DiagnosticKind',
    'ElementNode',
    'Node',
    'TextNode',
]
