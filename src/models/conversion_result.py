"""Conversion result data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class DiagnosticKind(Enum):
    """Kinds of non-fatal problems recorded during a conversion."""

    MALFORMED_BLOCK = "malformed_block"
    HANDLER_FAILURE = "handler_failure"
    UNKNOWN_BLOCK = "unknown_block"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem encountered while converting one block.

    Attributes:
        kind: What went wrong
        block_name: Name of the affected block ("" for freeform fragments)
        path: Position of the block in the tree (e.g. "block-2-0")
        message: Human-readable description
    """
    kind: DiagnosticKind
    block_name: str
    path: str
    message: str


@dataclass
class ConversionResult:
    """Result of converting a block tree.

    Contains the converted output along with diagnostics about blocks that
    were rendered as empty placeholders or resolved via the fallback handler.

    Attributes:
        output: Markup string, markdown string or list of nodes
        diagnostics: Non-fatal problems, in document order
        metadata: Additional information (block counts, target, framework)
    """
    output: Any
    diagnostics: List[Diagnostic] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        """True if any block was replaced by an empty placeholder."""
        return any(
            d.kind in (DiagnosticKind.MALFORMED_BLOCK, DiagnosticKind.HANDLER_FAILURE)
            for d in self.diagnostics
        )

    @property
    def warnings(self) -> List[str]:
        """Diagnostic messages of the error kinds, for display."""
        return [
            d.message for d in self.diagnostics
            if d.kind is not DiagnosticKind.UNKNOWN_BLOCK
        ]
