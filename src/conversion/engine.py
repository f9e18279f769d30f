"""Conversion engine.

Walks a block tree depth-first in document order. For every block it
dispatches a handler (caller overrides, then the registry, then the
fallback handler), lets the handler transform the reconciled content,
injects the resolved CSS classes into the output's root element and marks
interactive blocks for hydration.

Malformed blocks and failing handlers render as empty output and are
reported as diagnostics; their siblings are converted normally. Invalid
options and unusable input are fatal and raised before any output exists.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from src.block_handlers import create_default_registry
from src.block_handlers.registry import BlockHandler, BlockHandlerRegistry, as_handler
from src.css_frameworks.resolver import ClassResolution, ClassResolver
from src.hydration.markers import hydration_attributes
from src.markup.html_utils import create_element, inject_classes, set_root_attributes
from src.models.block import Block, parse_blocks
from src.models.conversion_result import ConversionResult, Diagnostic, DiagnosticKind
from src.models.errors import HandlerError, MalformedBlockError
from src.ssr.critical_path import OptimizationContext
from src.ssr.optimizer import SSROptimizer

from .markdown_output import MarkdownRenderer
from .node_builder import NodeBuilder
from .options import ConversionOptions, OutputTarget
from .reconciler import ContentReconciler, ReconciledContent

logger = logging.getLogger(__name__)


@dataclass
class RenderState:
    """Mutable state of one conversion call (or one chunk stream).

    Never shared between conversions.
    """
    options: ConversionOptions
    overrides: Dict[str, BlockHandler] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    optimizer: Optional[SSROptimizer] = None
    ssr_context: Optional[OptimizationContext] = None
    node_builder: Optional[NodeBuilder] = None
    markdown: Optional[MarkdownRenderer] = None
    blocks_rendered: int = 0

    def record(self, kind: DiagnosticKind, block: Block, path: str, message: str) -> None:
        self.diagnostics.append(Diagnostic(kind=kind, block_name=block.name, path=path, message=message))


class RenderContext:
    """What a handler sees while transforming one block.

    Reconciled content and resolved classes are computed on first access;
    each child block is converted at most once.
    """

    def __init__(self, converter: "BlockConverter", state: RenderState,
                 block: Block, path: str, depth: int):
        self.converter = converter
        self.state = state
        self.block = block
        self.path = path
        self.depth = depth
        self._content: Optional[ReconciledContent] = None
        self._resolution: Optional[ClassResolution] = None
        self._children: Dict[int, str] = {}

    @property
    def options(self) -> ConversionOptions:
        return self.state.options

    @property
    def framework(self) -> str:
        return self.state.options.css_framework

    @property
    def content(self) -> ReconciledContent:
        if self._content is None:
            self._content = self.converter.reconciler.reconcile(
                self.block, self.options.content_handling, self.render_child
            )
        return self._content

    @property
    def content_accessed(self) -> bool:
        return self._content is not None

    @property
    def resolution(self) -> ClassResolution:
        if self._resolution is None:
            self._resolution = self.converter.class_resolver.resolve(
                self.block.name,
                self.block.attributes,
                self.framework,
                self.options.custom_class_map,
            )
        return self._resolution

    @property
    def classes(self) -> List[str]:
        return list(self.resolution.classes)

    def render_child(self, index: int, child: Block) -> str:
        """Convert the child at `index` (memoized)."""
        if index not in self._children:
            self._children[index] = self.converter.render_block(
                child, f"{self.path}-{index}", self.depth + 1, self.state
            )
        return self._children[index]

    def render_children(self) -> List[str]:
        return [self.render_child(i, child) for i, child in enumerate(self.block.inner_blocks)]

    @staticmethod
    def create_element(tag: str, attributes: Optional[Dict[str, Optional[str]]] = None,
                       content: str = "") -> str:
        return create_element(tag, attributes, content)


class BlockConverter:
    """Converts block trees to markup, markdown or node trees.

    The registry, class resolver and reconciler are shared, read-only
    collaborators; everything that changes during a conversion lives in a
    RenderState created per call.
    """

    def __init__(self, registry: Optional[BlockHandlerRegistry] = None,
                 class_resolver: Optional[ClassResolver] = None,
                 reconciler: Optional[ContentReconciler] = None):
        """Initialize the converter.

        Args:
            registry: Handler registry (defaults to a fresh registry with
                the built-in handlers)
            class_resolver: Class resolver (defaults to Tailwind and Bootstrap)
            reconciler: Content reconciler
        """
        self.registry = registry if registry is not None else create_default_registry()
        self.class_resolver = class_resolver or ClassResolver()
        self.reconciler = reconciler or ContentReconciler()

    def create_state(self, options: Any = None) -> RenderState:
        """Validate options and create the state of a new conversion.

        Raises:
            InvalidOptionsError: If the options are invalid
        """
        options = ConversionOptions.coerce(options)
        self.class_resolver.check_framework(options.css_framework)
        state = RenderState(
            options=options,
            overrides={name: as_handler(handler) for name, handler in options.block_transformers.items()},
        )
        if options.ssr:
            if options.output_target is OutputTarget.HTML:
                state.optimizer = SSROptimizer(options.ssr_options)
                state.ssr_context = state.optimizer.create_context()
            else:
                logger.warning(
                    f"SSR optimization only applies to HTML output; "
                    f"skipping it for '{options.output_target.value}'"
                )
        if options.output_target is OutputTarget.MARKDOWN:
            state.markdown = MarkdownRenderer()
        elif options.output_target.is_node_target:
            state.node_builder = NodeBuilder(options.output_target)
        return state

    def convert(self, blocks: Any, options: Any = None) -> Any:
        """Convert a block, a block list or a `{"blocks": [...]}` mapping.

        Args:
            blocks: Conversion input
            options: ConversionOptions or a mapping of options

        Returns:
            Markup or markdown string, or a list of nodes for node targets

        Raises:
            InvalidOptionsError: If the options are invalid
            InvalidInputError: If the input is not a block or block list
        """
        return self.convert_with_result(blocks, options).output

    def convert_with_result(self, blocks: Any, options: Any = None) -> ConversionResult:
        """Convert and also return the diagnostics of the conversion."""
        state = self.create_state(options)
        parsed = parse_blocks(blocks)
        fragments = [self.render_top_level(block, index, state) for index, block in enumerate(parsed)]
        output = self.finalize(fragments, state)
        if state.diagnostics:
            logger.info(f"Converted {len(parsed)} block(s) with {len(state.diagnostics)} diagnostic(s)")
        return ConversionResult(
            output=output,
            diagnostics=list(state.diagnostics),
            metadata={
                "blocks": len(parsed),
                "blocks_rendered": state.blocks_rendered,
                "output_target": state.options.output_target.value,
                "css_framework": state.options.css_framework,
            },
        )

    def convert_block(self, block: Any, options: Any = None) -> Any:
        """Convert a single block (a Block or its serialized mapping)."""
        return self.convert([block], options)

    def render_top_level(self, block: Block, index: int, state: RenderState) -> Any:
        """Convert one top-level block into its output fragment.

        Runs the SSR tree and document stages when enabled, then converts
        the markup to the output target (a markdown string or a node list
        where needed).
        """
        markup = self.render_block(block, f"block-{index}", 0, state)
        if state.optimizer is not None:
            markup = state.optimizer.optimize_block(markup, block, state.ssr_context)
            if markup:
                markup = state.optimizer.optimize_fragment(markup, state.ssr_context)
        if state.markdown is not None:
            return self._render_markdown(markup, block, f"block-{index}", state)
        if state.node_builder is not None:
            return state.node_builder.build(markup)
        return markup

    def finalize(self, fragments: Sequence[Any], state: RenderState) -> Any:
        """Assemble fragments into the final output."""
        if state.node_builder is not None:
            return [node for fragment in fragments for node in fragment]
        return "".join(fragments)

    def render_block(self, block: Block, path: str, depth: int, state: RenderState) -> str:
        """Convert one block (and its subtree) to markup.

        Args:
            block: Block to convert
            path: Stable position id (e.g. "block-3-0")
            depth: Nesting depth (0 for top-level blocks)
            state: State of the running conversion

        Returns:
            Markup, or "" when the block is malformed or its handler fails
        """
        try:
            block.validate()
        except MalformedBlockError as e:
            logger.warning(f"Skipping malformed block at {path}: {e}")
            state.record(DiagnosticKind.MALFORMED_BLOCK, block, path, str(e))
            return ""

        handler = self._dispatch(block, path, state)
        context = RenderContext(self, state, block, path, depth)
        try:
            output = handler.transform(block, context)
            if not isinstance(output, str):
                raise TypeError(f"handler returned {type(output).__name__}, expected str")
            output = self._inject_classes(output, context)
            if state.options.emit_hydration_markers and self._is_interactive(handler, block):
                output = set_root_attributes(
                    output,
                    hydration_attributes(block.name, path, state.options.hydration_strategy),
                )
        except Exception as e:
            error = HandlerError(block.name, e)
            logger.warning(f"{error} (at {path})")
            state.record(DiagnosticKind.HANDLER_FAILURE, block, path, str(error))
            return ""
        state.blocks_rendered += 1
        return output

    def _dispatch(self, block: Block, path: str, state: RenderState) -> BlockHandler:
        override = state.overrides.get(block.name)
        if override is not None:
            return override
        handler = self.registry.get(block.name)
        if handler is not None:
            return handler
        if block.name:
            logger.debug(f"No handler for '{block.name}' at {path}; using fallback")
            state.record(
                DiagnosticKind.UNKNOWN_BLOCK, block, path,
                f"No handler registered for '{block.name}'",
            )
        return self.registry.fallback

    def _inject_classes(self, output: str, context: RenderContext) -> str:
        resolution = context.resolution
        if not resolution.classes and not resolution.displaced and not resolution.displace_authored_alignment:
            return output
        if context.content_accessed:
            content = context.content
            # Output that starts with a child's markup has no root of its own
            if not content.owns_root and content.markup and output.startswith(content.markup):
                return output
        return inject_classes(output, resolution.classes, resolution.is_displaced)

    @staticmethod
    def _is_interactive(handler: BlockHandler, block: Block) -> bool:
        return bool(getattr(handler, "interactive", False)) or block.attributes.get("interactive") is True

    def _render_markdown(self, markup: str, block: Block, path: str, state: RenderState) -> str:
        try:
            return state.markdown.render_fragment(markup)
        except Exception as e:
            error = HandlerError(block.name, e)
            logger.warning(f"Markdown conversion failed at {path}: {error}")
            state.record(DiagnosticKind.HANDLER_FAILURE, block, path, str(error))
            return ""


def convert_blocks(blocks: Any, options: Any = None,
                   converter: Optional[BlockConverter] = None) -> Any:
    """Convert blocks with a default converter (or the given one)."""
    return (converter or BlockConverter()).convert(blocks, options)
