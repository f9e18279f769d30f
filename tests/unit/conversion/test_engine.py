"""Unit tests for conversion.engine module."""

from unittest.mock import patch

import pytest

from src.block_handlers.registry import BlockHandler, BlockHandlerRegistry
from src.conversion import convert_blocks
from src.conversion.engine import BlockConverter
from src.models.conversion_result import DiagnosticKind
from src.models.errors import InvalidInputError, InvalidOptionsError
from src.models.nodes import ElementNode, TextNode
from tests.fixtures.blocks import (
    FREEFORM_FRAGMENT,
    MALFORMED_PLACEHOLDERS,
    UNKNOWN_RENDERED,
    WRAPPER_WITH_CHILD,
    group,
    paragraph,
)


class ExplodingHandler(BlockHandler):
    def transform(self, block, context):
        raise RuntimeError("boom")


class TestConvert:
    """Test cases for BlockConverter.convert()."""

    def test_empty_list(self, converter):
        assert converter.convert([]) == ""

    def test_sibling_order_preserved(self, converter):
        output = converter.convert([paragraph("one"), paragraph("two"), paragraph("three")])

        assert output == "<p>one</p><p>two</p><p>three</p>"

    def test_template_wraps_child_output(self, converter):
        """innerContent ["<div>", null, "</div>"] yields <div> + child + </div>."""
        output = converter.convert(WRAPPER_WITH_CHILD)

        assert output == "<div><p>Inside</p></div>"

    def test_convert_block(self, converter):
        assert converter.convert_block(paragraph("x")) == "<p>x</p>"

    def test_convert_blocks_helper(self):
        assert convert_blocks([paragraph("x")]) == "<p>x</p>"

    def test_freeform_fragment_passes_through(self, converter):
        result = converter.convert_with_result(FREEFORM_FRAGMENT)

        assert result.output == "\n<p>Classic content</p>\n"
        assert result.diagnostics == []

    def test_invalid_input_raises(self, converter):
        with pytest.raises(InvalidInputError):
            converter.convert("<p>not blocks</p>")

    def test_invalid_options_raise_before_output(self, converter):
        with pytest.raises(InvalidOptionsError):
            converter.convert([paragraph("x")], {"css_framework": "unknown"})

    def test_options_not_mutated(self, converter):
        options = {"css_framework": "tailwind", "custom_class_map": {"core/paragraph": {"block": "prose"}}}

        converter.convert([paragraph("x")], options)

        assert options == {"css_framework": "tailwind", "custom_class_map": {"core/paragraph": {"block": "prose"}}}


class TestClassInjection:
    """Test cases for class injection into block output."""

    def test_framework_classes_injected(self, converter):
        output = converter.convert(paragraph("x", align="center"), {"css_framework": "tailwind"})

        assert output == '<p class="text-center">x</p>'

    def test_one_alignment_class_when_both_attributes_set(self, converter):
        output = converter.convert(paragraph("x", align="center", textAlign="left"), {"css_framework": "tailwind"})

        assert output == '<p class="text-left">x</p>'

    def test_authored_alignment_displaced(self, converter):
        block = paragraph("x", align="right")
        block["innerContent"] = ['<p class="has-text-align-right intro">x</p>']

        output = converter.convert(block, {"css_framework": "bootstrap"})

        assert output == '<p class="intro text-end">x</p>'

    def test_nested_blocks_get_their_own_classes(self, converter):
        output = converter.convert(
            group(paragraph("x", align="center")),
            {"css_framework": "tailwind"},
        )

        assert output == '<div class="wp-block-group p-4"><p class="text-center">x</p></div>'

    def test_child_root_not_given_parent_classes(self, converter):
        """A parent whose markup starts with a child's output does not inject into it."""
        block = {
            "blockName": "acme/passthrough",
            "attrs": {},
            "innerBlocks": [paragraph("x")],
            "innerContent": [None],
        }

        output = converter.convert(block, {
            "css_framework": "custom",
            "custom_class_map": {"acme/passthrough": {"block": "parent"}},
        })

        assert output == "<p>x</p>"

    def test_unknown_block_rendered_html_gets_classes(self, converter):
        output = converter.convert(UNKNOWN_RENDERED, {
            "content_handling": "hybrid",
            "css_framework": "custom",
            "custom_class_map": {"acme/testimonial": {"block": "card"}},
        })

        assert output == '<section data-id="7" class="card"><p>Great product!</p></section>'


class TestDiagnostics:
    """Test cases for non-fatal failures."""

    def test_malformed_block_renders_empty(self, converter):
        result = converter.convert_with_result([paragraph("before"), MALFORMED_PLACEHOLDERS, paragraph("after")])

        assert result.output == "<p>before</p><p>after</p>"
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind is DiagnosticKind.MALFORMED_BLOCK
        assert diagnostic.block_name == "core/group"
        assert diagnostic.path == "block-1"

    def test_handler_failure_isolated(self, registry):
        registry.register("acme/bad", ExplodingHandler())
        converter = BlockConverter(registry=registry)

        result = converter.convert_with_result([
            paragraph("a"),
            {"blockName": "acme/bad", "innerContent": ["<p>x</p>"]},
            paragraph("b"),
        ])

        assert result.output == "<p>a</p><p>b</p>"
        assert result.diagnostics[0].kind is DiagnosticKind.HANDLER_FAILURE
        assert "RuntimeError: boom" in result.diagnostics[0].message
        assert result.has_errors

    def test_handler_failure_logged(self, registry):
        registry.register("acme/bad", ExplodingHandler())
        converter = BlockConverter(registry=registry)

        with patch("src.conversion.engine.logger") as mock_logger:
            converter.convert({"blockName": "acme/bad", "innerContent": ["x"]})

        mock_logger.warning.assert_called_once()
        assert "block-0" in mock_logger.warning.call_args[0][0]

    def test_attribute_type_error_is_handler_failure(self, converter):
        result = converter.convert_with_result({
            "blockName": "core/heading", "attrs": {"level": "big"}, "innerContent": ["Title"],
        })

        assert result.output == ""
        assert result.diagnostics[0].kind is DiagnosticKind.HANDLER_FAILURE
        assert "level" in result.diagnostics[0].message

    def test_non_string_output_is_handler_failure(self, converter):
        options = {"block_transformers": {"core/paragraph": lambda block, context: 42}}

        result = converter.convert_with_result(paragraph("x"), options)

        assert result.output == ""
        assert result.diagnostics[0].kind is DiagnosticKind.HANDLER_FAILURE

    def test_unknown_block_diagnostic(self, converter):
        result = converter.convert_with_result(UNKNOWN_RENDERED)

        assert result.diagnostics[0].kind is DiagnosticKind.UNKNOWN_BLOCK
        assert not result.has_errors

    def test_nested_failure_path(self, converter):
        result = converter.convert_with_result(group(paragraph("ok"), MALFORMED_PLACEHOLDERS))

        assert result.output == '<div class="wp-block-group"><p>ok</p></div>'
        assert result.diagnostics[0].path == "block-0-1"

    def test_metadata(self, converter):
        result = converter.convert_with_result([paragraph("a"), MALFORMED_PLACEHOLDERS], {"css_framework": "tailwind"})

        assert result.metadata == {
            "blocks": 2,
            "blocks_rendered": 1,
            "output_target": "html",
            "css_framework": "tailwind",
        }


class TestOverrides:
    """Test cases for caller handler overrides."""

    def test_override_takes_precedence(self, converter):
        options = {"block_transformers": {
            "core/paragraph": lambda block, context: f"<div>{context.content.markup}</div>",
        }}

        assert converter.convert(paragraph("x"), options) == "<div><p>x</p></div>"

    def test_override_for_unknown_block(self, converter):
        options = {"block_transformers": {"acme/testimonial": lambda block, context: "<aside>T</aside>"}}

        result = converter.convert_with_result(UNKNOWN_RENDERED, options)

        assert result.output == '<aside class="is-featured">T</aside>'
        assert result.diagnostics == []

    def test_override_receives_classes(self, converter):
        seen = {}

        def handler(block, context):
            seen["classes"] = context.classes
            return context.create_element("p", {"class": " ".join(context.classes)}, "x")

        output = converter.convert(paragraph("x", align="left"), {
            "css_framework": "tailwind",
            "block_transformers": {"core/paragraph": handler},
        })

        assert seen["classes"] == ["text-left"]
        assert output == '<p class="text-left">x</p>'

    def test_override_not_registered_globally(self, converter):
        converter.convert(paragraph("x"), {"block_transformers": {"core/paragraph": lambda block, context: ""}})

        assert converter.convert(paragraph("x")) == "<p>x</p>"

    def test_children_rendered_once(self, converter):
        calls = []

        def child_handler(block, context):
            calls.append(context.path)
            return "<span>c</span>"

        def parent_handler(block, context):
            first = context.render_child(0, block.inner_blocks[0])
            return f"<div>{first}{context.content.markup}</div>"

        output = converter.convert(
            {"blockName": "acme/parent", "innerBlocks": [{"blockName": "acme/child"}], "innerContent": [None]},
            {"block_transformers": {"acme/parent": parent_handler, "acme/child": child_handler}},
        )

        assert output == "<div><span>c</span><span>c</span></div>"
        assert calls == ["block-0-0"]


class TestHydrationMarkers:
    """Test cases for hydration markers on interactive blocks."""

    def test_interactive_handler_marked(self, converter):
        output = converter.convert(
            [paragraph("x"), {"blockName": "core/details", "attrs": {"summary": "S"}}],
            {"hydration_strategy": "viewport"},
        )

        assert output == (
            "<p>x</p>"
            '<details data-wp-block="core/details" data-wp-hydrate="block-1" data-wp-strategy="viewport">'
            "<summary>S</summary></details>"
        )

    def test_interactive_attribute_marks_block(self, converter):
        output = converter.convert(paragraph("x", interactive=True))

        assert output == '<p data-wp-block="core/paragraph" data-wp-hydrate="block-0">x</p>'

    def test_markers_disabled(self, converter):
        output = converter.convert(paragraph("x", interactive=True), {"emit_hydration_markers": False})

        assert output == "<p>x</p>"


class TestOutputTargets:
    """Test cases for non-HTML output targets."""

    def test_react_nodes(self, converter):
        output = converter.convert(paragraph("x", align="center"), {
            "output_target": "react", "css_framework": "tailwind",
        })

        assert output == [ElementNode("p", {"className": "text-center"}, [TextNode("x")])]

    def test_vue_nodes_keep_attribute_names(self, converter):
        output = converter.convert(paragraph("x", className="lead"), {"output_target": "vue"})

        assert output == [ElementNode("p", {"class": "lead"}, [TextNode("x")])]

    def test_markdown(self, converter):
        output = converter.convert([
            {"blockName": "core/heading", "attrs": {"level": 1}, "innerContent": ["<h1>Title</h1>"]},
            paragraph("Some <strong>bold</strong> text"),
        ], {"output_target": "markdown"})

        assert output == "# Title\n\nSome **bold** text\n\n"

    def test_ssr_ignored_for_markdown(self, converter):
        with patch("src.conversion.engine.logger") as mock_logger:
            output = converter.convert(paragraph("x"), {"output_target": "markdown", "ssr": True})

        assert output == "x\n\n"
        mock_logger.warning.assert_called_once()


class TestSharedConverter:
    """Test cases for reusing one converter across conversions."""

    def test_state_not_shared(self):
        converter = BlockConverter(registry=BlockHandlerRegistry())

        first = converter.convert_with_result({"blockName": "acme/x", "renderedHtml": "<p>1</p>"})
        second = converter.convert_with_result({"blockName": "acme/y", "renderedHtml": "<p>2</p>"})

        assert len(first.diagnostics) == 1
        assert len(second.diagnostics) == 1
        assert second.diagnostics[0].block_name == "acme/y"
