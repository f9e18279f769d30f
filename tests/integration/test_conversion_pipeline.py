"""Integration tests for whole-document conversion.

These tests run realistic block trees through the default registry,
class resolver and reconciler together.
"""

import pytest
from bs4 import BeautifulSoup

from src.conversion.engine import BlockConverter
from src.models.nodes import ElementNode
from tests.fixtures.blocks import (
    UNKNOWN_RENDERED,
    WRAPPER_WITH_CHILD,
    paragraph,
    sample_post,
)


def root_classes(markup):
    element = BeautifulSoup(markup, "html.parser").find()
    return element.get("class", [])


class TestDocumentOrder:
    """Output follows input order at every level."""

    def test_top_level_order(self, converter):
        blocks = [paragraph(f"Item {i}") for i in range(12)]

        output = converter.convert(blocks)

        positions = [output.index(f"Item {i}<") for i in range(12)]
        assert positions == sorted(positions)

    def test_sample_post_order(self, converter):
        output = converter.convert(sample_post())

        markers = [
            "Release notes",
            "faster renderer",
            "hero.jpg",
            "Nested paragraph one",
            "Nested paragraph two",
            "<li>First</li>",
            "<li>Second</li>",
            "Classic content",
            "Hidden text",
            "line one",
            "second.png",
            "Closing words.",
        ]
        positions = [output.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_raw_mode_discards_rendered_html(self, converter):
        raw = converter.convert(sample_post())
        hybrid = converter.convert(sample_post(), {"content_handling": "hybrid"})

        assert "Great product!" not in raw
        assert hybrid.index("Hidden text") < hybrid.index("Great product!") < hybrid.index("line one")

    def test_wrapper_template_around_child(self, converter):
        assert converter.convert(WRAPPER_WITH_CHILD) == "<div><p>Inside</p></div>"

    def test_no_diagnostics_for_sample_post_except_unknown(self, converter):
        result = converter.convert_with_result(sample_post())

        assert not result.has_errors
        assert [d.block_name for d in result.diagnostics] == ["acme/testimonial"]


class TestDeterminism:
    """Identical input and options give identical output."""

    @pytest.mark.parametrize("framework", ["none", "tailwind", "bootstrap"])
    def test_repeatable(self, framework):
        options = {"css_framework": framework, "content_handling": "hybrid"}

        first = BlockConverter().convert(sample_post(), options)
        second = BlockConverter().convert(sample_post(), options)

        assert first == second

    def test_shared_converter_repeatable(self, converter):
        options = {"css_framework": "tailwind", "ssr": True, "ssr_options": {"level": "maximum"}}

        assert converter.convert(sample_post(), options) == converter.convert(sample_post(), options)


class TestFrameworkClasses:
    """Class resolution across frameworks."""

    def test_tailwind_center_paragraph(self, converter):
        block = paragraph("Centered", align="center")
        block["innerContent"] = ['<p class="has-text-align-center">Centered</p>']

        output = converter.convert(block, {"css_framework": "tailwind"})

        classes = root_classes(output)
        assert "text-center" in classes
        assert "text-left" not in classes
        assert "text-right" not in classes
        assert not any(token.startswith("has-text-align") for token in classes)

    def test_unknown_block_hybrid_keeps_author_classes(self, converter):
        output = converter.convert(UNKNOWN_RENDERED, {"content_handling": "hybrid"})

        assert output == '<section data-id="7" class="is-featured"><p>Great product!</p></section>'

    def test_custom_map_for_unknown_block(self, converter):
        output = converter.convert(UNKNOWN_RENDERED, {
            "content_handling": "hybrid",
            "css_framework": "tailwind",
            "custom_class_map": {"acme/testimonial": {"block": "rounded shadow"}},
        })

        assert root_classes(output) == ["rounded", "shadow"]
        assert "Great product!" in output

    def test_react_nodes_for_sample_post(self, converter):
        nodes = converter.convert(sample_post(), {"output_target": "react", "css_framework": "tailwind"})

        assert all(isinstance(node, ElementNode) or node.text.strip() == "" for node in nodes)
        assert nodes[0].tag == "h1"
        assert "className" in nodes[0].props


class TestMarkdownDocument:
    """Markdown output of a full post."""

    def test_sample_post(self, converter):
        output = converter.convert(sample_post(), {"output_target": "markdown"})

        assert output.startswith("# Release notes\n\n")
        assert "![Hero](https://cdn.example.com/hero.jpg)" in output
        assert "1. First" in output
        assert "**More**" in output
        assert output.endswith("Closing words.\n\n")
