"""Unit tests for models.conversion_result and models.nodes modules."""

from src.models.conversion_result import ConversionResult, Diagnostic, DiagnosticKind
from src.models.nodes import ElementNode, TextNode


def _diagnostic(kind):
    return Diagnostic(kind=kind, block_name="core/x", path="block-0", message=kind.value)


class TestConversionResult:
    """Test cases for ConversionResult."""

    def test_no_diagnostics(self):
        result = ConversionResult(output="<p>x</p>")
        assert result.has_errors is False
        assert result.warnings == []

    def test_unknown_block_is_not_an_error(self):
        """UNKNOWN_BLOCK diagnostics should not count as errors."""
        result = ConversionResult(output="", diagnostics=[_diagnostic(DiagnosticKind.UNKNOWN_BLOCK)])
        assert result.has_errors is False
        assert result.warnings == []

    def test_failures_are_errors(self):
        result = ConversionResult(output="", diagnostics=[
            _diagnostic(DiagnosticKind.MALFORMED_BLOCK),
            _diagnostic(DiagnosticKind.HANDLER_FAILURE),
        ])
        assert result.has_errors is True
        assert result.warnings == ["malformed_block", "handler_failure"]


class TestNodes:
    """Test cases for node tree serialization."""

    def test_element_to_dict(self):
        node = ElementNode("p", {"className": "lead"}, [TextNode("Hi")])

        assert node.to_dict() == {
            "type": "element",
            "tag": "p",
            "props": {"className": "lead"},
            "children": [{"type": "text", "text": "Hi"}],
        }

    def test_text_content_is_recursive(self):
        node = ElementNode("div", children=[
            TextNode("a"),
            ElementNode("strong", children=[TextNode("b")]),
        ])

        assert node.text_content() == "ab"
