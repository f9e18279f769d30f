"""Unit tests for css_frameworks.resolver module."""

import pytest

from src.css_frameworks import BOOTSTRAP_CLASS_MAP, TAILWIND_CLASS_MAP
from src.css_frameworks.resolver import ClassResolution, ClassResolver, validate_class_map
from src.models.errors import InvalidOptionsError


@pytest.fixture
def resolver():
    return ClassResolver()


class TestFrameworks:
    """Test cases for framework registration and lookup."""

    def test_builtin_frameworks(self, resolver):
        """none, custom, tailwind and bootstrap should be accepted."""
        assert resolver.frameworks() == ["none", "custom", "tailwind", "bootstrap"]

    def test_unknown_framework_raises(self, resolver):
        with pytest.raises(InvalidOptionsError) as exc_info:
            resolver.resolve("core/paragraph", {}, "bulma")

        assert exc_info.value.option == "css_framework"
        assert "bulma" in str(exc_info.value)

    def test_register_framework(self, resolver):
        """A registered class map should be usable as a framework."""
        resolver.register_framework("bulma", {"core/paragraph": {"block": "content"}})

        assert resolver.resolve_classes("core/paragraph", {}, "bulma") == ["content"]

    @pytest.mark.parametrize("name", ["none", "custom"])
    def test_reserved_names_cannot_be_registered(self, resolver, name):
        with pytest.raises(InvalidOptionsError):
            resolver.register_framework(name, {})

    def test_builtin_maps_are_valid(self):
        validate_class_map(TAILWIND_CLASS_MAP)
        validate_class_map(BOOTSTRAP_CLASS_MAP)


class TestResolve:
    """Test cases for ClassResolver.resolve()."""

    def test_none_framework_passes_class_name_through(self, resolver):
        """With framework none only the authored className applies."""
        classes = resolver.resolve_classes(
            "core/paragraph", {"className": "lead lead intro", "align": "center"}, "none"
        )

        assert classes == ["lead", "intro"]

    def test_value_table_slot(self, resolver):
        """A value table slot should pick the class for the attribute value."""
        assert resolver.resolve_classes("core/paragraph", {"align": "center"}, "tailwind") == ["text-center"]

    def test_alternatives_are_displaced(self, resolver):
        """The other alignment classes should be reported as displaced."""
        resolution = resolver.resolve("core/paragraph", {"align": "center"}, "tailwind")

        assert resolution.displaced == frozenset({"text-left", "text-right"})
        assert resolution.is_displaced("text-left")
        assert not resolution.is_displaced("text-center")
        assert resolution.is_displaced("has-text-align-right")

    def test_default_key_used_when_attribute_missing(self, resolver):
        """A missing attribute should resolve to the table's default entry."""
        classes = resolver.resolve_classes("core/heading", {}, "tailwind")

        assert classes == ["text-3xl", "font-bold"]

    def test_numeric_attribute_key(self, resolver):
        """Numeric attribute values should match string keys."""
        assert resolver.resolve_classes("core/heading", {"level": 1}, "bootstrap") == ["h1"]

    def test_boolean_attribute_key(self, resolver):
        """Boolean attribute values should match "true"/"false" keys."""
        classes = resolver.resolve_classes("core/list", {"ordered": True}, "tailwind")

        assert classes == ["list-decimal", "pl-5"]

    def test_flag_slot_applies_when_truthy(self, resolver):
        classes = resolver.resolve_classes("core/paragraph", {"dropCap": True}, "tailwind")

        assert "first-letter:font-bold" in classes

    def test_flag_slot_skipped_when_falsy(self, resolver):
        assert resolver.resolve_classes("core/paragraph", {"dropCap": False}, "tailwind") == []

    def test_style_variant_from_class_name(self, resolver):
        """The style slot should read is-style-<name> from className."""
        classes = resolver.resolve_classes(
            "core/button", {"className": "is-style-outline"}, "bootstrap"
        )

        assert classes == ["btn", "btn-outline-primary"]

    @pytest.mark.parametrize("framework,expected", [("tailwind", "text-left"), ("bootstrap", "text-start")])
    def test_align_and_text_align_share_one_slot(self, resolver, framework, expected):
        """textAlign wins over align; the loser is displaced."""
        resolution = resolver.resolve("core/paragraph", {"align": "center", "textAlign": "left"}, framework)

        assert list(resolution.classes) == [expected]
        assert resolution.is_displaced("text-center")

    def test_custom_align_replaces_framework_text_align(self, resolver):
        custom = {"core/heading": {"align": {"right": "ml-auto"}}}

        classes = resolver.resolve_classes(
            "core/heading", {"level": 2, "textAlign": "center", "align": "right"}, "tailwind", custom
        )

        assert classes == ["text-3xl", "font-bold", "ml-auto"]

    def test_custom_map_replaces_slot(self, resolver):
        """A custom map slot should replace the framework's slot."""
        custom = {"core/paragraph": {"align": {"center": "mx-auto text-balance"}}}

        classes = resolver.resolve_classes("core/paragraph", {"align": "center"}, "tailwind", custom)

        assert classes == ["mx-auto", "text-balance"]

    def test_custom_map_adds_slots(self, resolver):
        """Slots only present in the custom map should accumulate."""
        custom = {"core/paragraph": {"block": "prose"}}

        classes = resolver.resolve_classes("core/paragraph", {"align": "left"}, "tailwind", custom)

        assert classes == ["prose", "text-left"]

    def test_custom_framework_uses_only_custom_map(self, resolver):
        custom = {"core/quote": {"block": "quote"}}

        assert resolver.resolve_classes("core/quote", {}, "custom", custom) == ["quote"]
        assert resolver.resolve_classes("core/paragraph", {}, "custom", custom) == []

    def test_unknown_block_has_no_classes(self, resolver):
        assert resolver.resolve("acme/widget", {"align": "center"}, "tailwind") == ClassResolution()

    def test_resolution_is_deterministic(self, resolver):
        """Same inputs should give identical results on every call."""
        attributes = {"align": "wide", "className": "x"}

        first = resolver.resolve("core/image", attributes, "bootstrap")
        second = ClassResolver().resolve("core/image", dict(attributes), "bootstrap")

        assert first == second

    def test_resolve_does_not_mutate_inputs(self, resolver):
        attributes = {"align": "center"}
        custom = {"core/paragraph": {"block": "prose"}}

        resolver.resolve("core/paragraph", attributes, "tailwind", custom)

        assert attributes == {"align": "center"}
        assert custom == {"core/paragraph": {"block": "prose"}}


class TestValidateClassMap:
    """Test cases for validate_class_map()."""

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidOptionsError):
            validate_class_map(["core/paragraph"])

    def test_rejects_non_string_classes(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            validate_class_map({"core/paragraph": {"align": {"center": 1}}})

        assert "align" in str(exc_info.value)
