"""Unit tests for ssr.options module."""

import pytest

from src.models.errors import InvalidOptionsError
from src.ssr.options import (
    LEVEL_PRESETS,
    OptimizationDepth,
    OptimizationLevel,
    SSRFlags,
    SSROptions,
)


class TestLevelPresets:
    """Test cases for the optimization level presets."""

    def test_levels_are_cumulative(self):
        """Every flag enabled at a level stays enabled at higher levels."""
        minimal = LEVEL_PRESETS[OptimizationLevel.MINIMAL]
        balanced = LEVEL_PRESETS[OptimizationLevel.BALANCED]
        maximum = LEVEL_PRESETS[OptimizationLevel.MAXIMUM]

        for lower, higher in ((minimal, balanced), (balanced, maximum)):
            for name, value in vars(lower).items():
                if value:
                    assert getattr(higher, name), name

    def test_minimal(self):
        flags = LEVEL_PRESETS[OptimizationLevel.MINIMAL]

        assert flags.strip_comments and flags.lazy_load_media and flags.preserve_first_image
        assert not flags.minify_output
        assert not flags.classification_enabled

    def test_maximum(self):
        flags = LEVEL_PRESETS[OptimizationLevel.MAXIMUM]

        assert flags.minify_output and flags.preconnect and flags.defer_non_critical
        assert not flags.critical_path_only
        assert flags.classification_enabled


class TestSSROptions:
    """Test cases for SSROptions."""

    def test_defaults(self):
        options = SSROptions()

        assert options.level is OptimizationLevel.BALANCED
        assert options.optimization_depth is OptimizationDepth.FULL
        assert options.fold_budget == 5
        assert options.resolve_flags() == LEVEL_PRESETS[OptimizationLevel.BALANCED]

    def test_flags_override_level(self):
        options = SSROptions(level="minimal", flags={"minify_output": True, "strip_comments": False})

        flags = options.resolve_flags()

        assert flags.minify_output is True
        assert flags.strip_comments is False
        assert flags.lazy_load_media is True

    def test_unknown_flag(self):
        with pytest.raises(InvalidOptionsError):
            SSROptions(flags={"turbo": True})

    def test_non_boolean_flag(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            SSROptions(flags={"minify_output": "yes"})

        assert exc_info.value.option == "ssr_options.minify_output"

    def test_negative_fold_budget(self):
        with pytest.raises(InvalidOptionsError):
            SSROptions(fold_budget=-1)

    def test_hooks_must_be_callable(self):
        with pytest.raises(InvalidOptionsError):
            SSROptions(pre_process="not callable")

    def test_unknown_level(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            SSROptions(level="extreme")

        assert exc_info.value.option == "ssr_options.level"


class TestSSROptionsFromDict:
    """Test cases for SSROptions.from_dict()."""

    def test_camel_case_flags_at_top_level(self):
        options = SSROptions.from_dict({
            "optimizationLevel": "minimal",
            "minifyOutput": True,
            "removeDuplicateStyles": True,
            "optimizationDepth": "shallow",
            "foldBudget": 2,
        })

        assert options.level is OptimizationLevel.MINIMAL
        assert options.flags == {"minify_output": True, "remove_duplicate_styles": True}
        assert options.optimization_depth is OptimizationDepth.SHALLOW
        assert options.fold_budget == 2

    def test_flags_mapping(self):
        options = SSROptions.from_dict({"flags": {"criticalPathOnly": True}})

        assert options.resolve_flags().critical_path_only is True

    def test_hooks(self):
        def hook(html):
            return html

        options = SSROptions.from_dict({"preProcessHTML": hook, "post_process": hook})

        assert options.pre_process is hook
        assert options.post_process is hook

    def test_enabled_ignored(self):
        assert SSROptions.from_dict({"enabled": True}) == SSROptions()

    def test_unknown_key(self):
        with pytest.raises(InvalidOptionsError):
            SSROptions.from_dict({"speed": "fast"})


class TestOptimizationDepth:
    """Test cases for OptimizationDepth."""

    @pytest.mark.parametrize("depth,expected", [
        (OptimizationDepth.SHALLOW, 0),
        (OptimizationDepth.MEDIUM, 1),
        (OptimizationDepth.FULL, None),
    ])
    def test_max_depth(self, depth, expected):
        assert depth.max_depth == expected


class TestSSRFlags:
    """Test cases for SSRFlags."""

    @pytest.mark.parametrize("flag", ["prioritize_above_the_fold", "critical_path_only", "defer_non_critical"])
    def test_classification_enabled(self, flag):
        assert SSRFlags(**{flag: True}).classification_enabled

    def test_classification_disabled_by_default(self):
        assert not SSRFlags().classification_enabled
