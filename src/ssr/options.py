"""Server-side rendering optimization options.

An optimization level expands into a concrete flag set; explicitly given
flags override the level's values.
"""

import re
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from src.models.errors import InvalidOptionsError

TextHook = Callable[[str], str]


class OptimizationLevel(Enum):
    """Preset bundles of optimization flags."""

    MINIMAL = "minimal"
    BALANCED = "balanced"
    MAXIMUM = "maximum"


class OptimizationDepth(Enum):
    """How deep nested blocks count toward the above-the-fold budget."""

    SHALLOW = "shallow"
    MEDIUM = "medium"
    FULL = "full"

    @property
    def max_depth(self) -> Optional[int]:
        """Deepest nesting level considered (None for unbounded)."""
        return {"shallow": 0, "medium": 1, "full": None}[self.value]


@dataclass(frozen=True)
class SSRFlags:
    """Concrete set of optimizations to apply."""

    strip_comments: bool = False
    strip_client_scripts: bool = False
    lazy_load_media: bool = False
    preserve_first_image: bool = False
    prioritize_above_the_fold: bool = False
    critical_path_only: bool = False
    defer_non_critical: bool = False
    remove_duplicate_styles: bool = False
    preconnect: bool = False
    minify_output: bool = False

    @property
    def classification_enabled(self) -> bool:
        """True if blocks must be split into critical and non-critical."""
        return (
            self.prioritize_above_the_fold
            or self.critical_path_only
            or self.defer_non_critical
        )


FLAG_NAMES = tuple(f.name for f in fields(SSRFlags))

_MINIMAL = SSRFlags(
    strip_comments=True,
    lazy_load_media=True,
    preserve_first_image=True,
)
_BALANCED = replace(
    _MINIMAL,
    strip_client_scripts=True,
    remove_duplicate_styles=True,
)
_MAXIMUM = replace(
    _BALANCED,
    prioritize_above_the_fold=True,
    defer_non_critical=True,
    preconnect=True,
    minify_output=True,
)

LEVEL_PRESETS: Dict[OptimizationLevel, SSRFlags] = {
    OptimizationLevel.MINIMAL: _MINIMAL,
    OptimizationLevel.BALANCED: _BALANCED,
    OptimizationLevel.MAXIMUM: _MAXIMUM,
}

# camelCase option names that do not map by case conversion alone
_KEY_ALIASES = {
    "optimizationLevel": "level",
    "preProcessHTML": "pre_process",
    "postProcessHTML": "post_process",
    "optimizationDepth": "optimization_depth",
    "foldBudget": "fold_budget",
}


def _snake_case(name: str) -> str:
    if name in _KEY_ALIASES:
        return _KEY_ALIASES[name]
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class SSROptions:
    """Options for the SSR optimization pass.

    Attributes:
        level: Preset the flags start from
        flags: Explicit flag overrides (flag name -> bool)
        optimization_depth: Nesting depth counted toward the fold budget
        fold_budget: Number of blocks (weighted by nesting) treated as
            above the fold
        pre_process: Text hook run on each top-level fragment, before the
            document stage
        post_process: Text hook run on each top-level fragment, after the
            document stage
    """

    level: OptimizationLevel = OptimizationLevel.BALANCED
    flags: Mapping[str, bool] = field(default_factory=dict)
    optimization_depth: OptimizationDepth = OptimizationDepth.FULL
    fold_budget: int = 5
    pre_process: Optional[TextHook] = None
    post_process: Optional[TextHook] = None

    def __post_init__(self):
        object.__setattr__(self, "level", _coerce_enum(OptimizationLevel, self.level, "ssr_options.level"))
        object.__setattr__(
            self,
            "optimization_depth",
            _coerce_enum(OptimizationDepth, self.optimization_depth, "ssr_options.optimization_depth"),
        )
        for name, value in self.flags.items():
            if name not in FLAG_NAMES:
                raise InvalidOptionsError(f"unknown SSR flag '{name}'", "ssr_options")
            if not isinstance(value, bool):
                raise InvalidOptionsError("flag values must be booleans", f"ssr_options.{name}")
        object.__setattr__(self, "flags", dict(self.flags))
        if isinstance(self.fold_budget, bool) or not isinstance(self.fold_budget, int) or self.fold_budget < 0:
            raise InvalidOptionsError("must be a non-negative integer", "ssr_options.fold_budget")
        for hook_name in ("pre_process", "post_process"):
            hook = getattr(self, hook_name)
            if hook is not None and not callable(hook):
                raise InvalidOptionsError("must be callable", f"ssr_options.{hook_name}")

    def resolve_flags(self) -> SSRFlags:
        """Expand the level and apply explicit overrides."""
        return replace(LEVEL_PRESETS[self.level], **self.flags)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SSROptions":
        """Build options from a mapping of snake_case or camelCase keys.

        Flag names may be given at the top level or under a "flags"
        mapping. An "enabled" key is accepted and ignored here; it is
        read by ConversionOptions.

        Raises:
            InvalidOptionsError: On unknown keys or invalid values
        """
        if not isinstance(data, Mapping):
            raise InvalidOptionsError("must be a mapping", "ssr_options")
        kwargs: Dict[str, Any] = {}
        flags: Dict[str, bool] = {}
        for raw_key, value in data.items():
            key = _snake_case(raw_key)
            if key == "enabled":
                continue
            if key == "flags":
                if not isinstance(value, Mapping):
                    raise InvalidOptionsError("must be a mapping", "ssr_options.flags")
                flags.update({_snake_case(k): v for k, v in value.items()})
            elif key in FLAG_NAMES:
                flags[key] = value
            elif key in ("level", "optimization_depth", "fold_budget", "pre_process", "post_process"):
                kwargs[key] = value
            else:
                raise InvalidOptionsError(f"unknown SSR option '{raw_key}'", "ssr_options")
        return cls(flags=flags, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form (hooks are omitted)."""
        data: Dict[str, Any] = {
            "level": self.level.value,
            "optimization_depth": self.optimization_depth.value,
            "fold_budget": self.fold_budget,
        }
        if self.flags:
            data["flags"] = dict(self.flags)
        return data


def _coerce_enum(enum_cls, value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidOptionsError(f"'{value}' is not one of: {allowed}", option)
