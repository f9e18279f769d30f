"""Conversion options.

ConversionOptions is immutable: a conversion never changes it, and the
same instance can be shared between independent conversions.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from src.css_frameworks.resolver import validate_class_map
from src.hydration.markers import HydrationStrategy
from src.models.errors import InvalidOptionsError
from src.ssr.options import SSROptions


class OutputTarget(Enum):
    """What a conversion produces."""

    HTML = "html"
    COMPONENT = "component"
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"
    MARKDOWN = "markdown"

    @property
    def is_node_target(self) -> bool:
        """True for targets that produce a node tree instead of text."""
        return self not in (OutputTarget.HTML, OutputTarget.MARKDOWN)

    @classmethod
    def parse(cls, value: Any) -> "OutputTarget":
        if isinstance(value, cls):
            return value
        if value == "markup":
            return cls.HTML
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(["markup"] + [member.value for member in cls])
            raise InvalidOptionsError(f"unknown output target '{value}' (expected one of: {allowed})",
                                      "output_target")


class ContentHandling(Enum):
    """Policy for choosing between pre-rendered HTML and the block template."""

    RAW = "raw"
    RENDERED = "rendered"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class StreamingOptions:
    """Chunked pipeline settings.

    Attributes:
        chunk_size: Top-level blocks converted per chunk
        max_buffered_chunks: Completed chunks held before the producer pauses
    """

    chunk_size: int = 10
    max_buffered_chunks: int = 2

    def __post_init__(self):
        for name in ("chunk_size", "max_buffered_chunks"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidOptionsError("must be a positive integer", f"streaming.{name}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StreamingOptions":
        if not isinstance(data, Mapping):
            raise InvalidOptionsError("must be a mapping", "streaming")
        aliases = {
            "chunkSize": "chunk_size",
            "maxBufferedChunks": "max_buffered_chunks",
            "highWaterMark": "max_buffered_chunks",
        }
        kwargs = {}
        for raw_key, value in data.items():
            key = aliases.get(raw_key, raw_key)
            if key == "handleBackpressure":
                continue
            if key not in ("chunk_size", "max_buffered_chunks"):
                raise InvalidOptionsError(f"unknown streaming option '{raw_key}'", "streaming")
            kwargs[key] = value
        return cls(**kwargs)


# camelCase option keys accepted by from_dict
_KEY_ALIASES = {
    "outputTarget": "output_target",
    "outputFormat": "output_target",
    "output_format": "output_target",
    "cssFramework": "css_framework",
    "customClassMap": "custom_class_map",
    "blockTransformers": "block_transformers",
    "contentHandling": "content_handling",
    "ssrOptions": "ssr_options",
    "streamingOptions": "streaming",
    "streaming_options": "streaming",
    "emitHydrationMarkers": "emit_hydration_markers",
    "hydrationStrategy": "hydration_strategy",
}


@dataclass(frozen=True)
class ConversionOptions:
    """Configuration of a conversion call.

    Attributes:
        output_target: Markup, markdown or a framework node representation
        css_framework: "none", "custom" or a framework known to the resolver
        custom_class_map: Caller class overrides, block name -> class mapping
        block_transformers: Caller handler overrides, block name -> handler
        content_handling: raw, rendered or hybrid
        ssr: Run the SSR optimization pass
        ssr_options: Level, flags and hooks for the SSR pass
        streaming: Chunk size and buffered-chunk limit
        emit_hydration_markers: Mark interactive blocks for hydration
        hydration_strategy: Strategy hint emitted with the markers
    """

    output_target: OutputTarget = OutputTarget.HTML
    css_framework: str = "none"
    custom_class_map: Mapping[str, Any] = field(default_factory=dict)
    block_transformers: Mapping[str, Any] = field(default_factory=dict)
    content_handling: ContentHandling = ContentHandling.RAW
    ssr: bool = False
    ssr_options: SSROptions = field(default_factory=SSROptions)
    streaming: StreamingOptions = field(default_factory=StreamingOptions)
    emit_hydration_markers: bool = True
    hydration_strategy: Optional[HydrationStrategy] = None

    def __post_init__(self):
        object.__setattr__(self, "output_target", OutputTarget.parse(self.output_target))
        object.__setattr__(self, "content_handling", _coerce_enum(
            ContentHandling, self.content_handling, "content_handling"))
        if self.hydration_strategy is not None:
            object.__setattr__(self, "hydration_strategy", _coerce_enum(
                HydrationStrategy, self.hydration_strategy, "hydration_strategy"))
        if not isinstance(self.css_framework, str) or not self.css_framework:
            raise InvalidOptionsError("must be a non-empty string", "css_framework")
        validate_class_map(self.custom_class_map)
        if not isinstance(self.block_transformers, Mapping):
            raise InvalidOptionsError("must be a mapping of block names", "block_transformers")
        for name, handler in self.block_transformers.items():
            if not (callable(handler) or callable(getattr(handler, "transform", None))):
                raise InvalidOptionsError(
                    f"transformer for '{name}' must be callable or define transform()",
                    "block_transformers",
                )
        if not isinstance(self.ssr, bool):
            raise InvalidOptionsError("must be a boolean", "ssr")
        if isinstance(self.ssr_options, Mapping):
            object.__setattr__(self, "ssr_options", SSROptions.from_dict(self.ssr_options))
        elif not isinstance(self.ssr_options, SSROptions):
            raise InvalidOptionsError("must be SSROptions or a mapping", "ssr_options")
        if isinstance(self.streaming, Mapping):
            object.__setattr__(self, "streaming", StreamingOptions.from_dict(self.streaming))
        elif not isinstance(self.streaming, StreamingOptions):
            raise InvalidOptionsError("must be StreamingOptions or a mapping", "streaming")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ConversionOptions":
        """Build options from a mapping.

        Accepts snake_case keys as well as their camelCase names.
        `ssrOptions.enabled` switches the SSR pass on, like the `ssr` key.

        Raises:
            InvalidOptionsError: On unknown keys or invalid values
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidOptionsError(f"expected a mapping, got {type(data).__name__}")
        known = {f for f in cls.__dataclass_fields__}
        kwargs: Dict[str, Any] = {}
        for raw_key, value in data.items():
            key = _KEY_ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise InvalidOptionsError(f"unknown option '{raw_key}'")
            kwargs[key] = value
        ssr_options = kwargs.get("ssr_options")
        if isinstance(ssr_options, Mapping) and "ssr" not in kwargs:
            enabled = ssr_options.get("enabled")
            if enabled is not None:
                kwargs["ssr"] = enabled
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Any) -> "ConversionOptions":
        """Accept None, a mapping or an existing ConversionOptions."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)

    def replace(self, **changes: Any) -> "ConversionOptions":
        """Return a copy with some fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable subset (handlers and hooks are omitted)."""
        data: Dict[str, Any] = {
            "output_target": self.output_target.value,
            "css_framework": self.css_framework,
            "content_handling": self.content_handling.value,
            "ssr": self.ssr,
            "ssr_options": self.ssr_options.to_dict(),
            "streaming": {
                "chunk_size": self.streaming.chunk_size,
                "max_buffered_chunks": self.streaming.max_buffered_chunks,
            },
            "emit_hydration_markers": self.emit_hydration_markers,
        }
        if self.custom_class_map:
            data["custom_class_map"] = _plain(self.custom_class_map)
        if self.hydration_strategy is not None:
            data["hydration_strategy"] = self.hydration_strategy.value
        return data


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    return value


def _coerce_enum(enum_cls, value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidOptionsError(f"'{value}' is not one of: {allowed}", option)
