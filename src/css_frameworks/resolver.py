"""CSS class resolution engine.

Maps a block's name and attributes to the CSS classes of a target framework.
Class maps are plain data: for each block name a mapping from *slot* (an
attribute name, or "block" for base classes) to either a class string that
applies when the attribute is truthy, or a value table keyed by the
attribute's value.

Resolution merges, in order, the framework's base classes, the framework's
attribute-driven slots, and the caller's custom map. A later source replaces
an earlier one slot by slot; different slots accumulate.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from src.models.attributes import class_name_tokens, scalar_key
from src.models.errors import InvalidOptionsError

from .bootstrap import BOOTSTRAP_CLASS_MAP
from .tailwind import TAILWIND_CLASS_MAP

logger = logging.getLogger(__name__)

FRAMEWORK_NONE = "none"
FRAMEWORK_CUSTOM = "custom"

BASE_SLOT = "block"
DEFAULT_KEY = "default"

# Attribute slots that share one semantic "alignment" slot, in precedence
# order (later wins). Its alternatives also displace alignment classes
# authored by the editor (e.g. "has-text-align-center").
ALIGNMENT_ORDER = ("align", "textAlign")
ALIGNMENT_SLOTS = frozenset(ALIGNMENT_ORDER)
ALIGNMENT_SLOT = "alignment"

AUTHORED_ALIGNMENT_PATTERN = re.compile(
    r"^(?:has-text-align-[\w-]+|align(?:left|right|center|wide|full)"
    r"|is-content-justification-[\w-]+)$"
)

STYLE_VARIANT_PATTERN = re.compile(r"^is-style-([\w-]+)$")

_MISSING = object()

ClassMapping = Mapping[str, Any]
ClassMap = Mapping[str, ClassMapping]


@dataclass(frozen=True)
class ClassResolution:
    """Resolved classes for one block.

    Attributes:
        classes: Ordered class tokens to attach to the block's root element
        displaced: Tokens that compete with a resolved slot and must be
            removed from the root element
        displace_authored_alignment: Also remove editor-authored alignment
            classes from the root element
    """
    classes: Tuple[str, ...] = ()
    displaced: FrozenSet[str] = field(default_factory=frozenset)
    displace_authored_alignment: bool = False

    def is_displaced(self, token: str) -> bool:
        """Check whether an existing class token loses to a resolved slot."""
        if token in self.classes:
            return False
        if token in self.displaced:
            return True
        return bool(
            self.displace_authored_alignment
            and AUTHORED_ALIGNMENT_PATTERN.match(token)
        )


def validate_class_map(class_map: Any, option: str = "custom_class_map") -> None:
    """Check the shape of a class map.

    Raises:
        InvalidOptionsError: If the map is not block -> slot -> str | table
    """
    if not isinstance(class_map, Mapping):
        raise InvalidOptionsError("class map must be a mapping of block names", option)
    for block_name, mapping in class_map.items():
        if not isinstance(block_name, str) or not isinstance(mapping, Mapping):
            raise InvalidOptionsError(
                f"entry for '{block_name}' must be a mapping of slots", option
            )
        for slot, spec in mapping.items():
            if isinstance(spec, str):
                continue
            if isinstance(spec, Mapping) and all(
                isinstance(value, str) for value in spec.values()
            ):
                continue
            raise InvalidOptionsError(
                f"slot '{slot}' of '{block_name}' must be a class string or "
                f"a table of class strings",
                option,
            )


class ClassResolver:
    """Resolves framework CSS classes for blocks.

    The resolver holds the built-in framework tables plus any registered
    with register_framework(). Registration is expected to happen before
    conversions start; resolve() never mutates the resolver.
    """

    def __init__(self, frameworks: Optional[Mapping[str, ClassMap]] = None):
        """Initialize with the given framework tables.

        Args:
            frameworks: Framework name -> class map. Defaults to the
                built-in Tailwind and Bootstrap tables.
        """
        if frameworks is None:
            frameworks = {
                "tailwind": TAILWIND_CLASS_MAP,
                "bootstrap": BOOTSTRAP_CLASS_MAP,
            }
        self._frameworks: Dict[str, ClassMap] = {}
        for name, class_map in frameworks.items():
            self.register_framework(name, class_map)

    def register_framework(self, name: str, class_map: ClassMap) -> None:
        """Register (or replace) the class map of a framework."""
        if name in (FRAMEWORK_NONE, FRAMEWORK_CUSTOM):
            raise InvalidOptionsError(f"'{name}' is a reserved framework name", "css_framework")
        validate_class_map(class_map, option=f"frameworks.{name}")
        self._frameworks[name] = class_map
        logger.debug(f"Registered CSS framework '{name}' ({len(class_map)} blocks)")

    def frameworks(self) -> List[str]:
        """Names of all accepted frameworks, including none and custom."""
        return [FRAMEWORK_NONE, FRAMEWORK_CUSTOM] + list(self._frameworks)

    def has_framework(self, name: str) -> bool:
        return name in (FRAMEWORK_NONE, FRAMEWORK_CUSTOM) or name in self._frameworks

    def check_framework(self, name: str) -> None:
        """Raise InvalidOptionsError if the framework is unknown."""
        if not self.has_framework(name):
            raise InvalidOptionsError(
                f"unknown CSS framework '{name}' "
                f"(expected one of: {', '.join(self.frameworks())})",
                "css_framework",
            )

    def resolve_classes(
        self,
        block_name: str,
        attributes: Mapping[str, Any],
        framework: str,
        custom_map: Optional[ClassMap] = None,
    ) -> List[str]:
        """Resolve the ordered class list for a block.

        Args:
            block_name: Namespaced block name
            attributes: Block attributes
            framework: Framework name ("none", "custom" or registered)
            custom_map: Caller overrides, block name -> class mapping

        Returns:
            Ordered, de-duplicated class tokens
        """
        return list(self.resolve(block_name, attributes, framework, custom_map).classes)

    def resolve(
        self,
        block_name: str,
        attributes: Mapping[str, Any],
        framework: str,
        custom_map: Optional[ClassMap] = None,
    ) -> ClassResolution:
        """Resolve classes along with the tokens they displace."""
        self.check_framework(framework)
        attributes = attributes or {}

        if framework == FRAMEWORK_NONE:
            return ClassResolution(classes=tuple(_dedupe(class_name_tokens(attributes))))

        sources: List[ClassMapping] = []
        if framework != FRAMEWORK_CUSTOM:
            builtin = self._frameworks[framework].get(block_name)
            if builtin:
                sources.append(builtin)
        if custom_map:
            custom = custom_map.get(block_name)
            if custom:
                sources.append(custom)

        slots: Dict[str, Tuple[List[str], set]] = {}
        for mapping in sources:
            for slot, spec in _ordered_slots(mapping):
                resolved = _resolve_slot(slot, spec, attributes)
                if resolved is None:
                    continue
                tokens, alternatives = resolved
                key = ALIGNMENT_SLOT if slot in ALIGNMENT_SLOTS else slot
                if key in slots:
                    alternatives = alternatives | slots[key][1]
                slots[key] = (tokens, alternatives)

        classes = _dedupe(token for tokens, _ in slots.values() for token in tokens)
        displaced = set()
        for _, alternatives in slots.values():
            displaced |= alternatives
        displaced.difference_update(classes)
        alignment = slots.get(ALIGNMENT_SLOT)
        displace_alignment = alignment is not None and bool(alignment[0])
        return ClassResolution(
            classes=tuple(classes),
            displaced=frozenset(displaced),
            displace_authored_alignment=displace_alignment,
        )


def _ordered_slots(mapping: ClassMapping) -> List[Tuple[str, Any]]:
    """Mapping items with the alignment slots together, in precedence order."""
    items = []
    placed = False
    for slot, spec in mapping.items():
        if slot not in ALIGNMENT_SLOTS:
            items.append((slot, spec))
        elif not placed:
            items.extend((name, mapping[name]) for name in ALIGNMENT_ORDER if name in mapping)
            placed = True
    return items


def _resolve_slot(slot: str, spec: Any, attributes: Mapping[str, Any]):
    """Resolve one slot to (tokens, competing alternatives), or None if unset."""
    if slot == BASE_SLOT:
        return spec.split(), set()

    value = _slot_value(slot, attributes)
    if isinstance(spec, str):
        if value is _MISSING or not value:
            return None
        return spec.split(), set()

    alternatives = {token for classes in spec.values() for token in classes.split()}
    if value is _MISSING:
        classes = spec.get(DEFAULT_KEY)
    else:
        key = scalar_key(value)
        classes = spec.get(key) if key is not None else None
    if classes is None:
        return None
    return classes.split(), alternatives


def _slot_value(slot: str, attributes: Mapping[str, Any]) -> Any:
    """Read the attribute driving a slot.

    The "style" slot reads a string `style` attribute, or else the editor's
    style variant (`is-style-<name>` in className).
    """
    if slot == "style":
        style = attributes.get("style")
        if isinstance(style, str):
            return style
        for token in class_name_tokens(attributes):
            match = STYLE_VARIANT_PATTERN.match(token)
            if match:
                return match.group(1)
        return _MISSING
    return attributes.get(slot, _MISSING)


def _dedupe(tokens) -> List[str]:
    seen = set()
    result = []
    for token in tokens:
        if token and token not in seen:
            seen.add(token)
            result.append(token)
    return result
