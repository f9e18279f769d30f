"""CSS framework class maps and the class resolution engine.

Key classes:
    ClassResolver: Resolves framework classes for a block
    ClassResolution: Resolved classes plus the tokens they displace
"""

from .bootstrap import BOOTSTRAP_CLASS_MAP
from .resolver import (
    FRAMEWORK_CUSTOM,
    FRAMEWORK_NONE,
    ClassResolution,
    ClassResolver,
    validate_class_map,
)
from .tailwind import TAILWIND_CLASS_MAP

__all__ = [
    "ClassResolver",
    "ClassResolution",
    "validate_class_map",
    "FRAMEWORK_NONE",
    "FRAMEWORK_CUSTOM",
    "TAILWIND_CLASS_MAP",
    "BOOTSTRAP_CLASS_MAP",
]
