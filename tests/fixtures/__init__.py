"""Test fixtures for block conversion tests.

This module provides serialized block trees (see blocks.py) shared by the
unit and integration tests.
"""

from .blocks import (
    DUPLICATE_STYLES_HTML,
    FREEFORM_FRAGMENT,
    MALFORMED_PLACEHOLDERS,
    PREFORMATTED,
    UNKNOWN_RENDERED,
    WRAPPER_WITH_CHILD,
    group,
    heading,
    image,
    paragraph,
    sample_post,
)

__all__ = [
    "DUPLICATE_STYLES_HTML",
    "FREEFORM_FRAGMENT",
    "MALFORMED_PLACEHOLDERS",
    "PREFORMATTED",
    "UNKNOWN_RENDERED",
    "WRAPPER_WITH_CHILD",
    "group",
    "heading",
    "image",
    "paragraph",
    "sample_post",
]
