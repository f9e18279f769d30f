"""HTML helpers shared by the converter and the SSR pass."""

from .html_utils import (
    StartTag,
    create_element,
    edit_root_tag,
    escape_attribute,
    escape_html,
    find_root_tag,
    has_content,
    inject_classes,
    iter_start_tags,
    locate_comments,
    locate_elements,
    locate_start_tags,
    parse_markup,
    rewrite_start_tags,
    root_tag_name,
    set_root_attributes,
)

__all__ = [
    "StartTag",
    "create_element",
    "edit_root_tag",
    "escape_attribute",
    "escape_html",
    "find_root_tag",
    "has_content",
    "inject_classes",
    "iter_start_tags",
    "locate_comments",
    "locate_elements",
    "locate_start_tags",
    "parse_markup",
    "rewrite_start_tags",
    "root_tag_name",
    "set_root_attributes",
]
