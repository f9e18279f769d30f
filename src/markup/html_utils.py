"""HTML helpers for rewriting block output.

Markup is parsed with BeautifulSoup to find elements and read their
attributes. Edits are spliced back into the original text at the source
position BeautifulSoup reports for each tag, so that everything outside the
edited opening tags stays byte-for-byte as the handler produced it.
"""

import html
import re
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Comment, Tag

PARSER = "html.parser"

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

# Attributes written without a value when re-rendered
BOOLEAN_ATTRIBUTES = frozenset({
    "allowfullscreen", "async", "autofocus", "autoplay", "checked", "controls",
    "default", "defer", "disabled", "download", "hidden", "inert", "ismap",
    "itemscope", "loop", "multiple", "muted", "nomodule", "novalidate", "open",
    "playsinline", "readonly", "required", "reversed", "selected",
})

# Elements whose content is not markup (or whose whitespace is significant)
RAW_TEXT_ELEMENTS = ("script", "style", "textarea", "pre")

# Extent of an opening tag: it ends at the first '>' outside a quoted value
START_TAG_PATTERN = re.compile(r"""<[a-zA-Z][\w:-]*(?:"[^"]*"|'[^']*'|[^'">])*>""")

Span = Tuple[int, int, Tag]


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse a fragment, keeping attribute values as plain strings."""
    return BeautifulSoup(markup, PARSER, multi_valued_attributes=None,
                         on_duplicate_attribute="ignore")


def escape_html(text: str) -> str:
    """Escape text content."""
    return html.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return html.escape(value, quote=False).replace('"', "&quot;")


class StartTag:
    """An editable opening tag.

    Attributes are read from the parsed element. An unedited tag keeps its
    original text; an edited one is re-rendered from its attributes, in
    their original order.
    """

    def __init__(self, text: str, element: Optional[Tag] = None):
        if element is None:
            element = parse_markup(text).find()
        if element is None:
            raise ValueError(f"Not a start tag: {text[:40]!r}")
        self.name = element.name
        self.self_closing = text.endswith("/>")
        self._original = text
        self._attributes = {name.lower(): value for name, value in element.attrs.items()}
        self._edited = False

    @property
    def text(self) -> str:
        if not self._edited:
            return self._original
        attributes = {
            name: None if not value and (value is None or name in BOOLEAN_ATTRIBUTES) else value
            for name, value in self._attributes.items()
        }
        closing = "/>" if self.self_closing else ">"
        return f"<{self.name}{render_attributes(attributes)}{closing}"

    def attribute_names(self) -> List[str]:
        return list(self._attributes)

    def has(self, name: str) -> bool:
        return name.lower() in self._attributes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the unescaped attribute value ("" for boolean attributes)."""
        name = name.lower()
        if name not in self._attributes:
            return default
        return self._attributes[name] or ""

    def set(self, name: str, value: Optional[str] = None) -> None:
        """Set an attribute; None renders a boolean attribute."""
        name = name.lower()
        if name in self._attributes and self._attributes[name] == value:
            return
        self._attributes[name] = value
        self._edited = True

    def set_default(self, name: str, value: Optional[str] = None) -> bool:
        """Set an attribute only if absent. Returns True if it was added."""
        if self.has(name):
            return False
        self.set(name, value)
        return True

    def remove(self, name: str) -> None:
        name = name.lower()
        if name in self._attributes:
            del self._attributes[name]
            self._edited = True

    def classes(self) -> List[str]:
        return (self.get("class") or "").split()

    def __str__(self) -> str:
        return self.text


def _line_starts(markup: str) -> List[int]:
    starts = [0]
    position = markup.find("\n")
    while position != -1:
        starts.append(position + 1)
        position = markup.find("\n", position + 1)
    return starts


def locate_start_tags(markup: str, names: Optional[Iterable[str]] = None,
                      soup: Optional[BeautifulSoup] = None) -> List[Span]:
    """Find opening tags and their position in the markup.

    Tags inside comments and raw text are not elements and are never
    reported. Tags inside a textarea are skipped as well.

    Args:
        markup: Markup to scan
        names: Restrict to these tag names (lowercase)
        soup: The markup already parsed with parse_markup()

    Returns:
        (start, end, element) for each opening tag, in document order
    """
    soup = soup if soup is not None else parse_markup(markup)
    line_starts = _line_starts(markup)
    found: List[Span] = []
    for element in soup.find_all(list(names) if names is not None else True):
        if element.sourceline is None or element.find_parent("textarea") is not None:
            continue
        start = line_starts[element.sourceline - 1] + element.sourcepos
        match = START_TAG_PATTERN.match(markup, start)
        if match is not None:
            found.append((start, match.end(), element))
    return found


def locate_elements(markup: str, names: Iterable[str]) -> List[Span]:
    """Find whole elements whose content is text, such as script or pre.

    The element ends at the first matching closing tag, which is where a
    browser ends a raw-text element. Elements nested in an earlier match
    are not reported separately.

    Returns:
        (start, end, element) for each element, in document order
    """
    lowered = markup.lower()
    found: List[Span] = []
    last_end = 0
    for start, tag_end, element in locate_start_tags(markup, names):
        if start < last_end:
            continue
        close = lowered.find(f"</{element.name}", tag_end)
        closing = markup.find(">", close) if close != -1 else -1
        end = closing + 1 if closing != -1 else len(markup)
        found.append((start, end, element))
        last_end = end
    return found


def locate_comments(markup: str) -> List[Tuple[int, int]]:
    """Find HTML comments outside raw text, as (start, end) pairs."""
    soup = parse_markup(markup)
    comments = soup.find_all(string=lambda text: isinstance(text, Comment))
    if not comments:
        return []
    protected = locate_start_tags(markup, soup=soup) + locate_elements(markup, ("script", "style", "textarea"))
    found = []
    cursor = 0
    for comment in comments:
        text = f"<!--{comment}-->"
        start = markup.find(text, cursor)
        # A match inside a tag or raw-text element is not this comment
        while start != -1 and any(s <= start < e for s, e, _ in protected):
            start = markup.find(text, start + 1)
        if start == -1:
            continue
        found.append((start, start + len(text)))
        cursor = start + len(text)
    return found


def has_content(markup: str) -> bool:
    """True if the markup has elements or text besides comments and whitespace."""
    for node in parse_markup(markup).contents:
        if isinstance(node, Tag):
            return True
        if not isinstance(node, Comment) and node.strip():
            return True
    return False


def splice(markup: str, replacements: Sequence[Tuple[int, int, str]]) -> str:
    """Replace non-overlapping (start, end) ranges, given in order, with text."""
    if not replacements:
        return markup
    pieces = []
    cursor = 0
    for start, end, text in replacements:
        pieces.append(markup[cursor:start])
        pieces.append(text)
        cursor = end
    pieces.append(markup[cursor:])
    return "".join(pieces)


def find_root_tag(markup: str) -> Optional[re.Match]:
    """Locate the first opening tag, skipping leading whitespace and comments.

    Returns None when the markup starts with text or a closing tag.
    """
    position = 0
    length = len(markup)
    while position < length:
        while position < length and markup[position].isspace():
            position += 1
        if markup.startswith("<!--", position):
            end = markup.find("-->", position + 4)
            if end == -1:
                return None
            position = end + 3
            continue
        break
    return START_TAG_PATTERN.match(markup, position)


def root_tag_name(markup: str) -> Optional[str]:
    match = find_root_tag(markup)
    return StartTag(match.group(0)).name if match else None


def edit_root_tag(markup: str, edit: Callable[[StartTag], None]) -> str:
    """Apply an edit to the root opening tag; markup without one is returned as is."""
    match = find_root_tag(markup)
    if match is None:
        return markup
    tag = StartTag(match.group(0))
    edit(tag)
    if tag.text == match.group(0):
        return markup
    return markup[:match.start()] + tag.text + markup[match.end():]


def set_root_attributes(markup: str, attributes: Mapping[str, Optional[str]],
                        overwrite: bool = False) -> str:
    """Add attributes to the root opening tag.

    Existing attributes are kept unless overwrite is set.
    """
    def edit(tag: StartTag) -> None:
        for name, value in attributes.items():
            if overwrite:
                tag.set(name, value)
            else:
                tag.set_default(name, value)

    return edit_root_tag(markup, edit)


def inject_classes(markup: str, classes: Sequence[str],
                   is_displaced: Optional[Callable[[str], bool]] = None) -> str:
    """Merge resolved class tokens into the root opening tag.

    Existing tokens keep their order, displaced tokens are removed and
    missing resolved tokens are appended. Nothing else in the markup changes.

    Args:
        markup: Block output
        classes: Resolved class tokens, in order
        is_displaced: Predicate for existing tokens that lose to a resolved one

    Returns:
        Markup with the root tag's class attribute updated
    """
    if not classes and is_displaced is None:
        return markup

    def edit(tag: StartTag) -> None:
        existing = tag.classes()
        kept = [token for token in existing if not (is_displaced and is_displaced(token))]
        merged = kept + [token for token in classes if token not in kept]
        if merged == existing:
            return
        if merged:
            tag.set("class", " ".join(merged))
        else:
            tag.remove("class")

    return edit_root_tag(markup, edit)


def rewrite_start_tags(markup: str, edit: Callable[[StartTag], None],
                       names: Optional[Iterable[str]] = None) -> str:
    """Apply an edit to every opening tag outside comments and raw text.

    Args:
        markup: Markup to rewrite
        edit: Called with each matching StartTag; mutates it in place
        names: Restrict to these tag names (lowercase)

    Returns:
        Rewritten markup
    """
    replacements = []
    for start, end, element in locate_start_tags(markup, names):
        original = markup[start:end]
        tag = StartTag(original, element)
        edit(tag)
        if tag.text != original:
            replacements.append((start, end, tag.text))
    return splice(markup, replacements)


def iter_start_tags(markup: str, names: Optional[Iterable[str]] = None) -> List[StartTag]:
    """Collect opening tags outside comments and raw text."""
    return [StartTag(markup[start:end], element)
            for start, end, element in locate_start_tags(markup, names)]


def render_attributes(attributes: Mapping[str, Optional[str]]) -> str:
    parts = []
    for name, value in attributes.items():
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape_attribute(str(value))}"')
    return "".join(parts)


def create_element(tag: str, attributes: Optional[Mapping[str, Optional[str]]] = None,
                   content: str = "") -> str:
    """Build an element string. Content is inserted as markup, not escaped."""
    attributes = attributes or {}
    opening = f"<{tag}{render_attributes(attributes)}>"
    if tag in VOID_ELEMENTS:
        return opening
    return f"{opening}{content}</{tag}>"
