"""Markdown output target using markdownify.

Each top-level block's markup becomes one markdown fragment terminated by a
blank line, so fragments can be concatenated (or streamed) in order.
"""

from markdownify import MarkdownConverter as BaseMarkdownConverter


class _BlockMarkdownConverter(BaseMarkdownConverter):
    """markdownify converter with settings suited to block content."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        super().__init__(**options)

    def _is_in_table_cell(self, parent_tags):
        return 'td' in parent_tags or 'th' in parent_tags

    def convert_p(self, el, text, parent_tags):
        """Paragraphs in table cells become line breaks instead of blocks."""
        text = text.strip()
        if not text:
            return ''
        if self._is_in_table_cell(parent_tags):
            return text + '<br>'
        if '_inline' in parent_tags:
            return ' ' + text + ' '
        return '\n\n%s\n\n' % text

    def convert_figcaption(self, el, text, parent_tags):
        text = text.strip()
        if not text or '_inline' in parent_tags:
            return text
        return '\n\n*%s*\n\n' % text

    def convert_summary(self, el, text, parent_tags):
        text = text.strip()
        if not text:
            return ''
        return '\n\n**%s**\n\n' % text

    def _media_link(self, el, text, label):
        src = el.get('src')
        if not src:
            source = el.find('source')
            src = source.get('src') if source else None
        if not src:
            return text
        return '[%s](%s)' % (el.get('title') or label, src)

    def convert_iframe(self, el, text, parent_tags):
        return self._media_link(el, text, 'Embedded content')

    def convert_video(self, el, text, parent_tags):
        return self._media_link(el, text, 'Video')

    def convert_audio(self, el, text, parent_tags):
        return self._media_link(el, text, 'Audio')


def _markdownify(html: str, **options) -> str:
    """Convert HTML to markdown using the block converter settings."""
    return _BlockMarkdownConverter(**options).convert(html)


class MarkdownRenderer:
    """Renders block markup fragments as markdown."""

    def __init__(self, **options):
        self.options = options

    def render_fragment(self, html: str) -> str:
        """Convert one top-level block's markup.

        Returns:
            Markdown ending with a blank line, or "" for empty output
        """
        if not html or not html.strip():
            return ""
        markdown = _markdownify(html, **self.options).strip()
        if not markdown:
            return ""
        return markdown + "\n\n"
