"""Sample block trees for testing.

Blocks are given in the editor's serialized form (blockName, attrs,
innerBlocks, innerContent, innerHTML), the shape a parser of stored post
content produces.
"""


def paragraph(text, **attrs):
    """Leaf paragraph block."""
    html = f"<p>{text}</p>"
    return {
        "blockName": "core/paragraph",
        "attrs": attrs,
        "innerBlocks": [],
        "innerHTML": html,
        "innerContent": [html],
    }


def heading(text, level=2, **attrs):
    html = f"<h{level}>{text}</h{level}>"
    return {
        "blockName": "core/heading",
        "attrs": dict(attrs, level=level),
        "innerBlocks": [],
        "innerHTML": html,
        "innerContent": [html],
    }


def image(url, alt="", **attrs):
    html = f'<figure class="wp-block-image"><img src="{url}" alt="{alt}"/></figure>'
    return {
        "blockName": "core/image",
        "attrs": dict(attrs, url=url, alt=alt),
        "innerBlocks": [],
        "innerHTML": html,
        "innerContent": [html],
    }


def group(*children, **attrs):
    """Group block wrapping the given children."""
    return {
        "blockName": "core/group",
        "attrs": attrs,
        "innerBlocks": list(children),
        "innerContent": ['<div class="wp-block-group">']
        + [None] * len(children)
        + ["</div>"],
    }


# A block with one child between literal wrapper markup
WRAPPER_WITH_CHILD = {
    "blockName": "acme/wrapper",
    "attrs": {},
    "innerBlocks": [paragraph("Inside")],
    "innerContent": ["<div>", None, "</div>"],
}

# Placeholder count does not match the inner blocks
MALFORMED_PLACEHOLDERS = {
    "blockName": "core/group",
    "attrs": {},
    "innerBlocks": [paragraph("Only child")],
    "innerContent": ["<div>", None, None, "</div>"],
}

# Unregistered block carrying pre-rendered HTML only
UNKNOWN_RENDERED = {
    "blockName": "acme/testimonial",
    "attrs": {"className": "is-featured"},
    "innerBlocks": [],
    "innerContent": [],
    "renderedHtml": '<section data-id="7"><p>Great product!</p></section>',
}

# Classic editor content between blocks
FREEFORM_FRAGMENT = {
    "blockName": None,
    "attrs": {},
    "innerBlocks": [],
    "innerHTML": "\n<p>Classic content</p>\n",
    "innerContent": ["\n<p>Classic content</p>\n"],
}

PREFORMATTED = {
    "blockName": "core/preformatted",
    "attrs": {},
    "innerBlocks": [],
    "innerHTML": "<pre>line one\n    indented   line\n\n  last</pre>",
    "innerContent": ["<pre>line one\n    indented   line\n\n  last</pre>"],
}

DUPLICATE_STYLES_HTML = {
    "blockName": "core/html",
    "attrs": {},
    "innerBlocks": [],
    "innerHTML": (
        "<style>.card { color: red; }</style>\n"
        '<div class="card card">One</div>\n'
        "<style>.card {  color: red; }</style>\n"
        "<!-- author note -->\n"
        '<div class="card">Two</div>'
    ),
    "innerContent": [
        "<style>.card { color: red; }</style>\n"
        '<div class="card card">One</div>\n'
        "<style>.card {  color: red; }</style>\n"
        "<!-- author note -->\n"
        '<div class="card">Two</div>'
    ],
}


def sample_post():
    """A realistic post mixing text, media, layout and nested blocks."""
    return [
        heading("Release notes", level=1),
        paragraph("This release brings a faster renderer, better Markdown export and many smaller fixes."),
        image("https://cdn.example.com/hero.jpg", alt="Hero", sizeSlug="large"),
        group(
            paragraph("Nested paragraph one", align="center"),
            paragraph("Nested paragraph two"),
            align="wide",
        ),
        {
            "blockName": "core/list",
            "attrs": {"ordered": True},
            "innerBlocks": [
                {
                    "blockName": "core/list-item",
                    "attrs": {},
                    "innerBlocks": [],
                    "innerContent": ["<li>First</li>"],
                },
                {
                    "blockName": "core/list-item",
                    "attrs": {},
                    "innerBlocks": [],
                    "innerContent": ["<li>Second</li>"],
                },
            ],
            "innerContent": ["<ol>", None, None, "</ol>"],
        },
        FREEFORM_FRAGMENT,
        {
            "blockName": "core/details",
            "attrs": {"summary": "More"},
            "innerBlocks": [paragraph("Hidden text")],
            "innerContent": [None],
        },
        UNKNOWN_RENDERED,
        PREFORMATTED,
        image("https://images.example.org/second.png", alt="Second"),
        paragraph("Closing words."),
    ]
