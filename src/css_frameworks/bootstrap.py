"""Bootstrap 5 class map for core blocks."""

_TEXT_ALIGN = {
    'left': 'text-start',
    'center': 'text-center',
    'right': 'text-end',
}

BOOTSTRAP_CLASS_MAP = {
    # Text blocks
    'core/paragraph': {
        'block': '',
        'align': _TEXT_ALIGN,
        'textAlign': _TEXT_ALIGN,
        'dropCap': 'first-letter:float-start first-letter:fs-1 first-letter:fw-bold first-letter:me-2',
    },
    'core/heading': {
        'block': '',
        'level': {
            '1': 'h1',
            '2': 'h2',
            '3': 'h3',
            '4': 'h4',
            '5': 'h5',
            '6': 'h6',
            'default': 'h2',
        },
        'align': _TEXT_ALIGN,
        'textAlign': _TEXT_ALIGN,
    },
    'core/list': {
        'block': '',
        'ordered': {
            'true': 'list-group list-group-numbered',
            'false': 'list-group',
            'default': 'list-group',
        },
    },
    'core/quote': {
        'block': 'blockquote',
        'align': _TEXT_ALIGN,
    },
    'core/pullquote': {
        'block': 'blockquote text-center border-top border-bottom py-4',
    },
    'core/code': {
        'block': 'bg-light p-3 rounded',
    },
    'core/preformatted': {
        'block': 'bg-light p-3',
    },
    'core/verse': {
        'block': 'font-monospace',
    },
    'core/details': {
        'block': 'border rounded p-3',
    },
    # Media blocks
    'core/image': {
        'block': 'img-fluid',
        'align': {
            'left': 'float-start me-3 mb-3',
            'center': 'mx-auto d-block',
            'right': 'float-end ms-3 mb-3',
            'wide': 'container-lg',
            'full': 'w-100',
        },
        'sizeSlug': {
            'thumbnail': 'w-25',
            'medium': 'w-50',
            'large': 'w-75',
            'full': 'w-100',
        },
    },
    'core/gallery': {
        'block': 'row g-3',
        'columns': {
            '1': 'row-cols-1',
            '2': 'row-cols-2',
            '3': 'row-cols-3',
            '4': 'row-cols-4',
            'default': 'row-cols-3',
        },
    },
    'core/video': {
        'block': 'ratio ratio-16x9',
    },
    'core/audio': {
        'block': 'w-100',
    },
    'core/embed': {
        'block': 'ratio ratio-16x9',
    },
    'core/cover': {
        'block': 'position-relative d-flex align-items-center justify-content-center',
    },
    # Layout blocks
    'core/group': {
        'block': 'p-3',
        'align': {
            'wide': 'container-lg',
            'full': 'container-fluid',
        },
    },
    'core/columns': {
        'block': 'row',
    },
    'core/column': {
        'block': 'col p-2',
        'width': {
            '25': 'col-3',
            '33.33': 'col-4',
            '50': 'col-6',
            '66.66': 'col-8',
            '75': 'col-9',
            '100': 'col-12',
        },
    },
    'core/buttons': {
        'block': 'd-flex flex-wrap gap-2',
    },
    'core/button': {
        'block': 'btn',
        'style': {
            'fill': 'btn-primary',
            'outline': 'btn-outline-primary',
            'default': 'btn-primary',
        },
        'size': {
            'small': 'btn-sm',
            'medium': '',
            'large': 'btn-lg',
        },
    },
    'core/separator': {
        'block': 'border-top my-4',
        'style': {
            'default': '',
            'wide': 'w-100',
            'dots': 'border-dotted',
        },
    },
    'core/spacer': {
        'block': '',
        'height': {
            'small': 'my-2',
            'medium': 'my-3',
            'large': 'my-5',
        },
    },
    'core/search': {
        'block': 'input-group',
    },
    'core/table': {
        'block': 'table my-4',
        'style': {
            'stripes': 'table-striped',
        },
        'align': _TEXT_ALIGN,
    },
    'core/file': {
        'block': 'my-3 p-3 border rounded',
    },
    'core/media-text': {
        'block': 'row my-3',
        'mediaPosition': {
            'left': 'flex-row',
            'right': 'flex-row-reverse',
            'default': 'flex-row',
        },
        'verticalAlignment': {
            'top': 'align-items-start',
            'center': 'align-items-center',
            'bottom': 'align-items-end',
        },
    },
    'core/social-links': {
        'block': 'my-4 d-flex flex-wrap gap-2',
        'size': {
            'small': 'fs-6',
            'large': 'fs-4',
        },
    },
    'core/social-link': {
        'block': 'd-inline-block m-1',
    },
}
