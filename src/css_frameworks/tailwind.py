"""Tailwind CSS class map for core blocks."""

_TEXT_ALIGN = {
    'left': 'text-left',
    'center': 'text-center',
    'right': 'text-right',
}

TAILWIND_CLASS_MAP = {
    # Text blocks
    'core/paragraph': {
        'block': '',
        'align': _TEXT_ALIGN,
        'textAlign': _TEXT_ALIGN,
        'dropCap': 'first-letter:float-left first-letter:text-7xl first-letter:font-bold first-letter:mr-3',
    },
    'core/heading': {
        'block': '',
        'level': {
            '1': 'text-4xl font-bold',
            '2': 'text-3xl font-bold',
            '3': 'text-2xl font-bold',
            '4': 'text-xl font-bold',
            '5': 'text-lg font-bold',
            '6': 'text-base font-bold',
            'default': 'text-3xl font-bold',
        },
        'align': _TEXT_ALIGN,
        'textAlign': _TEXT_ALIGN,
    },
    'core/list': {
        'block': '',
        'ordered': {
            'true': 'list-decimal pl-5',
            'false': 'list-disc pl-5',
            'default': 'list-disc pl-5',
        },
    },
    'core/quote': {
        'block': 'border-l-4 border-gray-300 pl-4 italic',
        'align': _TEXT_ALIGN,
    },
    'core/pullquote': {
        'block': 'border-y-4 border-gray-300 py-6 text-center text-xl',
    },
    'core/code': {
        'block': 'bg-gray-100 rounded p-4 overflow-x-auto font-mono text-sm',
    },
    'core/preformatted': {
        'block': 'bg-gray-50 p-4 overflow-x-auto font-mono',
    },
    'core/verse': {
        'block': 'whitespace-pre-wrap font-serif',
    },
    'core/details': {
        'block': 'border rounded p-4',
    },
    # Media blocks
    'core/image': {
        'block': 'max-w-full h-auto',
        'align': {
            'left': 'float-left mr-4 mb-4',
            'center': 'mx-auto',
            'right': 'float-right ml-4 mb-4',
            'wide': 'max-w-screen-xl mx-auto',
            'full': 'w-full',
        },
        'sizeSlug': {
            'thumbnail': 'max-w-xs',
            'medium': 'max-w-md',
            'large': 'max-w-lg',
            'full': 'w-full',
        },
    },
    'core/gallery': {
        'block': 'grid gap-4',
        'columns': {
            '1': 'grid-cols-1',
            '2': 'grid-cols-2',
            '3': 'grid-cols-3',
            '4': 'grid-cols-4',
            'default': 'grid-cols-3',
        },
    },
    'core/video': {
        'block': 'w-full',
    },
    'core/audio': {
        'block': 'w-full',
    },
    'core/embed': {
        'block': 'relative w-full',
    },
    'core/cover': {
        'block': 'relative flex items-center justify-center bg-cover bg-center min-h-[430px]',
    },
    # Layout blocks
    'core/group': {
        'block': 'p-4',
        'align': {
            'wide': 'max-w-screen-xl mx-auto',
            'full': 'w-full',
        },
    },
    'core/columns': {
        'block': 'flex flex-wrap',
        'isStackedOnMobile': 'flex-col md:flex-row',
    },
    'core/column': {
        'block': 'flex-1 p-4',
        'width': {
            '25': 'w-1/4',
            '33.33': 'w-1/3',
            '50': 'w-1/2',
            '66.66': 'w-2/3',
            '75': 'w-3/4',
            '100': 'w-full',
        },
    },
    'core/buttons': {
        'block': 'flex flex-wrap gap-2',
    },
    'core/button': {
        'block': 'inline-block px-4 py-2 font-medium rounded',
        'style': {
            'fill': 'bg-blue-600 text-white hover:bg-blue-700',
            'outline': 'border border-blue-600 text-blue-600 hover:bg-blue-100',
            'default': 'bg-blue-600 text-white hover:bg-blue-700',
        },
        'size': {
            'small': 'text-sm',
            'medium': 'text-base',
            'large': 'text-lg',
        },
    },
    'core/separator': {
        'block': 'border-t my-4',
        'style': {
            'default': 'border-gray-200',
            'wide': 'border-gray-200 w-full',
            'dots': 'border-dotted border-gray-400',
        },
    },
    'core/spacer': {
        'block': '',
        'height': {
            'small': 'h-4',
            'medium': 'h-8',
            'large': 'h-16',
        },
    },
    'core/search': {
        'block': 'flex gap-2',
    },
    'core/table': {
        'block': 'min-w-full border-collapse my-4',
        'hasFixedLayout': 'table-fixed',
        'style': {
            'stripes': 'odd:bg-gray-50',
        },
        'align': _TEXT_ALIGN,
    },
    'core/file': {
        'block': 'my-4 p-4 border border-gray-200 rounded',
    },
    'core/media-text': {
        'block': 'flex flex-wrap my-4',
        'mediaPosition': {
            'left': 'flex-row',
            'right': 'flex-row-reverse',
            'default': 'flex-row',
        },
        'verticalAlignment': {
            'top': 'items-start',
            'center': 'items-center',
            'bottom': 'items-end',
        },
    },
    'core/social-links': {
        'block': 'my-6 flex flex-wrap gap-2',
        'size': {
            'normal': 'text-base',
            'small': 'text-sm',
            'large': 'text-lg',
        },
    },
    'core/social-link': {
        'block': 'inline-block m-1',
    },
}
