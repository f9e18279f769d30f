"""SEO metadata extraction and head generation."""

from .head_generator import HeadOptions, canonical_url, generate_head
from .metadata_extractor import MetadataExtractor, SEOHeading, SEOImage, SEOLink, SEOMetadata

__all__ = [
    "MetadataExtractor",
    "SEOMetadata",
    "SEOHeading",
    "SEOImage",
    "SEOLink",
    "HeadOptions",
    "canonical_url",
    "generate_head",
]
