"""
PageLens Metadata Extraction Module

Components:
- MetadataExtractor: per-field fallback chains over meta tags, schema.org data and the DOM
- SchemaPathResolver: dotted path lookup over JSON-LD shaped data
- Meta-tag table helpers: lookup and collection
- JSON-LD collection from a parsed document
"""

from .meta_tags import collect_meta_tags, get_meta_content
from .metadata_extractor import MetadataExtractor, clean_title, domain_from_url
from .schema_resolver import SchemaPathResolver
from .structured_data import collect_schema_org_data

__all__ = [
    # Main extractor
    "MetadataExtractor",
    "clean_title",
    "domain_from_url",
    # Structured data
    "SchemaPathResolver",
    "collect_schema_org_data",
    # Meta tags
    "collect_meta_tags",
    "get_meta_content",
]
