"""
PageLens - page metadata extraction and main-content scoring.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .metadata import MetadataExtractor, SchemaPathResolver, collect_meta_tags, collect_schema_org_data
from .protocols import ContentScore, DocumentMetadata, LayoutProvider, MetaTagItem, Rect
from .scoring import ContentScorer

__all__ = [
    "__version__",
    "Config",
    "ContentScore",
    "ContentScorer",
    "DocumentMetadata",
    "LayoutProvider",
    "MetaTagItem",
    "MetadataExtractor",
    "Rect",
    "SchemaPathResolver",
    "collect_meta_tags",
    "collect_schema_org_data",
]
