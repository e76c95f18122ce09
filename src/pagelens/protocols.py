"""
Shared dataclasses and protocols for PageLens.

These are the records passed between the caller's pipeline and the two
extraction components:

- MetaTagItem: one entry of the caller's meta-tag table
- DocumentMetadata: the record produced by MetadataExtractor
- ContentScore: a scored reference into the caller's document tree
- LayoutProvider: optional geometry source for the content scorer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from bs4 import Tag


@dataclass(frozen=True)
class MetaTagItem:
    """One <meta> tag as collected from the document head."""

    name: Optional[str] = None
    property: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_tag(cls, tag: Tag) -> MetaTagItem:
        return cls(
            name=tag.get("name"),
            property=tag.get("property"),
            content=tag.get("content"),
        )


@dataclass
class DocumentMetadata:
    """Metadata record for one document. String fields are never None."""

    title: str = ""
    description: str = ""
    domain: str = ""
    favicon: str = ""
    image: str = ""
    published: str = ""
    author: str = ""
    site: str = ""
    schema_org_data: Any = None

    # Owned by the surrounding pipeline
    word_count: int = 0
    parse_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the assembly stage."""
        return {
            "title": self.title,
            "description": self.description,
            "domain": self.domain,
            "favicon": self.favicon,
            "image": self.image,
            "published": self.published,
            "author": self.author,
            "site": self.site,
            "schemaOrgData": self.schema_org_data,
            "wordCount": self.word_count,
            "parseTime": self.parse_time,
        }


@dataclass(frozen=True)
class Rect:
    """Bounding box in viewport pixels."""

    left: float
    top: float
    width: float
    height: float


@dataclass
class ContentScore:
    """Score for a candidate content root. Only relative ordering matters."""

    score: float
    element: Tag


@runtime_checkable
class LayoutProvider(Protocol):
    """Geometry source for rendered documents.

    Parsed trees carry no layout, so this is optional. Implementations may
    raise from any method when geometry is unavailable; the scorer treats
    that as a missing signal.
    """

    def viewport_width(self) -> float:
        """Width of the rendering viewport in pixels."""
        ...

    def bounding_rect(self, element: Tag) -> Rect:
        """Bounding box of an element."""
        ...

    def computed_width(self, element: Tag) -> str:
        """Computed CSS width of an element, e.g. "640px"."""
        ...
