"""
Meta-tag table helpers.

The table is an ordered list of MetaTagItem records in document order, so
that the first tag wins when a page repeats a key.
"""

from __future__ import annotations

from typing import List, Sequence

from bs4 import Tag

from ..protocols import MetaTagItem


def get_meta_content(meta_tags: Sequence[MetaTagItem], attr: str, value: str) -> str:
    """
    Return the trimmed content of the first tag whose ``attr`` matches ``value``.

    Args:
        meta_tags: Meta-tag table in document order
        attr: Either ``"name"`` or ``"property"``
        value: Key to match, case-insensitively

    Returns:
        Trimmed content, or an empty string when no tag matches
    """
    wanted = value.lower()
    for tag in meta_tags:
        key = tag.name if attr == "name" else tag.property
        if key is not None and key.lower() == wanted:
            return (tag.content or "").strip()
    return ""


def collect_meta_tags(doc: Tag) -> List[MetaTagItem]:
    """Build the meta-tag table from every keyed <meta> element of ``doc``."""
    items: List[MetaTagItem] = []
    for tag in doc.find_all("meta"):
        if not (tag.has_attr("name") or tag.has_attr("property")):
            continue
        if not tag.has_attr("content"):
            continue
        items.append(MetaTagItem.from_tag(tag))
    return items
