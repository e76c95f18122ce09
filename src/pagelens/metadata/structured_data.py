"""
Structured Data Collection - Schema.org JSON-LD

Pulls every ``application/ld+json`` block out of a parsed document so the
caller can hand the result to MetadataExtractor.
"""

from __future__ import annotations

import json
import re
from typing import Any, List

import structlog
from bs4 import Tag

logger = structlog.get_logger(__name__)

LD_JSON_TYPE = re.compile(r"^\s*application/ld\+json\s*$", re.I)

# CMSes wrap JSON-LD in CDATA sections and JavaScript comments
CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"


def _strip_wrappers(text: str) -> str:
    """Remove comments and CDATA markers around the JSON value, never inside it."""
    text = text.strip()

    while True:
        if text.startswith("/*") and "*/" in text:
            text = text[text.index("*/") + 2 :].lstrip()
        elif text.startswith("//"):
            text = text.partition("\n")[2].lstrip()
        elif text.startswith(CDATA_OPEN):
            text = text[len(CDATA_OPEN) :].lstrip()
        else:
            break

    while True:
        head, _, last_line = text.rpartition("\n")
        if text.endswith("*/") and "/*" in text:
            text = text[: text.rindex("/*")].rstrip()
        elif text.endswith(CDATA_CLOSE):
            text = text[: -len(CDATA_CLOSE)].rstrip()
        elif head and last_line.lstrip().startswith("//"):
            text = head.rstrip()
        else:
            break

    return text


def collect_schema_org_data(doc: Tag) -> List[Any]:
    """
    Parse all JSON-LD script blocks of ``doc`` in document order.

    Blocks are parsed as-is first; only blocks that fail are retried with
    their wrapping comments and CDATA markers removed. Top-level arrays are
    spliced into the result. Blocks that still fail to parse are logged and
    skipped.
    """
    items: List[Any] = []

    for script in doc.find_all("script", attrs={"type": LD_JSON_TYPE}):
        raw = script.string
        if not raw or not raw.strip():
            continue

        json_text = str(raw)
        try:
            data = json.loads(json_text)
        except json.JSONDecodeError:
            json_text = _strip_wrappers(json_text)
            if not json_text:
                continue
            try:
                data = json.loads(json_text)
            except json.JSONDecodeError as e:
                logger.warning("Invalid JSON-LD block skipped", error=str(e), position=e.pos)
                continue

        if isinstance(data, list):
            items.extend(data)
        else:
            items.append(data)

    return items
