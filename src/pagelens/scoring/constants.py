"""Selector constants shared by the content scorer."""

from __future__ import annotations

# Inline footnote and citation markers as emitted by common publishing
# tools (MediaWiki, arXiv/LaTeXML, WordPress footnote plugins, Substack, ...)
FOOTNOTE_INLINE_REFERENCES = ", ".join(
    [
        "sup.reference",
        "cite.ltx_cite",
        'sup[id^="fnr"]',
        'span[id^="fnr"]',
        'span[class*="footnote_ref"]',
        'span[class*="footnote-ref"]',
        "span.footnote-link",
        "a.citation",
        'a[id^="ref-link"]',
        'a[href^="#fn"]',
        'a[href^="#cite"]',
        'a[href^="#reference"]',
        'a[href^="#footnote"]',
        'a[href*="cite_note"]',
        'a[href*="citeas"]',
        "sup.footnoteref",
        "sup.footnote-ref",
        "a.footnote-anchor",
        "[data-footnote-ref]",
        'a[role="doc-noteref"]',
    ]
)
