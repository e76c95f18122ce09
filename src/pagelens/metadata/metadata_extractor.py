"""
Main Metadata Extractor - Per-Field Fallback Chains

Builds a DocumentMetadata record from three sources: the caller's meta-tag
table, schema.org data (through SchemaPathResolver) and direct queries on
the document tree. Every field is an ordered chain of sources; the first
non-empty value wins.
"""

from __future__ import annotations

import html
import re
from typing import Any, Callable, List, Optional, Sequence
from urllib.parse import urljoin, urlsplit

import structlog
from bs4 import Tag

from ..protocols import DocumentMetadata, MetaTagItem
from .meta_tags import get_meta_content
from .schema_resolver import SchemaPathResolver

logger = structlog.get_logger(__name__)

TITLE_SEPARATORS = r"[\|\-–—]"
TRAILING_COMMA = re.compile(r",$")
LEADING_WWW = re.compile(r"^www\.")


def clean_title(title: str, site_name: str) -> str:
    """
    Strip a leading or trailing site name from a page title.

    ``"Story | Site"`` and ``"Site - Story"`` both become ``"Story"``. At most
    one occurrence is removed, and the title is returned untouched when
    either argument is empty.
    """
    if not title or not site_name:
        return title

    escaped = re.escape(site_name)
    patterns = (
        rf"\s*{TITLE_SEPARATORS}\s*{escaped}\s*$",  # Title | Site Name
        rf"^\s*{escaped}\s*{TITLE_SEPARATORS}\s*",  # Site Name | Title
    )
    for pattern in patterns:
        regex = re.compile(pattern, re.IGNORECASE)
        if regex.search(title):
            title = regex.sub("", title, count=1)
            break

    return title.strip()


def domain_from_url(url: str) -> str:
    """Hostname of ``url`` without a leading ``www.``; empty when unparsable."""
    if not url:
        return ""
    try:
        hostname = urlsplit(url).hostname
    except ValueError as e:
        logger.warning("Failed to parse URL", url=url, error=str(e))
        return ""
    if not hostname:
        return ""
    return LEADING_WWW.sub("", hostname)


def _element_text(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return element.get_text().strip()


def _attribute(element: Optional[Tag], name: str) -> str:
    if element is None:
        return ""
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


class MetadataExtractor:
    """
    Metadata extractor for a single parsed document.

    Holds no per-document state: ``extract`` is a pure function of its
    arguments and the instance can be shared across threads.
    """

    def __init__(self, resolver: Optional[SchemaPathResolver] = None) -> None:
        self.resolver = resolver or SchemaPathResolver()

    def extract(
        self,
        doc: Tag,
        schema_org_data: Any,
        meta_tags: Sequence[MetaTagItem],
        url: Optional[str] = None,
    ) -> DocumentMetadata:
        """
        Extract metadata from a parsed document.

        Args:
            doc: Parsed document tree (BeautifulSoup or any Tag)
            schema_org_data: JSON-LD data collected from the page
            meta_tags: Meta-tag table in document order
            url: Location the document was loaded from, if known

        Returns:
            DocumentMetadata with every string field populated
        """
        page_url = self._guard("url", lambda: self._get_url(doc, schema_org_data, meta_tags, url or ""))
        domain = domain_from_url(page_url)

        if not domain:
            base_href = self._guard("base", lambda: _attribute(doc.select_one("base[href]"), "href"))
            base_domain = domain_from_url(base_href)
            if base_domain:
                page_url, domain = base_href, base_domain

        return DocumentMetadata(
            title=self._guard("title", lambda: self._get_title(doc, schema_org_data, meta_tags)),
            description=self._guard("description", lambda: self._get_description(schema_org_data, meta_tags)),
            domain=domain,
            favicon=self._guard("favicon", lambda: self._get_favicon(doc, page_url, meta_tags)),
            image=self._guard("image", lambda: self._get_image(schema_org_data, meta_tags)),
            published=self._guard("published", lambda: self._get_published(doc, schema_org_data, meta_tags)),
            author=self._guard("author", lambda: self._get_author(doc, schema_org_data, meta_tags)),
            site=self._guard("site", lambda: self._get_site(doc, schema_org_data, meta_tags)),
            schema_org_data=schema_org_data,
        )

    def _guard(self, field_name: str, getter: Callable[[], str]) -> str:
        """Run one field chain; a failure empties that field only."""
        try:
            return getter() or ""
        except Exception as e:
            logger.warning("Metadata field extraction failed", field=field_name, error=str(e), exc_info=True)
            return ""

    def _schema(self, schema_org_data: Any, path: str) -> str:
        return self.resolver.resolve(schema_org_data, path).strip()

    def _get_url(self, doc: Tag, schema_org_data: Any, meta_tags: Sequence[MetaTagItem], location: str) -> str:
        return (
            location.strip()
            or get_meta_content(meta_tags, "property", "og:url")
            or get_meta_content(meta_tags, "property", "twitter:url")
            or self._schema(schema_org_data, "url")
            or self._schema(schema_org_data, "mainEntityOfPage.url")
            or self._schema(schema_org_data, "mainEntity.url")
            or self._schema(schema_org_data, "WebSite.url")
            or _attribute(doc.select_one('link[rel="canonical"]'), "href")
        )

    def _get_author(self, doc: Tag, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        # Author-specific meta tags
        authors = (
            get_meta_content(meta_tags, "name", "sailthru.author")
            or get_meta_content(meta_tags, "property", "author")
            or get_meta_content(meta_tags, "name", "author")
            or get_meta_content(meta_tags, "name", "byl")
            or get_meta_content(meta_tags, "name", "authorList")
        )
        if authors:
            return authors

        authors = self._schema(schema_org_data, "author.name") or self._schema(schema_org_data, "author.[].name")
        if authors:
            return authors

        # Microdata
        authors = self._join_author_names(doc.select('[itemprop="author"]'))
        if authors:
            return authors

        authors = self._join_author_names(doc.select('[itemprop~="author"][itemprop~="name"]'))
        if authors:
            return authors

        authors = _element_text(doc.select_one(".author"))
        if authors:
            return authors

        # Weaker signals: these usually name an organisation
        return (
            get_meta_content(meta_tags, "name", "copyright")
            or self._schema(schema_org_data, "copyrightHolder.name")
            or get_meta_content(meta_tags, "property", "og:site_name")
            or self._schema(schema_org_data, "publisher.name")
            or self._schema(schema_org_data, "sourceOrganization.name")
            or self._schema(schema_org_data, "isPartOf.name")
            or get_meta_content(meta_tags, "name", "twitter:creator")
            or get_meta_content(meta_tags, "name", "application-name")
        )

    @staticmethod
    def _join_author_names(elements: List[Tag]) -> str:
        names: List[str] = []
        for element in elements:
            name = TRAILING_COMMA.sub("", element.get_text().strip()).strip()
            if name and name not in names:
                names.append(name)
        return ", ".join(names)

    def _get_site(self, doc: Tag, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        return (
            self._schema(schema_org_data, "publisher.name")
            or get_meta_content(meta_tags, "property", "og:site_name")
            or self._schema(schema_org_data, "WebSite.name")
            or self._schema(schema_org_data, "sourceOrganization.name")
            or get_meta_content(meta_tags, "name", "copyright")
            or self._schema(schema_org_data, "copyrightHolder.name")
            or self._schema(schema_org_data, "isPartOf.name")
            or get_meta_content(meta_tags, "name", "application-name")
            or self._get_author(doc, schema_org_data, meta_tags)
        )

    def _get_title(self, doc: Tag, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        raw_title = (
            get_meta_content(meta_tags, "property", "og:title")
            or get_meta_content(meta_tags, "name", "twitter:title")
            or self._schema(schema_org_data, "headline")
            or get_meta_content(meta_tags, "name", "title")
            or get_meta_content(meta_tags, "name", "sailthru.title")
            or _element_text(doc.find("title"))
        )
        if not raw_title:
            return ""
        return clean_title(raw_title, self._get_site(doc, schema_org_data, meta_tags))

    def _get_description(self, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        return (
            get_meta_content(meta_tags, "name", "description")
            or get_meta_content(meta_tags, "property", "description")
            or get_meta_content(meta_tags, "property", "og:description")
            or self._schema(schema_org_data, "description")
            or get_meta_content(meta_tags, "name", "twitter:description")
            or get_meta_content(meta_tags, "name", "sailthru.description")
        )

    def _get_image(self, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        return (
            get_meta_content(meta_tags, "property", "og:image")
            or get_meta_content(meta_tags, "name", "twitter:image")
            or self._schema(schema_org_data, "image.url")
            or get_meta_content(meta_tags, "name", "sailthru.image.full")
        )

    def _get_favicon(self, doc: Tag, base_url: str, meta_tags: Sequence[MetaTagItem]) -> str:
        icon = (
            get_meta_content(meta_tags, "property", "og:image:favicon")
            or _attribute(doc.select_one('link[rel="icon"]'), "href")
            or _attribute(doc.select_one('link[rel="shortcut icon"]'), "href")
        )
        if icon or not base_url:
            return icon

        try:
            parts = urlsplit(base_url)
        except ValueError as e:
            logger.warning("Failed to construct favicon URL", base_url=base_url, error=str(e))
            return ""
        if not (parts.scheme and parts.netloc):
            logger.warning("Failed to construct favicon URL", base_url=base_url, error="not an absolute URL")
            return ""
        return urljoin(base_url, "/favicon.ico")

    def _get_published(self, doc: Tag, schema_org_data: Any, meta_tags: Sequence[MetaTagItem]) -> str:
        return (
            self._schema(schema_org_data, "datePublished")
            or get_meta_content(meta_tags, "name", "publishDate")
            or get_meta_content(meta_tags, "property", "article:published_time")
            or _attribute(doc.select_one('abbr[itemprop="datePublished"]'), "title")
            or self._get_time_element(doc)
            or get_meta_content(meta_tags, "name", "sailthru.date")
        )

    @staticmethod
    def _get_time_element(doc: Tag) -> str:
        element = doc.find("time")
        if element is None:
            return ""
        datetime_attr = element.get("datetime")
        content = datetime_attr.strip() if datetime_attr is not None else element.get_text().strip()
        return html.unescape(content).strip()
