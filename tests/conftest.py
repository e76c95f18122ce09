"""
Test configuration for PageLens.

Provides parsed-document fixtures and ready-made components so tests can
focus on a single behaviour each.
"""

from __future__ import annotations

from typing import Callable

import pytest
from bs4 import BeautifulSoup

from pagelens.metadata import MetadataExtractor, SchemaPathResolver
from pagelens.scoring import ContentScorer

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests that run the extractor and scorer together")


# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest.fixture
def make_soup() -> Callable[[str], BeautifulSoup]:
    """Parse an HTML string the way the CLI does."""

    def _make(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _make


@pytest.fixture
def resolver() -> SchemaPathResolver:
    return SchemaPathResolver()


@pytest.fixture
def extractor(resolver: SchemaPathResolver) -> MetadataExtractor:
    return MetadataExtractor(resolver)


@pytest.fixture
def scorer() -> ContentScorer:
    return ContentScorer()
