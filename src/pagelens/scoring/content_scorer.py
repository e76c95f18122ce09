"""
Content Scorer - Main Content Detection

Scores DOM subtrees by how likely they are to hold an article's main
content. Signals are additive: text volume and paragraph count raise the
score, link/image density and nested tables lower it, and a handful of
markup hints (dates, bylines, class names, footnotes, legacy table layouts)
add fixed bonuses.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import structlog
from bs4 import Tag

from ..config import ScoringConfig
from ..protocols import ContentScore, LayoutProvider
from .constants import FOOTNOTE_INLINE_REFERENCES

logger = structlog.get_logger(__name__)

DATE_PATTERN = re.compile(
    r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{1,2},?\s+\d{4}\b",
    re.IGNORECASE,
)
BYLINE_PATTERN = re.compile(r"\b(?:by|written by|author:)\s+[A-Za-z\s]+\b", re.IGNORECASE)
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
INLINE_WIDTH_PX = re.compile(r"(?:^|;)\s*width\s*:\s*(\d+(?:\.\d+)?)px", re.IGNORECASE)

TABLE_CELL_TAGS = ("td", "th")


def _leading_int(value: Optional[str]) -> int:
    """Integer prefix of ``value`` (``"600px"`` -> 600), 0 when there is none."""
    if not value:
        return 0
    match = LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def _class_name(element: Tag) -> str:
    value = element.get("class") or ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.lower()


class ContentScorer:
    """
    Heuristic scorer for main-content candidates.

    Without a LayoutProvider the geometry signals are skipped; inline
    ``style`` widths stand in for computed table widths.
    """

    def __init__(self, config: Optional[ScoringConfig] = None, layout: Optional[LayoutProvider] = None) -> None:
        self.config = config or ScoringConfig()
        self.layout = layout

    def score(self, element: Tag) -> float:
        """Score a single element. Higher means more content-like."""
        cfg = self.config
        text = element.get_text()
        words = len(text.split())
        density_base = words or 1

        score = float(words)
        score += len(element.find_all("p")) * cfg.paragraph_bonus

        # Boilerplate is link- and image-heavy relative to its text
        score -= len(element.find_all("a")) / density_base * cfg.link_density_penalty
        score -= len(element.find_all("img")) / density_base * cfg.image_density_penalty

        if self._is_right_of_center(element):
            score += cfg.right_side_bonus

        if DATE_PATTERN.search(text):
            score += cfg.date_bonus
        if BYLINE_PATTERN.search(text):
            score += cfg.byline_bonus

        class_name = _class_name(element)
        if any(hint in class_name for hint in cfg.content_class_hints):
            score += cfg.content_class_bonus

        if element.select_one(FOOTNOTE_INLINE_REFERENCES) is not None:
            score += cfg.footnote_bonus

        score -= len(element.find_all("table")) * cfg.nested_table_penalty

        if element.name in TABLE_CELL_TAGS:
            score += self._layout_cell_bonus(element)

        return score

    def score_candidates(self, candidates: Iterable[Tag]) -> List[ContentScore]:
        """Score every candidate, preserving input order."""
        return [ContentScore(score=self.score(element), element=element) for element in candidates]

    def find_best_element(self, candidates: Iterable[Tag], min_score: Optional[float] = None) -> Optional[Tag]:
        """
        Pick the highest-scoring candidate.

        Args:
            candidates: Elements to compare
            min_score: Threshold the winner must strictly exceed
                (defaults to the configured ``min_score``)

        Returns:
            The best element, or None when no candidate clears the threshold
        """
        threshold = self.config.min_score if min_score is None else min_score
        best: Optional[ContentScore] = None

        for scored in self.score_candidates(candidates):
            if best is None or scored.score > best.score:
                best = scored

        if best is None or best.score <= threshold:
            return None
        return best.element

    def _is_right_of_center(self, element: Tag) -> bool:
        if self.layout is None:
            return False
        try:
            rect = self.layout.bounding_rect(element)
            return rect.left > self.layout.viewport_width() / 2
        except Exception as e:
            logger.debug("Element geometry unavailable", tag=element.name, error=str(e))
            return False

    def _layout_cell_bonus(self, cell: Tag) -> float:
        """Bonus for inner cells of an old-style centred layout table."""
        table = cell.find_parent("table")
        if table is None or not self._is_layout_table(table):
            return 0.0

        cells = table.find_all("td")
        index = next((i for i, candidate in enumerate(cells) if candidate is cell), -1)
        if 0 < index < len(cells) - 1:
            return self.config.layout_cell_bonus
        return 0.0

    def _is_layout_table(self, table: Tag) -> bool:
        min_width = self.config.layout_table_min_width
        if _leading_int(table.get("width")) > min_width:
            return True
        if self._table_pixel_width(table) > min_width:
            return True
        if (table.get("align") or "").lower() == "center":
            return True
        class_name = _class_name(table)
        return any(hint in class_name for hint in self.config.layout_table_classes)

    def _table_pixel_width(self, table: Tag) -> int:
        if self.layout is not None:
            try:
                width = self.layout.computed_width(table)
            except Exception as e:
                logger.debug("Computed style unavailable", tag=table.name, error=str(e))
                return 0
            return _leading_int(width) if "px" in (width or "") else 0

        match = INLINE_WIDTH_PX.search(table.get("style") or "")
        return int(float(match.group(1))) if match else 0
