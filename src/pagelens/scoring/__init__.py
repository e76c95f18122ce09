"""
PageLens Content Scoring Module

- ContentScorer: ranks DOM subtrees by likelihood of holding the main content
- FOOTNOTE_INLINE_REFERENCES: selector for inline footnote markers
"""

from .constants import FOOTNOTE_INLINE_REFERENCES
from .content_scorer import ContentScorer

__all__ = ["ContentScorer", "FOOTNOTE_INLINE_REFERENCES"]
