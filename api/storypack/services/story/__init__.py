"""Story pack assembly: selection, ordering and page text.

Usage:
    from storypack.services.story import assemble_story_pack
"""

from __future__ import annotations

from .schema import (
    CoverPage,
    HighlightPage,
    InfoPage,
    StoryMetrics,
    StoryPack,
    validate_story_pack,
)
from .selection import (
    HighlightSelection,
    order_chronologically,
    rank_by_score,
    select_highlights,
)
from .story_builder import assemble_story_pack, build_highlight_page, build_story_id
from .templates import HEADLINE_TEMPLATES, build_caption, build_explanation, build_headline

__all__ = [
    # Schema
    "CoverPage",
    "HighlightPage",
    "InfoPage",
    "StoryMetrics",
    "StoryPack",
    "validate_story_pack",
    # Selection
    "HighlightSelection",
    "order_chronologically",
    "rank_by_score",
    "select_highlights",
    # Assembly
    "assemble_story_pack",
    "build_highlight_page",
    "build_story_id",
    # Text
    "HEADLINE_TEMPLATES",
    "build_caption",
    "build_explanation",
    "build_headline",
]
