"""
Story Pack Builder: turns scored events into the final page sequence.

Steps:
1. Select the top N eligible events and order them by minute
2. Render one highlight page per selected event (headline, caption,
   score explanation)
3. Wrap them with a cover page and a closing info page
4. Compute metrics and stamp identity/provenance

Every selected event must render a non-empty headline and caption;
a page that cannot be rendered raises AssemblyError instead of being
dropped.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Sequence

from ...errors import AssemblyError
from ..match_feed import event_minute, is_goal_event
from ..roster import RosterIndex
from ..scoring.types import ScoredEvent
from ...utils.datetime_utils import now_utc
from .schema import (
    MAX_HIGHLIGHT_MINUTE,
    CoverPage,
    HighlightPage,
    InfoPage,
    StoryMetrics,
    StoryPack,
)
from .selection import select_highlights
from .templates import build_caption, build_explanation, build_headline

logger = logging.getLogger(__name__)

DEFAULT_COVER_IMAGE = "images/cover.jpg"
CLOSING_HEADLINE = "Full Time"

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _SLUG_STRIP.sub("-", text.lower()).strip("-") or "team"


def build_story_id(home_name: str, away_name: str, created_at: datetime) -> str:
    """e.g. ``celtic-vs-kilmarnock-2026-10-19``"""
    return f"{slugify(home_name)}-vs-{slugify(away_name)}-{created_at.date().isoformat()}"


def _clamp_minute(minute: int) -> int:
    return min(max(minute, 0), MAX_HIGHLIGHT_MINUTE)


def build_highlight_page(scored: ScoredEvent, roster: RosterIndex) -> HighlightPage:
    event = scored.event
    headline = build_headline(event, roster)
    caption = build_caption(event, headline)

    if not headline.strip() or not caption.strip():
        raise AssemblyError(
            f"Event {event.id!r} ({event.type!r}) rendered an empty "
            f"{'headline' if not headline.strip() else 'caption'}"
        )

    return HighlightPage(
        minute=_clamp_minute(event_minute(event)),
        headline=headline,
        caption=caption,
        explanation=build_explanation(scored.breakdown),
    )


def _closing_body(goals: int, highlights: int) -> str:
    goal_word = "goal" if goals == 1 else "goals"
    moment_word = "highlight" if highlights == 1 else "highlights"
    return (
        f"{goals} {goal_word} across {highlights} {moment_word}. "
        f"Moments ranked by newsworthiness score and shown in match order."
    )


def assemble_story_pack(
    scored_events: Sequence[ScoredEvent],
    highlight_count: int,
    roster: RosterIndex,
    home_name: str = "Home",
    away_name: str = "Away",
    source: str = "match_events.json",
    cover_image: str = DEFAULT_COVER_IMAGE,
    created_at: datetime | None = None,
) -> StoryPack:
    """Build a StoryPack from the full list of scored events.

    Args:
        scored_events: One ScoredEvent per feed event, any order
        highlight_count: Target number of highlight pages (N)
        roster: Participant lookup for headline names
        home_name / away_name: Team display names for title and id
        source: Provenance reference for the pack
        cover_image: Image reference for the cover page
        created_at: Creation timestamp, default now (UTC)

    Returns:
        StoryPack with cover + N highlight pages + info page

    Raises:
        AssemblyError: if a selected event cannot render its page
    """
    created_at = created_at or now_utc()
    selection = select_highlights(scored_events, highlight_count)

    highlight_pages = [build_highlight_page(s, roster) for s in selection.highlights]
    goals = sum(1 for s in selection.highlights if is_goal_event(s.event))
    highlights = len(highlight_pages)

    title = f"{home_name} vs {away_name}"
    cover = CoverPage(
        headline=title,
        subheadline=f"{highlights} key moments" if highlights != 1 else "1 key moment",
        image=cover_image,
    )
    closing = InfoPage(headline=CLOSING_HEADLINE, body=_closing_body(goals, highlights))

    pack = StoryPack(
        story_id=build_story_id(home_name, away_name, created_at),
        title=title,
        pages=[cover, *highlight_pages, closing],
        metrics=StoryMetrics(goals=goals, highlights=highlights),
        source=source,
        created_at=created_at,
    )

    logger.info(
        "story_pack_assembled",
        extra={
            "story_id": pack.story_id,
            "pages": len(pack.pages),
            "goals": goals,
            "highlights": highlights,
        },
    )
    return pack
