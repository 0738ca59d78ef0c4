"""Highlight selection: rank by score, then re-emit chronologically.

Two independent sort passes:
1. Rank eligible events by final score (descending, stable) and keep top N
2. Re-order the kept events by match minute (ascending) for narrative flow

Lineup events have no minute or participant and are never eligible,
whatever score they were given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..match_feed import GameEvent, event_minute
from ..scoring.types import ScoredEvent

logger = logging.getLogger(__name__)


@dataclass
class HighlightSelection:
    """Selected highlights plus the numbers behind the cut."""

    highlights: list[ScoredEvent] = field(default_factory=list)

    total_events: int = 0
    eligible_events: int = 0
    excluded_metadata: int = 0
    requested: int = 0

    min_selected_score: float = 0.0
    max_rejected_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_events": self.total_events,
            "eligible_events": self.eligible_events,
            "excluded_metadata": self.excluded_metadata,
            "requested": self.requested,
            "selected": len(self.highlights),
            "min_selected_score": round(self.min_selected_score, 3),
            "max_rejected_score": round(self.max_rejected_score, 3),
        }


def is_highlight_eligible(scored: ScoredEvent) -> bool:
    return isinstance(scored.event, GameEvent)


def rank_by_score(scored_events: Sequence[ScoredEvent]) -> list[ScoredEvent]:
    """Descending final score; equal scores keep their original order."""
    return sorted(scored_events, key=lambda s: s.final_score, reverse=True)


def order_chronologically(scored_events: Sequence[ScoredEvent]) -> list[ScoredEvent]:
    """Ascending minute; equal minutes keep their incoming order."""
    return sorted(scored_events, key=lambda s: event_minute(s.event))


def select_highlights(scored_events: Sequence[ScoredEvent], count: int) -> HighlightSelection:
    """Pick the top ``count`` eligible events, returned in minute order."""
    result = HighlightSelection()
    result.total_events = len(scored_events)
    result.requested = count

    eligible = [s for s in scored_events if is_highlight_eligible(s)]
    result.eligible_events = len(eligible)
    result.excluded_metadata = result.total_events - result.eligible_events

    ranked = rank_by_score(eligible)
    cutoff = max(count, 0)
    selected = ranked[:cutoff]
    rejected = ranked[cutoff:]

    if selected:
        result.min_selected_score = selected[-1].final_score
    if rejected:
        result.max_rejected_score = rejected[0].final_score

    result.highlights = order_chronologically(selected)

    logger.info("highlights_selected", extra=result.to_dict())
    return result
