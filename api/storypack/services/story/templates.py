"""Headline, caption and score-explanation text for highlight pages.

Headlines come from a mapping of event type to template. Types without a
template fall back to a truncated prefix of the commentary text, then to
the event type itself, so every page gets a non-empty headline.
"""

from __future__ import annotations

from typing import Callable

from ..match_feed import GameEvent, MatchEvent, MatchEventType
from ..roster import RosterIndex, display_name
from ..scoring.types import AppliedWeight, ScoreBreakdown

HEADLINE_COMMENT_LIMIT = 60
FALLBACK_HEADLINE = "MATCH MOMENT"

HeadlineTemplate = Callable[[str], str]

HEADLINE_TEMPLATES: dict[str, HeadlineTemplate] = {
    MatchEventType.GOAL.value: lambda player: f"GOAL — {player}",
    MatchEventType.PENALTY_GOAL.value: lambda player: f"PENALTY GOAL — {player}",
    MatchEventType.PENALTY_WON.value: lambda player: f"PENALTY WON — {player}",
    MatchEventType.PENALTY_LOST.value: lambda player: f"PENALTY CONCEDED — {player}",
    MatchEventType.YELLOW_CARD.value: lambda player: f"YELLOW CARD — {player}",
    MatchEventType.RED_CARD.value: lambda player: f"RED CARD — {player}",
    MatchEventType.MISS.value: lambda player: f"CHANCE MISSED — {player}",
    MatchEventType.POST.value: lambda player: f"OFF THE WOODWORK — {player}",
    MatchEventType.ATTEMPT_SAVED.value: lambda player: f"SAVED — {player}",
    MatchEventType.ATTEMPT_BLOCKED.value: lambda player: f"BLOCKED — {player}",
    MatchEventType.SUBSTITUTION.value: lambda player: f"SUBSTITUTION — {player}",
    MatchEventType.OFFSIDE.value: lambda player: f"OFFSIDE — {player}",
}


def truncate_comment(comment: str, limit: int = HEADLINE_COMMENT_LIMIT) -> str:
    """First ``limit`` characters of a comment, with an ellipsis if cut."""
    text = " ".join(comment.split())
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def headline_player_ref(event: MatchEvent) -> str | None:
    """The player a headline names: the incoming player for substitutions."""
    if not isinstance(event, GameEvent):
        return None
    if event.type == MatchEventType.SUBSTITUTION.value:
        return event.player_ref2 or event.player_ref1
    return event.player_ref1


def build_headline(event: MatchEvent, roster: RosterIndex) -> str:
    template = HEADLINE_TEMPLATES.get(event.type)
    if template is not None:
        return template(display_name(roster, headline_player_ref(event)))

    prefix = truncate_comment(event.comment)
    if prefix:
        return prefix
    if event.type:
        return event.type.upper()
    return FALLBACK_HEADLINE


def build_caption(event: MatchEvent, headline: str) -> str:
    """The full commentary line; the headline when the feed has none."""
    comment = " ".join(event.comment.split())
    return comment or headline


def _format_number(value: float) -> str:
    return f"{value:g}"


def _format_weights(weights: tuple[AppliedWeight, ...], symbol: str) -> list[str]:
    return [f"{w.name} ({symbol}{_format_number(w.value)})" for w in weights]


def build_explanation(breakdown: ScoreBreakdown) -> str:
    """Render a breakdown verbatim, e.g.

    ``Base 100 × Tie Breaker (x1.5) + Assist Sequence (+15) = 165``
    """
    parts = [f"Base {_format_number(breakdown.base)}"]
    for label in _format_weights(breakdown.multipliers, "x"):
        parts.append(f"× {label}")
    for label in _format_weights(breakdown.bonuses, "+"):
        parts.append(f"+ {label}")
    return " ".join(parts) + f" = {_format_number(breakdown.final_score)}"
