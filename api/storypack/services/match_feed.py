"""
Match feed normalization.

Turns the raw commentary feed (``matchInfo`` + ``messages`` blocks) into
typed, chronologically ordered events for the scoring engine.

Events form a tagged union:
- LineupEvent: team sheet metadata, no timing or participant fields
- GameEvent: everything else, with minute/period/time and optional refs

Rules that need minute, team or player data must check the variant with
``isinstance(event, GameEvent)`` first. Helpers in this module do that
so rule code has one place to get a minute or a player reference.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from ..utils.datetime_utils import parse_feed_timestamp

logger = logging.getLogger(__name__)


class MatchEventType(str, Enum):
    """Event type tags used by the commentary feed."""

    MATCH_END = "end 14"
    SECOND_HALF_END = "end 2"
    FIRST_HALF_END = "end 1"
    START = "start"
    LINEUP = "lineup"
    GOAL = "goal"
    PENALTY_GOAL = "penalty goal"
    PENALTY_WON = "penalty won"
    PENALTY_LOST = "penalty lost"  # conceded
    MISS = "miss"  # shot off target
    POST = "post"
    ATTEMPT_SAVED = "attempt saved"
    ATTEMPT_BLOCKED = "attempt blocked"
    CORNER = "corner"
    OFFSIDE = "offside"
    FREE_KICK_WON = "free kick won"
    FREE_KICK_LOST = "free kick lost"  # foul committed
    YELLOW_CARD = "yellow card"
    RED_CARD = "red card"
    SUBSTITUTION = "substitution"
    ADDED_TIME = "added time"
    START_DELAY = "start delay"
    END_DELAY = "end delay"


GOAL_FAMILY: frozenset[str] = frozenset(
    {MatchEventType.GOAL.value, MatchEventType.PENALTY_GOAL.value}
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Unparseable timestamps sort ahead of everything else
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class LineupEvent:
    """Team-sheet entry. Carries no minute, team or player fields."""

    id: str
    type: str
    comment: str
    timestamp: str
    last_modified: str = ""


@dataclass(frozen=True)
class GameEvent:
    """An in-play commentary entry."""

    id: str
    type: str
    comment: str
    timestamp: str
    minute: str
    period: str
    second: str
    time: str
    last_modified: str = ""
    team_ref1: str | None = None
    team_ref2: str | None = None
    player_ref1: str | None = None
    player_ref2: str | None = None


MatchEvent = Union[LineupEvent, GameEvent]


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


def is_goal_event(event: MatchEvent) -> bool:
    """True for goal-family events (goal, penalty goal)."""
    return event.type in GOAL_FAMILY


def parse_minute(raw: Any) -> int:
    """Parse a feed minute as a base-10 integer.

    Only the leading digits count, so ``"45+2"`` is 45. Missing or
    non-numeric values are minute 0.
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return 0
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return int(match.group(1), 10)


def event_minute(event: MatchEvent) -> int:
    """Minute of a GameEvent; lineup events are minute 0."""
    if isinstance(event, GameEvent):
        return parse_minute(event.minute)
    return 0


def event_player_ref(event: MatchEvent) -> str | None:
    """Primary player reference, or None for lineup events."""
    if isinstance(event, GameEvent):
        return event.player_ref1 or None
    return None


def event_team_ref(event: MatchEvent) -> str | None:
    """Primary team reference, or None for lineup events."""
    if isinstance(event, GameEvent):
        return event.team_ref1 or None
    return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _text(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_ref(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None or value == "":
        return None
    return str(value)


def parse_match_event(raw: Mapping[str, Any]) -> MatchEvent:
    """Build the matching event variant from a raw feed entry.

    The ``lineup`` tag yields a LineupEvent. Every other tag, including
    ones this module does not know, yields a GameEvent so the default base
    score and the comment fallback still apply to it.
    """
    event_type = _text(raw, "type").strip().lower()

    if event_type == MatchEventType.LINEUP.value:
        return LineupEvent(
            id=_text(raw, "id"),
            type=event_type,
            comment=_text(raw, "comment"),
            timestamp=_text(raw, "timestamp"),
            last_modified=_text(raw, "lastModified"),
        )

    return GameEvent(
        id=_text(raw, "id"),
        type=event_type,
        comment=_text(raw, "comment"),
        timestamp=_text(raw, "timestamp"),
        minute=_text(raw, "minute"),
        period=_text(raw, "period"),
        second=_text(raw, "second"),
        time=_text(raw, "time"),
        last_modified=_text(raw, "lastModified"),
        team_ref1=_optional_ref(raw, "teamRef1"),
        team_ref2=_optional_ref(raw, "teamRef2"),
        player_ref1=_optional_ref(raw, "playerRef1"),
        player_ref2=_optional_ref(raw, "playerRef2"),
    )


def _timestamp_sort_key(event: MatchEvent) -> datetime:
    return parse_feed_timestamp(event.timestamp) or _EPOCH


def sort_events_chronologically(events: Sequence[MatchEvent]) -> list[MatchEvent]:
    """Sort ascending by timestamp. Stable: equal timestamps keep feed order."""
    return sorted(events, key=_timestamp_sort_key)


def extract_match_events(feed: Mapping[str, Any]) -> list[MatchEvent]:
    """Flatten every message block of a feed and sort chronologically.

    Sequence rules look at the next event, so this ordering is what
    "immediately following" means downstream.
    """
    raw_events: list[Mapping[str, Any]] = []
    for block in feed.get("messages") or []:
        raw_events.extend(block.get("message") or [])

    events = [parse_match_event(raw) for raw in raw_events]
    ordered = sort_events_chronologically(events)

    logger.info(
        "match_events_extracted",
        extra={
            "blocks": len(feed.get("messages") or []),
            "events": len(ordered),
            "lineup_events": sum(1 for e in ordered if isinstance(e, LineupEvent)),
        },
    )
    return ordered


# ---------------------------------------------------------------------------
# Match info
# ---------------------------------------------------------------------------


def _contestant(feed: Mapping[str, Any], position: str) -> Mapping[str, Any] | None:
    match_info = feed.get("matchInfo") or {}
    for contestant in match_info.get("contestant") or []:
        if contestant.get("position") == position:
            return contestant
    return None


def resolve_team_ids(feed: Mapping[str, Any]) -> tuple[str, str]:
    """Return (home_id, away_id), falling back to "home" / "away"."""
    home = _contestant(feed, "home")
    away = _contestant(feed, "away")
    home_id = (home or {}).get("id") or "home"
    away_id = (away or {}).get("id") or "away"
    return str(home_id), str(away_id)


def resolve_team_names(feed: Mapping[str, Any]) -> tuple[str, str]:
    """Return (home_name, away_name) for titles and story identifiers."""
    home = _contestant(feed, "home") or {}
    away = _contestant(feed, "away") or {}
    home_name = home.get("name") or home.get("shortName") or "Home"
    away_name = away.get("name") or away.get("shortName") or "Away"
    return str(home_name), str(away_name)
