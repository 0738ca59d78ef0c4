"""
Scoring rules.

Pure predicates grouped in three families. None of them mutate state;
the engine reads the state as it stood *before* the event being scored.

CONTEXT (match state + minute):
- late game, halftime push
- tie breaker / equalizer / garbage time (cascade, at most one fires)

NARRATIVE (the participant involved):
- defender goal, keeper drama, super sub

SEQUENCE (current event + the next one in chronological order):
- assist sequence, disallowed goal

Plus the text safety net: a comment mentioning "red card".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..match_feed import MatchEvent, MatchEventType, is_goal_event
from ..roster import Participant, Position
from .config import HALFTIME_PUSH_WINDOW, ScoringConfig
from .types import MatchState

RuleKind = Literal["multiplier", "bonus"]

RED_CARD_TEXT = "red card"


@dataclass(frozen=True)
class RuleHit:
    """A rule that fired, named by its config key."""

    kind: RuleKind
    key: str


# ---------------------------------------------------------------------------
# Context rules
# ---------------------------------------------------------------------------


def is_late_game(minute: int, config: ScoringConfig) -> bool:
    return minute >= config.thresholds.late_game_minute


def is_halftime_push(minute: int) -> bool:
    start, end = HALFTIME_PUSH_WINDOW
    return start <= minute <= end


def is_tie_breaker(event: MatchEvent, state: MatchState) -> bool:
    """A goal scored while level."""
    return is_goal_event(event) and state.home_score == state.away_score


def is_equalizer(event: MatchEvent, state: MatchState) -> bool:
    """A goal scored while the margin is exactly one."""
    return is_goal_event(event) and state.score_diff == 1


def is_garbage_time(state: MatchState, config: ScoringConfig) -> bool:
    return state.score_diff >= config.thresholds.garbage_time_diff


def evaluate_context_rules(
    event: MatchEvent,
    minute: int,
    state: MatchState,
    config: ScoringConfig,
) -> list[RuleHit]:
    hits: list[RuleHit] = []
    if is_late_game(minute, config):
        hits.append(RuleHit("multiplier", "lateGame"))
    if is_halftime_push(minute):
        hits.append(RuleHit("multiplier", "halftimePush"))

    if is_tie_breaker(event, state):
        hits.append(RuleHit("multiplier", "tieBreaker"))
    elif is_equalizer(event, state):
        hits.append(RuleHit("multiplier", "equalizer"))
    elif is_garbage_time(state, config):
        hits.append(RuleHit("multiplier", "garbageTime"))
    return hits


# ---------------------------------------------------------------------------
# Narrative rules
# ---------------------------------------------------------------------------


def is_defender_goal(event: MatchEvent, player: Participant | None) -> bool:
    return (
        event.type == MatchEventType.GOAL.value
        and player is not None
        and player.position == Position.DEFENDER
    )


def is_keeper_drama(event: MatchEvent, player: Participant | None) -> bool:
    return (
        player is not None
        and player.position == Position.GOALKEEPER
        and event.type in (MatchEventType.YELLOW_CARD.value, MatchEventType.PENALTY_WON.value)
    )


def is_super_sub(
    event: MatchEvent,
    minute: int,
    player: Participant | None,
    state: MatchState,
    config: ScoringConfig,
) -> bool:
    """Goal or penalty won by someone who came on within the window.

    The scorer must be in the roster and have a recorded substitution
    entry; anyone else never qualifies.
    """
    if player is None:
        return False
    if event.type not in (MatchEventType.GOAL.value, MatchEventType.PENALTY_WON.value):
        return False
    entered = state.substitutions.get(player.id)
    if entered is None:
        return False
    return minute - entered <= config.thresholds.super_sub_minutes


def evaluate_narrative_rules(
    event: MatchEvent,
    minute: int,
    player: Participant | None,
    state: MatchState,
    config: ScoringConfig,
) -> list[RuleHit]:
    hits: list[RuleHit] = []
    if is_defender_goal(event, player):
        hits.append(RuleHit("bonus", "defenderGoal"))
    if is_keeper_drama(event, player):
        hits.append(RuleHit("bonus", "keeperDrama"))
    if is_super_sub(event, minute, player, state, config):
        hits.append(RuleHit("multiplier", "superSub"))
    return hits


# ---------------------------------------------------------------------------
# Sequence rules
# ---------------------------------------------------------------------------


def is_assist_sequence(current: MatchEvent, next_event: MatchEvent | None) -> bool:
    """Corner or free kick won, immediately followed by a goal."""
    if next_event is None:
        return False
    is_setup = current.type in (
        MatchEventType.CORNER.value,
        MatchEventType.FREE_KICK_WON.value,
    )
    return is_setup and next_event.type == MatchEventType.GOAL.value


def is_disallowed_goal(current: MatchEvent, next_event: MatchEvent | None) -> bool:
    """A goal immediately followed by an offside call."""
    if next_event is None:
        return False
    return (
        current.type == MatchEventType.GOAL.value
        and next_event.type == MatchEventType.OFFSIDE.value
    )


def evaluate_sequence_rules(current: MatchEvent, next_event: MatchEvent | None) -> list[RuleHit]:
    hits: list[RuleHit] = []
    if is_assist_sequence(current, next_event):
        hits.append(RuleHit("bonus", "assistSequence"))
    if is_disallowed_goal(current, next_event):
        hits.append(RuleHit("multiplier", "disallowedGoal"))
    return hits


# ---------------------------------------------------------------------------
# Text safety net
# ---------------------------------------------------------------------------


def mentions_red_card(event: MatchEvent) -> bool:
    """Comment mentions a red card, whatever the declared type."""
    return bool(event.comment) and RED_CARD_TEXT in event.comment.lower()


def evaluate_text_rules(event: MatchEvent) -> list[RuleHit]:
    if mentions_red_card(event):
        return [RuleHit("bonus", "redCardText")]
    return []
