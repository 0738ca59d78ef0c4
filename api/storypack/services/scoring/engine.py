"""
Scoring Engine: one forward pass over the chronologically sorted events.

For each event the engine:
1. Evaluates every rule family against the state *before* this event
   (with lookahead to the next event for sequence rules)
2. Computes final_score = base * product(multipliers) + sum(bonuses)
3. Advances the match state with this event

Because step 3 follows step 2, the goal that levels a match is scored as
an equalizer against the pre-goal margin, and the goal that breaks a tie
sees the level score it broke.

The output has exactly one ScoredEvent per input event, in input order.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...errors import ConfigurationMissingError
from ..match_feed import MatchEvent, event_minute, event_player_ref
from ..roster import Participant, RosterIndex
from .config import BONUS_LABELS, MULTIPLIER_LABELS, ScoringConfig
from .rules import (
    RuleHit,
    evaluate_context_rules,
    evaluate_narrative_rules,
    evaluate_sequence_rules,
    evaluate_text_rules,
)
from .state import advance_state, new_match_state
from .types import AppliedWeight, MatchState, ScoreBreakdown, ScoredEvent

logger = logging.getLogger(__name__)


def compute_final_score(
    base: float,
    multipliers: Sequence[AppliedWeight],
    bonuses: Sequence[AppliedWeight],
) -> float:
    """base * product(multipliers) + sum(bonuses). No rules -> base."""
    total_multiplier = math.prod((m.value for m in multipliers), start=1.0)
    total_bonus = sum((b.value for b in bonuses), 0.0)
    return base * total_multiplier + total_bonus


class ScoringEngine:
    """Drives the rule set and match state over an ordered event sequence."""

    def __init__(self, config: ScoringConfig | None, roster: RosterIndex) -> None:
        if config is None:
            raise ConfigurationMissingError()
        self._config = config
        self._roster = roster

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def score_events(
        self,
        events: Sequence[MatchEvent],
        home_team_id: str,
        away_team_id: str,
    ) -> list[ScoredEvent]:
        """Score every event in order. State is fresh for each call."""
        state = new_match_state(home_team_id, away_team_id)
        scored: list[ScoredEvent] = []

        for index, event in enumerate(events):
            next_event = events[index + 1] if index + 1 < len(events) else None
            scored.append(self.score_event(event, next_event, state))
            advance_state(state, event)

        logger.info(
            "scoring_complete",
            extra={
                "events": len(scored),
                "final_home_score": state.home_score,
                "final_away_score": state.away_score,
                "substitutions": len(state.substitutions),
            },
        )
        return scored

    def score_event(
        self,
        event: MatchEvent,
        next_event: MatchEvent | None,
        state: MatchState,
    ) -> ScoredEvent:
        """Score one event against a read-only view of ``state``."""
        config = self._config
        base = config.base_score(event.type)
        minute = event_minute(event)
        player_id = event_player_ref(event)
        player: Participant | None = self._roster.get(player_id) if player_id else None

        hits: list[RuleHit] = []
        hits.extend(evaluate_context_rules(event, minute, state, config))
        hits.extend(evaluate_narrative_rules(event, minute, player, state, config))
        hits.extend(evaluate_sequence_rules(event, next_event))
        hits.extend(evaluate_text_rules(event))

        multipliers: list[AppliedWeight] = []
        bonuses: list[AppliedWeight] = []
        for hit in hits:
            if hit.kind == "multiplier":
                multipliers.append(
                    AppliedWeight(MULTIPLIER_LABELS[hit.key], config.multiplier(hit.key))
                )
            else:
                bonuses.append(AppliedWeight(BONUS_LABELS[hit.key], config.bonus(hit.key)))

        breakdown = ScoreBreakdown(
            base=base,
            multipliers=tuple(multipliers),
            bonuses=tuple(bonuses),
            final_score=compute_final_score(base, multipliers, bonuses),
        )

        if hits:
            logger.debug(
                "event_scored",
                extra={
                    "event_id": event.id,
                    "event_type": event.type,
                    "minute": minute,
                    "score_before": (state.home_score, state.away_score),
                    **breakdown.to_dict(),
                },
            )

        return ScoredEvent(event=event, breakdown=breakdown)


def score_events(
    events: Sequence[MatchEvent],
    home_team_id: str,
    away_team_id: str,
    config: ScoringConfig | None,
    roster: RosterIndex,
) -> list[ScoredEvent]:
    """Functional entry point. Raises ConfigurationMissingError before any work."""
    engine = ScoringEngine(config, roster)
    return engine.score_events(events, home_team_id, away_team_id)
