"""Match state transitions.

Applied once per event, after that event has been scored. Transitions
only move forward; nothing is ever rolled back.
"""

from __future__ import annotations

import logging

from ..match_feed import (
    GameEvent,
    MatchEvent,
    MatchEventType,
    event_minute,
    event_team_ref,
    is_goal_event,
)
from .types import MatchState

logger = logging.getLogger(__name__)


def new_match_state(home_team_id: str, away_team_id: str) -> MatchState:
    """Fresh 0-0 state with no substitutions recorded."""
    return MatchState(home_team_id=home_team_id, away_team_id=away_team_id)


def advance_state(state: MatchState, event: MatchEvent) -> None:
    """Fold one event into the running state.

    - goal / penalty goal: credit the team named by ``team_ref1`` when it
      matches the home or away id; anything else changes nothing
    - substitution: record the incoming player's (``player_ref2``) minute
    """
    if not isinstance(event, GameEvent):
        return

    if is_goal_event(event):
        team = event_team_ref(event)
        if team and team == state.home_team_id:
            state.home_score += 1
        elif team and team == state.away_team_id:
            state.away_score += 1
        else:
            logger.debug(
                "goal_without_known_team",
                extra={"event_id": event.id, "team_ref": team},
            )

    if event.type == MatchEventType.SUBSTITUTION.value and event.player_ref2:
        state.substitutions[event.player_ref2] = event_minute(event)
