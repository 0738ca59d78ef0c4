"""Event scoring: configurable heuristic newsworthiness scores.

Usage:
    from storypack.services.scoring import ScoringEngine, load_scoring_config

    engine = ScoringEngine(load_scoring_config(), roster)
    scored = engine.score_events(events, home_id, away_id)
"""

from __future__ import annotations

from .config import (
    BONUS_LABELS,
    HALFTIME_PUSH_WINDOW,
    MULTIPLIER_LABELS,
    ScoringConfig,
    ScoringThresholds,
    load_bundled_weights,
    load_scoring_config,
)
from .engine import ScoringEngine, compute_final_score, score_events
from .state import advance_state, new_match_state
from .types import AppliedWeight, MatchState, ScoreBreakdown, ScoredEvent

__all__ = [
    # Configuration
    "BONUS_LABELS",
    "HALFTIME_PUSH_WINDOW",
    "MULTIPLIER_LABELS",
    "ScoringConfig",
    "ScoringThresholds",
    "load_bundled_weights",
    "load_scoring_config",
    # Engine
    "ScoringEngine",
    "compute_final_score",
    "score_events",
    # State
    "advance_state",
    "new_match_state",
    # Types
    "AppliedWeight",
    "MatchState",
    "ScoreBreakdown",
    "ScoredEvent",
]
