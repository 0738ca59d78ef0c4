"""Scoring data types.

- MatchState: running score and substitution entry minutes (engine-owned)
- AppliedWeight: one named multiplier or bonus that fired
- ScoreBreakdown: base, applied multipliers/bonuses, final score
- ScoredEvent: an event paired with its breakdown
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..match_feed import MatchEvent


@dataclass
class MatchState:
    """Replay state as of the last processed event.

    Mutated only by ``advance_state`` after an event has been scored.
    Never share one instance between scoring runs.
    """

    home_team_id: str
    away_team_id: str
    home_score: int = 0
    away_score: int = 0
    # player id -> minute they came on
    substitutions: dict[str, int] = field(default_factory=dict)

    @property
    def score_diff(self) -> int:
        return abs(self.home_score - self.away_score)


@dataclass(frozen=True)
class AppliedWeight:
    name: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class ScoreBreakdown:
    """How an event's final score was reached.

    final_score = base * product(multipliers) + sum(bonuses)
    """

    base: float
    multipliers: tuple[AppliedWeight, ...] = ()
    bonuses: tuple[AppliedWeight, ...] = ()
    final_score: float = 0.0

    @property
    def multiplier_names(self) -> list[str]:
        return [m.name for m in self.multipliers]

    @property
    def bonus_names(self) -> list[str]:
        return [b.name for b in self.bonuses]

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "multipliers": [m.to_dict() for m in self.multipliers],
            "bonuses": [b.to_dict() for b in self.bonuses],
            "final_score": self.final_score,
        }


@dataclass(frozen=True)
class ScoredEvent:
    event: MatchEvent
    breakdown: ScoreBreakdown

    @property
    def final_score(self) -> float:
        return self.breakdown.final_score
