"""Scoring weights: base scores, multipliers, bonuses and thresholds.

Weights are explicit constants supplied from a JSON document (the bundled
``data/weights.json`` or a file named by WEIGHTS_PATH). They are immutable
for a scoring run.

Every rule site resolves its weight through one lookup with a neutral
fallback: base -> "default" entry, multiplier -> 1.0, bonus -> 0.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from importlib import resources
from types import MappingProxyType
from typing import Any, Mapping

from ...errors import InvalidScoringConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE_KEY = "default"
NEUTRAL_MULTIPLIER = 1.0
NEUTRAL_BONUS = 0.0

# Inclusive minute band for the halftime push multiplier. Kept as a policy
# constant rather than a configurable threshold.
HALFTIME_PUSH_WINDOW: tuple[int, int] = (40, 45)


# ---------------------------------------------------------------------------
# Weight names: config key -> display label
# ---------------------------------------------------------------------------

MULTIPLIER_LABELS: dict[str, str] = {
    "lateGame": "Late Game",
    "halftimePush": "Halftime Push",
    "tieBreaker": "Tie Breaker",
    "equalizer": "Equalizer",
    "garbageTime": "Garbage Time",
    "superSub": "Super Sub",
    "disallowedGoal": "Disallowed Goal",
}

BONUS_LABELS: dict[str, str] = {
    "defenderGoal": "Defender Goal",
    "keeperDrama": "Keeper Drama",
    "assistSequence": "Assist Sequence",
    "redCardText": "Red Card Text",
}


@dataclass(frozen=True)
class ScoringThresholds:
    """Minute and score-differential cutoffs used by context rules."""

    late_game_minute: int
    super_sub_minutes: int
    garbage_time_diff: int


def _freeze(values: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable scoring weights for one run."""

    base_scores: Mapping[str, float]
    multipliers: Mapping[str, float] = field(default_factory=dict)
    bonuses: Mapping[str, float] = field(default_factory=dict)
    thresholds: ScoringThresholds = field(
        default_factory=lambda: ScoringThresholds(
            late_game_minute=80, super_sub_minutes=15, garbage_time_diff=3
        )
    )

    def __post_init__(self) -> None:
        if DEFAULT_BASE_KEY not in self.base_scores:
            raise InvalidScoringConfigError(
                f'baseScores must contain a "{DEFAULT_BASE_KEY}" entry'
            )
        object.__setattr__(self, "base_scores", _freeze(self.base_scores))
        object.__setattr__(self, "multipliers", _freeze(self.multipliers))
        object.__setattr__(self, "bonuses", _freeze(self.bonuses))

    def base_score(self, event_type: str) -> float:
        """Base score for an event type, else the "default" entry."""
        value = self.base_scores.get(event_type)
        if value is None:
            return self.base_scores[DEFAULT_BASE_KEY]
        return value

    def multiplier(self, name: str) -> float:
        """Multiplier factor by config key, neutral 1.0 when absent."""
        value = self.multipliers.get(name)
        return NEUTRAL_MULTIPLIER if value is None else value

    def bonus(self, name: str) -> float:
        """Additive bonus by config key, neutral 0 when absent."""
        value = self.bonuses.get(name)
        return NEUTRAL_BONUS if value is None else value

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ScoringConfig":
        """Build a config from the weights document shape.

        Expected keys: ``baseScores``, ``multipliers``, ``bonuses`` and
        ``thresholds`` (``lateGameMinute``, ``superSubMinutes``,
        ``garbageTimeDiff``).
        """
        if not isinstance(raw, Mapping):
            raise InvalidScoringConfigError("weights document must be a JSON object")

        base_scores = _number_map(raw, "baseScores", required=True)
        multipliers = _number_map(raw, "multipliers")
        bonuses = _number_map(raw, "bonuses")

        thresholds_raw = raw.get("thresholds")
        if not isinstance(thresholds_raw, Mapping):
            raise InvalidScoringConfigError("thresholds must be an object")
        thresholds = ScoringThresholds(
            late_game_minute=_int_field(thresholds_raw, "lateGameMinute"),
            super_sub_minutes=_int_field(thresholds_raw, "superSubMinutes"),
            garbage_time_diff=_int_field(thresholds_raw, "garbageTimeDiff"),
        )

        return cls(
            base_scores=base_scores,
            multipliers=multipliers,
            bonuses=bonuses,
            thresholds=thresholds,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseScores": dict(self.base_scores),
            "multipliers": dict(self.multipliers),
            "bonuses": dict(self.bonuses),
            "thresholds": {
                "lateGameMinute": self.thresholds.late_game_minute,
                "superSubMinutes": self.thresholds.super_sub_minutes,
                "garbageTimeDiff": self.thresholds.garbage_time_diff,
            },
        }


def _number_map(raw: Mapping[str, Any], key: str, required: bool = False) -> dict[str, float]:
    value = raw.get(key)
    if value is None and not required:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidScoringConfigError(f"{key} must be an object")
    result: dict[str, float] = {}
    for name, number in value.items():
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise InvalidScoringConfigError(f"{key}.{name} must be a number, got {number!r}")
        result[str(name)] = number
    return result


def _int_field(raw: Mapping[str, Any], key: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidScoringConfigError(f"thresholds.{key} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidScoringConfigError(f"thresholds.{key} must be a whole number, got {value!r}")
    return int(value)


def load_bundled_weights() -> dict[str, Any]:
    """Read the weights document shipped with the package."""
    text = resources.files("storypack.data").joinpath("weights.json").read_text(encoding="utf-8")
    return json.loads(text)


def load_scoring_config(raw: Mapping[str, Any] | None = None) -> ScoringConfig:
    """Build a ScoringConfig from a weights document, default: bundled weights."""
    source = "inline"
    if raw is None:
        raw = load_bundled_weights()
        source = "bundled"
    config = ScoringConfig.from_dict(raw)
    logger.info(
        "scoring_config_loaded",
        extra={
            "source": source,
            "base_scores": len(config.base_scores),
            "multipliers": len(config.multipliers),
            "bonuses": len(config.bonuses),
        },
    )
    return config
