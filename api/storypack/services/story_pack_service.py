"""
Story Pack Service.

Runs a match through the full chain:

1. EXTRACT - flatten feed message blocks, sort by timestamp
2. RANK    - score every event, order by final score
3. CREATE  - select top N highlights, build the story pack
4. OUTPUT  - write the story pack JSON

Usage:
    service = StoryPackService(match_feed, squad_feed)
    service.load_configuration()
    pack = service.build(highlight_count=10)
    service.output_story_pack(pack)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..config import settings
from ..errors import ConfigurationMissingError
from .file_service import dump_json, load_json
from .match_feed import (
    MatchEvent,
    extract_match_events,
    resolve_team_ids,
    resolve_team_names,
)
from .roster import RosterIndex, build_roster_index
from .scoring import ScoringConfig, ScoringEngine, ScoredEvent, load_scoring_config
from .scoring.types import AppliedWeight
from .story import StoryPack, assemble_story_pack, rank_by_score

logger = logging.getLogger(__name__)

TOP_PICKS_LOGGED = 10
COMMENT_LOG_LIMIT = 300


def _format_applied(weights: Sequence[AppliedWeight], symbol: str) -> str:
    return ", ".join(f"{w.name}({symbol}{w.value:g})" for w in weights)


class StoryPackService:
    """Owns one match's feeds, roster index and scoring configuration."""

    def __init__(self, match_feed: Mapping[str, Any], squad_feed: Mapping[str, Any]) -> None:
        self._match_feed = match_feed
        self._squad_feed = squad_feed
        self._scoring_config: ScoringConfig | None = None
        self._roster: RosterIndex = build_roster_index(squad_feed)

    @property
    def roster(self) -> RosterIndex:
        return self._roster

    @property
    def scoring_config(self) -> ScoringConfig | None:
        return self._scoring_config

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, config: ScoringConfig) -> None:
        self._scoring_config = config

    def load_configuration(self, path: str | Path | None = None) -> ScoringConfig:
        """Load weights from ``path``, WEIGHTS_PATH, or the bundled file."""
        resolved = path or settings.weights_path
        raw = load_json(resolved) if resolved else None
        self._scoring_config = load_scoring_config(raw)
        return self._scoring_config

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def extract_match_event_data(self) -> list[MatchEvent]:
        return extract_match_events(self._match_feed)

    def score_match_event_data(self, events: Sequence[MatchEvent]) -> list[ScoredEvent]:
        """Score events in feed order (one ScoredEvent per event)."""
        if self._scoring_config is None:
            raise ConfigurationMissingError()
        home_id, away_id = resolve_team_ids(self._match_feed)
        engine = ScoringEngine(self._scoring_config, self._roster)
        return engine.score_events(events, home_id, away_id)

    def rank_match_event_data(self, events: Sequence[MatchEvent]) -> list[ScoredEvent]:
        """Score events and order them by final score, highest first."""
        return rank_by_score(self.score_match_event_data(events))

    def create_story_pack(
        self,
        ranked_events: Sequence[ScoredEvent],
        highlight_count: int,
    ) -> StoryPack:
        home_name, away_name = resolve_team_names(self._match_feed)
        self.log_top_picks(ranked_events, min(highlight_count, TOP_PICKS_LOGGED))
        return assemble_story_pack(
            ranked_events,
            highlight_count,
            self._roster,
            home_name=home_name,
            away_name=away_name,
            source=settings.story_source,
            cover_image=settings.cover_image,
        )

    def output_story_pack(self, pack: StoryPack, path: str | Path | None = None) -> Path:
        return dump_json(path or settings.story_output_path, pack.to_json_dict())

    def build(self, highlight_count: int | None = None) -> StoryPack:
        """Extract, rank and assemble in one call."""
        count = settings.highlight_count if highlight_count is None else highlight_count
        events = self.extract_match_event_data()
        ranked = self.rank_match_event_data(events)
        return self.create_story_pack(ranked, count)

    # ------------------------------------------------------------------
    # Debug output
    # ------------------------------------------------------------------

    def log_top_picks(self, ranked_events: Sequence[ScoredEvent], count: int) -> None:
        for rank, scored in enumerate(ranked_events[: max(count, 0)], 1):
            comment = scored.event.comment
            if len(comment) > COMMENT_LOG_LIMIT:
                comment = comment[:COMMENT_LOG_LIMIT] + "..."
            logger.debug(
                "top_pick",
                extra={
                    "rank": rank,
                    "score": round(scored.final_score, 1),
                    "comment": comment,
                    "multipliers": _format_applied(scored.breakdown.multipliers, "x"),
                    "bonuses": _format_applied(scored.breakdown.bonuses, "+"),
                },
            )
