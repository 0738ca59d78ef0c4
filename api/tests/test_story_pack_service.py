"""Tests for the end-to-end story pack service."""

from __future__ import annotations

import json
import logging

import pytest

from storypack.errors import ConfigurationMissingError, FeedLoadError
from storypack.services.scoring import ScoringConfig
from storypack.services.story import validate_story_pack
from storypack.services.story_pack_service import StoryPackService


@pytest.fixture
def service(match_feed, squad_feed, weights) -> StoryPackService:
    svc = StoryPackService(match_feed, squad_feed)
    svc.configure(ScoringConfig.from_dict(weights))
    return svc


class TestConfiguration:
    def test_roster_indexed_on_construction(self, match_feed, squad_feed) -> None:
        assert len(StoryPackService(match_feed, squad_feed).roster) == 8

    def test_ranking_without_config_raises(self, match_feed, squad_feed) -> None:
        svc = StoryPackService(match_feed, squad_feed)
        events = svc.extract_match_event_data()
        with pytest.raises(ConfigurationMissingError):
            svc.rank_match_event_data(events)

    def test_load_configuration_from_file(self, match_feed, squad_feed, weights, tmp_path) -> None:
        path = tmp_path / "weights.json"
        path.write_text(json.dumps(weights), encoding="utf-8")
        svc = StoryPackService(match_feed, squad_feed)
        config = svc.load_configuration(path)
        assert config.base_score("post") == 10
        assert svc.scoring_config is config

    def test_load_configuration_bundled(self, match_feed, squad_feed) -> None:
        svc = StoryPackService(match_feed, squad_feed)
        assert svc.load_configuration().base_score("goal") == 100

    def test_missing_weights_file(self, match_feed, squad_feed, tmp_path) -> None:
        svc = StoryPackService(match_feed, squad_feed)
        with pytest.raises(FeedLoadError):
            svc.load_configuration(tmp_path / "nope.json")


class TestPipeline:
    def test_rank_orders_by_final_score(self, service) -> None:
        ranked = service.rank_match_event_data(service.extract_match_event_data())
        scores = [s.final_score for s in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0].event.id == "e8"

    def test_score_keeps_feed_order(self, service) -> None:
        events = service.extract_match_event_data()
        assert [s.event for s in service.score_match_event_data(events)] == events

    def test_build(self, service) -> None:
        pack = service.build(3)
        assert pack.title == "Celtic vs Kilmarnock"
        assert [p.minute for p in pack.highlight_pages] == [43, 60, 85]

    def test_build_uses_default_count(self, service) -> None:
        # HIGHLIGHT_COUNT defaults to 10; only 8 events are eligible
        assert service.build().metrics.highlights == 8

    def test_output_writes_valid_json(self, service, tmp_path) -> None:
        pack = service.build(3)
        path = service.output_story_pack(pack, tmp_path / "out" / "story.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert validate_story_pack(data) == pack

    def test_top_picks_logged(self, service, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="storypack.services.story_pack_service"):
            service.build(2)
        picks = [r for r in caplog.records if r.getMessage() == "top_pick"]
        assert [r.rank for r in picks] == [1, 2]
        assert "Equalizer(x1.4)" in picks[0].multipliers
