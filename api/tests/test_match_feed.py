"""Tests for match feed normalization."""

from __future__ import annotations

import pytest

from storypack.services.match_feed import (
    GameEvent,
    LineupEvent,
    MatchEventType,
    event_minute,
    event_player_ref,
    event_team_ref,
    extract_match_events,
    is_goal_event,
    parse_match_event,
    parse_minute,
    resolve_team_ids,
    resolve_team_names,
    sort_events_chronologically,
)


def _raw(event_type: str, **extra) -> dict:
    raw = {"id": "x1", "type": event_type, "comment": "c", "timestamp": "2026-10-18T15:00:00Z"}
    raw.update(extra)
    return raw


class TestParseMatchEvent:
    def test_lineup_tag_builds_lineup_event(self) -> None:
        event = parse_match_event(_raw("lineup", minute="0", teamRef1="t1"))
        assert isinstance(event, LineupEvent)
        assert not hasattr(event, "minute")
        assert not hasattr(event, "team_ref1")

    def test_game_event_carries_refs(self) -> None:
        event = parse_match_event(
            _raw(
                "goal",
                minute="43",
                period="1",
                second="12",
                time="43'",
                teamRef1="t1",
                playerRef1="p1",
                playerRef2="p2",
                lastModified="2026-10-18T15:01:00Z",
            )
        )
        assert isinstance(event, GameEvent)
        assert event.minute == "43"
        assert event.team_ref1 == "t1"
        assert event.player_ref1 == "p1"
        assert event.player_ref2 == "p2"
        assert event.team_ref2 is None
        assert event.last_modified == "2026-10-18T15:01:00Z"

    def test_unknown_type_is_kept_as_game_event(self) -> None:
        event = parse_match_event(_raw("VAR review", minute="70"))
        assert isinstance(event, GameEvent)
        assert event.type == "var review"

    def test_empty_refs_become_none(self) -> None:
        event = parse_match_event(_raw("goal", minute="10", teamRef1="", playerRef1=None))
        assert event.team_ref1 is None
        assert event.player_ref1 is None

    def test_missing_comment_is_empty_string(self) -> None:
        event = parse_match_event({"id": "x", "type": "start", "timestamp": "t"})
        assert event.comment == ""


class TestMinuteParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [("45", 45), ("045", 45), ("45+2", 45), (" 7", 7), ("", 0), ("abc", 0), (None, 0), (12, 12)],
    )
    def test_parse_minute(self, raw, expected) -> None:
        assert parse_minute(raw) == expected

    def test_lineup_event_is_minute_zero(self) -> None:
        assert event_minute(parse_match_event(_raw("lineup"))) == 0

    def test_lineup_event_has_no_refs(self) -> None:
        event = parse_match_event(_raw("lineup"))
        assert event_player_ref(event) is None
        assert event_team_ref(event) is None


class TestGoalFamily:
    def test_goal_and_penalty_goal(self) -> None:
        assert is_goal_event(parse_match_event(_raw("goal", minute="1")))
        assert is_goal_event(parse_match_event(_raw("penalty goal", minute="1")))

    def test_penalty_won_is_not_a_goal(self) -> None:
        assert not is_goal_event(parse_match_event(_raw(MatchEventType.PENALTY_WON.value, minute="1")))


class TestExtractMatchEvents:
    def test_flattens_blocks_and_sorts_by_timestamp(self, match_feed) -> None:
        events = extract_match_events(match_feed)
        assert [e.id for e in events] == ["e1", "e2", "e3", "e4", "e5", "e6", "e7", "e8", "e9"]

    def test_equal_timestamps_keep_feed_order(self) -> None:
        ts = "2026-10-18T15:00:00Z"
        events = [
            parse_match_event({"id": "b", "type": "corner", "timestamp": ts, "minute": "5"}),
            parse_match_event({"id": "a", "type": "goal", "timestamp": ts, "minute": "5"}),
        ]
        assert [e.id for e in sort_events_chronologically(events)] == ["b", "a"]

    def test_mixed_offsets_compare_as_instants(self) -> None:
        events = [
            parse_match_event({"id": "later", "type": "miss", "timestamp": "2026-10-18T16:30:00+01:00"}),
            parse_match_event({"id": "earlier", "type": "miss", "timestamp": "2026-10-18T15:10:00Z"}),
        ]
        assert [e.id for e in sort_events_chronologically(events)] == ["earlier", "later"]

    def test_empty_feed(self) -> None:
        assert extract_match_events({"messages": []}) == []
        assert extract_match_events({}) == []


class TestMatchInfo:
    def test_team_ids(self, match_feed) -> None:
        assert resolve_team_ids(match_feed) == ("t-home", "t-away")

    def test_team_ids_fallback(self) -> None:
        assert resolve_team_ids({}) == ("home", "away")

    def test_team_names(self, match_feed) -> None:
        assert resolve_team_names(match_feed) == ("Celtic", "Kilmarnock")

    def test_team_names_fallback(self) -> None:
        assert resolve_team_names({"matchInfo": {"contestant": []}}) == ("Home", "Away")
