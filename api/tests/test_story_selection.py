"""Tests for highlight selection and ordering."""

from __future__ import annotations

from storypack.services.match_feed import GameEvent, LineupEvent, MatchEvent
from storypack.services.scoring import ScoreBreakdown, ScoredEvent
from storypack.services.story import order_chronologically, rank_by_score, select_highlights


def game(eid: str, minute: int, event_type: str = "miss") -> GameEvent:
    return GameEvent(
        id=eid, type=event_type, comment=eid, timestamp="", minute=str(minute),
        period="1", second="0", time="",
    )


def scored(event: MatchEvent, score: float) -> ScoredEvent:
    return ScoredEvent(event=event, breakdown=ScoreBreakdown(base=score, final_score=score))


def ids(items: list[ScoredEvent]) -> list[str]:
    return [s.event.id for s in items]


class TestRankByScore:
    def test_descending(self) -> None:
        items = [scored(game("a", 1), 10), scored(game("b", 2), 30), scored(game("c", 3), 20)]
        assert ids(rank_by_score(items)) == ["b", "c", "a"]

    def test_ties_keep_original_order(self) -> None:
        items = [scored(game("a", 1), 10), scored(game("b", 2), 50), scored(game("c", 3), 10)]
        assert ids(rank_by_score(items)) == ["b", "a", "c"]


class TestSelectHighlights:
    def test_top_n_reordered_by_minute(self) -> None:
        items = [
            scored(game("m90", 90), 300),
            scored(game("m12", 12), 200),
            scored(game("m45", 45), 100),
            scored(game("m60", 60), 5),
        ]
        result = select_highlights(items, 3)
        # Chosen by score as [90, 12, 45]; shown as [12, 45, 90]
        assert ids(result.highlights) == ["m12", "m45", "m90"]
        assert result.min_selected_score == 100
        assert result.max_rejected_score == 5

    def test_lineup_events_never_selected(self) -> None:
        lineup = LineupEvent(id="lineup", type="lineup", comment="Teams", timestamp="")
        items = [scored(lineup, 1000), scored(game("a", 10), 1)]
        result = select_highlights(items, 5)
        assert ids(result.highlights) == ["a"]
        assert result.excluded_metadata == 1
        assert result.eligible_events == 1

    def test_fewer_events_than_requested(self) -> None:
        result = select_highlights([scored(game("a", 10), 1)], 10)
        assert len(result.highlights) == 1

    def test_zero_and_negative_count(self) -> None:
        items = [scored(game("a", 10), 1)]
        assert select_highlights(items, 0).highlights == []
        assert select_highlights(items, -3).highlights == []

    def test_empty_input(self) -> None:
        result = select_highlights([], 10)
        assert result.highlights == []
        assert result.to_dict()["selected"] == 0

    def test_equal_scores_at_cutoff_prefer_earlier_input(self) -> None:
        items = [scored(game("first", 70), 10), scored(game("second", 20), 10)]
        assert ids(select_highlights(items, 1).highlights) == ["first"]

    def test_inputs_not_mutated(self) -> None:
        items = [scored(game("b", 20), 1), scored(game("a", 10), 2)]
        before = list(items)
        select_highlights(items, 2)
        assert items == before


def test_order_chronologically_is_stable() -> None:
    items = [scored(game("x", 30), 1), scored(game("y", 30), 2), scored(game("z", 5), 3)]
    assert ids(order_chronologically(items)) == ["z", "x", "y"]
