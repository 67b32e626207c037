"""Tests for the leaderboard page parser."""

from __future__ import annotations

import pytest  # type: ignore

from jpdbstats.errors import ParseError
from jpdbstats.parse.leaderboard import parse_leaderboard
from jpdbstats.parse.schema import RankingEntry


def _entry(nickname: str, cards: int, rank: int | None = None, me: bool = False) -> str:
    rank_html = f"<span>{rank}</span>" if rank is not None else ""
    marker = "This is you!" if me else ""
    return (
        '<div class="ranking-entry">'
        f"<div><div>{rank_html}<a>{nickname}</a></div></div>"
        f"<div><span>{marker}</span><span>{cards}</span></div>"
        "</div>"
    )


def _page(count: int, entries: str = "") -> str:
    return "<html><body>" + f'<div class="ranking">{entries}</div>' * count + "</body></html>"


def test_two_rankings(leaderboard_html: str) -> None:
    snapshot = parse_leaderboard(leaderboard_html)
    assert snapshot.new_cards_ranking == (
        RankingEntry(rank=1, nickname="alice", is_current_user=False, cards=300),
        RankingEntry(rank=2, nickname="me", is_current_user=True, cards=120),
    )
    assert snapshot.old_cards_retained_ranking == (
        RankingEntry(rank=1, nickname="bob", is_current_user=False, cards=900),
        RankingEntry(rank=None, nickname="me", is_current_user=True, cards=450),
    )


def test_to_dict_keys(leaderboard_html: str) -> None:
    data = parse_leaderboard(leaderboard_html).to_dict()
    assert set(data) == {"newCardsRanking", "oldCardsRetainedRanking"}
    assert data["newCardsRanking"][1] == {"rank": 2, "nickname": "me", "isCurrentUser": True, "cards": 120}


def test_empty_rankings() -> None:
    snapshot = parse_leaderboard(_page(2))
    assert snapshot.new_cards_ranking == ()
    assert snapshot.old_cards_retained_ranking == ()


def test_rank_present_only_with_two_cells() -> None:
    snapshot = parse_leaderboard(_page(2, _entry("x", 5, rank=7) + _entry("y", 4)))
    assert [e.rank for e in snapshot.new_cards_ranking] == [7, None]
    assert [e.nickname for e in snapshot.new_cards_ranking] == ["x", "y"]


@pytest.mark.parametrize("count", [0, 1, 3])
def test_wrong_ranking_count_raises(count: int) -> None:
    with pytest.raises(ParseError, match="rankings"):
        parse_leaderboard(_page(count))


def test_entry_without_score_row_raises() -> None:
    entries = '<div class="ranking-entry"><div><div><a>solo</a></div></div></div>'
    with pytest.raises(ParseError):
        parse_leaderboard(_page(2, entries))
