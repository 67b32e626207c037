"""
Leaderboard page parser.

The ``/leaderboard`` page shows two rankings side by side: new cards
learned and old cards retained.  Each ``.ranking-entry`` is laid out
as two rows::

    <div class="ranking-entry">
      <div><div><span>#3</span><a>nickname</a></div></div>
      <div><span>This is you!</span><span>120</span></div>
    </div>

The first row carries the rank only when it has two children; entries
without a visible rank have just the nickname.
"""

from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, Tag

from .schema import LeaderboardSnapshot, RankingEntry
from .text import (
    as_soup,
    child_elements,
    element_text,
    nth_child,
    parse_leading_int,
    verify_equals,
)

CURRENT_USER_MARKER = "This is you!"


def _parse_entry(entry: Tag) -> RankingEntry:
    first_row = nth_child(nth_child(entry, 0, "ranking entry"), 0, "ranking entry header")
    cells = child_elements(first_row)
    rank = None
    index = 0
    if len(cells) == 2:
        rank = parse_leading_int(element_text(cells[0]).lstrip("#"))
        index = 1
    nickname = element_text(nth_child(first_row, index, "ranking entry header"))

    second_row = nth_child(entry, 1, "ranking entry")
    marker = nth_child(second_row, 0, "ranking entry score")
    cards = nth_child(second_row, 1, "ranking entry score")
    return RankingEntry(
        rank=rank,
        nickname=nickname,
        is_current_user=element_text(marker) == CURRENT_USER_MARKER,
        cards=parse_leading_int(element_text(cards)),
    )


def parse_ranking(ranking: Tag) -> List[RankingEntry]:
    return [_parse_entry(entry) for entry in ranking.find_all(class_="ranking-entry")]


def parse_leaderboard(html: Union[str, bytes, BeautifulSoup]) -> LeaderboardSnapshot:
    """Parse the ``/leaderboard`` page into a ``LeaderboardSnapshot``."""
    soup = as_soup(html)
    rankings = soup.find_all(class_="ranking")
    verify_equals(2, len(rankings), "rankings")
    return LeaderboardSnapshot(
        new_cards_ranking=tuple(parse_ranking(rankings[0])),
        old_cards_retained_ranking=tuple(parse_ranking(rankings[1])),
    )
