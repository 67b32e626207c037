"""
Learn page parser.

Reads the vocabulary summary table, the blacklist/due/new sentences and
the deck list from jpdb's ``/learn`` page.  The parser is tied to the
page as it is rendered today:

* the first ``<table>`` holds rows of four cells: a label followed by
  the total, learning and known counts;
* the blacklist count is the number opening the sentence
  "You currently have N blacklisted ...";
* due and new card counts are the emphasised numbers inside the
  sentence starting with "You have ";
* the deck count is the number of children of ``.deck-list`` plus the
  number in a "N more decks..." link when the list is truncated.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional, Union

from bs4 import BeautifulSoup

from ..dates import to_absolute_timestamp
from .schema import LearnSnapshot, WordCounts
from .text import (
    ParseError,
    as_soup,
    child_elements,
    element_text,
    parse_leading_int,
)

logger = logging.getLogger(__name__)

DIRECT_WORDS_LABEL = "Words (direct)"
BLACKLIST_PREFIX = "You currently have "
DUE_NEW_PREFIX = "You have "
MORE_DECKS_SUFFIX = " more decks..."


def _parse_word_table(soup: BeautifulSoup) -> Dict[str, WordCounts]:
    table = soup.find("table")
    if table is None:
        raise ParseError("learn page has no vocabulary table")
    cells = [element_text(td) for td in table.find_all("td")]
    if len(cells) % 4 != 0:
        raise ParseError(f"vocabulary table has {len(cells)} cells, expected groups of 4")
    counts: Dict[str, WordCounts] = {}
    for i in range(0, len(cells), 4):
        label = cells[i]
        key = "direct_words" if label == DIRECT_WORDS_LABEL else "indirect_words"
        counts[key] = WordCounts(
            total=parse_leading_int(cells[i + 1]),
            learning=parse_leading_int(cells[i + 2]),
            you_know=parse_leading_int(cells[i + 3]),
        )
    return counts


def _parse_due_and_new(paragraph, text: str) -> Dict[str, Optional[int]]:
    strongs = paragraph.select(".strong, strong")
    due = new = None
    if len(strongs) >= 2:
        due, new = strongs[0], strongs[1]
    elif strongs and "new vocabulary" in text:
        new = strongs[0]
    elif strongs and "overdue vocabulary" in text:
        due = strongs[0]
    found: Dict[str, Optional[int]] = {}
    if due is not None:
        found["due_vocabulary_cards"] = parse_leading_int(element_text(due))
    if new is not None:
        found["new_vocabulary_cards"] = parse_leading_int(element_text(new))
    return found


def _count_decks(soup: BeautifulSoup) -> int:
    deck_list = soup.select_one(".deck-list")
    decks = len(child_elements(deck_list)) if deck_list is not None else 0
    for link in soup.find_all("a"):
        if link.get("class") != ["button-link"]:
            continue
        text = link.get_text()
        if text.endswith(MORE_DECKS_SUFFIX):
            decks += parse_leading_int(text) or 0
            break
    return decks


def parse_learn(html: Union[str, bytes, BeautifulSoup], now: datetime) -> LearnSnapshot:
    """Parse the ``/learn`` page into a ``LearnSnapshot``.

    Args:
        html: Page HTML or an already parsed document.
        now: Capture time, written as the snapshot timestamp.
    """
    soup = as_soup(html)
    fields: Dict[str, object] = dict(_parse_word_table(soup))
    fields.update(blacklisted=0, due_vocabulary_cards=0, new_vocabulary_cards=0)

    for paragraph in soup.find_all("p"):
        text = element_text(paragraph)
        if text.startswith(BLACKLIST_PREFIX):
            fields["blacklisted"] = parse_leading_int(text[len(BLACKLIST_PREFIX):])
        elif text.startswith(DUE_NEW_PREFIX):
            fields.update(_parse_due_and_new(paragraph, text))

    fields["decks"] = _count_decks(soup)
    snapshot = LearnSnapshot(time=to_absolute_timestamp(now), **fields)
    logger.debug("Parsed learn page: %s", snapshot)
    return snapshot
