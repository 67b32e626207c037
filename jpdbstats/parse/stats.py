"""
Stats page parser.

Reads the two charts, the retention-rate table and the streak and
leaderboard sentences from jpdb's ``/stats`` page.  Chart data comes
either from the caller (already read from live chart objects) or from
the page's inline chart scripts.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Union

from bs4 import BeautifulSoup

from ..dates import relative_day_label_to_date, to_absolute_timestamp
from .charts import ChartData, extract_charts
from .schema import DayRecord, LevelCount, StatsSnapshot
from .text import ParseError, as_soup, element_text, parse_leading_int

logger = logging.getLogger(__name__)

CARDS_PER_DAY_CHART = "chart"
CARDS_BY_LEVEL_CHART = "chart2"

DATASET_FIELDS = {
    "New cards": "new_cards",
    "Old cards (failed)": "old_cards_failed",
    "Old cards (passed)": "old_cards_passed",
}
RETENTION_RATE_FIELDS = {
    "Learning": "learning",
    "Known": "known",
}
STREAK_PREFIX = "Current streak: "
LEADERBOARD_PREFIX = "You're currently "


def normalize_dataset_label(label: str) -> str:
    try:
        return DATASET_FIELDS[label]
    except KeyError:
        raise ParseError(f'invalid dataset label "{label}"') from None


def normalize_retention_rate_key(key: str) -> str:
    try:
        return RETENTION_RATE_FIELDS[key]
    except KeyError:
        raise ParseError(f'invalid retention rate key "{key}"') from None


def _chart(charts: Mapping[str, ChartData], chart_id: str) -> ChartData:
    chart = charts.get(chart_id)
    if chart is None:
        raise ParseError(f'chart "{chart_id}" not found on stats page')
    return chart


def _value_at(data, index: int):
    return data[index] if index < len(data) else None


def parse_cards_per_day(chart: ChartData, now: datetime) -> List[DayRecord]:
    fields = [normalize_dataset_label(ds.label) for ds in chart.datasets]
    days: List[DayRecord] = []
    for i, day_name in enumerate(chart.labels):
        values = {
            field: _value_at(ds.data, i) for field, ds in zip(fields, chart.datasets)
        }
        time = to_absolute_timestamp(relative_day_label_to_date(day_name, now))
        days.append(DayRecord(time=time, **values))
    return days


def parse_cards_by_level(chart: ChartData) -> List[LevelCount]:
    if len(chart.datasets) != 1:
        raise ParseError(
            f"unexpected datasets length for Cards by Level chart: {len(chart.datasets)}"
        )
    data = chart.datasets[0].data
    return [
        LevelCount(level=parse_leading_int(str(level)), cards=_value_at(data, i))
        for i, level in enumerate(chart.labels)
    ]


def parse_retention_rate(soup: BeautifulSoup) -> Dict[str, str]:
    table = soup.select_one(".cross-table")
    if table is None:
        raise ParseError("stats page has no retention rate table")
    items = table.select("th, td")
    if len(items) % 2 != 0:
        raise ParseError(f"retention rate table has {len(items)} cells, expected pairs")
    rates: Dict[str, str] = {}
    for i in range(0, len(items), 2):
        key = normalize_retention_rate_key(element_text(items[i]))
        rates[key] = element_text(items[i + 1]).lower()
    return rates


def parse_stats(
    html: Union[str, bytes, BeautifulSoup],
    now: datetime,
    charts: Optional[Mapping[str, ChartData]] = None,
) -> StatsSnapshot:
    """Parse the ``/stats`` page into a ``StatsSnapshot``.

    Args:
        html: Page HTML or an already parsed document.
        now: Capture time; relative day labels are resolved against it.
        charts: Chart data keyed by canvas id.  Read from the page's
            scripts when omitted.
    """
    soup = as_soup(html)
    if charts is None:
        charts = extract_charts(soup)

    current_streak = None
    leaderboard = None
    for paragraph in soup.find_all("p"):
        text = element_text(paragraph)
        if text.startswith(STREAK_PREFIX):
            current_streak = parse_leading_int(text[len(STREAK_PREFIX):])
        elif text.startswith(LEADERBOARD_PREFIX):
            leaderboard = parse_leading_int(text[len(LEADERBOARD_PREFIX):])

    snapshot = StatsSnapshot(
        time=to_absolute_timestamp(now),
        current_streak=current_streak,
        leaderboard=leaderboard,
        cards_per_day=tuple(parse_cards_per_day(_chart(charts, CARDS_PER_DAY_CHART), now)),
        cards_by_level=tuple(parse_cards_by_level(_chart(charts, CARDS_BY_LEVEL_CHART))),
        retention_rate=parse_retention_rate(soup),
    )
    logger.debug(
        "Parsed stats page: %d days, %d levels", len(snapshot.cards_per_day), len(snapshot.cards_by_level)
    )
    return snapshot
