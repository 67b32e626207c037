"""Shared page fixtures.

The HTML below mirrors the parts of the jpdb pages the parsers read;
everything else on the real pages is left out.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest  # type: ignore

TZ = timezone(timedelta(hours=9))

LEARN_HTML = """
<html><body>
<table>
  <tr><th></th><th>Total</th><th>Learning</th><th>Known</th></tr>
  <tr><td>Words&nbsp;(direct)</td><td>10</td><td>2</td><td>8</td></tr>
  <tr><td>Words&nbsp;(indirect)</td><td>5</td><td>1</td><td>4</td></tr>
</table>
<p>You currently have 3 blacklisted words.</p>
<p>You have <span class="strong">12</span> overdue vocabulary cards and
   <span class="strong">7</span> new vocabulary cards waiting.</p>
<div class="deck-list"><div>Deck A</div><div>Deck B</div></div>
<a class="button-link" href="/learn?all">4 more decks...</a>
</body></html>
"""

STATS_HTML = """
<html><body>
<p>Current streak: 15 days</p>
<p>You're currently 42nd on the leaderboard.</p>
<table class="cross-table">
  <tr><th>Learning</th><td>85%</td></tr>
  <tr><th>Known</th><td>93% (Good)</td></tr>
</table>
<canvas id="chart"></canvas>
<canvas id="chart2"></canvas>
<script>
new Chart(document.getElementById('chart'), {
  type: 'bar',
  data: {
    labels: ["Today", "Yesterday"],
    datasets: [
      {label: 'New cards', data: [5, 7], backgroundColor: 'rgba(0, 0, 0, 0.5)'},
      {label: 'Old cards (failed)', data: [1, 0]},
      {label: 'Old cards (passed)', data: [20, 31]},
    ]
  },
  options: {plugins: {legend: {display: true}}}
});
const ctx2 = document.getElementById('chart2');
new Chart(ctx2, {type: 'bar', data: {labels: ['1', '2', '3'], datasets: [{label: 'Cards', data: [100, 50, null]}]}});
</script>
</body></html>
"""


def ranking_entry(nickname: str, cards: int, rank: int | None = None, me: bool = False) -> str:
    rank_html = f"<span>#{rank}</span>" if rank is not None else ""
    marker = "This is you!" if me else ""
    return (
        '<div class="ranking-entry">'
        f"<div><div>{rank_html}<a>{nickname}</a></div></div>"
        f"<div><span>{marker}</span><span>{cards}</span></div>"
        "</div>"
    )


def leaderboard_page(*rankings: str) -> str:
    body = "".join(f'<div class="ranking">{r}</div>' for r in rankings)
    return f"<html><body>{body}</body></html>"


LEADERBOARD_HTML = leaderboard_page(
    ranking_entry("alice", 300, rank=1) + ranking_entry("me", 120, rank=2, me=True),
    ranking_entry("bob", 900, rank=1) + ranking_entry("me", 450, me=True),
)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 3, 10, 21, 7, 9, 123000, tzinfo=TZ)


@pytest.fixture
def pages() -> dict[str, str]:
    return {
        "/learn": LEARN_HTML,
        "/leaderboard": LEADERBOARD_HTML,
        "/stats": STATS_HTML,
    }


@pytest.fixture
def learn_html() -> str:
    return LEARN_HTML


@pytest.fixture
def stats_html() -> str:
    return STATS_HTML


@pytest.fixture
def leaderboard_html() -> str:
    return LEADERBOARD_HTML
