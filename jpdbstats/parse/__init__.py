"""
Page parsers for jpdbstats.

Each parser converts one jpdb page into an immutable snapshot defined
in ``schema.py``.  Parsers are bound to the known structure of their
page: an unrecognised label, key or element count raises
``ParseError`` rather than producing a partial snapshot.
"""

from .schema import (  # noqa: F401
    LeaderboardSnapshot,
    LearnSnapshot,
    StatsSnapshot,
    merge_snapshots,
)
from .text import ParseError  # noqa: F401
from .charts import ChartData, extract_charts  # noqa: F401
from .learn import parse_learn  # noqa: F401
from .stats import parse_stats  # noqa: F401
from .leaderboard import parse_leaderboard  # noqa: F401
