"""
Date helpers for snapshot timestamps.

All timestamps written to the stats file use the local wall clock with
an explicit offset, e.g. ``2024-03-05T21:07:09+09:00``.  The stats page
labels its per-day chart with relative names ("Today", "3 days ago"),
which are resolved against the moment the capture started.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from .errors import ParseError

RELATIVE_DAY_LABELS = (
    "Today",
    "Yesterday",
    "2 days ago",
    "3 days ago",
    "4 days ago",
    "5 days ago",
    "6 days ago",
    "7 days ago",
)


def local_now() -> datetime:
    """Current local time, naive.

    Naive datetimes stand for the local zone throughout: each one is
    rendered with the offset the zone has at that instant.
    """
    return datetime.now()


def to_absolute_timestamp(dt: datetime) -> str:
    """Format ``dt`` as ``YYYY-MM-DDTHH:MM:SS±HH:MM``.

    Naive datetimes are taken to be local time.  Sub-second precision is
    dropped.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.astimezone()
    offset_minutes = int(dt.utcoffset().total_seconds() // 60)
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}{sign}{hours:02d}:{minutes:02d}"


def relative_day_label_to_date(label: str, now: Optional[datetime] = None) -> datetime:
    """Resolve a chart label such as "Yesterday" to an absolute datetime.

    Days are whole 24 hour steps back from ``now``.  For local (naive)
    ``now`` the result carries the local offset of that day, so a
    daylight saving change inside the window is reflected; an explicit
    ``tzinfo`` is kept as is.
    """
    if now is None:
        now = local_now()
    try:
        days = RELATIVE_DAY_LABELS.index(label)
    except ValueError:
        raise ParseError(f'invalid day name "{label}"') from None
    if now.tzinfo is None:
        return (now.astimezone() - timedelta(days=days)).astimezone()
    return now - timedelta(days=days)
