"""
Capture runner.

This module exposes ``collect_stats``, which reads the learn,
leaderboard and stats pages concurrently and merges their snapshots,
and ``run``, which wraps it with an HTTP fetcher and writes the result
to ``<output_dir>/jpdb/stats-<epoch-millis>.json``.

The three producers are independent asyncio tasks joined with
``asyncio.gather``: the merge happens only once all of them have
finished, and their completion order does not matter.  If any producer
fails the error propagates and nothing is written.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup

from ..config import Settings
from ..dates import local_now
from ..parse import merge_snapshots, parse_leaderboard, parse_learn, parse_stats
from ..progress import SaveControl
from .fetcher import HttpPageFetcher, PageFetcher

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Any]]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def snapshot_filename(now: datetime) -> str:
    """Relative output path for a capture started at ``now``."""
    aware = now if now.tzinfo is not None else now.astimezone()
    millis = (aware - EPOCH) // timedelta(milliseconds=1)
    return os.path.join("jpdb", f"stats-{millis}.json")


def save_snapshot(data: Dict[str, Any], output_dir: Union[str, Path], now: datetime) -> Path:
    """Write the merged stats as pretty-printed JSON and return the path."""
    path = Path(output_dir) / snapshot_filename(now)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path


async def _load_and_parse(fetcher: PageFetcher, path: str, handler: Callable[[str], Any]) -> Any:
    html = await fetcher.fetch(path)
    return handler(html)


async def _parse_page(html: Union[str, BeautifulSoup], handler: Callable[[Any], Any]) -> Any:
    return handler(html)


async def _join(producers: List[Producer], progress: Optional[SaveControl]) -> List[Any]:
    async def tracked(producer: Producer) -> Any:
        result = await producer()
        if progress is not None:
            progress.advance()
        return result

    if progress is not None:
        progress.start(len(producers))
    return list(await asyncio.gather(*(tracked(p) for p in producers)))


async def collect_stats(
    fetcher: PageFetcher,
    *,
    now: Optional[datetime] = None,
    stats_html: Optional[Union[str, BeautifulSoup]] = None,
    settings: Optional[Settings] = None,
    progress: Optional[SaveControl] = None,
) -> Dict[str, Any]:
    """Read all three pages and return the merged stats object.

    Args:
        fetcher: Source of page HTML.
        now: Capture time shared by every snapshot.  Defaults to the
            current local time.
        stats_html: An already loaded stats page.  When omitted the page
            is fetched like the others.
        settings: Page paths; defaults to ``Settings()``.
        progress: Optional save control advanced as each page finishes.
    """
    now = now or local_now()
    settings = settings or Settings()

    def handle_stats(html):
        return parse_stats(html, now)

    producers: List[Producer] = [
        lambda: _load_and_parse(fetcher, settings.learn_path, lambda html: parse_learn(html, now)),
        lambda: _load_and_parse(fetcher, settings.leaderboard_path, parse_leaderboard),
    ]
    if stats_html is not None:
        producers.append(lambda: _parse_page(stats_html, handle_stats))
    else:
        producers.append(lambda: _load_and_parse(fetcher, settings.stats_path, handle_stats))

    results = await _join(producers, progress)
    return merge_snapshots(*results)


async def run(
    settings: Settings,
    *,
    stats_html: Optional[str] = None,
    progress: Optional[SaveControl] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Capture stats from jpdb and save them under ``settings.output_dir``."""
    for warning in settings.warnings():
        logger.warning(warning)
    now = now or local_now()

    async def save(control: SaveControl) -> Path:
        async with HttpPageFetcher(settings) as fetcher:
            data = await collect_stats(
                fetcher, now=now, stats_html=stats_html, settings=settings, progress=control
            )
        path = save_snapshot(data, settings.output_dir, now)
        logger.info("Saved %d fields to %s", len(data), path)
        return path

    control = progress or SaveControl()
    return await control.trigger(save)
