"""
Collection subsystem for jpdbstats.

The ``collect`` package fetches the jpdb pages, runs the page parsers
concurrently and writes the merged result.  ``fetcher`` speaks HTTP;
``runner`` joins the three producers and saves the JSON file.
"""

from .fetcher import HttpPageFetcher, PageFetcher  # noqa: F401
from .runner import collect_stats, run, save_snapshot  # noqa: F401
