"""
Command line interface for jpdbstats.

``jpdbstats save`` captures the learn, leaderboard and stats pages of
the configured jpdb account and writes them to one JSON file.  The
session cookie is read from ``JPDB_SID`` (environment or ``.env``);
other settings come from an optional YAML file and the flags below.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List

import aiohttp
import yaml

from .collect.runner import run
from .config import load_settings
from .errors import FetchError, ParseError
from .progress import SaveControl

logger = logging.getLogger("jpdbstats.cli")


def _log_progress(control: SaveControl) -> None:
    logger.info(control.label)


def cmd_save(args: argparse.Namespace) -> int:
    """Capture stats and write them to the output directory."""
    try:
        settings = load_settings(
            args.config,
            base_url=args.base_url,
            output_dir=args.out,
            timeout_seconds=args.timeout,
        )
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    stats_html = None
    if args.stats_file:
        try:
            with open(args.stats_file, "r", encoding="utf-8") as f:
                stats_html = f.read()
        except OSError as exc:
            logger.error("Could not read stats file: %s", exc)
            return 1
    control = SaveControl(_log_progress)
    try:
        path = asyncio.run(run(settings, stats_html=stats_html, progress=control))
    except ParseError as exc:
        logger.error("Page structure not recognised: %s", exc)
        return 1
    except (FetchError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.error("Could not download page: %s", exc)
        return 1
    print(path)
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="jpdbstats", description="Save jpdb.io learning stats to JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    save_cmd = subparsers.add_parser("save", help="Capture stats into jpdb/stats-<millis>.json")
    save_cmd.add_argument("--config", help="YAML config file")
    save_cmd.add_argument("--out", help="Output directory (default: current directory)")
    save_cmd.add_argument("--base-url", dest="base_url", help="jpdb origin, e.g. https://jpdb.io")
    save_cmd.add_argument("--timeout", type=float, help="Per-run HTTP timeout in seconds")
    save_cmd.add_argument(
        "--stats-file",
        dest="stats_file",
        help="Parse a saved copy of the stats page instead of fetching it",
    )
    save_cmd.set_defaults(func=cmd_save)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
