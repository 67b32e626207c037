"""
jpdbstats package.

Captures a user's learning statistics from jpdb.io and saves them as a
single JSON file.  The package is split the same way the work is:

1. **parse** – Turn the HTML of the learn, stats and leaderboard pages
   into immutable snapshot records.  Each parser is tied to the known
   structure of one page and fails loudly when that structure changes.
2. **collect** – Fetch the pages, run the parsers concurrently, join
   the results and write the merged object to
   ``jpdb/stats-<epoch-millis>.json``.
3. **progress** – A small save control whose label reflects how many
   of the pages have been processed.
4. **cli** – Command line entry point wiring together the above
   components.
"""

__version__ = "1.0.0"
