"""
Page fetchers.

The orchestrator only needs ``await fetcher.fetch(path)`` returning the
page HTML.  ``HttpPageFetcher`` implements it with aiohttp against the
configured jpdb origin, sending the session cookie so the pages render
for the logged-in user.  Tests substitute an in-memory fetcher.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import aiohttp

from ..config import Settings
from ..errors import FetchError

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sid"


class PageFetcher(Protocol):
    async def fetch(self, path: str) -> str:
        ...


class HttpPageFetcher:
    """Fetch pages from one origin over a shared aiohttp session."""

    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None) -> None:
        self.settings = settings
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpPageFetcher":
        if self._session is None:
            cookies = {SESSION_COOKIE: self.settings.session_id} if self.settings.session_id else None
            self._session = aiohttp.ClientSession(
                base_url=self.settings.base_url,
                cookies=cookies,
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout_seconds),
            )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def fetch(self, path: str) -> str:
        if self._session is None:
            raise RuntimeError("HttpPageFetcher must be used as an async context manager")
        logger.debug("GET %s", path)
        async with self._session.get(path) as response:
            if response.status >= 400:
                raise FetchError(str(response.url), response.status)
            html = await response.text()
        logger.debug("Fetched %s (%d chars)", path, len(html))
        return html
