"""
Save control.

A single control that starts a capture and shows how far it got.  It is
either idle ("Save info", enabled) or in progress ("Saving info
(k/n)...", disabled).  Listeners are told about every label change so a
front end (the CLI logs them) can render it.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

IDLE_LABEL = "Save info"

T = TypeVar("T")
Listener = Callable[["SaveControl"], None]


class SaveControl:
    def __init__(self, listener: Optional[Listener] = None) -> None:
        self._listeners: List[Listener] = [listener] if listener else []
        self.count: Optional[int] = None
        self.total: Optional[int] = None

    @property
    def label(self) -> str:
        if self.count is None:
            return IDLE_LABEL
        return f"Saving info ({self.count}/{self.total})..."

    @property
    def enabled(self) -> bool:
        return self.count is None

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)

    def reset(self) -> None:
        self.count = None
        self.total = None
        self._changed()

    def start(self, total: int) -> None:
        self.count = 0
        self.total = total
        self._changed()

    def advance(self) -> None:
        if self.count is None:
            raise RuntimeError("save control is not in progress")
        self.count += 1
        self._changed()

    def finish(self) -> None:
        self.reset()

    async def trigger(self, action: Callable[["SaveControl"], Awaitable[T]]) -> T:
        """Run one save while the control is busy.

        ``action`` receives the control so it can call ``start`` and
        ``advance``.  The control is idle again once the action returns
        or raises.
        """
        if not self.enabled:
            raise RuntimeError("a save is already in progress")
        self.reset()
        try:
            return await action(self)
        finally:
            self.finish()
