"""Debounced writer for the category order.

Dragging categories around produces a burst of edits; only the last state
is written, CATEGORY_SAVE_DELAY_SECONDS after the last edit.
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from gourmet.utilities import config

logger = logging.getLogger(__name__)

SaveCallback = Callable[[List[str]], Awaitable[None]]


class DebouncedCategorySaver:
    def __init__(self, save: SaveCallback, delay: float = config.CATEGORY_SAVE_DELAY_SECONDS):
        self._save = save
        self.delay = delay
        self._pending: Optional[List[str]] = None
        self._timer: Optional[asyncio.Task] = None
        self._running: List[asyncio.Task] = []

    @property
    def pending(self) -> Optional[List[str]]:
        return list(self._pending) if self._pending is not None else None

    def schedule(self, names: List[str]):
        """Remember ``names`` and (re)start the quiet-period timer.

        Must be called from inside the running event loop.
        """
        self._pending = list(names)
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(self._wait_and_save())

    async def _wait_and_save(self):
        await asyncio.sleep(self.delay)
        # detached from the timer: schedule() no longer cancels this save
        self._timer = None
        task = asyncio.current_task()
        self._running.append(task)
        try:
            await self._write_pending()
        except Exception:
            logger.exception("Saving categories failed")
        finally:
            self._running.remove(task)

    async def _write_pending(self):
        names, self._pending = self._pending, None
        if names is None:
            return
        await self._save(names)
        logger.debug("Saved %d categories", len(names))

    def discard(self):
        """Drop the pending list and its timer; a save already running is left alone."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
        self._pending = None

    async def flush(self):
        """Write the pending list now and wait for saves already running."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
        await self._write_pending()
        if self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    async def close(self):
        await self.flush()
