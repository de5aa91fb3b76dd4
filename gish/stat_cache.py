# gish/stat_cache.py
"""
Short-lived lstat() cache.

A tree walk asks for the same metadata more than once (to sort a listing,
then again to dispatch each child). Results are memoized and the whole
cache is dropped every flush interval, so nothing is ever more than about
a second old. Failed lookups are never stored.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL = 1.0


@dataclass
class CacheStats:
    """Statistics about stat cache usage."""
    hits: int = 0
    misses: int = 0
    flushes: int = 0
    hit_rate: float = 0.0

    def record_hit(self):
        self.hits += 1
        self._update_rate()

    def record_miss(self):
        self.misses += 1
        self._update_rate()

    def _update_rate(self):
        total = self.hits + self.misses
        self.hit_rate = self.hits / total if total > 0 else 0.0


class StatCache:
    """
    Memoized lstat() with a periodic full flush.

    The flush loop is an asyncio task owned by the cache: start() launches it
    and close() cancels it. Use as an async context manager to get both:

        async with StatCache() as cache:
            st = await cache.lstat("/some/path")
    """

    def __init__(self, flush_interval: float = DEFAULT_FLUSH_INTERVAL):
        if flush_interval <= 0:
            raise ValueError(f"Flush interval must be positive, got {flush_interval}")
        self.flush_interval = flush_interval
        self.stats = CacheStats()
        self._entries: Dict[str, os.stat_result] = {}
        self._flush_task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "StatCache":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @property
    def running(self) -> bool:
        return self._flush_task is not None and not self._flush_task.done()

    def start(self):
        """Start the background flush loop. Must be called inside a running event loop."""
        if self.running:
            return
        self._flush_task = asyncio.get_running_loop().create_task(self._flush_loop())

    async def close(self):
        """Stop the flush loop and drop all entries."""
        task, self._flush_task = self._flush_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.clear()
        logger.debug(
            f"Stat cache closed: {self.stats.hits} hits, {self.stats.misses} misses, "
            f"{self.stats.flushes} flushes"
        )

    async def _flush_loop(self):
        while True:
            await asyncio.sleep(self.flush_interval)
            self.flush()

    def flush(self):
        """Periodic invalidation: clear everything and count it."""
        self.clear()
        self.stats.flushes += 1

    def clear(self):
        """Drop every cached entry."""
        # Rebind rather than mutate so a lookup holding the old dict stays consistent.
        self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path) -> bool:
        return os.fspath(path) in self._entries

    async def lstat(self, path) -> os.stat_result:
        """
        Metadata for path without following symlinks.

        Raises whatever os.lstat raises; errors are not cached.
        """
        key = os.fspath(path)
        cached = self._entries.get(key)
        if cached is not None:
            self.stats.record_hit()
            return cached

        self.stats.record_miss()
        result = await asyncio.to_thread(os.lstat, key)
        self._entries[key] = result
        return result
