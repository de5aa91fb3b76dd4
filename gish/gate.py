# gish/gate.py
"""
Bounded concurrency gate.

Caps how many operations of one kind are in flight at once so a wide tree
walk does not run out of file descriptors. Callers beyond the limit wait
in FIFO order and are released one at a time as slots free up.
"""

import asyncio
import functools
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LIMIT = 100


class Gate:
    """
    Counting semaphore with occupancy counters.

    Usage:
        tree_gate = Gate(100, name="tree")
        async with tree_gate.slot():
            names = await asyncio.to_thread(os.listdir, path)
    """

    def __init__(self, limit: int = DEFAULT_LIMIT, name: str = "gate"):
        if limit < 1:
            raise ValueError(f"Gate limit must be at least 1, got {limit}")
        self.limit = limit
        self.name = name
        self._semaphore = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.waiting = 0
        self.peak = 0

    @asynccontextmanager
    async def slot(self):
        """Hold one slot for the duration of the block, released on any exit."""
        if self._semaphore.locked():
            logger.debug(f"{self.name} gate full ({self.limit}), queueing")
        self.waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self.waiting -= 1
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            yield
        finally:
            self.in_flight -= 1
            self._semaphore.release()

    def wrap(self, func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        """Return func gated by this gate, keeping its signature."""
        @functools.wraps(func)
        async def gated(*args: Any, **kwargs: Any) -> T:
            async with self.slot():
                return await func(*args, **kwargs)
        return gated


def gate(func: Callable[..., Awaitable[T]], limit: int = DEFAULT_LIMIT) -> Callable[..., Awaitable[T]]:
    """
    Wrap a coroutine function with its own private Gate.

    Usage:
        read_listing = gate(list_directory, 100)
    """
    return Gate(limit, name=getattr(func, "__name__", "gate")).wrap(func)
