"""Minimum-interval gate for rate-limited literature APIs."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from loguru import logger


class MinIntervalRateLimiter:
    """Spaces permitted calls at least ``min_interval`` seconds apart.

    The next-slot timestamp is read and reserved under one lock, so concurrent
    callers queue up (in lock acquisition order) instead of racing for the same
    slot. One instance is constructed per protected API and shared by every
    request in the process.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        *,
        name: str = "rate-limiter",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")
        self.min_interval = min_interval
        self.name = name
        self._clock = clock
        self._sleep = sleep
        self._next_available = 0.0
        self._lock = asyncio.Lock()

    async def wait_for_slot(self) -> None:
        """Block until the interval since the previous permitted call has elapsed."""
        async with self._lock:
            delay = self._next_available - self._clock()
            if delay > 0:
                logger.debug(f"[{self.name}] waiting {delay:.3f}s for next slot")
                await self._sleep(delay)
            self._next_available = self._clock() + self.min_interval
