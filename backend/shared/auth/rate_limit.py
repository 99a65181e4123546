"""In-memory sliding-window rate limiter with periodic eviction."""

from __future__ import annotations

import asyncio
import contextlib
import threading
import time
from collections import deque
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_SECONDS = 60.0
CLEANUP_INTERVAL_SECONDS = 300  # 5 minutes

logger = structlog.get_logger()


class SlidingWindowRateLimiter:
    """Count requests per identifier over a trailing time window.

    A call is allowed while fewer than ``max_requests`` calls for the same
    identifier were accepted in the last ``window_seconds``. Rejected calls
    are not recorded, so a client that backs off regains budget as soon as
    its oldest accepted call leaves the window.

    State lives in process memory: limits are per instance and are reset by
    a restart. Identifiers with no recent calls are dropped on access and by
    ``cleanup_expired()``, which ``start_cleanup()`` runs periodically.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._cleanup_task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        return len(self._buckets)

    def check(self, identifier: str) -> bool:
        """Return True and record the call if ``identifier`` is within budget."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(identifier)
            if bucket is None:
                bucket = deque()
                self._buckets[identifier] = bucket
            else:
                self._prune(bucket, now)
            if len(bucket) >= self.max_requests:
                return False
            bucket.append(now)
            return True

    def reset(self, identifier: str) -> None:
        with self._lock:
            self._buckets.pop(identifier, None)

    def cleanup_expired(self) -> int:
        """Drop identifiers whose window is empty. Return how many were removed."""
        now = self._clock()
        with self._lock:
            stale = []
            for identifier, bucket in self._buckets.items():
                self._prune(bucket, now)
                if not bucket:
                    stale.append(identifier)
            for identifier in stale:
                del self._buckets[identifier]
        if stale:
            logger.debug("evicted idle rate limit buckets", count=len(stale))
        return len(stale)

    def start_cleanup(self, interval_seconds: float = CLEANUP_INTERVAL_SECONDS) -> None:
        """Start the periodic eviction task. No-op if it is already running."""
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop(interval_seconds))

    async def stop_cleanup(self) -> None:
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._cleanup_task
            self._cleanup_task = None

    async def _cleanup_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            self.cleanup_expired()

    def _prune(self, bucket: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while bucket and bucket[0] <= cutoff:
            bucket.popleft()
