from __future__ import annotations
import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, List


class _Window:
    def __init__(self, period: float, limit: int):
        self.period = period
        self.limit = limit
        self.stamps: deque = deque()

    def evict(self, now: float):
        while self.stamps and self.stamps[0] <= now - self.period:
            self.stamps.popleft()

    def has_room(self) -> bool:
        return len(self.stamps) < self.limit

    def wait_time(self, now: float) -> float:
        return (self.stamps[0] + self.period - now) if self.stamps else 0.0


class AsyncRateLimiter:
    """Sliding-window limiter for outbound brokerage calls.

    Always caps calls per second; a per-minute cap is optional. Callers
    `await limiter.acquire()` (or `async with limiter:`) before each request.
    """

    def __init__(
        self,
        per_second: int = 5,
        per_minute: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.per_second = max(1, int(per_second))
        self.per_minute = int(per_minute) if per_minute else None
        self._windows: List[_Window] = [_Window(1.0, self.per_second)]
        if self.per_minute is not None:
            self._windows.append(_Window(60.0, self.per_minute))
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()

    async def acquire(self):
        while True:
            async with self._lock:
                now = self._clock()
                for w in self._windows:
                    w.evict(now)
                if all(w.has_room() for w in self._windows):
                    for w in self._windows:
                        w.stamps.append(now)
                    return
                wait_for = max(w.wait_time(now) for w in self._windows if not w.has_room())
            await self._sleep(max(wait_for, 0.01))

    async def __aenter__(self):
        await self.acquire()
        return self

    async def __aexit__(self, *exc):
        return False
