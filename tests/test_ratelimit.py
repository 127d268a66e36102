from __future__ import annotations

import pytest

from rebalancer.utils.ratelimit import AsyncRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.mark.asyncio
async def test_calls_within_limit_do_not_wait() -> None:
    clock = FakeClock()
    limiter = AsyncRateLimiter(per_second=3, clock=clock, sleep=clock.sleep)

    for _ in range(3):
        await limiter.acquire()

    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_per_second_cap_waits_for_window() -> None:
    clock = FakeClock()
    limiter = AsyncRateLimiter(per_second=2, clock=clock, sleep=clock.sleep)

    for _ in range(3):
        await limiter.acquire()

    assert clock.sleeps == [pytest.approx(1.0)]


@pytest.mark.asyncio
async def test_per_minute_cap_dominates() -> None:
    clock = FakeClock()
    limiter = AsyncRateLimiter(per_second=10, per_minute=2, clock=clock, sleep=clock.sleep)

    async with limiter:
        pass
    async with limiter:
        pass
    async with limiter:
        pass

    assert clock.sleeps == [pytest.approx(60.0)]
