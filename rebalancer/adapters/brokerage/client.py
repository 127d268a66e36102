# rebalancer/adapters/brokerage/client.py
from __future__ import annotations
import asyncio, random
from typing import Any, Dict

import httpx

from rebalancer.core.errors import UpstreamUnavailable
from rebalancer.utils.logging import get_logger
from rebalancer.utils.ratelimit import AsyncRateLimiter

log = get_logger("brokerage.client")


# exponential backoff with jitter
def _expo_backoff(attempt: int, base: float = 0.5, cap: float = 8.0) -> float:
    # 0.5, 1, 2, 4, 8 ... plus up to 25% jitter
    delay = min(base * (2 ** max(0, attempt - 1)), cap)
    jitter = random.uniform(0, delay * 0.25)
    return delay + jitter


def _is_transient_status(code: int) -> bool:
    return code in (429, 500, 502, 503, 504)


class BrokerageClient:
    """Read-only REST client for the brokerage.

    Retries 429/5xx and transport errors with backoff; anything else is
    raised to the caller. Exhausted retries become `UpstreamUnavailable`.
    """

    def __init__(
        self,
        base: str,
        token: str,
        *,
        timeout: float = 15.0,
        max_attempts: int = 5,
        rps: int = 5,
        rpm: int | None = 200,
        transport: httpx.AsyncBaseTransport | None = None,
        backoff=_expo_backoff,
    ):
        self.base = base.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.max_attempts = max(1, int(max_attempts))
        self._transport = transport
        self._backoff = backoff
        self._rl_get = AsyncRateLimiter(per_second=rps, per_minute=rpm)

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "BrokerageClient":
        conf = settings.resolve_broker()
        return cls(
            conf["base"], conf["token"],
            timeout=conf["timeout"], max_attempts=conf["max_attempts"],
            rps=conf["rps"], rpm=conf["rpm"], **kwargs,
        )

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "authorization": f"Bearer {self.token}",
            "accept": "application/json",
        }

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = f"{self.base}{path}"
        attempt = 1
        while True:
            try:
                await self._rl_get.acquire()
                async with self._http() as client:
                    r = await client.get(url, headers=self._auth_headers(), params=params or {})
                    r.raise_for_status()
                    return r.json()
            except httpx.HTTPStatusError as e:
                code = e.response.status_code
                if not _is_transient_status(code):
                    raise
                if attempt >= self.max_attempts:
                    raise UpstreamUnavailable(f"GET {path} failed with HTTP {code} after {attempt} attempts", stage="fetch") from e
                log.warning(f"GET {path} -> HTTP {code}, retrying ({attempt}/{self.max_attempts})")
            except httpx.TransportError as e:
                if attempt >= self.max_attempts:
                    raise UpstreamUnavailable(f"GET {path} failed: {e!r} after {attempt} attempts", stage="fetch") from e
                log.warning(f"GET {path} -> {type(e).__name__}, retrying ({attempt}/{self.max_attempts})")
            await asyncio.sleep(self._backoff(attempt))
            attempt += 1
