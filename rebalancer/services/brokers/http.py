from __future__ import annotations
from typing import Any, Dict, List

import httpx

from rebalancer.adapters.brokerage.api import BrokerageApi
from rebalancer.adapters.brokerage.client import BrokerageClient
from rebalancer.core.errors import InstrumentNotFound, UpstreamUnavailable
from rebalancer.core.models import FundsSummary, Holding, Quote
from rebalancer.core.rounding import to_decimal
from .base import Broker


def _pick(d: dict, keys: list[str]):
    """First non-empty value among `keys`, falling back to a case-insensitive match."""
    for k in keys:
        if k in d and d.get(k) not in (None, ""):
            return d.get(k)
    low = {str(k).lower(): v for k, v in d.items()}
    for k in keys:
        v = low.get(k.lower())
        if v not in (None, ""):
            return v
    return None


def _items(payload: Any, keys: list[str]) -> List[dict]:
    if isinstance(payload, list):
        return [it for it in payload if isinstance(it, dict)]
    if isinstance(payload, dict):
        for k in keys:
            v = payload.get(k)
            if isinstance(v, list):
                return [it for it in v if isinstance(it, dict)]
    return []


def _number(value: Any, what: str):
    try:
        return to_decimal(value)
    except ValueError as e:
        raise UpstreamUnavailable(f"unparseable {what}: {value!r}", stage="parse") from e


def parse_holdings(payload: Any) -> List[Holding]:
    """Holdings from a list payload or one wrapped under holdings/data/items.

    Every entry must carry a code, a quantity and a current value.
    """
    holdings: List[Holding] = []
    for it in _items(payload, ["holdings", "data", "items"]):
        code = _pick(it, ["contractCode", "contract_code", "code", "instrumentCode"])
        if not code:
            raise UpstreamUnavailable(f"holding without instrument code: {it!r}", stage="parse")
        code = str(code)
        qty = _pick(it, ["shares", "quantity", "qty"])
        if qty is None:
            raise UpstreamUnavailable(f"holding {code} has no quantity", code=code, stage="parse")
        value = _pick(it, ["currentValue", "current_value", "value"])
        if value is None:
            raise UpstreamUnavailable(f"holding {code} has no current value", code=code, stage="parse")
        holdings.append(Holding(
            code=code,
            quantity=_number(qty, f"quantity of {code}"),
            current_value=_number(value, f"value of {code}"),
        ))
    return holdings


def parse_funds_summary(payload: Any) -> FundsSummary:
    summary = payload.get("data", payload) if isinstance(payload, dict) else {}
    if not isinstance(summary, dict):
        summary = {}
    cash = _pick(summary, ["availableToInvest", "available_to_invest", "cash"])
    if cash is None:
        raise UpstreamUnavailable("funds summary has no available cash", stage="parse")
    return FundsSummary(available_to_invest=_number(cash, "available cash"))


def parse_quote(code: str, payload: Any) -> Quote:
    data = payload.get("data", payload) if isinstance(payload, dict) else {}
    if not isinstance(data, dict):
        data = {}
    price = _pick(data, ["currentPrice", "current_price", "price", "last"])
    if price is None:
        raise InstrumentNotFound(code)
    returned = _pick(data, ["contractCode", "contract_code", "code"]) or code
    return Quote(code=str(returned), current_price=_number(price, f"price of {code}"))


class HttpBroker:
    """Broker backed by the brokerage REST API."""

    def __init__(self, client: BrokerageClient, api: BrokerageApi):
        self.client = client
        self.api = api

    @classmethod
    def from_settings(cls, settings, **client_kwargs) -> Broker:
        client = BrokerageClient.from_settings(settings, **client_kwargs)
        return cls(client, BrokerageApi.from_settings(client, settings))

    async def holdings(self, account_id: str) -> List[Holding]:
        try:
            raw = await self.api.holdings(account_id)
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(f"holdings request failed with HTTP {e.response.status_code}", stage="fetch_holdings") from e
        return parse_holdings(raw)

    async def funds_summary(self, account_id: str) -> FundsSummary:
        try:
            raw = await self.api.funds_summary(account_id)
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(f"funds summary request failed with HTTP {e.response.status_code}", stage="fetch_funds") from e
        return parse_funds_summary(raw)

    async def current_price(self, code: str) -> Quote:
        try:
            raw = await self.api.current_price(code)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise InstrumentNotFound(code) from e
            raise UpstreamUnavailable(f"price request failed with HTTP {e.response.status_code}", code=code, stage="price_lookup") from e
        return parse_quote(code, raw)
