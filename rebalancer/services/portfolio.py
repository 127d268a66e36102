from __future__ import annotations
import asyncio
from decimal import Decimal
from typing import Any, Awaitable, Dict, Iterable, List

from rebalancer.core.errors import MissingPrice, UpstreamUnavailable
from rebalancer.core.models import PortfolioSnapshot
from rebalancer.core.rounding import to_decimal
from rebalancer.services.brokers.base import AccountService, MarketDataService


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """Like asyncio.gather, but the first failure cancels the requests still in flight."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for t in tasks:
            if not t.done():
                t.cancel()
        raise


async def get_snapshot(accounts: AccountService, account_id: str) -> PortfolioSnapshot:
    """Holdings and funds summary, fetched concurrently."""
    holdings, funds = await gather_all(
        accounts.holdings(account_id),
        accounts.funds_summary(account_id),
    )
    try:
        return PortfolioSnapshot.build(funds.available_to_invest, holdings)
    except ValueError as e:
        raise UpstreamUnavailable(f"malformed account data: {e}", stage="fetch_holdings") from e


async def get_prices(market: MarketDataService, codes: Iterable[str]) -> Dict[str, Decimal]:
    """
    Current price per code, one concurrent request each.

    Raises:
        InstrumentNotFound: from the market data service
        MissingPrice: a quote came back for a different code
    """
    codes = sorted(set(codes))
    if not codes:
        return {}
    quotes = await gather_all(*(market.current_price(c) for c in codes))
    prices: Dict[str, Decimal] = {}
    for code, q in zip(codes, quotes):
        if q.code != code:
            raise MissingPrice(code, stage="price_lookup")
        prices[code] = to_decimal(q.current_price)
    return prices
