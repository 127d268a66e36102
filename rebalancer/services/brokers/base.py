from __future__ import annotations
from typing import List, Protocol

from rebalancer.core.models import FundsSummary, Holding, Quote


class AccountService(Protocol):
    async def holdings(self, account_id: str) -> List[Holding]:
        """Current holdings of the account. Transport failures raise UpstreamUnavailable."""

    async def funds_summary(self, account_id: str) -> FundsSummary:
        """Cash available to invest, in the account currency."""


class MarketDataService(Protocol):
    async def current_price(self, code: str) -> Quote:
        """Latest price of one instrument. Unknown codes raise InstrumentNotFound."""


class Broker(AccountService, MarketDataService, Protocol):
    """Both read sides of a brokerage, as used by the rebalancing engine."""
