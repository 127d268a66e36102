# rebalancer/adapters/brokerage/api.py
from __future__ import annotations
from typing import Any, Dict
from urllib.parse import quote

from rebalancer.adapters.brokerage.client import BrokerageClient
from rebalancer.utils.logging import get_logger

# Defaults; Settings overrides them from the environment
PATH_HOLDINGS = "/api/accounts/{account_id}/holdings"
PATH_FUNDS = "/api/accounts/{account_id}/funds-summary"
PATH_PRICE = "/api/instruments/{code}/price"


class BrokerageApi:
    """Raw endpoint calls. Returns the JSON payload untouched."""

    def __init__(self, client: BrokerageClient, paths: Dict[str, str] | None = None):
        self.c = client
        self.paths = {"holdings": PATH_HOLDINGS, "funds": PATH_FUNDS, "price": PATH_PRICE}
        self.paths.update(paths or {})
        self.log = get_logger("brokerage.api")

    @classmethod
    def from_settings(cls, client: BrokerageClient, settings) -> "BrokerageApi":
        return cls(client, {
            "holdings": settings.broker_path_holdings,
            "funds": settings.broker_path_funds,
            "price": settings.broker_path_price,
        })

    def _path(self, name: str, **fields: str) -> str:
        return self.paths[name].format(**{k: quote(str(v), safe="") for k, v in fields.items()})

    async def holdings(self, account_id: str) -> Any:
        path = self._path("holdings", account_id=account_id)
        self.log.debug(f"holdings - {path}")
        return await self.c.get(path)

    async def funds_summary(self, account_id: str) -> Any:
        path = self._path("funds", account_id=account_id)
        self.log.debug(f"funds summary - {path}")
        return await self.c.get(path)

    async def current_price(self, code: str) -> Any:
        return await self.c.get(self._path("price", code=code))
