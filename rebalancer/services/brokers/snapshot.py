from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from rebalancer.core.errors import InstrumentNotFound, UpstreamUnavailable
from rebalancer.core.models import FundsSummary, Holding, Quote
from rebalancer.core.rounding import to_decimal


class SnapshotBroker:
    """In-memory broker for dry runs and tests. No network calls.

    Snapshot file layout:
        {
          "accounts": {"<id>": {"available_to_invest": 500,
                                "holdings": [{"code": "AAPL", "quantity": 10, "current_value": 1500}]}},
          "prices": {"AAPL": 150}
        }
    """

    def __init__(self, accounts: Dict[str, Dict[str, Any]], prices: Dict[str, Any]):
        self._accounts = accounts
        self._prices = {code: to_decimal(p) for code, p in prices.items()}

    @classmethod
    def from_file(cls, path: str) -> "SnapshotBroker":
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise UpstreamUnavailable(f"cannot read snapshot {path}: {e.strerror or e}", stage="fetch") from e
        except json.JSONDecodeError as e:
            raise UpstreamUnavailable(f"snapshot {path} is not valid JSON: {e.msg}", stage="fetch") from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"snapshot {path} must be a JSON object", stage="fetch")
        accounts, prices = data.get("accounts", {}), data.get("prices", {})
        if not isinstance(accounts, dict) or not isinstance(prices, dict):
            raise UpstreamUnavailable(f"snapshot {path}: accounts and prices must be JSON objects", stage="fetch")
        try:
            return cls(accounts, prices)
        except ValueError as e:
            raise UpstreamUnavailable(f"malformed snapshot {path}: {e}", stage="fetch") from e

    def _account(self, account_id: str) -> Dict[str, Any]:
        acc = self._accounts.get(account_id)
        if acc is None:
            raise UpstreamUnavailable(f"unknown account: {account_id}", stage="fetch")
        if not isinstance(acc, dict):
            raise UpstreamUnavailable(f"malformed account: {account_id}", stage="fetch")
        return acc

    async def holdings(self, account_id: str) -> List[Holding]:
        try:
            return [Holding(**h) for h in self._account(account_id).get("holdings", [])]
        except (TypeError, ValidationError) as e:
            raise UpstreamUnavailable(f"malformed holdings for {account_id}: {e}", stage="fetch_holdings") from e

    async def funds_summary(self, account_id: str) -> FundsSummary:
        cash = self._account(account_id).get("available_to_invest", 0)
        try:
            return FundsSummary(available_to_invest=cash)
        except ValidationError as e:
            raise UpstreamUnavailable(f"malformed funds for {account_id}: {e}", stage="fetch_funds") from e

    async def current_price(self, code: str) -> Quote:
        if code not in self._prices:
            raise InstrumentNotFound(code)
        return Quote(code=code, current_price=self._prices[code])
