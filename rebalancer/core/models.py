from __future__ import annotations
from decimal import Decimal
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class Holding(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    quantity: Decimal
    current_value: Decimal  # quantity x latest price, account currency


class FundsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_to_invest: Decimal


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    current_price: Decimal


class PortfolioSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    available_cash: Decimal
    holdings: Tuple[Holding, ...] = ()

    @classmethod
    def build(cls, available_cash, holdings) -> "PortfolioSnapshot":
        """Build a snapshot, rejecting holdings that share an instrument code."""
        seen = set()
        for h in holdings:
            if h.code in seen:
                raise ValueError(f"duplicate holding code: {h.code}")
            seen.add(h.code)
        return cls(available_cash=available_cash, holdings=tuple(holdings))

    def quantities(self) -> dict[str, Decimal]:
        return {h.code: h.quantity for h in self.holdings}


class AllocationWeight(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    weight: Decimal


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    side: Side
    amount: Decimal                 # 3 dp, always > 0
    estimated_order_value: Decimal  # 2 dp
