from __future__ import annotations

from decimal import Decimal
from typing import Callable

import pytest

from rebalancer.core.models import Holding
from rebalancer.services.brokers.snapshot import SnapshotBroker


def holding(code: str, quantity, current_value) -> Holding:
    return Holding(code=code, quantity=Decimal(str(quantity)), current_value=Decimal(str(current_value)))


@pytest.fixture
def make_broker() -> Callable[..., SnapshotBroker]:
    """Single-account SnapshotBroker; account id is "acc"."""

    def _make(cash, holdings=(), prices=None) -> SnapshotBroker:
        accounts = {
            "acc": {
                "available_to_invest": str(cash),
                "holdings": [
                    {"code": code, "quantity": str(qty), "current_value": str(value)}
                    for code, qty, value in holdings
                ],
            }
        }
        return SnapshotBroker(accounts, prices or {})

    return _make
