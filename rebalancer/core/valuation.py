"""
Portfolio valuation and current allocation
"""
from __future__ import annotations
from decimal import Decimal
from typing import Iterable, List

from rebalancer.core.errors import DivisionByZero
from rebalancer.core.models import AllocationWeight, Holding
from rebalancer.core.rounding import round_money, round_weight, to_decimal

CASH_CODE = "cash"


def portfolio_value(available_to_invest, holdings: Iterable[Holding]) -> Decimal:
    """
    Value of the account: available cash plus each holding's current value.

    Args:
        available_to_invest: cash available in the account
        holdings: holdings from the account service

    Returns:
        Decimal: total value rounded to 2 decimal places (half-up)
    """
    total = to_decimal(available_to_invest)
    for h in holdings:
        total += to_decimal(h.current_value)
    return round_money(total)


def current_weights(available_to_invest, holdings: Iterable[Holding]) -> List[AllocationWeight]:
    """
    Current allocation as weights. The first entry is the synthetic "cash"
    slot, followed by one entry per holding in input order.

    Raises:
        DivisionByZero: when the portfolio value is zero
    """
    holdings = list(holdings)
    cash = to_decimal(available_to_invest)
    value = portfolio_value(cash, holdings)
    if value == 0:
        raise DivisionByZero(stage="current_weights")

    weights = [AllocationWeight(code=CASH_CODE, weight=round_weight(cash / value))]
    for h in holdings:
        weights.append(AllocationWeight(code=h.code, weight=round_weight(to_decimal(h.current_value) / value)))
    return weights
