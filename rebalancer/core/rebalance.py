from __future__ import annotations
from decimal import Decimal
from typing import Dict, List, Mapping

from rebalancer.core.errors import MissingPrice
from rebalancer.core.models import Order, Side
from rebalancer.core.rounding import round_amount, round_money, round_quantity, to_decimal


def diff_holdings(current: Mapping[str, Decimal], desired: Mapping[str, Decimal]) -> Dict[str, Decimal]:
    """
    Signed quantity change per instrument (desired - current).

    The codes are split into three groups:
    1. held now and desired: desired - current, rounded to 4 decimal places
    2. held now only: -current (full liquidation)
    3. desired only: desired (full initiation)

    Every code in either input gets exactly one entry. The result is keyed
    in sorted code order so it never depends on input iteration order.
    """
    current_codes = set(current)
    desired_codes = set(desired)

    deltas: Dict[str, Decimal] = {}
    for code in current_codes & desired_codes:
        deltas[code] = round_quantity(to_decimal(desired[code]) - to_decimal(current[code]))
    for code in current_codes - desired_codes:
        deltas[code] = -to_decimal(current[code])
    for code in desired_codes - current_codes:
        deltas[code] = to_decimal(desired[code])

    return {code: deltas[code] for code in sorted(deltas)}


def orders_from_deltas(deltas: Mapping[str, Decimal], prices: Mapping[str, Decimal]) -> List[Order]:
    """
    Turn signed deltas into orders sorted by instrument code.

    Zero deltas, and deltas whose amount rounds to zero, produce no order.

    Raises:
        MissingPrice: a nonzero delta has no price, or a non-positive one
    """
    orders: List[Order] = []
    for code in sorted(deltas):
        delta = to_decimal(deltas[code])
        if delta == 0:
            continue
        price = prices.get(code)
        if price is None or to_decimal(price) <= 0:
            raise MissingPrice(code, stage="order_generation")

        size = abs(delta)
        amount = round_amount(size)
        if amount == 0:
            continue
        orders.append(Order(
            code=code,
            side=Side.BUY if delta > 0 else Side.SELL,
            amount=amount,
            estimated_order_value=round_money(size * to_decimal(price)),
        ))
    return orders
