from __future__ import annotations
from typing import List, Mapping

from rebalancer.core.errors import DivisionByZero
from rebalancer.core.models import AllocationWeight, Order
from rebalancer.core.rebalance import diff_holdings, orders_from_deltas
from rebalancer.core.targets import desired_quantities, tradable_codes, validate_target_weights
from rebalancer.core.valuation import current_weights, portfolio_value
from rebalancer.services.brokers.base import Broker
from rebalancer.services.portfolio import gather_all, get_prices, get_snapshot
from rebalancer.utils.logging import get_logger

log = get_logger("rebalancing")


async def rebalancing_orders(broker: Broker, account_id: str, target_weights: Mapping[str, object]) -> List[Order]:
    """
    Orders that move the account to `target_weights`.

    Steps:
    1. validate weights before touching the broker
    2. fetch holdings, cash and target prices concurrently, then prices of
       held instruments that are not targeted
    3. value the portfolio and convert weights to desired quantities
    4. diff current against desired quantities and build orders

    Any fetch failure aborts the whole call. Nothing is executed.
    """
    weights = validate_target_weights(target_weights)
    target_codes = tradable_codes(weights)

    log.info(f"Fetching account {account_id} and {len(target_codes)} target prices")
    snapshot, prices = await gather_all(
        get_snapshot(broker, account_id),
        get_prices(broker, target_codes),
    )
    held_only = set(snapshot.quantities()) - set(prices)
    if held_only:
        prices.update(await get_prices(broker, held_only))

    value = portfolio_value(snapshot.available_cash, snapshot.holdings)
    log.info(f"Portfolio value: {value:,.2f} (cash {snapshot.available_cash:,.2f}, {len(snapshot.holdings)} holdings)")
    if weights and value == 0:
        raise DivisionByZero(stage="desired_quantities")

    desired = desired_quantities(weights, value, prices)
    deltas = diff_holdings(snapshot.quantities(), desired)
    orders = orders_from_deltas(deltas, prices)
    log.info(f"Planned {len(orders)} orders from {len(deltas)} instruments")
    return orders


async def current_portfolio_weights(broker: Broker, account_id: str) -> List[AllocationWeight]:
    """Current weights of the account, cash first."""
    snapshot = await get_snapshot(broker, account_id)
    return current_weights(snapshot.available_cash, snapshot.holdings)
