from __future__ import annotations
import asyncio

import typer

from rebalancer.config import Settings
from rebalancer.core.errors import RebalanceError
from rebalancer.services.rebalancing import current_portfolio_weights
from rebalancer.services.report import format_weights
from rebalancer.utils.logging import get_logger
from .common import build_broker, echo_json

log = get_logger("cli.weights")


async def _run(account: str, snapshot: str | None = None, raw: bool = False):
    st = Settings()
    try:
        broker = build_broker(st, snapshot)
        weights = await current_portfolio_weights(broker, account)
    except RebalanceError as e:
        log.error(f"Could not compute current weights: {e}")
        raise typer.Exit(code=1)

    if raw:
        echo_json(weights)
    else:
        typer.echo(format_weights(weights, st.tz))


def run(account: str, snapshot: str | None = None, raw: bool = False):
    asyncio.run(_run(account, snapshot, raw))
