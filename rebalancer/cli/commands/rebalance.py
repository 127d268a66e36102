from __future__ import annotations
import asyncio
import json
from typing import Dict

import typer

from rebalancer.config import Settings
from rebalancer.core.errors import RebalanceError
from rebalancer.services.rebalancing import rebalancing_orders
from rebalancer.services.report import format_orders
from rebalancer.utils.logging import get_logger
from .common import build_broker, echo_json

log = get_logger("cli.rebalance")


def load_targets(path: str) -> Dict[str, object]:
    """Read target weights. Accepts {"tickers": {...}} or a bare {code: weight} mapping."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise typer.BadParameter(f"{path}: cannot read targets file ({e.strerror or e})") from e
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"{path}: invalid JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{path}: expected a JSON object")

    if "tickers" in data:
        if "description" in data:
            log.info(f"📋 Target set: {data['description']}")
        tickers = data["tickers"]
    else:
        tickers = data
    if not isinstance(tickers, dict):
        raise typer.BadParameter(f"{path}: tickers must be an object of code -> weight")
    return tickers


async def _run(account: str, config: str, snapshot: str | None = None, raw: bool = False):
    st = Settings()
    targets = load_targets(config)
    log.info(f"Target weights: {targets}")
    try:
        broker = build_broker(st, snapshot)
        orders = await rebalancing_orders(broker, account, targets)
    except RebalanceError as e:
        log.error(f"❌ Rebalancing aborted: {e}")
        raise typer.Exit(code=1)

    if raw:
        echo_json(orders)
    else:
        typer.echo(format_orders(orders, st.tz))
    if not orders:
        log.info("Portfolio already matches the targets")


def run(account: str, config: str, snapshot: str | None = None, raw: bool = False):
    asyncio.run(_run(account, config, snapshot, raw))
