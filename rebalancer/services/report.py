from __future__ import annotations
from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from rebalancer.core.models import AllocationWeight, Order


def _stamp(tz: str) -> str:
    return datetime.now(tz=ZoneInfo(tz)).strftime("%Y-%m-%d %H:%M:%S")


def format_orders(orders: List[Order], tz: str = "UTC") -> str:
    lines = [f"[{_stamp(tz)}] Proposed Orders ({len(orders)}):"]
    for o in orders:
        lines.append(f" - {o.side.value:<4} {o.code} x {o.amount} (~{o.estimated_order_value:,.2f})")
    if orders:
        total = sum(o.estimated_order_value for o in orders)
        lines.append(f" Total estimated value: {total:,.2f}")
    return "\n".join(lines)


def format_weights(weights: List[AllocationWeight], tz: str = "UTC") -> str:
    lines = [f"[{_stamp(tz)}] Current Weights ({len(weights)}):"]
    for w in weights:
        lines.append(f" - {w.code:<12} {w.weight * 100:>8.2f}%")
    return "\n".join(lines)
