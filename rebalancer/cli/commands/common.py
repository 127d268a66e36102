from __future__ import annotations
import json
from typing import Any, Dict, List

import typer

from rebalancer.config import Settings
from rebalancer.services.brokers.base import Broker
from rebalancer.utils.logging import get_logger

log = get_logger("cli")


def build_broker(st: Settings, snapshot: str | None) -> Broker:
    """Snapshot file means a dry run against in-memory data; otherwise the REST brokerage."""
    if snapshot:
        from rebalancer.services.brokers.snapshot import SnapshotBroker
        log.info(f"[DRY_RUN] Using snapshot {snapshot}, no brokerage calls")
        return SnapshotBroker.from_file(snapshot)

    missing = st.missing_broker_keys()
    if missing:
        log.error(f"[config] Missing brokerage settings: {', '.join(missing)}. Fill them in .env")
        raise typer.Exit(code=2)
    from rebalancer.services.brokers.http import HttpBroker
    return HttpBroker.from_settings(st)


def echo_json(models: List[Any]) -> None:
    payload: List[Dict[str, Any]] = [m.model_dump(mode="json") for m in models]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
