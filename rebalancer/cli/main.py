from __future__ import annotations
from typing import Optional

import typer
from rebalancer.config import Settings

app = typer.Typer(help="Portfolio Rebalancer CLI (proposes orders, never places them)")

# shared options
raw_option = typer.Option(False, "--raw", help="Print JSON instead of the text report")
account_option = typer.Option(..., "--account", help="Brokerage account ID")
snapshot_option = typer.Option(None, "--snapshot", help="JSON snapshot file for a dry run without brokerage calls")

settings = Settings()


@app.command()
def rebalance(
    account: str = account_option,
    config: str = typer.Option(settings.default_targets_file, "--config", help="Target weights JSON file"),
    snapshot: Optional[str] = snapshot_option,
    raw: bool = raw_option,
):
    """Propose the orders that move the account to the target weights."""
    from rebalancer.cli.commands.rebalance import run as run_rebalance
    run_rebalance(account, config, snapshot, raw)


@app.command()
def weights(account: str = account_option, snapshot: Optional[str] = snapshot_option, raw: bool = raw_option):
    """Show the account's current allocation, cash included."""
    from rebalancer.cli.commands.weights import run as run_weights
    run_weights(account, snapshot, raw)


if __name__ == "__main__":
    app()
