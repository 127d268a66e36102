from rich.console import Console
from rich.logging import RichHandler
import logging
import os

# stdout stays clean for --raw JSON output
_console = Console(stderr=True)


def get_logger(name: str = "rebalancer") -> logging.Logger:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    # no-op once the root logger has a handler
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, markup=True, rich_tracebacks=True, show_path=False)],
    )
    return logging.getLogger(f"rebalancer.{name}" if not name.startswith("rebalancer") else name)
