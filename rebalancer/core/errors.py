"""Conditions raised by the rebalancing core and its fetch boundary."""
from __future__ import annotations
from typing import Optional


class RebalanceError(Exception):
    """Base error. Carries the instrument code (if any) and the failing stage."""

    def __init__(self, message: str, code: Optional[str] = None, stage: Optional[str] = None):
        self.message = message
        self.code = code
        self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"code={self.code}")
        if self.stage:
            parts.append(f"stage={self.stage}")
        return " | ".join(parts)


class UpstreamUnavailable(RebalanceError):
    """Account or market-data fetch failed or timed out."""


class InstrumentNotFound(RebalanceError):
    """Market data has no instrument with this code."""

    def __init__(self, code: str, stage: Optional[str] = "price_lookup"):
        super().__init__(f"instrument not found: {code}", code=code, stage=stage)


class MissingPrice(RebalanceError):
    """A price needed for valuation or order generation is absent or not positive."""

    def __init__(self, code: str, stage: Optional[str] = None):
        super().__init__(f"no usable price for {code}", code=code, stage=stage)


class DivisionByZero(RebalanceError, ZeroDivisionError):
    """Portfolio value is zero where weights are needed."""

    def __init__(self, stage: Optional[str] = None):
        super().__init__("portfolio value is zero", stage=stage)


class InvalidWeights(RebalanceError):
    """Target weights rejected before computation."""
