from __future__ import annotations
from decimal import Decimal
from typing import Dict, Mapping

from rebalancer.core.errors import InvalidWeights, MissingPrice
from rebalancer.core.rounding import round_quantity, to_decimal
from rebalancer.core.valuation import CASH_CODE


def validate_target_weights(weights: Mapping[str, object]) -> Dict[str, Decimal]:
    """
    Convert target weights to Decimal and reject bad input before any fetch.

    Weights must lie in [0, 1] and sum to at most 1. A shortfall below 1 is
    residual cash. The reserved "cash" key counts toward the sum but is never
    traded.
    """
    validated: Dict[str, Decimal] = {}
    for code, raw in weights.items():
        if not isinstance(code, str) or not code.strip():
            raise InvalidWeights(f"invalid instrument code: {code!r}", stage="validate_weights")
        try:
            w = to_decimal(raw)
        except ValueError:
            raise InvalidWeights(f"weight is not a number: {raw!r}", code=code, stage="validate_weights")
        if not w.is_finite():
            raise InvalidWeights(f"weight is not finite: {raw!r}", code=code, stage="validate_weights")
        if w < 0:
            raise InvalidWeights(f"negative weight: {w}", code=code, stage="validate_weights")
        if w > 1:
            raise InvalidWeights(f"weight above 1: {w}", code=code, stage="validate_weights")
        validated[code] = w

    total = sum(validated.values(), Decimal("0"))
    if total > 1:
        raise InvalidWeights(f"weights sum to {total}, above 1", stage="validate_weights")
    return validated


def tradable_codes(weights: Mapping[str, Decimal]) -> list[str]:
    return sorted(code for code in weights if code != CASH_CODE)


def desired_quantities(weights: Mapping[str, Decimal], value: Decimal, prices: Mapping[str, Decimal]) -> Dict[str, Decimal]:
    """
    Target quantity per instrument: (weight x portfolio value) / price,
    rounded to 4 decimal places.

    Raises:
        MissingPrice: a weighted code has no price, or a non-positive one
    """
    desired: Dict[str, Decimal] = {}
    for code in tradable_codes(weights):
        price = prices.get(code)
        if price is None or to_decimal(price) <= 0:
            raise MissingPrice(code, stage="desired_quantities")
        desired[code] = round_quantity(to_decimal(weights[code]) * to_decimal(value) / to_decimal(price))
    return desired
