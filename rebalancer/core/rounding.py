from __future__ import annotations
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

MONEY = Decimal("0.01")
AMOUNT = Decimal("0.001")
QUANTITY = Decimal("0.0001")
WEIGHT = Decimal("0.0001")


def to_decimal(value) -> Decimal:
    """Convert via str() so floats like 0.1 do not carry binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"not a number: {value!r}") from e


def quantize(value, step: Decimal) -> Decimal:
    # ties go away from zero
    return to_decimal(value).quantize(step, rounding=ROUND_HALF_UP)


def round_money(value) -> Decimal:
    return quantize(value, MONEY)


def round_amount(value) -> Decimal:
    return quantize(value, AMOUNT)


def round_quantity(value) -> Decimal:
    return quantize(value, QUANTITY)


def round_weight(value) -> Decimal:
    return quantize(value, WEIGHT)
