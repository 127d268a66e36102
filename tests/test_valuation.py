from decimal import Decimal

import pytest

from rebalancer.core.errors import DivisionByZero, RebalanceError
from rebalancer.core.valuation import CASH_CODE, current_weights, portfolio_value
from tests.conftest import holding


class TestPortfolioValue:
    def test_cash_plus_holdings(self):
        assert portfolio_value(500, [holding("AAPL", 10, 1500)]) == Decimal("2000.00")

    def test_empty_holdings_returns_cash(self):
        assert portfolio_value(Decimal("123.45"), []) == Decimal("123.45")

    def test_rounds_half_up_to_cents(self):
        assert portfolio_value(Decimal("1.125"), []) == Decimal("1.13")
        assert portfolio_value("0.005", []) == Decimal("0.01")

    def test_float_cash_does_not_leak_binary_noise(self):
        assert portfolio_value(0.1, [holding("X", 1, "0.2")]) == Decimal("0.30")

    def test_result_has_two_decimal_places(self):
        value = portfolio_value(Decimal("10"), [holding("A", 1, "0.333"), holding("B", 1, "0.333")])
        assert value == Decimal("10.67")
        assert value.as_tuple().exponent == -2


class TestCurrentWeights:
    def test_cash_entry_first_then_holdings_in_order(self):
        weights = current_weights(500, [holding("AAPL", 10, 1500)])

        assert [w.code for w in weights] == [CASH_CODE, "AAPL"]
        assert weights[0].weight == Decimal("0.25")
        assert weights[1].weight == Decimal("0.75")

    def test_weights_rounded_to_four_places(self):
        weights = current_weights(1, [holding("A", 1, 1), holding("B", 1, 1)])

        assert [w.weight for w in weights] == [Decimal("0.3333")] * 3
        assert abs(sum(w.weight for w in weights) - 1) <= Decimal("0.00005") * 3

    def test_all_cash_account(self):
        weights = current_weights(1000, [])
        assert len(weights) == 1
        assert weights[0].code == CASH_CODE
        assert weights[0].weight == Decimal("1")

    def test_zero_value_raises_division_by_zero(self):
        with pytest.raises(DivisionByZero) as exc:
            current_weights(0, [holding("A", 0, 0)])

        assert exc.value.stage == "current_weights"
        assert isinstance(exc.value, ZeroDivisionError)
        assert isinstance(exc.value, RebalanceError)
