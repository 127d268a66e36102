from __future__ import annotations

import math

import numpy as np
import pytest

from rebalancer.core.statistics import (
    beta,
    sample_covariance,
    sample_variance,
    simple_returns,
    volatility,
)


def test_simple_returns() -> None:
    returns = simple_returns([100.0, 110.0, 99.0])
    assert np.allclose(returns, [0.1, -0.1])


def test_sample_variance_uses_n_minus_one() -> None:
    assert sample_variance([1, 2, 3, 4]) == pytest.approx(5.0 / 3.0)


def test_sample_covariance() -> None:
    assert sample_covariance([1, 2, 3], [2, 4, 6]) == pytest.approx(2.0)


def test_volatility_defaults_to_number_of_returns() -> None:
    # returns [0.1, -0.1]: sample std sqrt(0.02), scaled by sqrt(2)
    assert volatility([100.0, 110.0, 99.0]) == pytest.approx(0.2)


def test_volatility_with_explicit_periods() -> None:
    expected = math.sqrt(0.02) * math.sqrt(252)
    assert volatility([100.0, 110.0, 99.0], periods=252) == pytest.approx(expected)


def test_beta_of_levered_series() -> None:
    market = [0.01, -0.02, 0.03, 0.005]
    asset = [2 * r for r in market]
    assert beta(asset, market) == pytest.approx(2.0)


def test_beta_of_uncorrelated_series_is_zero() -> None:
    assert beta([0.01, 0.01, 0.01], [0.01, -0.01, 0.02]) == pytest.approx(0.0)


@pytest.mark.parametrize(
    "call",
    [
        lambda: simple_returns([100.0]),
        lambda: simple_returns([0.0, 1.0]),
        lambda: sample_variance([1.0]),
        lambda: sample_covariance([1.0, 2.0], [1.0]),
        lambda: beta([0.1, 0.2], [0.05, 0.05]),
        lambda: volatility([1.0, 2.0, 3.0], periods=0),
        lambda: sample_variance([1.0, float("nan")]),
    ],
)
def test_invalid_inputs_raise_value_error(call) -> None:
    with pytest.raises(ValueError):
        call()
