"""Return-series statistics: sample variance, covariance, volatility and beta."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def _as_array(values: Sequence[float], name: str) -> np.ndarray:
    arr = np.asarray([float(v) for v in values], dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains non-finite values")
    return arr


def simple_returns(prices: Sequence[float]) -> np.ndarray:
    """Period-over-period returns `p[i] / p[i-1] - 1`, one shorter than `prices`."""
    arr = _as_array(prices, "prices")
    if arr.size < 2:
        raise ValueError("at least two prices are required")
    if np.any(arr[:-1] <= 0):
        raise ValueError("prices must be positive")
    return arr[1:] / arr[:-1] - 1.0


def sample_variance(values: Sequence[float]) -> float:
    arr = _as_array(values, "values")
    if arr.size < 2:
        raise ValueError("at least two observations are required")
    return float(np.var(arr, ddof=1))


def sample_covariance(xs: Sequence[float], ys: Sequence[float]) -> float:
    x = _as_array(xs, "xs")
    y = _as_array(ys, "ys")
    if x.size != y.size:
        raise ValueError(f"series lengths differ: {x.size} != {y.size}")
    if x.size < 2:
        raise ValueError("at least two observations are required")
    return float(np.cov(x, y, ddof=1)[0, 1])


def volatility(prices: Sequence[float], periods: int | None = None) -> float:
    """Sample standard deviation of simple returns scaled by `sqrt(periods)`.

    `periods` defaults to the number of returns in the series.
    """
    returns = simple_returns(prices)
    scale = returns.size if periods is None else int(periods)
    if scale <= 0:
        raise ValueError("periods must be positive")
    return float(np.sqrt(sample_variance(returns)) * np.sqrt(scale))


def beta(asset_returns: Sequence[float], market_returns: Sequence[float]) -> float:
    """Sample covariance of asset and market returns over sample market variance."""
    market_variance = sample_variance(market_returns)
    if market_variance == 0.0:
        raise ValueError("market returns have zero variance")
    return sample_covariance(asset_returns, market_returns) / market_variance
