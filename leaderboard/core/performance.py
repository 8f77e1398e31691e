# leaderboard/core/performance.py

import math
from numbers import Real

import numpy as np

# Every return is treated as one trading day when annualizing. The history
# endpoint actually samples roughly once a minute, so annualized ratios are
# on a daily-return scale. Kept as-is so figures match the live dashboard.
TRADING_DAYS_PER_YEAR = 252


def is_finite_number(value) -> bool:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def sanitize(series) -> np.ndarray:
    """
    Reduces a raw time series to its finite numeric values.

    Entries that are not mappings, have no "value", or whose value is not a
    finite real number (strings, booleans, None, NaN, +/-inf) are dropped.
    Order is preserved and timestamps are discarded.

    Args:
        series: A sequence of {"timestamp": ..., "value": ...} points.

    Returns:
        A float64 array, possibly empty.
    """
    values = []
    for point in series or []:
        if not isinstance(point, dict):
            continue
        value = point.get("value")
        if is_finite_number(value):
            values.append(float(value))
    return np.asarray(values, dtype=np.float64)


def calculate_returns(values) -> np.ndarray:
    """
    Period-over-period fractional returns.

    Pairs with a zero or non-finite previous value, a non-finite current
    value, or a non-finite ratio are skipped, so the result can be shorter
    than len(values) - 1.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size < 2:
        return np.empty(0, dtype=np.float64)

    previous = values[:-1]
    current = values[1:]
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        returns = (current - previous) / previous

    valid = (
        (previous != 0)
        & np.isfinite(previous)
        & np.isfinite(current)
        & np.isfinite(returns)
    )
    return returns[valid]


def calculate_max_drawdown(values) -> float:
    """
    Largest peak-to-trough decline, as a non-negative percentage.

    A zero running peak is not special-cased: 0/0 gives NaN, which never
    exceeds the running maximum, while a positive decline over a zero peak
    gives +inf. Callers that need a finite figure must guard the result.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return 0.0

    peaks = np.maximum.accumulate(values)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        drawdowns = (peaks - values) / peaks

    drawdowns = drawdowns[~np.isnan(drawdowns)]
    max_drawdown = max(0.0, float(drawdowns.max())) if drawdowns.size else 0.0
    return max_drawdown * 100


def calculate_sharpe_ratio(returns) -> float:
    """Annualized Sharpe Ratio with a zero risk-free rate."""
    returns = np.asarray(returns, dtype=np.float64)
    if returns.size < 2:
        return 0.0

    mean = returns.mean()
    std = returns.std(ddof=1)
    if std == 0:
        return 0.0

    annualized_return = mean * TRADING_DAYS_PER_YEAR
    annualized_std = std * np.sqrt(TRADING_DAYS_PER_YEAR)
    return float(annualized_return / annualized_std)


def calculate_sortino_ratio(returns) -> float:
    """
    Annualized Sortino Ratio.

    The numerator uses the mean of all returns. The denominator is the
    downside deviation measured against zero over the negative returns only.
    """
    returns = np.asarray(returns, dtype=np.float64)
    if returns.size < 2:
        return 0.0

    mean = returns.mean()
    downside = returns[returns < 0]
    if downside.size == 0:
        return 0.0

    downside_std = np.sqrt(np.sum(downside ** 2) / downside.size)
    if downside_std == 0:
        return 0.0

    annualized_return = mean * TRADING_DAYS_PER_YEAR
    annualized_downside_std = downside_std * np.sqrt(TRADING_DAYS_PER_YEAR)
    return float(annualized_return / annualized_downside_std)


def calculate_calmar_ratio(total_return_pct: float, max_drawdown_pct: float) -> float:
    """Calculates the Calmar Ratio from percentage inputs."""
    if max_drawdown_pct == 0:
        return 0.0
    return (total_return_pct / 100) / (max_drawdown_pct / 100)
