"""
Volatility calculation utilities.
Pure functions for population standard deviation, downside deviation and tracking error.
"""

import math
import numpy as np
from typing import Sequence, List


def population_std(values: Sequence[float]) -> float:
    """
    Population standard deviation (ddof=0) at full precision.

    Returns:
        Standard deviation, or 0.0 for fewer than 2 values
    """
    if len(values) < 2:
        return 0.0

    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def volatility(returns: Sequence[float]) -> float:
    """
    Calculate volatility of period returns.

    Formula: σ = sqrt(Σ(r - mean)² / n)

    Args:
        returns: Period returns as percentages

    Returns:
        Volatility rounded to 2 decimals (0.0 for empty or single-element input)
    """
    return round(population_std(returns), 2)


def downside_std(returns: Sequence[float]) -> float:
    """
    Downside deviation at full precision.

    Only observations below the mean contribute, but the squared deviations
    are divided by the full sequence length.

    Returns:
        Downside deviation, or 0.0 if empty or no observation is below the mean
    """
    n = len(returns)
    if n == 0:
        return 0.0

    values = np.asarray(returns, dtype=float)
    avg = float(np.mean(values))
    downside = values[values < avg]

    if downside.size == 0:
        return 0.0

    return math.sqrt(float(np.sum((downside - avg) ** 2)) / n)


def downside_deviation(returns: Sequence[float]) -> float:
    """
    Calculate downside deviation of period returns.

    Args:
        returns: Period returns as percentages

    Returns:
        Downside deviation rounded to 2 decimals
    """
    return round(downside_std(returns), 2)


def excess_returns(
    returns: Sequence[float],
    benchmark_returns: Sequence[float]
) -> List[float]:
    """
    Pairwise excess of fund over benchmark returns.

    Returns:
        Excess returns, or an empty list when lengths differ
    """
    if len(returns) != len(benchmark_returns):
        return []

    diff = np.asarray(returns, dtype=float) - np.asarray(benchmark_returns, dtype=float)
    return diff.tolist()


def tracking_error(
    returns: Sequence[float],
    benchmark_returns: Sequence[float]
) -> float:
    """
    Calculate tracking error: volatility of excess returns over the benchmark.

    Args:
        returns: Fund period returns
        benchmark_returns: Benchmark returns for the same periods

    Returns:
        Tracking error rounded to 2 decimals (0.0 on length mismatch or empty input)
    """
    return round(population_std(excess_returns(returns, benchmark_returns)), 2)
