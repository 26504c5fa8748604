"""
Co-movement calculation utilities.
Pure functions for beta, Pearson correlation and correlation matrices.
"""

import math
import numpy as np
from typing import Sequence, Dict, Mapping, Hashable


def beta_unrounded(
    returns: Sequence[float],
    benchmark_returns: Sequence[float]
) -> float:
    """
    Beta at full precision: cov(r, b) / var(b) with population moments.

    Returns:
        Beta, or 1.0 (market-neutral default) when lengths differ,
        input is empty, or benchmark variance is zero
    """
    if len(returns) != len(benchmark_returns) or len(returns) == 0:
        return 1.0

    fund = np.asarray(returns, dtype=float)
    bench = np.asarray(benchmark_returns, dtype=float)

    fund_diff = fund - fund.mean()
    bench_diff = bench - bench.mean()

    covariance = float(np.sum(fund_diff * bench_diff)) / len(fund)
    benchmark_variance = float(np.sum(bench_diff * bench_diff)) / len(bench)

    if benchmark_variance == 0:
        return 1.0

    return covariance / benchmark_variance


def beta(returns: Sequence[float], benchmark_returns: Sequence[float]) -> float:
    """
    Calculate fund beta against its benchmark.

    Args:
        returns: Fund period returns
        benchmark_returns: Benchmark returns for the same periods

    Returns:
        Beta rounded to 3 decimals (1.0 on degenerate input)
    """
    return round(beta_unrounded(returns, benchmark_returns), 3)


def correlation(series_a: Sequence[float], series_b: Sequence[float]) -> float:
    """
    Calculate the Pearson correlation coefficient.

    Args:
        series_a: First sequence
        series_b: Second sequence, index-aligned with the first

    Returns:
        Correlation rounded to 3 decimals. 0.0 on length mismatch,
        empty input, or zero variance in either sequence.
    """
    if len(series_a) != len(series_b) or len(series_a) == 0:
        return 0.0

    a = np.asarray(series_a, dtype=float)
    b = np.asarray(series_b, dtype=float)

    diff_a = a - a.mean()
    diff_b = b - b.mean()

    numerator = float(np.sum(diff_a * diff_b))
    denominator = math.sqrt(float(np.sum(diff_a * diff_a)) * float(np.sum(diff_b * diff_b)))

    if denominator == 0:
        return 0.0

    return round(numerator / denominator, 3)


def correlation_matrix(
    series_by_key: Mapping[Hashable, Sequence[float]]
) -> Dict[Hashable, Dict[Hashable, float]]:
    """
    Calculate pairwise correlations between several return series.

    Args:
        series_by_key: Mapping of identifier to return series

    Returns:
        Symmetric nested dictionary: matrix[a][b] == matrix[b][a]
    """
    keys = list(series_by_key.keys())
    matrix: Dict[Hashable, Dict[Hashable, float]] = {key: {} for key in keys}

    for i, first in enumerate(keys):
        for second in keys[i:]:
            value = correlation(series_by_key[first], series_by_key[second])
            matrix[first][second] = value
            matrix[second][first] = value

    return matrix
