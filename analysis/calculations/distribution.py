"""
Return distribution statistics.
Summary moments, floor-index percentiles and a fixed-bin histogram.
"""

import math
import numpy as np
from typing import Sequence, Dict, Any, List

from analysis.calculations.volatility import population_std


PERCENTILES = {'p10': 0.10, 'p25': 0.25, 'p50': 0.50, 'p75': 0.75, 'p90': 0.90}


def skewness(returns: Sequence[float]) -> float:
    """Population skewness rounded to 3 decimals (0.0 for constant or short input)."""
    std_dev = population_std(returns)
    if std_dev == 0:
        return 0.0

    values = np.asarray(returns, dtype=float)
    standardized = (values - values.mean()) / std_dev
    return round(float(np.mean(standardized ** 3)), 3)


def kurtosis(returns: Sequence[float]) -> float:
    """Population (non-excess) kurtosis rounded to 3 decimals (0.0 for constant or short input)."""
    std_dev = population_std(returns)
    if std_dev == 0:
        return 0.0

    values = np.asarray(returns, dtype=float)
    standardized = (values - values.mean()) / std_dev
    return round(float(np.mean(standardized ** 4)), 3)


def histogram(returns: Sequence[float], bin_count: int = 20) -> List[Dict[str, Any]]:
    """
    Bucket returns into equal-width bins between min and max.

    Bins are half-open [start, end) except the last, which also holds the maximum.
    Adjacent bins share one edge, so every observation lands in exactly one bin.

    Returns:
        List of bins with start, end, count and percentage of observations
    """
    if len(returns) == 0 or bin_count <= 0:
        return []

    values = np.asarray(returns, dtype=float)
    low, high = float(values.min()), float(values.max())
    n = len(values)

    edges = np.linspace(low, high, bin_count + 1)
    if high == low:
        # Zero-width bins: everything goes in the last one
        counts = np.zeros(bin_count, dtype=int)
        counts[-1] = n
    else:
        counts, _ = np.histogram(values, bins=edges)

    return [
        {
            'bin': i + 1,
            'start': round(float(edges[i]), 2),
            'end': round(float(edges[i + 1]), 2),
            'count': int(counts[i]),
            'percentage': round(int(counts[i]) / n * 100, 2)
        }
        for i in range(bin_count)
    ]


def returns_distribution(returns: Sequence[float], bin_count: int = 20) -> Dict[str, Any]:
    """
    Describe the distribution of period returns.

    Percentiles and the median use the element at floor(q × n) of the
    ascending sort, matching the historical VaR index convention.

    Args:
        returns: Period returns as percentages
        bin_count: Number of histogram bins

    Returns:
        Dictionary with total_observations, statistics (mean, median, min,
        max, standard_deviation, percentiles), histogram, skewness, kurtosis
    """
    n = len(returns)
    if n == 0:
        return {
            'total_observations': 0,
            'statistics': {
                'mean': 0.0,
                'median': 0.0,
                'min': 0.0,
                'max': 0.0,
                'standard_deviation': 0.0,
                'percentiles': {name: 0.0 for name in PERCENTILES}
            },
            'histogram': [],
            'skewness': 0.0,
            'kurtosis': 0.0
        }

    ordered = np.sort(np.asarray(returns, dtype=float))

    def at(q: float) -> float:
        return round(float(ordered[min(int(math.floor(n * q)), n - 1)]), 2)

    return {
        'total_observations': n,
        'statistics': {
            'mean': round(float(ordered.mean()), 2),
            'median': at(0.5),
            'min': round(float(ordered[0]), 2),
            'max': round(float(ordered[-1]), 2),
            'standard_deviation': round(population_std(ordered), 2),
            'percentiles': {name: at(q) for name, q in PERCENTILES.items()}
        },
        'histogram': histogram(ordered, bin_count),
        'skewness': skewness(ordered),
        'kurtosis': kurtosis(ordered)
    }
