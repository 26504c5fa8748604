"""
Tail-risk calculation utilities.
Historical-simulation Value at Risk and Conditional Value at Risk.
"""

import math
import numpy as np
from typing import Sequence


def _var_index(n: int, confidence: float) -> int:
    # floor((1 - c) * n), kept inside the sorted array
    index = int(math.floor((1 - confidence) * n))
    return min(max(index, 0), n - 1)


def value_at_risk_unrounded(returns: Sequence[float], confidence: float = 0.95) -> float:
    """Historical VaR element at full precision (0.0 for empty input)."""
    n = len(returns)
    if n == 0:
        return 0.0

    ordered = np.sort(np.asarray(returns, dtype=float))
    return float(ordered[_var_index(n, confidence)])


def value_at_risk(returns: Sequence[float], confidence: float = 0.95) -> float:
    """
    Calculate historical Value at Risk.

    Sorts returns ascending and picks the element at floor((1 - confidence) × n).
    With 20 observations at 95% this is the second-worst return; with fewer
    than 20 it is the worst.

    Args:
        returns: Period returns as percentages
        confidence: Confidence level (0.95 = 95%)

    Returns:
        VaR as a (usually negative) return rounded to 2 decimals, 0.0 if empty
    """
    return round(value_at_risk_unrounded(returns, confidence), 2)


def conditional_var(returns: Sequence[float], confidence: float = 0.95) -> float:
    """
    Calculate Conditional Value at Risk (expected shortfall).

    Mean of all returns at or below the VaR threshold.

    Returns:
        CVaR rounded to 2 decimals; the VaR itself if nothing qualifies, 0.0 if empty
    """
    if len(returns) == 0:
        return 0.0

    threshold = value_at_risk_unrounded(returns, confidence)
    values = np.asarray(returns, dtype=float)
    tail = values[values <= threshold]

    if tail.size == 0:
        return round(threshold, 2)

    return round(float(np.mean(tail)), 2)
