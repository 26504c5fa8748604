"""
Drawdown and recovery calculation utilities.
Pure functions for peak-to-trough decline analysis over NAV series.
"""

import numpy as np
from datetime import date
from typing import Sequence, Dict, Union, Optional


def _drawdown_curve(navs: Sequence[float]) -> np.ndarray:
    """Relative decline from the running peak at each point (0.0 = at peak)."""
    values = np.asarray(navs, dtype=float)
    running_max = np.maximum.accumulate(values)

    curve = np.zeros_like(values)
    positive = running_max > 0
    curve[positive] = (running_max[positive] - values[positive]) / running_max[positive]
    return curve


def max_drawdown(navs: Sequence[float]) -> float:
    """
    Calculate maximum drawdown of a valuation series.

    Tracks the running peak and reports the largest (peak - value) / peak.

    Args:
        navs: Net asset values in chronological order

    Returns:
        Maximum drawdown as a positive percentage rounded to 2 decimals.
        0.0 for empty or single-element input and for series with no decline.
    """
    if len(navs) < 2:
        return 0.0

    curve = _drawdown_curve(navs)
    return round(float(curve.max()) * 100, 2)


def drawdown_stats(
    navs: Sequence[float],
    periods: Sequence[date]
) -> Dict[str, Union[float, date, int, None]]:
    """
    Calculate maximum drawdown with its peak, trough and recovery points.

    Args:
        navs: Net asset values in chronological order
        periods: Corresponding period identifiers

    Returns:
        Dictionary with drawdown statistics:
        - max_drawdown_pct: Largest decline as positive percentage
        - peak_period: Period of the peak before the max drawdown
        - trough_period: Period of the lowest point
        - recovery_period: First period back above the peak (None if not recovered)
        - drawdown_periods: Periods from peak to trough
        - recovery_periods: Periods from trough to recovery (None if not recovered)

        Degenerate input (fewer than 2 values or mismatched lengths) yields a
        zero drawdown with no peak or trough.
    """
    empty = {
        'max_drawdown_pct': 0.0,
        'peak_period': None,
        'trough_period': None,
        'recovery_period': None,
        'drawdown_periods': 0,
        'recovery_periods': None
    }

    if len(navs) < 2 or len(navs) != len(periods):
        return empty

    values = np.asarray(navs, dtype=float)
    curve = _drawdown_curve(values)
    trough_idx = int(np.argmax(curve))

    if curve[trough_idx] == 0:
        return {**empty, 'peak_period': periods[0], 'trough_period': periods[0]}

    # Peak is the first occurrence of the running maximum before the trough
    peak_value = float(np.max(values[:trough_idx + 1]))
    peak_idx = int(np.argmax(values[:trough_idx + 1] >= peak_value))

    recovery_idx: Optional[int] = None
    for i in range(trough_idx + 1, len(values)):
        if values[i] >= peak_value:
            recovery_idx = i
            break

    return {
        'max_drawdown_pct': round(float(curve[trough_idx]) * 100, 2),
        'peak_period': periods[peak_idx],
        'trough_period': periods[trough_idx],
        'recovery_period': periods[recovery_idx] if recovery_idx is not None else None,
        'drawdown_periods': trough_idx - peak_idx,
        'recovery_periods': (recovery_idx - trough_idx) if recovery_idx is not None else None
    }
