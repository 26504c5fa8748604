"""
Risk-adjusted performance ratios.
Pure functions built on the unrounded volatility, beta and mean helpers;
rounding happens once, on the returned value.
"""

from typing import Sequence

from analysis.calculations.returns import mean_return
from analysis.calculations.volatility import population_std, downside_std, excess_returns
from analysis.calculations.regression import beta_unrounded


DEFAULT_RISK_FREE_RATE = 2.5


def sharpe_ratio(returns: Sequence[float], risk_free_rate: float = DEFAULT_RISK_FREE_RATE) -> float:
    """
    Calculate the Sharpe ratio.

    Formula: (mean(r) - rf) / σ

    Args:
        returns: Period returns as percentages
        risk_free_rate: Risk-free rate in the same units as returns

    Returns:
        Sharpe ratio rounded to 3 decimals (0.0 for empty input or zero volatility)
    """
    if len(returns) == 0:
        return 0.0

    std_dev = population_std(returns)
    if std_dev == 0:
        return 0.0

    return round((mean_return(returns) - risk_free_rate) / std_dev, 3)


def sortino_ratio(returns: Sequence[float], risk_free_rate: float = DEFAULT_RISK_FREE_RATE) -> float:
    """
    Calculate the Sortino ratio.

    Formula: (mean(r) - rf) / downside deviation, where the downside deviation
    only counts observations below the mean but is normalized by the full length.

    Returns:
        Sortino ratio rounded to 3 decimals (0.0 without downside observations)
    """
    if len(returns) == 0:
        return 0.0

    deviation = downside_std(returns)
    if deviation == 0:
        return 0.0

    return round((mean_return(returns) - risk_free_rate) / deviation, 3)


def treynor_ratio(
    returns: Sequence[float],
    benchmark_returns: Sequence[float],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE
) -> float:
    """
    Calculate the Treynor ratio.

    Formula: (mean(r) - rf) / β

    Returns:
        Treynor ratio rounded to 3 decimals (0.0 when beta is zero or returns are empty)
    """
    if len(returns) == 0:
        return 0.0

    fund_beta = beta_unrounded(returns, benchmark_returns)
    if fund_beta == 0:
        return 0.0

    return round((mean_return(returns) - risk_free_rate) / fund_beta, 3)


def information_ratio(returns: Sequence[float], benchmark_returns: Sequence[float]) -> float:
    """
    Calculate the information ratio.

    Formula: mean(r - b) / tracking error

    Returns:
        Information ratio rounded to 3 decimals. 0.0 on length mismatch,
        empty input, or zero tracking error.
    """
    excess = excess_returns(returns, benchmark_returns)
    if not excess:
        return 0.0

    tracking = population_std(excess)
    if tracking == 0:
        return 0.0

    return round(mean_return(excess) / tracking, 3)


def jensens_alpha(
    returns: Sequence[float],
    benchmark_returns: Sequence[float],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE
) -> float:
    """
    Calculate Jensen's alpha.

    Formula: mean(r) - [rf + β × (mean(b) - rf)]

    Returns:
        Alpha rounded to 2 decimals (0.0 when either series is empty)
    """
    if len(returns) == 0 or len(benchmark_returns) == 0:
        return 0.0

    fund_beta = beta_unrounded(returns, benchmark_returns)
    expected = risk_free_rate + fund_beta * (mean_return(benchmark_returns) - risk_free_rate)

    return round(mean_return(returns) - expected, 2)
