"""
Analysis Engine Module

Calculates risk/performance statistics from fund return series:
- Volatility, downside deviation, tracking error
- Maximum drawdown
- Sharpe, Sortino, Treynor, information ratio, Jensen's alpha
- Beta and correlation
- Historical VaR / CVaR
- Allocation concentration (HHI)
- Annualized and personal rates of return
"""

from analysis.metrics_aggregator import compute_metrics
from analysis.calculations.returns import InvalidInputError, personal_rate_of_return

__version__ = "0.1.0"


def compute_personal_return(
    beginning_value: float,
    ending_value: float,
    contributions: float = 0.0,
    withdrawals: float = 0.0,
    period_months: float = 12
) -> float:
    """
    Personal rate of return in percent.

    Raises:
        InvalidInputError: If the beginning value or the weighted base is not positive
    """
    return personal_rate_of_return(
        beginning_value, ending_value, contributions, withdrawals, period_months
    )


__all__ = [
    "compute_metrics",
    "compute_personal_return",
    "InvalidInputError",
]
