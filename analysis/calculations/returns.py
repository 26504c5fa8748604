"""
Returns calculation utilities.
Pure functions for average, compounded, annualized and personal rates of return.
All period returns are percentages (2.5 = 2.5%).
"""

import math
import numpy as np
from typing import Sequence


class InvalidInputError(ValueError):
    """Raised when inputs make a return economically meaningless."""
    pass


def mean_return(returns: Sequence[float]) -> float:
    """
    Arithmetic mean of period returns at full precision.

    Returns:
        Mean return, or 0.0 for an empty sequence
    """
    if len(returns) == 0:
        return 0.0

    return float(np.mean(np.asarray(returns, dtype=float)))


def compounded_growth(period_returns: Sequence[float]) -> float:
    """
    Growth factor of compounding percentage returns: Π(1 + r/100).

    Returns:
        Growth factor (1.0 for an empty sequence)
    """
    if len(period_returns) == 0:
        return 1.0

    factors = 1.0 + np.asarray(period_returns, dtype=float) / 100.0
    return float(np.prod(factors))


def cumulative_return(period_returns: Sequence[float]) -> float:
    """
    Total compounded return over all periods.

    Formula: (Π(1 + r/100) - 1) × 100

    Args:
        period_returns: Period returns in chronological order

    Returns:
        Cumulative return as percentage, rounded to 2 decimals
    """
    return round((compounded_growth(period_returns) - 1.0) * 100.0, 2)


def annualized_return(period_returns: Sequence[float], period_count: int) -> float:
    """
    Annualize compounded monthly returns.

    Formula: (Π(1 + r/100))^(12 / period_count) - 1

    Args:
        period_returns: Monthly returns as percentages
        period_count: Number of months the returns span

    Returns:
        Annualized return as percentage, rounded to 2 decimals.
        0.0 for an empty sequence or non-positive period_count;
        -100.0 when the compounded growth is wiped out (growth <= 0).
    """
    if len(period_returns) == 0 or period_count <= 0:
        return 0.0

    growth = compounded_growth(period_returns)

    # A non-positive growth factor has no real fractional power
    if growth <= 0:
        return -100.0

    annualized = math.pow(growth, 12.0 / period_count) - 1.0
    return round(annualized * 100.0, 2)


def personal_rate_of_return(
    beginning_value: float,
    ending_value: float,
    contributions: float = 0.0,
    withdrawals: float = 0.0,
    period_months: float = 12
) -> float:
    """
    Calculate Personal Rate of Return (PROR), a money-weighted return.

    Formula:
        net_cash_flow = contributions - withdrawals
        weighted_contributions = contributions × (period_months / 12)
        PROR = (ending - beginning - net_cash_flow)
               / (beginning + weighted_contributions) × 100

    Args:
        beginning_value: Account value at period start
        ending_value: Account value at period end
        contributions: Money added during the period
        withdrawals: Money removed during the period
        period_months: Length of the period in months

    Returns:
        PROR as percentage, rounded to 2 decimals

    Raises:
        InvalidInputError: If beginning value or denominator is not positive
    """
    if beginning_value <= 0:
        raise InvalidInputError("Beginning value must be greater than zero")

    net_cash_flow = contributions - withdrawals
    weighted_contributions = contributions * (period_months / 12)
    denominator = beginning_value + weighted_contributions

    if denominator <= 0:
        raise InvalidInputError(
            f"Invalid calculation parameters: denominator {denominator} must be positive"
        )

    pror = ((ending_value - beginning_value - net_cash_flow) / denominator) * 100
    return round(pror, 2)
