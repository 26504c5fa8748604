"""
Risk scoring and risk-level classification.

Two distinct scores share one bucketing function:
- profile risk score (1-10) from fund type, expense ratio and fund age
- market risk score from realized volatility and maximum drawdown
They are kept under separate names and never substituted for one another.
"""

from datetime import date, datetime
from typing import Dict, Any, Optional, Sequence, Union
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ingestion.models import FundProfile, FundType, MetricsBundle


RISK_LEVELS = ('Low', 'Low-Medium', 'Medium', 'Medium-High', 'High')

# Inclusive upper bounds for the first four levels
PROFILE_RISK_BREAKPOINTS = (3, 5, 7, 9)
MARKET_RISK_BREAKPOINTS = (10, 20, 30, 40)
ALLOCATION_RISK_BREAKPOINTS = (3, 5, 7, 9)

FUND_TYPE_BASE_RISK = {
    FundType.FIXED_INCOME.value: 2,
    FundType.BALANCED.value: 4,
    FundType.CANADIAN_EQUITY.value: 6,
    FundType.GLOBAL_EQUITY.value: 7,
    FundType.REAL_ESTATE.value: 7,
    FundType.SECTOR.value: 8,
    FundType.ALTERNATIVE.value: 9,
}
UNKNOWN_FUND_TYPE_RISK = 5

MAX_RISK_SCORE = 10
MIN_RISK_SCORE = 1

MARKET_VOLATILITY_WEIGHT = 0.6
MARKET_DRAWDOWN_WEIGHT = 0.4


def classify_risk_level(value: float, breakpoints: Sequence[float]) -> str:
    """
    Map a score onto the five risk levels.

    Args:
        value: Score to classify
        breakpoints: Four ascending inclusive upper bounds for
            Low, Low-Medium, Medium and Medium-High; anything above is High

    Returns:
        Risk level label
    """
    if len(breakpoints) != len(RISK_LEVELS) - 1:
        raise ValueError(f"Expected {len(RISK_LEVELS) - 1} breakpoints, got {len(breakpoints)}")

    for level, upper in zip(RISK_LEVELS, breakpoints):
        if value <= upper:
            return level
    return RISK_LEVELS[-1]


def parse_inception_date(inception: Union[date, datetime, str, None]) -> Optional[date]:
    """Coerce an inception date given as date, datetime or string; None if absent."""
    if inception is None:
        return None
    if isinstance(inception, datetime):
        return inception.date()
    if isinstance(inception, date):
        return inception
    if isinstance(inception, str) and inception.strip():
        return date_parser.parse(inception).date()
    return None


def fund_age_years(
    inception: Union[date, datetime, str, None],
    as_of: Optional[date] = None
) -> Optional[int]:
    """
    Completed years between inception and as_of.

    Returns:
        Age in whole years, or None when the inception date is absent
    """
    inception_date = parse_inception_date(inception)
    if inception_date is None:
        return None

    if as_of is None:
        as_of = date.today()

    return relativedelta(as_of, inception_date).years


def compute_risk_score(fund: FundProfile, as_of: Optional[date] = None) -> int:
    """
    Calculate the profile risk score of a fund.

    Scoring:
    - Base from fund type (Fixed Income 2 ... Alternative 9, unknown 5)
    - +2 if expense ratio > 2.0, else +1 if > 1.5
    - +2 if fund is younger than 3 years, else +1 if younger than 5

    Args:
        fund: Fund profile
        as_of: Date the fund age is measured at (defaults to today)

    Returns:
        Integer score between 1 and 10
    """
    score = FUND_TYPE_BASE_RISK.get(fund.fund_type, UNKNOWN_FUND_TYPE_RISK)

    expense_ratio = fund.expense_ratio
    if expense_ratio is not None:
        if expense_ratio > 2.0:
            score += 2
        elif expense_ratio > 1.5:
            score += 1

    age = fund_age_years(fund.inception_date, as_of)
    if age is not None:
        if age < 3:
            score += 2
        elif age < 5:
            score += 1

    return max(MIN_RISK_SCORE, min(score, MAX_RISK_SCORE))


def profile_risk_level(risk_score: int) -> str:
    """Risk level of a profile risk score."""
    return classify_risk_level(risk_score, PROFILE_RISK_BREAKPOINTS)


def _weighted_market_risk(volatility: float, max_drawdown: float) -> float:
    return volatility * MARKET_VOLATILITY_WEIGHT + max_drawdown * MARKET_DRAWDOWN_WEIGHT


def market_risk_score(volatility: float, max_drawdown: float) -> float:
    """Weighted market risk score: 0.6 × volatility + 0.4 × max drawdown, 2 decimals."""
    return round(_weighted_market_risk(volatility, max_drawdown), 2)


def market_risk_level(volatility: float, max_drawdown: float) -> str:
    """Risk level from realized volatility and drawdown (10/20/30/40 breakpoints)."""
    return classify_risk_level(_weighted_market_risk(volatility, max_drawdown), MARKET_RISK_BREAKPOINTS)


def assess_market_risk(metrics: MetricsBundle) -> Dict[str, Any]:
    """Market risk score and level for a metrics bundle."""
    return {
        'market_risk_score': market_risk_score(metrics.volatility, metrics.max_drawdown),
        'market_risk_level': market_risk_level(metrics.volatility, metrics.max_drawdown)
    }


def allocation_risk_level(risk_rating: float) -> str:
    """Risk level of an allocation's 1-10 risk rating."""
    return classify_risk_level(risk_rating, ALLOCATION_RISK_BREAKPOINTS)
