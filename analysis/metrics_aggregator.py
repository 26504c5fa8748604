"""
Metrics aggregator - composes all return-series calculations into a MetricsBundle.
Pure function: a fresh bundle per call, identical output for identical input.
"""

import logging
from typing import Optional

from ingestion.models import ReturnSeries, MetricsBundle
from analysis.calculations.returns import mean_return, annualized_return
from analysis.calculations.volatility import volatility
from analysis.calculations.drawdown import max_drawdown
from analysis.calculations.ratios import (
    sharpe_ratio,
    sortino_ratio,
    treynor_ratio,
    information_ratio,
    jensens_alpha
)
from analysis.calculations.regression import beta, correlation
from analysis.calculations.tail_risk import value_at_risk, conditional_var
from analysis.settings import AnalyticsSettings

logger = logging.getLogger(__name__)


def compute_metrics(
    series: ReturnSeries,
    risk_free_rate: Optional[float] = None,
    confidence: Optional[float] = None
) -> MetricsBundle:
    """
    Compute the full risk/performance metrics bundle for a return series.

    Args:
        series: Chronological performance observations (may be empty)
        risk_free_rate: Risk-free rate in percent per period
            (default AnalyticsSettings.risk_free_rate)
        confidence: VaR / CVaR confidence level
            (default AnalyticsSettings.var_confidence)

    Returns:
        MetricsBundle; an empty series yields the documented defaults
        (0 for every statistic except beta, which defaults to 1)
    """
    defaults = AnalyticsSettings()
    if risk_free_rate is None:
        risk_free_rate = defaults.risk_free_rate
    if confidence is None:
        confidence = defaults.var_confidence

    returns = series.returns
    benchmark = series.benchmark_returns
    navs = series.navs

    if series.is_empty:
        logger.debug("Computing metrics for empty series, returning defaults")

    return MetricsBundle(
        observations=len(series),
        risk_free_rate=risk_free_rate,
        confidence=confidence,
        average_return=round(mean_return(returns), 2),
        annualized_return=annualized_return(returns, len(returns)),
        volatility=volatility(returns),
        max_drawdown=max_drawdown(navs),
        sharpe_ratio=sharpe_ratio(returns, risk_free_rate),
        sortino_ratio=sortino_ratio(returns, risk_free_rate),
        treynor_ratio=treynor_ratio(returns, benchmark, risk_free_rate),
        value_at_risk=value_at_risk(returns, confidence),
        conditional_var=conditional_var(returns, confidence),
        beta=beta(returns, benchmark),
        correlation=correlation(returns, benchmark),
        information_ratio=information_ratio(returns, benchmark),
        jensens_alpha=jensens_alpha(returns, benchmark, risk_free_rate)
    )
