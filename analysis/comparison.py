"""
Multi-fund comparison.
Side-by-side metrics, total returns and a return correlation matrix for several funds.
"""

from typing import Dict, Any, Hashable, Mapping, Optional

from ingestion.models import ReturnSeries
from analysis.metrics_aggregator import compute_metrics
from analysis.calculations.returns import mean_return, compounded_growth
from analysis.calculations.regression import correlation_matrix


def _nav_total_return(series: ReturnSeries) -> float:
    """Total return from first to last NAV as a fraction (0.0 below 2 observations)."""
    navs = series.navs
    if len(navs) < 2 or navs[0] <= 0:
        return 0.0
    return navs[-1] / navs[0] - 1


def compare_funds(
    series_by_fund: Mapping[Hashable, ReturnSeries],
    risk_free_rate: Optional[float] = None
) -> Dict[str, Any]:
    """
    Compare several funds over their supplied series.

    Args:
        series_by_fund: Mapping of fund identifier to its return series
        risk_free_rate: Risk-free rate passed through to each metrics bundle

    Returns:
        Dictionary with:
        - comparison: per-fund metrics, total_return, benchmark_total_return,
          excess_return and avg_return (percentages, 2 decimals)
        - correlation_matrix: pairwise correlation of fund returns
        - summary: fund ids of best/worst performer, highest volatility and
          best Sharpe ratio (None when no funds are given)
    """
    comparison = []
    for fund_id, series in series_by_fund.items():
        metrics = compute_metrics(series, risk_free_rate=risk_free_rate)

        total_return = _nav_total_return(series)
        benchmark_total = compounded_growth(series.benchmark_returns) - 1

        comparison.append({
            'fund_id': fund_id,
            'metrics': metrics.to_dict(),
            'total_return': round(total_return * 100, 2),
            'benchmark_total_return': round(benchmark_total * 100, 2),
            'excess_return': round((total_return - benchmark_total) * 100, 2),
            'avg_return': round(mean_return(series.returns), 2)
        })

    matrix = correlation_matrix({
        fund_id: series.returns for fund_id, series in series_by_fund.items()
    })

    if not comparison:
        summary = {
            'best_performer': None,
            'worst_performer': None,
            'highest_volatility': None,
            'best_sharpe': None
        }
    else:
        summary = {
            'best_performer': max(comparison, key=lambda f: f['total_return'])['fund_id'],
            'worst_performer': min(comparison, key=lambda f: f['total_return'])['fund_id'],
            'highest_volatility': max(comparison, key=lambda f: f['metrics']['volatility'])['fund_id'],
            'best_sharpe': max(comparison, key=lambda f: f['metrics']['sharpe_ratio'])['fund_id']
        }

    return {
        'comparison': comparison,
        'correlation_matrix': matrix,
        'summary': summary
    }
