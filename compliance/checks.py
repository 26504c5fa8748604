"""
Individual compliance checks.
Each check is a pure function of its inputs returning a dict with at least 'compliant'.
"""

from datetime import date
from typing import Dict, Any, List, Optional, Sequence

from ingestion.models import FundProfile, ReturnSeries, AllocationRecord
from analysis.calculations.concentration import concentration_risk, concentration_interpretation
from analysis.calculations.volatility import volatility
from analysis.calculations.drawdown import max_drawdown
from compliance.rules_config import ComplianceThresholds
from compliance.risk_scoring import compute_risk_score, profile_risk_level


REQUIRED_DISCLOSURES = ('fund_type', 'management_fee', 'expense_ratio', 'inception_date')


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _fmt(value: float) -> str:
    # 3.0 -> "3.0", 6.499999 -> "6.5"
    return f"{round(value, 2)}"


def check_concentration_limits(
    allocations: Sequence[AllocationRecord],
    thresholds: ComplianceThresholds
) -> Dict[str, Any]:
    """
    Check no single alternative-investment allocation exceeds the limit.

    Args:
        allocations: Alternative-investment allocation records
        thresholds: Regulatory limits (max_single_allocation, default 20%)

    Returns:
        Dictionary with compliant flag, concentration_risk (HHI 0-100),
        concentration_level, violations ({type, allocation, limit} per breach)
        and total_alternative_allocation
    """
    limit = thresholds.max_single_allocation
    percentages = [a.allocation_percentage for a in allocations]

    violations = [
        {
            'type': a.investment_type,
            'allocation': a.allocation_percentage,
            'limit': limit
        }
        for a in allocations
        if a.allocation_percentage > limit
    ]

    risk = concentration_risk(percentages)

    return {
        'compliant': not violations,
        'concentration_risk': risk,
        'concentration_level': concentration_interpretation(risk),
        'violations': violations,
        'total_alternative_allocation': round(sum(percentages), 2)
    }


def check_risk_disclosure(
    fund: FundProfile,
    thresholds: ComplianceThresholds,
    as_of: Optional[date] = None
) -> Dict[str, Any]:
    """
    Check that the required risk disclosures are present.

    Fails when fund type, management fee, expense ratio or inception date
    is absent. Also reports the profile risk score and its level.
    """
    missing = [name for name in REQUIRED_DISCLOSURES if _is_absent(getattr(fund, name))]
    risk_score = compute_risk_score(fund, as_of)

    return {
        'compliant': not missing,
        'risk_score': risk_score,
        'missing_disclosures': missing,
        'risk_level': profile_risk_level(risk_score)
    }


def check_performance_reporting(
    series: ReturnSeries,
    thresholds: ComplianceThresholds
) -> Dict[str, Any]:
    """
    Check that enough performance history exists for reporting.

    An empty series fails with a distinct reason; otherwise at least
    min_reporting_periods observations (one year of months) are required.
    """
    if series.is_empty:
        return {
            'compliant': False,
            'reason': 'No performance data available',
            'data_points': 0,
            'has_required_periods': False
        }

    has_required_periods = len(series) >= thresholds.min_reporting_periods

    result = {
        'compliant': has_required_periods,
        'volatility': volatility(series.returns),
        'max_drawdown': max_drawdown(series.navs),
        'data_points': len(series),
        'has_required_periods': has_required_periods
    }
    if not has_required_periods:
        result['reason'] = (
            f"Insufficient performance history: {len(series)} periods, "
            f"need {thresholds.min_reporting_periods}"
        )
    return result


def check_fee_disclosure(
    fund: FundProfile,
    thresholds: ComplianceThresholds
) -> Dict[str, Any]:
    """
    Check management fee, expense ratio and total fees against limits.

    Each breach produces its own message. Absent fees count as zero here;
    their absence is reported by the risk disclosure check.
    """
    management_fee = fund.management_fee or 0.0
    expense_ratio = fund.expense_ratio or 0.0
    total_fees = management_fee + expense_ratio

    violations: List[str] = []

    if management_fee > thresholds.max_management_fee:
        violations.append(
            f"Management fee ({_fmt(management_fee)}%) exceeds maximum "
            f"({_fmt(thresholds.max_management_fee)}%)"
        )

    if expense_ratio > thresholds.max_expense_ratio:
        violations.append(
            f"Expense ratio ({_fmt(expense_ratio)}%) exceeds maximum "
            f"({_fmt(thresholds.max_expense_ratio)}%)"
        )

    if total_fees > thresholds.max_total_fees:
        violations.append(
            f"Total fees ({_fmt(total_fees)}%) exceed maximum "
            f"({_fmt(thresholds.max_total_fees)}%)"
        )

    return {
        'compliant': not violations,
        'violations': violations,
        'total_fees': round(total_fees, 2),
        'management_fee': fund.management_fee,
        'expense_ratio': fund.expense_ratio
    }


def average_daily_volume(series: ReturnSeries, thresholds: ComplianceThresholds) -> float:
    """Approximate average daily volume as a fixed fraction of mean AUM."""
    aum_values = series.aum_values
    if not aum_values:
        return 0.0
    return sum(aum_values) / len(aum_values) * thresholds.daily_volume_fraction


def check_liquidity_requirements(
    fund: FundProfile,
    series: ReturnSeries,
    thresholds: ComplianceThresholds
) -> Dict[str, Any]:
    """
    Check minimum AUM and the days-to-liquidate ratio.

    Compliant requires latest AUM >= min_aum and
    latest AUM / average daily volume <= max_liquidity_days.
    """
    if series.is_empty:
        return {
            'compliant': False,
            'reason': 'Insufficient data for liquidity analysis'
        }

    recent_aum = series.latest.assets_under_management
    avg_daily_volume = average_daily_volume(series, thresholds)

    if avg_daily_volume > 0:
        liquidity_ratio: Optional[float] = round(recent_aum / avg_daily_volume, 2)
        liquid = recent_aum / avg_daily_volume <= thresholds.max_liquidity_days
    else:
        liquidity_ratio = None
        liquid = False

    return {
        'compliant': recent_aum >= thresholds.min_aum and liquid,
        'aum': recent_aum,
        'min_aum': thresholds.min_aum,
        'liquidity_ratio': liquidity_ratio,
        'max_liquidity_ratio': thresholds.max_liquidity_days,
        'avg_daily_volume': round(avg_daily_volume, 2)
    }
