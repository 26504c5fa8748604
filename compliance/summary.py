"""
Portfolio-wide compliance summaries.
Aggregations over already-evaluated reports and allocation sets of several funds.
"""

from collections import Counter
from typing import Dict, Any, Hashable, List, Mapping, Optional, Sequence

from ingestion.models import AllocationRecord, Alert, AlertSeverity, ComplianceReport
from compliance.risk_scoring import allocation_risk_level
from compliance.rules_config import ComplianceThresholds


def summarize_compliance(reports: Sequence[ComplianceReport]) -> Dict[str, Any]:
    """
    Summarize compliance across several fund reports.

    Returns:
        Dictionary with total_funds, compliant_funds, non_compliant_funds,
        compliance_rate (percent; 100.0 for no reports), average_risk_score,
        and counts of each violation and warning name
    """
    total = len(reports)
    compliant = sum(1 for r in reports if r.overall_compliant)

    violation_counts = Counter(name for r in reports for name in r.violations)
    warning_counts = Counter(name for r in reports for name in r.warnings)

    return {
        'total_funds': total,
        'compliant_funds': compliant,
        'non_compliant_funds': total - compliant,
        'compliance_rate': round(compliant / total * 100, 2) if total else 100.0,
        'average_risk_score': round(sum(r.risk_score for r in reports) / total, 2) if total else 0.0,
        'violation_counts': dict(violation_counts),
        'warning_counts': dict(warning_counts)
    }


def summarize_concentration(
    allocations_by_fund: Mapping[Hashable, Sequence[AllocationRecord]],
    thresholds: Optional[ComplianceThresholds] = None
) -> Dict[str, Any]:
    """
    Summarize single-allocation concentration breaches across funds.

    Returns:
        Dictionary with max_concentration_limit, compliance_summary
        (funds with alternatives, funds with violations, total violations,
        compliance rate) and the list of violations with excess allocation
    """
    if thresholds is None:
        thresholds = ComplianceThresholds()
    limit = thresholds.max_single_allocation

    violations: List[Dict[str, Any]] = []
    funds_with_alternatives = 0
    funds_with_violations = set()

    for fund_id, allocations in allocations_by_fund.items():
        if not allocations:
            continue
        funds_with_alternatives += 1

        for allocation in allocations:
            if allocation.allocation_percentage > limit:
                funds_with_violations.add(fund_id)
                violations.append({
                    'fund_id': fund_id,
                    'investment_type': allocation.investment_type,
                    'allocation_percentage': round(allocation.allocation_percentage, 2),
                    'risk_rating': allocation.risk_rating,
                    'risk_level': allocation_risk_level(allocation.risk_rating),
                    'excess_allocation': round(allocation.allocation_percentage - limit, 2)
                })

    if funds_with_alternatives:
        rate = (funds_with_alternatives - len(funds_with_violations)) / funds_with_alternatives * 100
    else:
        rate = 100.0

    return {
        'max_concentration_limit': limit,
        'compliance_summary': {
            'total_funds_with_alternatives': funds_with_alternatives,
            'funds_with_violations': len(funds_with_violations),
            'total_violations': len(violations),
            'compliance_rate': round(rate, 2)
        },
        'violations': violations
    }


def scan_portfolio_alerts(reports: Sequence[ComplianceReport]) -> List[Alert]:
    """One CRITICAL alert per non-compliant report."""
    return [
        Alert(
            type='NON_COMPLIANT',
            severity=AlertSeverity.CRITICAL,
            message=f"Fund is not compliant: {', '.join(report.violations)}",
            threshold=0,
            fund_id=report.fund_id
        )
        for report in reports
        if not report.overall_compliant
    ]
