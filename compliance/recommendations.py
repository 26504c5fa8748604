"""
Remediation recommendations derived from failed compliance checks.
"""

from typing import List, Sequence

from ingestion.models import CheckResult, CheckSeverity, Priority, Recommendation
from compliance.rules_config import ComplianceThresholds


# check key -> (category, action, deadline threshold attribute)
REMEDIATIONS = {
    'concentration_limits': (
        'Concentration Limits',
        'Review and rebalance portfolio to meet concentration limits',
        'concentration_deadline_days'
    ),
    'fee_disclosure': (
        'Fee Disclosure',
        'Review fee structure and ensure compliance with fee limits',
        'fee_deadline_days'
    ),
    'risk_disclosure': (
        'Risk Disclosure',
        'Update fund documentation with complete risk disclosures',
        'risk_disclosure_deadline_days'
    ),
    'liquidity_requirements': (
        'Liquidity',
        'Monitor liquidity ratios and consider portfolio adjustments',
        'liquidity_deadline_days'
    ),
}

PRIORITY_BY_SEVERITY = {
    CheckSeverity.VIOLATION: Priority.HIGH,
    CheckSeverity.WARNING: Priority.MEDIUM,
}

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1}


def generate_recommendations(
    results: Sequence[CheckResult],
    thresholds: ComplianceThresholds
) -> List[Recommendation]:
    """
    Build prioritized remediation steps for failed checks.

    HIGH priority for violations, MEDIUM for warnings; HIGH first, then in
    check order. Checks without a remediation entry (performance reporting)
    produce nothing.
    """
    recommendations = []
    for result in results:
        if result.compliant or result.key not in REMEDIATIONS:
            continue

        category, action, deadline_attr = REMEDIATIONS[result.key]
        recommendations.append(Recommendation(
            priority=PRIORITY_BY_SEVERITY[result.severity],
            category=category,
            action=action,
            deadline_days=int(getattr(thresholds, deadline_attr))
        ))

    # Stable sort keeps check order within a priority
    return sorted(recommendations, key=lambda r: _PRIORITY_ORDER[r.priority])
