"""
Compliance engine - evaluates the ordered check registry against one fund.

Checks are data: each descriptor names its evaluator and severity tier.
Violation-tier failures flip the overall verdict; warning-tier failures are
tracked separately and leave it untouched.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Any, List, Optional, Sequence, Tuple

from ingestion.models import (
    FundProfile,
    ReturnSeries,
    AllocationRecord,
    CheckResult,
    CheckSeverity,
    ComplianceReport,
)
from compliance.checks import (
    check_concentration_limits,
    check_risk_disclosure,
    check_performance_reporting,
    check_fee_disclosure,
    check_liquidity_requirements,
)
from compliance.recommendations import generate_recommendations
from compliance.risk_scoring import compute_risk_score, profile_risk_level
from compliance.rules_config import ComplianceThresholds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """Inputs shared by every check in one evaluation."""
    fund: FundProfile
    series: ReturnSeries
    allocations: Tuple[AllocationRecord, ...]
    thresholds: ComplianceThresholds
    as_of: date


@dataclass(frozen=True)
class ComplianceCheck:
    """Descriptor of one registered compliance check."""
    key: str
    name: str
    severity: CheckSeverity
    evaluator: Callable[[EvaluationContext], Dict[str, Any]]

    def run(self, context: EvaluationContext) -> CheckResult:
        outcome = dict(self.evaluator(context))
        compliant = bool(outcome.pop('compliant'))
        return CheckResult(
            key=self.key,
            name=self.name,
            severity=self.severity,
            compliant=compliant,
            details=outcome
        )


COMPLIANCE_CHECKS: Tuple[ComplianceCheck, ...] = (
    ComplianceCheck(
        key='concentration_limits',
        name='Concentration Limits',
        severity=CheckSeverity.VIOLATION,
        evaluator=lambda ctx: check_concentration_limits(ctx.allocations, ctx.thresholds)
    ),
    ComplianceCheck(
        key='risk_disclosure',
        name='Risk Disclosure',
        severity=CheckSeverity.WARNING,
        evaluator=lambda ctx: check_risk_disclosure(ctx.fund, ctx.thresholds, ctx.as_of)
    ),
    ComplianceCheck(
        key='performance_reporting',
        name='Performance Reporting',
        severity=CheckSeverity.WARNING,
        evaluator=lambda ctx: check_performance_reporting(ctx.series, ctx.thresholds)
    ),
    ComplianceCheck(
        key='fee_disclosure',
        name='Fee Disclosure',
        severity=CheckSeverity.VIOLATION,
        evaluator=lambda ctx: check_fee_disclosure(ctx.fund, ctx.thresholds)
    ),
    ComplianceCheck(
        key='liquidity_requirements',
        name='Liquidity Requirements',
        severity=CheckSeverity.WARNING,
        evaluator=lambda ctx: check_liquidity_requirements(ctx.fund, ctx.series, ctx.thresholds)
    ),
)


def run_checks(
    context: EvaluationContext,
    checks: Sequence[ComplianceCheck] = COMPLIANCE_CHECKS
) -> List[CheckResult]:
    """Run every registered check once, in registry order."""
    results = []
    for check in checks:
        result = check.run(context)
        logger.debug(f"Check {check.key}: {'pass' if result.compliant else 'fail'}")
        results.append(result)
    return results


def evaluate_compliance(
    fund: FundProfile,
    series: ReturnSeries,
    allocations: Sequence[AllocationRecord],
    thresholds: Optional[ComplianceThresholds] = None,
    as_of: Optional[date] = None,
    checks: Sequence[ComplianceCheck] = COMPLIANCE_CHECKS
) -> ComplianceReport:
    """
    Evaluate a fund against the compliance rule set.

    Args:
        fund: Fund profile
        series: Chronological performance observations (may be empty)
        allocations: Alternative-investment allocations (may be empty)
        thresholds: Regulatory limits (defaults to the built-in limits)
        as_of: Evaluation date for fund-age rules (defaults to today);
            pass it explicitly for reproducible reports
        checks: Check registry to apply

    Returns:
        Immutable ComplianceReport with per-check detail, violation and
        warning names, risk score, risk level and recommendations
    """
    if thresholds is None:
        thresholds = ComplianceThresholds()
    if as_of is None:
        as_of = date.today()

    context = EvaluationContext(
        fund=fund,
        series=series,
        allocations=tuple(allocations),
        thresholds=thresholds,
        as_of=as_of
    )

    results = run_checks(context, checks)

    failed = [r for r in results if not r.compliant]
    violations = [r.name for r in failed if r.severity == CheckSeverity.VIOLATION]
    warnings = [r.name for r in failed if r.severity == CheckSeverity.WARNING]

    risk_score = compute_risk_score(fund, as_of)

    report = ComplianceReport(
        overall_compliant=not violations,
        checks=tuple(results),
        violations=tuple(violations),
        warnings=tuple(warnings),
        risk_score=risk_score,
        risk_level=profile_risk_level(risk_score),
        recommendations=tuple(generate_recommendations(results, thresholds)),
        as_of=as_of,
        fund_id=fund.fund_id
    )

    logger.info(
        f"Compliance evaluated for fund {fund.fund_id}: {report.status} "
        f"({len(violations)} violations, {len(warnings)} warnings, risk score {risk_score})"
    )
    return report
