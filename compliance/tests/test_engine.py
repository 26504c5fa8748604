"""
Tests for the compliance engine.
Covers the overall verdict tiers, report summary and registry extension.
"""

import json
import pickle
import pytest
from dataclasses import FrozenInstanceError
from datetime import date

from ingestion.models import (
    FundProfile,
    PerformanceObservation,
    ReturnSeries,
    AllocationRecord,
    CheckSeverity,
    Priority
)
from compliance import (
    COMPLIANCE_CHECKS,
    ComplianceCheck,
    ComplianceThresholds,
    evaluate_compliance
)


AS_OF = date(2025, 6, 30)


def make_series(n=12, aum=None):
    aum = aum if aum is not None else [50_000_000.0] * n
    return ReturnSeries(tuple(
        PerformanceObservation(
            period=date(2024 + i // 12, i % 12 + 1, 1),
            nav=10.0 + i * 0.05,
            total_return=0.5,
            benchmark_return=0.4,
            assets_under_management=aum[i],
        )
        for i in range(n)
    ))


def good_fund(**overrides):
    values = dict(
        fund_id=42,
        fund_type='Balanced',
        management_fee=1.5,
        expense_ratio=1.8,
        inception_date=date(2016, 3, 1),
    )
    values.update(overrides)
    return FundProfile(**values)


def liquid_series():
    """Twelve months where the last AUM is low enough relative to the mean."""
    aum = [100_000_000.0] * 11 + [25_000_000.0]
    return make_series(12, aum)


class TestRegistry:
    """Tests for the default check registry."""

    def test_order_and_severity(self):
        assert [(c.key, c.severity) for c in COMPLIANCE_CHECKS] == [
            ('concentration_limits', CheckSeverity.VIOLATION),
            ('risk_disclosure', CheckSeverity.WARNING),
            ('performance_reporting', CheckSeverity.WARNING),
            ('fee_disclosure', CheckSeverity.VIOLATION),
            ('liquidity_requirements', CheckSeverity.WARNING),
        ]


class TestEvaluateCompliance:
    """Tests for evaluate_compliance."""

    def test_fully_compliant(self):
        report = evaluate_compliance(good_fund(), liquid_series(),
                                     [AllocationRecord('REITs', 15.0)], as_of=AS_OF)

        assert report.overall_compliant is True
        assert report.status == 'COMPLIANT'
        assert report.violations == ()
        assert report.warnings == ()
        assert report.recommendations == ()
        assert report.summary == {
            'total_checks': 5,
            'passed_checks': 5,
            'warnings': 0,
            'violations': 0,
        }
        assert report.fund_id == 42
        assert report.as_of == AS_OF

    def test_concentration_violation(self):
        report = evaluate_compliance(good_fund(), liquid_series(),
                                     [AllocationRecord('REITs', 25.0)], as_of=AS_OF)

        assert report.overall_compliant is False
        assert report.status == 'NON-COMPLIANT'
        assert report.violations == ('Concentration Limits',)
        details = report.check('concentration_limits').details
        assert details['violations'] == ({'type': 'REITs', 'allocation': 25.0, 'limit': 20.0},)

    def test_fee_violation(self):
        report = evaluate_compliance(good_fund(management_fee=3.0, expense_ratio=3.5),
                                     liquid_series(), [], as_of=AS_OF)

        assert report.overall_compliant is False
        assert 'Fee Disclosure' in report.violations
        assert len(report.check('fee_disclosure').details['violations']) == 3

    def test_warnings_do_not_flip_verdict(self):
        """Missing disclosures, no history and no liquidity are warning-tier."""
        fund = good_fund(management_fee=None)

        report = evaluate_compliance(fund, ReturnSeries(), [], as_of=AS_OF)

        assert report.overall_compliant is True
        assert report.warnings == (
            'Risk Disclosure',
            'Performance Reporting',
            'Liquidity Requirements',
        )
        assert report.summary['passed_checks'] == 2

    def test_risk_score_matches_disclosure_check(self):
        report = evaluate_compliance(good_fund(), liquid_series(), [], as_of=AS_OF)

        assert report.risk_score == report.check('risk_disclosure').details['risk_score'] == 5
        assert report.risk_level == 'Low-Medium'

    def test_recommendations_high_first(self):
        fund = good_fund(management_fee=3.0, expense_ratio=3.5, inception_date=None)

        report = evaluate_compliance(fund, make_series(3), [AllocationRecord('REITs', 30.0)],
                                     as_of=AS_OF)

        assert [(r.priority, r.category, r.deadline_days) for r in report.recommendations] == [
            (Priority.HIGH, 'Concentration Limits', 30),
            (Priority.HIGH, 'Fee Disclosure', 15),
            (Priority.MEDIUM, 'Risk Disclosure', 60),
            (Priority.MEDIUM, 'Liquidity', 90),
        ]

    def test_custom_thresholds(self):
        thresholds = ComplianceThresholds(max_single_allocation=10.0)

        report = evaluate_compliance(good_fund(), liquid_series(),
                                     [AllocationRecord('REITs', 15.0)],
                                     thresholds=thresholds, as_of=AS_OF)

        assert report.violations == ('Concentration Limits',)

    def test_deterministic(self):
        args = (good_fund(), make_series(6), [AllocationRecord('REITs', 25.0)])

        first = evaluate_compliance(*args, as_of=AS_OF)
        second = evaluate_compliance(*args, as_of=AS_OF)

        assert first.to_dict() == second.to_dict()

    def test_report_immutable(self):
        report = evaluate_compliance(good_fund(), ReturnSeries(), [], as_of=AS_OF)

        with pytest.raises(FrozenInstanceError):
            report.overall_compliant = False
        with pytest.raises(TypeError):
            report.check('fee_disclosure').details['total_fees'] = 0

    def test_nested_details_tamper_proof(self):
        report = evaluate_compliance(good_fund(management_fee=3.0, expense_ratio=3.5),
                                     liquid_series(), [], as_of=AS_OF)
        before = report.to_dict()

        with pytest.raises(AttributeError):
            report.check('fee_disclosure').details['violations'].append('tampered')

        assert report.to_dict() == before

    def test_pickle_round_trip(self):
        report = evaluate_compliance(good_fund(), liquid_series(),
                                     [AllocationRecord('REITs', 25.0)], as_of=AS_OF)

        restored = pickle.loads(pickle.dumps(report))

        assert restored == report
        assert restored.to_dict() == report.to_dict()
        assert hash(restored) == hash(report)

    def test_to_dict_serializable(self):
        report = evaluate_compliance(good_fund(), make_series(12), [], as_of=AS_OF)

        data = json.loads(json.dumps(report.to_dict()))

        assert set(data['checks']) == {c.key for c in COMPLIANCE_CHECKS}
        assert data['summary']['total_checks'] == 5

    def test_logs_verdict(self, caplog):
        with caplog.at_level('INFO', logger='compliance.engine'):
            evaluate_compliance(good_fund(), ReturnSeries(), [], as_of=AS_OF)

        assert 'Compliance evaluated for fund 42' in caplog.text


class TestRegistryExtension:
    """A new rule is a new descriptor, not an engine change."""

    def test_extra_violation_check(self):
        no_sector_funds = ComplianceCheck(
            key='no_sector_funds',
            name='No Sector Funds',
            severity=CheckSeverity.VIOLATION,
            evaluator=lambda ctx: {'compliant': ctx.fund.fund_type != 'Sector'}
        )
        checks = COMPLIANCE_CHECKS + (no_sector_funds,)

        report = evaluate_compliance(good_fund(fund_type='Sector'), liquid_series(), [],
                                     as_of=AS_OF, checks=checks)

        assert report.violations == ('No Sector Funds',)
        assert report.summary['total_checks'] == 6
        # No remediation is registered for the new rule
        assert report.recommendations == ()
