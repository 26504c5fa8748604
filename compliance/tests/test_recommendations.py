"""
Tests for remediation recommendations.
"""

import pytest

from ingestion.models import CheckResult, CheckSeverity, Priority
from compliance.rules_config import ComplianceThresholds
from compliance.recommendations import generate_recommendations


def result(key, severity, compliant=False):
    return CheckResult(key, key.replace('_', ' ').title(), severity, compliant, {})


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_nothing_failed(self):
        results = [
            result('concentration_limits', CheckSeverity.VIOLATION, True),
            result('liquidity_requirements', CheckSeverity.WARNING, True),
        ]

        assert generate_recommendations(results, ComplianceThresholds()) == []

    def test_priority_from_severity(self):
        recs = generate_recommendations([
            result('liquidity_requirements', CheckSeverity.WARNING),
            result('fee_disclosure', CheckSeverity.VIOLATION),
        ], ComplianceThresholds())

        assert [(r.priority, r.category) for r in recs] == [
            (Priority.HIGH, 'Fee Disclosure'),
            (Priority.MEDIUM, 'Liquidity'),
        ]

    def test_default_deadlines(self):
        recs = generate_recommendations([
            result('concentration_limits', CheckSeverity.VIOLATION),
            result('risk_disclosure', CheckSeverity.WARNING),
            result('fee_disclosure', CheckSeverity.VIOLATION),
            result('liquidity_requirements', CheckSeverity.WARNING),
        ], ComplianceThresholds())

        assert {r.category: r.deadline_days for r in recs} == {
            'Concentration Limits': 30,
            'Risk Disclosure': 60,
            'Fee Disclosure': 15,
            'Liquidity': 90,
        }

    def test_check_order_kept_within_priority(self):
        recs = generate_recommendations([
            result('concentration_limits', CheckSeverity.VIOLATION),
            result('risk_disclosure', CheckSeverity.WARNING),
            result('fee_disclosure', CheckSeverity.VIOLATION),
            result('liquidity_requirements', CheckSeverity.WARNING),
        ], ComplianceThresholds())

        assert [r.category for r in recs] == [
            'Concentration Limits', 'Fee Disclosure', 'Risk Disclosure', 'Liquidity'
        ]

    def test_performance_reporting_has_no_remediation(self):
        recs = generate_recommendations(
            [result('performance_reporting', CheckSeverity.WARNING)],
            ComplianceThresholds()
        )

        assert recs == []

    def test_configured_deadline(self):
        recs = generate_recommendations(
            [result('fee_disclosure', CheckSeverity.VIOLATION)],
            ComplianceThresholds(fee_deadline_days=7)
        )

        assert recs[0].deadline_days == 7
        assert 'fee structure' in recs[0].action
