"""
Compliance Engine Module

Applies the fund regulatory rule set to a fund profile, its return series
and its alternative-investment allocations:
- Concentration limits and fee disclosure (violations)
- Risk disclosure, performance reporting and liquidity (warnings)
- Profile risk score and risk level
- Prioritized remediation recommendations
- Regulatory alerts
"""

from compliance.engine import (
    COMPLIANCE_CHECKS,
    ComplianceCheck,
    EvaluationContext,
    evaluate_compliance,
)
from compliance.alerts import check_alerts
from compliance.risk_scoring import (
    compute_risk_score,
    classify_risk_level,
    profile_risk_level,
    market_risk_level,
    assess_market_risk,
)
from compliance.rules_config import (
    ComplianceThresholds,
    AnalyticsSettings,
    ThresholdsConfigError,
    load_thresholds,
    load_analytics_settings,
)
from compliance.summary import summarize_compliance, summarize_concentration, scan_portfolio_alerts

__version__ = "0.1.0"

__all__ = [
    # Evaluation
    "COMPLIANCE_CHECKS",
    "ComplianceCheck",
    "EvaluationContext",
    "evaluate_compliance",
    "check_alerts",
    # Risk scoring
    "compute_risk_score",
    "classify_risk_level",
    "profile_risk_level",
    "market_risk_level",
    "assess_market_risk",
    # Configuration
    "ComplianceThresholds",
    "AnalyticsSettings",
    "ThresholdsConfigError",
    "load_thresholds",
    "load_analytics_settings",
    # Portfolio summaries
    "summarize_compliance",
    "summarize_concentration",
    "scan_portfolio_alerts",
]
