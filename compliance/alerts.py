"""
Regulatory alerts.
Threshold triggers evaluated directly on fund and series data, independent of the compliance report.
"""

import logging
from datetime import date
from typing import List, Optional

from ingestion.models import FundProfile, ReturnSeries, Alert, AlertSeverity
from analysis.calculations.volatility import volatility
from compliance.risk_scoring import fund_age_years
from compliance.rules_config import ComplianceThresholds

logger = logging.getLogger(__name__)


def check_alerts(
    fund: FundProfile,
    series: ReturnSeries,
    thresholds: Optional[ComplianceThresholds] = None,
    as_of: Optional[date] = None
) -> List[Alert]:
    """
    Raise regulatory alerts for a fund.

    Triggers:
    - HIGH_VOLATILITY (WARNING): volatility of period returns above 25
    - HIGH_FEES (WARNING): expense ratio above 2.0
    - NEW_FUND (INFO): fund younger than 1 year

    Args:
        fund: Fund profile
        series: Performance observations (volatility alert needs at least one)
        thresholds: Alert thresholds (defaults to the built-in limits)
        as_of: Date the fund age is measured at (defaults to today)

    Returns:
        List of alerts in trigger order
    """
    if thresholds is None:
        thresholds = ComplianceThresholds()

    alerts = []

    if not series.is_empty:
        fund_volatility = volatility(series.returns)
        if fund_volatility > thresholds.alert_volatility:
            alerts.append(Alert(
                type='HIGH_VOLATILITY',
                severity=AlertSeverity.WARNING,
                message=f"Fund volatility ({fund_volatility:.2f}%) exceeds normal range",
                threshold=thresholds.alert_volatility,
                fund_id=fund.fund_id
            ))

    if fund.expense_ratio is not None and fund.expense_ratio > thresholds.alert_expense_ratio:
        alerts.append(Alert(
            type='HIGH_FEES',
            severity=AlertSeverity.WARNING,
            message=f"Expense ratio ({fund.expense_ratio}%) is above industry average",
            threshold=thresholds.alert_expense_ratio,
            fund_id=fund.fund_id
        ))

    age = fund_age_years(fund.inception_date, as_of)
    if age is not None and age < thresholds.alert_new_fund_years:
        alerts.append(Alert(
            type='NEW_FUND',
            severity=AlertSeverity.INFO,
            message=(
                f"Fund is less than {thresholds.alert_new_fund_years} year old - "
                f"limited performance history"
            ),
            threshold=thresholds.alert_new_fund_years,
            fund_id=fund.fund_id
        ))

    if alerts:
        logger.info(f"Raised {len(alerts)} alerts for fund {fund.fund_id}")

    return alerts
