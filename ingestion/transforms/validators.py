"""
Core validators for caller-supplied fund rows.
Pure functions - no IO, network, or side effects.
"""

import math
from datetime import date, datetime
from typing import Dict, Any, List


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def _check_number(row: Dict[str, Any], field: str) -> float:
    value = row[field]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be numeric, got {type(value)}")

    if not math.isfinite(value):
        raise ValidationError(f"{field} must be finite, got {value}")

    return value


def validate_performance_row(row: Dict[str, Any]) -> None:
    """
    Validate a canonical performance row.

    Args:
        row: Dictionary with date, nav, total_return, benchmark_return,
            assets_under_management

    Raises:
        ValidationError: If validation fails
    """
    required_keys = {'date', 'nav', 'total_return', 'benchmark_return', 'assets_under_management'}

    missing = required_keys - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    if not isinstance(row['date'], date):
        raise ValidationError(f"date must be date, got {type(row['date'])}")

    nav = _check_number(row, 'nav')
    if nav <= 0:
        raise ValidationError(f"nav must be positive, got {nav}")

    _check_number(row, 'total_return')
    _check_number(row, 'benchmark_return')

    aum = _check_number(row, 'assets_under_management')
    if aum < 0:
        raise ValidationError(f"assets_under_management must be non-negative, got {aum}")


def validate_allocation_row(row: Dict[str, Any]) -> None:
    """
    Validate a canonical alternative-investment allocation row.

    Raises:
        ValidationError: If validation fails
    """
    required_keys = {'investment_type', 'allocation_percentage'}

    missing = required_keys - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    if not isinstance(row['investment_type'], str) or not row['investment_type'].strip():
        raise ValidationError("investment_type must be a non-empty string")

    allocation = _check_number(row, 'allocation_percentage')
    if not 0 <= allocation <= 100:
        raise ValidationError(f"allocation_percentage must be between 0 and 100, got {allocation}")

    rating = row.get('risk_rating')
    if rating is not None:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError(f"risk_rating must be integer, got {type(rating)}")
        if not 1 <= rating <= 10:
            raise ValidationError(f"risk_rating must be between 1 and 10, got {rating}")


def validate_fund_row(row: Dict[str, Any]) -> None:
    """
    Validate a canonical fund row. Disclosure fields may be absent or None.

    Raises:
        ValidationError: If a present field has the wrong type or range
    """
    for field in ('management_fee', 'expense_ratio'):
        if row.get(field) is not None:
            value = _check_number(row, field)
            if value < 0:
                raise ValidationError(f"{field} must be non-negative, got {value}")

    inception = row.get('inception_date')
    if inception is not None and not isinstance(inception, (date, str)):
        raise ValidationError(f"inception_date must be date or string, got {type(inception)}")

    fund_type = row.get('fund_type')
    if fund_type is not None and not isinstance(fund_type, str):
        raise ValidationError(f"fund_type must be string, got {type(fund_type)}")


def check_period_monotonicity(rows: List[Dict[str, Any]]) -> None:
    """
    Check that performance rows have strictly ascending dates.

    Raises:
        ValidationError: If dates are duplicated or out of order
    """
    for previous, current in zip(rows, rows[1:]):
        if current['date'] <= previous['date']:
            raise ValidationError(
                f"Dates must be strictly ascending: {current['date']} after {previous['date']}"
            )
