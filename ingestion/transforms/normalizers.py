"""
Normalizers for transforming caller rows into the canonical data model.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import logging
import pandas as pd
from datetime import date, datetime
from typing import Dict, Any, Iterable, List, Union
from dateutil import parser as date_parser

from ingestion.models import (
    AllocationRecord,
    FundProfile,
    PerformanceObservation,
    ReturnSeries,
)
from ingestion.transforms.validators import (
    ValidationError,
    check_period_monotonicity,
    validate_allocation_row,
    validate_fund_row,
    validate_performance_row,
)

logger = logging.getLogger(__name__)

PERFORMANCE_COLUMNS = ['date', 'nav', 'total_return', 'benchmark_return', 'assets_under_management']


def _parse_date(value: Any) -> Any:
    # Normalization justified: rows from JSON/SQL carry ISO strings or timestamps
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return date_parser.parse(value).date()
        except (ValueError, OverflowError):
            raise ValidationError(f"Unparseable date: {value!r}")
    return value


def _to_float(value: Any) -> Any:
    # Numeric strings and numpy scalars become floats; anything else is left for the validator
    if isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def normalize_performance(
    raw_rows: Iterable[Dict[str, Any]],
    *,
    sort: bool = True
) -> ReturnSeries:
    """
    Transform performance rows into a ReturnSeries.

    Minimal normalization:
    - Date strings/timestamps to date objects
    - Numeric fields to float
    - Deduplication by date (keep last to handle corrections)
    - Chronological sort (optional)

    With sort=False the input order is checked before deduplication, so a
    repeated date is rejected rather than collapsed.

    Args:
        raw_rows: Rows with date, nav, total_return, benchmark_return,
            assets_under_management
        sort: Sort rows by date; when False the rows must already be strictly ascending

    Returns:
        ReturnSeries (empty for no rows)

    Raises:
        ValidationError: If a row fails validation, or sort=False and dates
            are not strictly ascending
    """
    parsed: List[Dict[str, Any]] = []

    for raw in raw_rows:
        row = {
            'date': _parse_date(raw.get('date')),
            'nav': _to_float(raw.get('nav')),
            'total_return': _to_float(raw.get('total_return')),
            'benchmark_return': _to_float(raw.get('benchmark_return')),
            'assets_under_management': _to_float(raw.get('assets_under_management', 0.0)),
        }
        validate_performance_row(row)
        parsed.append(row)

    if not sort:
        check_period_monotonicity(parsed)

    by_date: Dict[date, Dict[str, Any]] = {}
    for row in parsed:
        if row['date'] in by_date:
            logger.warning(f"Duplicate performance row for {row['date']}, keeping latest")
        by_date[row['date']] = row

    rows = list(by_date.values())
    if sort:
        rows.sort(key=lambda r: r['date'])

    return ReturnSeries(tuple(
        PerformanceObservation(
            period=r['date'],
            nav=r['nav'],
            total_return=r['total_return'],
            benchmark_return=r['benchmark_return'],
            assets_under_management=r['assets_under_management'],
        )
        for r in rows
    ))


def series_from_dataframe(df: pd.DataFrame) -> ReturnSeries:
    """
    Build a ReturnSeries from a performance DataFrame.

    Raises:
        ValidationError: If required columns are missing or a row is invalid
    """
    missing = set(PERFORMANCE_COLUMNS) - set(df.columns)
    if missing:
        raise ValidationError(f"Missing required columns: {sorted(missing)}")

    if df.empty:
        return ReturnSeries()

    return normalize_performance(df[PERFORMANCE_COLUMNS].to_dict('records'))


def normalize_fund(raw: Dict[str, Any]) -> FundProfile:
    """
    Transform a fund row into a FundProfile.

    Accepts either 'fund_id' or 'id' as the identifier. Blank strings are kept
    so that the risk disclosure check can report them as absent.

    Raises:
        ValidationError: If a present field is invalid
    """
    row = dict(raw)
    for field in ('management_fee', 'expense_ratio'):
        if row.get(field) is not None and row.get(field) != '':
            row[field] = _to_float(row[field])
        else:
            row[field] = None

    inception = row.get('inception_date')
    if isinstance(inception, str) and inception.strip():
        row['inception_date'] = _parse_date(inception)
    elif isinstance(inception, (datetime, pd.Timestamp)):
        row['inception_date'] = _parse_date(inception)

    validate_fund_row(row)

    return FundProfile(
        fund_type=row.get('fund_type'),
        management_fee=row['management_fee'],
        expense_ratio=row['expense_ratio'],
        inception_date=row.get('inception_date'),
        fund_family=row.get('fund_family'),
        fund_id=row.get('fund_id', row.get('id')),
        fund_name=row.get('fund_name'),
    )


def normalize_allocations(raw_rows: Iterable[Dict[str, Any]]) -> List[AllocationRecord]:
    """
    Transform alternative-investment rows into AllocationRecords.

    Raises:
        ValidationError: If a row fails validation
    """
    records = []
    for raw in raw_rows:
        row = {
            'investment_type': raw.get('investment_type'),
            'allocation_percentage': _to_float(raw.get('allocation_percentage')),
            'risk_rating': raw.get('risk_rating', 5),
        }
        validate_allocation_row(row)
        records.append(AllocationRecord(
            investment_type=row['investment_type'],
            allocation_percentage=row['allocation_percentage'],
            risk_rating=row['risk_rating'] if row['risk_rating'] is not None else 5,
        ))
    return records


def normalize_fund_bundle(
    payload: Dict[str, Any]
) -> Dict[str, Union[FundProfile, ReturnSeries, List[AllocationRecord]]]:
    """
    Normalize a {fund, performance, allocations} payload in one call.

    Returns:
        Dictionary with fund, series and allocations
    """
    if 'fund' not in payload:
        raise ValidationError("Payload missing required 'fund' section")

    return {
        'fund': normalize_fund(payload['fund']),
        'series': normalize_performance(payload.get('performance') or []),
        'allocations': normalize_allocations(payload.get('allocations') or []),
    }
