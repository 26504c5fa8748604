#!/usr/bin/env python3
"""
Main CLI for the fund analytics and compliance engine.
Usage: python cli.py {metrics,compliance,pror} ...
"""

import sys
import json
import logging
import argparse
import yaml
from datetime import date
from pathlib import Path
from typing import Dict, Any

from analysis import compute_metrics, compute_personal_return, InvalidInputError
from analysis.calculations.distribution import returns_distribution
from compliance import (
    evaluate_compliance,
    check_alerts,
    assess_market_risk,
    load_thresholds,
    load_analytics_settings,
    ThresholdsConfigError,
)
from ingestion.transforms.normalizers import normalize_fund_bundle
from ingestion.transforms.validators import ValidationError

logger = logging.getLogger(__name__)


def _load_payload(path: str) -> Dict[str, Any]:
    """Load a {fund, performance, allocations} payload from JSON or YAML."""
    payload_file = Path(path)
    if not payload_file.exists():
        raise FileNotFoundError(f"Fund file not found: {path}")

    with open(payload_file, 'r', encoding='utf-8') as f:
        if payload_file.suffix.lower() in ('.yml', '.yaml'):
            return yaml.safe_load(f) or {}
        return json.load(f)


def run_metrics(args: argparse.Namespace) -> Dict[str, Any]:
    """Compute the metrics bundle and market risk level for a fund file."""
    settings = load_analytics_settings(args.config)
    bundle = normalize_fund_bundle(_load_payload(args.file))

    metrics = compute_metrics(
        bundle['series'],
        risk_free_rate=settings.risk_free_rate,
        confidence=settings.var_confidence
    )

    result = {
        'fund_id': bundle['fund'].fund_id,
        'metrics': metrics.to_dict(),
        **assess_market_risk(metrics)
    }
    if args.distribution:
        result['distribution'] = returns_distribution(bundle['series'].returns)
    return result


def run_compliance(args: argparse.Namespace) -> Dict[str, Any]:
    """Evaluate compliance and alerts for a fund file."""
    thresholds = load_thresholds(args.config)
    bundle = normalize_fund_bundle(_load_payload(args.file))

    report = evaluate_compliance(
        bundle['fund'],
        bundle['series'],
        bundle['allocations'],
        thresholds=thresholds,
        as_of=args.as_of
    )
    alerts = check_alerts(bundle['fund'], bundle['series'], thresholds=thresholds, as_of=args.as_of)

    return {
        'report': report.to_dict(),
        'alerts': [a.to_dict() for a in alerts]
    }


def run_pror(args: argparse.Namespace) -> Dict[str, Any]:
    """Compute a personal rate of return."""
    pror = compute_personal_return(
        args.beginning_value,
        args.ending_value,
        contributions=args.contributions,
        withdrawals=args.withdrawals,
        period_months=args.months
    )
    return {'pror': pror}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Fund risk analytics and compliance evaluation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py metrics tests/fixtures/balanced_fund.json
  python cli.py compliance tests/fixtures/balanced_fund.json --as-of 2025-06-30
  python cli.py pror 10000 11000 --contributions 1000 --months 12
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--config',
                        help='Compliance rules YAML (default: COMPLIANCE_RULES_PATH '
                             'or ./config/compliance_rules.yml)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    metrics_parser = subparsers.add_parser('metrics', help='Risk/performance metrics for a fund file')
    metrics_parser.add_argument('file', help='Fund JSON or YAML file')
    metrics_parser.add_argument('--distribution', action='store_true',
                                help='Include the returns distribution')
    metrics_parser.set_defaults(handler=run_metrics)

    compliance_parser = subparsers.add_parser('compliance', help='Compliance report and alerts')
    compliance_parser.add_argument('file', help='Fund JSON or YAML file')
    compliance_parser.add_argument('--as-of',
                                   type=date.fromisoformat,
                                   default=date.today(),
                                   help='Evaluation date (YYYY-MM-DD, default: today)')
    compliance_parser.set_defaults(handler=run_compliance)

    pror_parser = subparsers.add_parser('pror', help='Personal rate of return')
    pror_parser.add_argument('beginning_value', type=float)
    pror_parser.add_argument('ending_value', type=float)
    pror_parser.add_argument('--contributions', type=float, default=0.0)
    pror_parser.add_argument('--withdrawals', type=float, default=0.0)
    pror_parser.add_argument('--months', type=float, default=12)
    pror_parser.set_defaults(handler=run_pror)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        result = args.handler(args)
    except (InvalidInputError, ValidationError) as e:
        print(f"ERROR: Invalid input: {e}", file=sys.stderr)
        return 2
    except (FileNotFoundError, ThresholdsConfigError, json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == '__main__':
    sys.exit(main())
