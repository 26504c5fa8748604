"""
Compliance thresholds and analytics settings.
Loaded once by the caller from YAML and environment; the engine receives them as arguments.
"""

import os
import logging
import yaml
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from analysis.settings import AnalyticsSettings

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = './config/compliance_rules.yml'


class ThresholdsConfigError(Exception):
    """Raised when the thresholds configuration cannot be loaded."""
    pass


@dataclass(frozen=True)
class ComplianceThresholds:
    """Regulatory limits applied by the compliance checks and alerts."""
    # Concentration limits
    max_single_allocation: float = 20.0

    # Fee disclosure
    max_management_fee: float = 2.5
    max_expense_ratio: float = 3.0
    max_total_fees: float = 4.0

    # Performance reporting
    min_reporting_periods: int = 12

    # Liquidity requirements
    min_aum: float = 10_000_000.0
    max_liquidity_days: float = 30.0
    daily_volume_fraction: float = 0.01

    # Regulatory alerts
    alert_volatility: float = 25.0
    alert_expense_ratio: float = 2.0
    alert_new_fund_years: int = 1

    # Remediation deadlines (days)
    concentration_deadline_days: int = 30
    fee_deadline_days: int = 15
    risk_disclosure_deadline_days: int = 60
    liquidity_deadline_days: int = 90

    def __post_init__(self):
        """Validate limits."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be numeric, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")

        if not 0 < self.daily_volume_fraction <= 1:
            raise ValueError("daily_volume_fraction must be in (0, 1]")


def _read_yaml(config_path: Optional[str]) -> Dict[str, Any]:
    explicit = config_path is not None
    if config_path is None:
        config_path = os.getenv('COMPLIANCE_RULES_PATH', DEFAULT_RULES_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        if explicit:
            raise ThresholdsConfigError(f"Compliance rules file not found: {config_path}")
        logger.debug(f"No compliance rules file at {config_path}, using defaults")
        return {}

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ThresholdsConfigError(f"Failed to load compliance rules: {e}")

    if not isinstance(config, dict):
        raise ThresholdsConfigError("Compliance rules file must contain a mapping")

    return config


def _build(cls, section: Dict[str, Any], section_name: str):
    known = {f.name for f in fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ThresholdsConfigError(f"Unknown {section_name} keys: {sorted(unknown)}")

    try:
        return cls(**section)
    except (TypeError, ValueError) as e:
        raise ThresholdsConfigError(f"Invalid {section_name}: {e}")


def load_thresholds(config_path: Optional[str] = None) -> ComplianceThresholds:
    """
    Load compliance thresholds from YAML.

    Args:
        config_path: Path to the rules file. Defaults to COMPLIANCE_RULES_PATH
            or ./config/compliance_rules.yml; a missing default file yields
            the built-in thresholds.

    Returns:
        ComplianceThresholds instance

    Raises:
        ThresholdsConfigError: If an explicit file is missing or the content is invalid
    """
    config = _read_yaml(config_path)
    return _build(ComplianceThresholds, config.get('thresholds') or {}, 'thresholds')


def load_analytics_settings(config_path: Optional[str] = None) -> AnalyticsSettings:
    """
    Load analytics settings from YAML, then apply environment overrides.

    Environment variables RISK_FREE_RATE and VAR_CONFIDENCE win over the file.

    Raises:
        ThresholdsConfigError: If the content or an override is invalid
    """
    config = _read_yaml(config_path)
    settings = _build(AnalyticsSettings, config.get('analytics') or {}, 'analytics')

    overrides = {}
    for env_name, field_name in (('RISK_FREE_RATE', 'risk_free_rate'),
                                 ('VAR_CONFIDENCE', 'var_confidence')):
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == '':
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            raise ThresholdsConfigError(f"{env_name} must be numeric, got {raw!r}")

    if not overrides:
        return settings

    try:
        return replace(settings, **overrides)
    except ValueError as e:
        raise ThresholdsConfigError(f"Invalid analytics override: {e}")
