"""
Statistics engine defaults.
compute_metrics falls back to these when a caller passes no explicit values;
the compliance config loader builds the same type from YAML and environment.
"""

from dataclasses import dataclass

from analysis.calculations.ratios import DEFAULT_RISK_FREE_RATE


@dataclass(frozen=True)
class AnalyticsSettings:
    """Defaults for the statistics engine."""
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE
    var_confidence: float = 0.95

    def __post_init__(self):
        """Validate settings."""
        if not 0 < self.var_confidence < 1:
            raise ValueError(f"var_confidence must be in (0, 1), got {self.var_confidence}")
