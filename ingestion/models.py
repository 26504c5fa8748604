"""
Canonical data model shared by the analytics and compliance engines.
Frozen dataclasses - built once by the caller or the normalizers, never mutated.
"""

from collections import abc
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Dict, Any, Mapping, Optional, Tuple, Iterator, Union


class FundType(str, Enum):
    """Closed set of fund categories with a known base risk."""
    FIXED_INCOME = 'Fixed Income'
    BALANCED = 'Balanced'
    CANADIAN_EQUITY = 'Canadian Equity'
    GLOBAL_EQUITY = 'Global Equity'
    REAL_ESTATE = 'Real Estate'
    SECTOR = 'Sector'
    ALTERNATIVE = 'Alternative'


def _to_primitive(value: Any) -> Any:
    """Convert dates, enums and nested containers to JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


class FrozenDetails(abc.Mapping):
    """
    Read-only mapping of check details.

    Nested mappings and sequences are frozen on construction, so a built
    result cannot be altered at any depth. Hashable and picklable.
    """
    __slots__ = ('_data',)

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, '_data', {k: _freeze(v) for k, v in dict(data or {}).items()})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __reduce__(self):
        return (FrozenDetails, (dict(self._data),))

    def __repr__(self) -> str:
        return f"FrozenDetails({self._data!r})"


def _freeze(value: Any) -> Any:
    """Recursively replace mutable containers with read-only equivalents."""
    if isinstance(value, FrozenDetails):
        return value
    if isinstance(value, Mapping):
        return FrozenDetails(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class PerformanceObservation:
    """One periodic observation of a fund."""
    period: date
    nav: float
    total_return: float
    benchmark_return: float
    assets_under_management: float

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(asdict(self))


@dataclass(frozen=True)
class ReturnSeries:
    """
    Chronological series of performance observations.

    Periods must be unique and ascending. The derived value tuples
    (navs, returns, benchmark_returns, aum_values) are always index-aligned.
    """
    observations: Tuple[PerformanceObservation, ...] = ()

    def __post_init__(self):
        # Accept any iterable but store a tuple
        object.__setattr__(self, 'observations', tuple(self.observations))

        for previous, current in zip(self.observations, self.observations[1:]):
            if current.period <= previous.period:
                raise ValueError(
                    f"Observations must have unique ascending periods: "
                    f"{current.period} follows {previous.period}"
                )

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[PerformanceObservation]:
        return iter(self.observations)

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def periods(self) -> Tuple[date, ...]:
        return tuple(o.period for o in self.observations)

    @property
    def navs(self) -> Tuple[float, ...]:
        return tuple(o.nav for o in self.observations)

    @property
    def returns(self) -> Tuple[float, ...]:
        return tuple(o.total_return for o in self.observations)

    @property
    def benchmark_returns(self) -> Tuple[float, ...]:
        return tuple(o.benchmark_return for o in self.observations)

    @property
    def aum_values(self) -> Tuple[float, ...]:
        return tuple(o.assets_under_management for o in self.observations)

    @property
    def latest(self) -> Optional[PerformanceObservation]:
        """Most recent observation, or None for an empty series."""
        return self.observations[-1] if self.observations else None

    def to_dict(self) -> Dict[str, Any]:
        return {'observations': [o.to_dict() for o in self.observations]}


@dataclass(frozen=True)
class FundProfile:
    """
    Static fund attributes supplied per evaluation.

    Disclosure fields are optional so the risk disclosure check can report
    which of them are absent. fund_type is kept as a plain string so that
    categories outside FundType still flow through (they score as unknown).
    """
    fund_type: Optional[str] = None
    management_fee: Optional[float] = None
    expense_ratio: Optional[float] = None
    inception_date: Optional[Union[date, str]] = None
    fund_family: Optional[str] = None
    fund_id: Optional[Union[int, str]] = None
    fund_name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.fund_type, FundType):
            object.__setattr__(self, 'fund_type', self.fund_type.value)

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(asdict(self))


@dataclass(frozen=True)
class AllocationRecord:
    """One alternative-investment allocation line of a fund."""
    investment_type: str
    allocation_percentage: float
    risk_rating: int = 5

    def __post_init__(self):
        if not 1 <= self.risk_rating <= 10:
            raise ValueError(f"risk_rating must be between 1 and 10, got {self.risk_rating}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MetricsBundle:
    """Risk and performance statistics for one return series."""
    observations: int
    risk_free_rate: float
    confidence: float
    average_return: float
    annualized_return: float
    volatility: float
    max_drawdown: float
    sharpe_ratio: float
    sortino_ratio: float
    treynor_ratio: float
    value_at_risk: float
    conditional_var: float
    beta: float
    correlation: float
    information_ratio: float
    jensens_alpha: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CheckSeverity(str, Enum):
    """Severity tier of a compliance check failure."""
    VIOLATION = 'VIOLATION'
    WARNING = 'WARNING'


class Priority(str, Enum):
    """Remediation priority."""
    HIGH = 'HIGH'
    MEDIUM = 'MEDIUM'


class AlertSeverity(str, Enum):
    """Severity of a regulatory alert."""
    INFO = 'INFO'
    WARNING = 'WARNING'
    CRITICAL = 'CRITICAL'


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one compliance check, with its supporting figures."""
    key: str
    name: str
    severity: CheckSeverity
    compliant: bool
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'details', FrozenDetails(self.details))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'name': self.name,
            'severity': self.severity.value,
            'compliant': self.compliant,
            **_to_primitive(self.details),
        }


@dataclass(frozen=True)
class Recommendation:
    """Remediation step for a failed check."""
    priority: Priority
    category: str
    action: str
    deadline_days: int

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(asdict(self))


@dataclass(frozen=True)
class Alert:
    """Threshold trigger raised directly from fund and series data."""
    type: str
    severity: AlertSeverity
    message: str
    threshold: float
    fund_id: Optional[Union[int, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(asdict(self))


@dataclass(frozen=True)
class ComplianceReport:
    """
    Aggregate compliance verdict for one fund evaluation.

    checks keeps every per-check result in evaluation order as the audit
    trail; violations and warnings hold the names of the failed checks by tier.
    """
    overall_compliant: bool
    checks: Tuple[CheckResult, ...]
    violations: Tuple[str, ...]
    warnings: Tuple[str, ...]
    risk_score: int
    risk_level: str
    recommendations: Tuple[Recommendation, ...]
    as_of: date
    fund_id: Optional[Union[int, str]] = None

    def __post_init__(self):
        object.__setattr__(self, 'checks', tuple(self.checks))
        object.__setattr__(self, 'violations', tuple(self.violations))
        object.__setattr__(self, 'warnings', tuple(self.warnings))
        object.__setattr__(self, 'recommendations', tuple(self.recommendations))

    @property
    def status(self) -> str:
        return 'COMPLIANT' if self.overall_compliant else 'NON-COMPLIANT'

    @property
    def summary(self) -> Dict[str, int]:
        return {
            'total_checks': len(self.checks),
            'passed_checks': sum(1 for c in self.checks if c.compliant),
            'warnings': len(self.warnings),
            'violations': len(self.violations),
        }

    def check(self, key: str) -> CheckResult:
        """Look up a check result by key."""
        for result in self.checks:
            if result.key == key:
                return result
        raise KeyError(f"No compliance check named {key!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fund_id': self.fund_id,
            'as_of': self.as_of.isoformat(),
            'status': self.status,
            'overall_compliant': self.overall_compliant,
            'summary': self.summary,
            'checks': {c.key: c.to_dict() for c in self.checks},
            'violations': list(self.violations),
            'warnings': list(self.warnings),
            'risk_score': self.risk_score,
            'risk_level': self.risk_level,
            'recommendations': [r.to_dict() for r in self.recommendations],
        }
