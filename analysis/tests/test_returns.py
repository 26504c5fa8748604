"""
Tests for returns calculation utilities.
Covers compounding, annualization and the personal rate of return.
"""

import pytest

from analysis.calculations.returns import (
    mean_return,
    compounded_growth,
    cumulative_return,
    annualized_return,
    personal_rate_of_return,
    InvalidInputError
)


class TestMeanAndCompounding:
    """Tests for mean_return and compounding helpers."""

    def test_mean_return(self):
        assert mean_return([1.0, 2.0, 3.0]) == 2.0

    def test_mean_return_empty(self):
        """Empty sequence has a zero mean instead of NaN."""
        assert mean_return([]) == 0.0

    def test_compounded_growth(self):
        """10% then 10% compounds to 1.21."""
        assert abs(compounded_growth([10.0, 10.0]) - 1.21) < 1e-12

    def test_compounded_growth_empty(self):
        assert compounded_growth([]) == 1.0

    def test_cumulative_return(self):
        assert cumulative_return([10.0, 10.0]) == 21.0
        assert cumulative_return([10.0, -10.0]) == -1.0


class TestAnnualizedReturn:
    """Tests for annualized_return."""

    def test_twelve_months_of_one_percent(self):
        """1.01^12 - 1 = 12.68%."""
        assert annualized_return([1.0] * 12, 12) == 12.68

    def test_two_year_span(self):
        """Growth 1.1 × 0.9 = 0.99 over 24 months -> 0.99^0.5 - 1 = -0.50%."""
        assert annualized_return([10.0, -10.0], 24) == -0.5

    def test_empty(self):
        assert annualized_return([], 12) == 0.0

    def test_non_positive_period_count(self):
        """No annualization without a positive period count."""
        assert annualized_return([1.0, 2.0], 0) == 0.0

    def test_total_loss(self):
        """Wiped-out growth reports -100% rather than a complex number."""
        assert annualized_return([-100.0], 1) == -100.0


class TestPersonalRateOfReturn:
    """Tests for PROR."""

    def test_contribution_explains_all_growth(self):
        """
        PROR(10000, 11000, 1000, 0, 12):
        net cash flow 1000, weighted contributions 1000, denominator 11000,
        ((11000 - 10000 - 1000) / 11000) × 100 = 0.00
        """
        assert personal_rate_of_return(10000, 11000, 1000, 0, 12) == 0.0

    def test_no_cash_flows(self):
        """Plain growth 10000 -> 11000 is 10%."""
        assert personal_rate_of_return(10000, 11000, 0, 0, 12) == 10.0

    def test_half_year_weighting(self):
        """
        net 1000, weighted contributions 1200 × 6/12 = 600, denominator 10600,
        (12000 - 10000 - 1000) / 10600 × 100 = 9.43
        """
        assert personal_rate_of_return(10000, 12000, 1200, 200, 6) == 9.43

    def test_zero_beginning_value(self):
        """Beginning value must be positive."""
        with pytest.raises(InvalidInputError, match="Beginning value must be greater than zero"):
            personal_rate_of_return(0, 1000, 0, 0, 12)

    def test_negative_beginning_value(self):
        with pytest.raises(InvalidInputError):
            personal_rate_of_return(-500, 1000, 0, 0, 12)

    def test_non_positive_denominator(self):
        """Negative contributions that wipe out the base are rejected."""
        with pytest.raises(InvalidInputError, match="denominator"):
            personal_rate_of_return(100, 50, -200, 0, 12)

    def test_invalid_input_is_value_error(self):
        """Callers catching ValueError also catch InvalidInputError."""
        assert issubclass(InvalidInputError, ValueError)
