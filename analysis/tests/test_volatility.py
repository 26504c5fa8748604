"""
Tests for volatility calculation utilities.
Pure functions with synthetic data where standard deviation is known.
"""

import math
import numpy as np
import pytest

from analysis.calculations.volatility import (
    population_std,
    volatility,
    downside_std,
    downside_deviation,
    excess_returns,
    tracking_error
)


class TestVolatility:
    """Tests for population volatility."""

    def test_volatility_known_series(self):
        """Textbook series with population std of exactly 2."""
        returns = [2, 4, 4, 4, 5, 5, 7, 9]

        assert volatility(returns) == 2.0

    def test_volatility_matches_numpy_population_std(self):
        """Volatility uses ddof=0, not the sample estimator."""
        returns = [1.5, -0.3, 2.2, 0.8, -1.1]

        expected = round(float(np.std(returns, ddof=0)), 2)
        assert volatility(returns) == expected
        assert volatility(returns) != round(float(np.std(returns, ddof=1)), 2)

    def test_volatility_empty(self):
        """Empty sequence degrades to 0."""
        assert volatility([]) == 0.0

    def test_volatility_single_element(self):
        """Single observation has no dispersion."""
        assert volatility([7.3]) == 0.0

    def test_volatility_constant_series(self):
        """Constant returns have zero volatility."""
        assert volatility([1.0, 1.0, 1.0, 1.0]) == 0.0

    def test_volatility_non_negative(self):
        """Volatility is never negative, even for all-negative returns."""
        assert volatility([-5.0, -3.0, -8.0, -1.0]) >= 0

    def test_volatility_accepts_tuple_and_array(self):
        """Any numeric sequence type is accepted."""
        returns = [2, 4, 4, 4, 5, 5, 7, 9]

        assert volatility(tuple(returns)) == 2.0
        assert volatility(np.array(returns, dtype=float)) == 2.0

    def test_population_std_is_unrounded(self):
        """The helper keeps full precision for composition."""
        returns = [3.0, 5.0, 7.0]

        assert abs(population_std(returns) - math.sqrt(8 / 3)) < 1e-12


class TestDownsideDeviation:
    """Tests for downside deviation normalized by full length."""

    def test_downside_known_series(self):
        """Below-mean squared deviations divided by full n."""
        # mean = 5; below-mean values 2, 4, 4, 4 -> 9 + 1 + 1 + 1 = 12; 12 / 8 = 1.5
        returns = [2, 4, 4, 4, 5, 5, 7, 9]

        assert abs(downside_std(returns) - math.sqrt(1.5)) < 1e-12
        assert downside_deviation(returns) == 1.22

    def test_downside_no_observations_below_mean(self):
        """Constant series has nothing below its mean."""
        assert downside_std([3.0, 3.0, 3.0]) == 0.0

    def test_downside_empty(self):
        """Empty input degrades to 0."""
        assert downside_deviation([]) == 0.0


class TestTrackingError:
    """Tests for tracking error and excess returns."""

    def test_excess_returns_pairwise(self):
        """Excess returns are element-wise differences."""
        assert excess_returns([3, 5, 7], [1, 2, 3]) == [2.0, 3.0, 4.0]

    def test_excess_returns_length_mismatch(self):
        """Mismatched lengths give no excess series."""
        assert excess_returns([1, 2, 3], [1, 2]) == []

    def test_tracking_error_known(self):
        """Excess [2, 3, 4] has population std sqrt(2/3)."""
        assert tracking_error([3, 5, 7], [1, 2, 3]) == 0.82

    def test_tracking_error_mismatch(self):
        """Length mismatch degrades to 0."""
        assert tracking_error([1, 2, 3], [1, 2]) == 0.0

    def test_tracking_error_identical_series(self):
        """A fund that is its benchmark has no tracking error."""
        returns = [1.0, -2.0, 3.5]
        assert tracking_error(returns, returns) == 0.0
