"""
Tests for return distribution statistics.
"""

import numpy as np
import pytest

from analysis.calculations.distribution import (
    returns_distribution,
    histogram,
    skewness,
    kurtosis
)


ONE_TO_TEN = [float(i) for i in range(1, 11)]


class TestReturnsDistribution:
    """Tests for returns_distribution."""

    def test_statistics(self):
        result = returns_distribution(ONE_TO_TEN)
        stats = result['statistics']

        assert result['total_observations'] == 10
        assert stats['mean'] == 5.5
        assert stats['min'] == 1.0
        assert stats['max'] == 10.0
        # floor(0.5 × 10) = 5 -> sixth smallest
        assert stats['median'] == 6.0

    def test_percentiles_floor_index(self):
        percentiles = returns_distribution(ONE_TO_TEN)['statistics']['percentiles']

        assert percentiles == {
            'p10': 2.0,
            'p25': 3.0,
            'p50': 6.0,
            'p75': 8.0,
            'p90': 10.0,
        }

    def test_histogram_covers_all_observations(self):
        result = returns_distribution(ONE_TO_TEN)

        assert len(result['histogram']) == 20
        assert sum(b['count'] for b in result['histogram']) == 10

    def test_empty(self):
        result = returns_distribution([])

        assert result['total_observations'] == 0
        assert result['histogram'] == []
        assert result['statistics']['standard_deviation'] == 0.0


class TestHistogram:
    """Tests for histogram bins."""

    def test_three_bins(self):
        """[1,4) -> 3, [4,7) -> 3, [7,10] -> 4 (last bin holds the max)."""
        bins = histogram(ONE_TO_TEN, bin_count=3)

        assert [b['count'] for b in bins] == [3, 3, 4]
        assert [b['percentage'] for b in bins] == [30.0, 30.0, 40.0]
        assert bins[0]['start'] == 1.0
        assert bins[-1]['end'] == 10.0

    def test_constant_series(self):
        """Zero-width bins put every observation in the last bin."""
        bins = histogram([2.0, 2.0, 2.0], bin_count=4)

        assert [b['count'] for b in bins] == [0, 0, 0, 3]

    def test_empty(self):
        assert histogram([]) == []

    @pytest.mark.parametrize("seed", range(25))
    def test_counts_sum_to_observations(self, seed):
        """No observation falls between adjacent bins for arbitrary returns."""
        rng = np.random.default_rng(seed)
        returns = np.round(rng.normal(0.5, 3.0, size=30), 2).tolist()

        for bin_count in (7, 20, 33):
            bins = histogram(returns, bin_count=bin_count)

            assert sum(b['count'] for b in bins) == 30
            assert bins[-1]['count'] >= 1
            assert all(a["end"] == b["start"] for a, b in zip(bins, bins[1:]))


class TestMoments:
    """Tests for skewness and kurtosis."""

    def test_symmetric_series_has_no_skew(self):
        assert abs(skewness(ONE_TO_TEN)) < 1e-9

    def test_right_skew(self):
        assert skewness([0, 0, 0, 0, 10]) > 0

    def test_kurtosis_positive(self):
        assert kurtosis(ONE_TO_TEN) > 0

    def test_constant_series(self):
        assert skewness([1, 1, 1]) == 0.0
        assert kurtosis([1, 1, 1]) == 0.0
