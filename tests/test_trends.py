"""Tests for order-sensitive trend indicators."""

import logging

import pytest

from subtrack_core.exceptions import InvalidSmoothingFactorError, InvalidWindowError
from subtrack_core.models import TrendDirection
from subtrack_core.trends import (
    analyze_trend,
    detect_outliers,
    exponential_moving_average,
    linear_slope,
    momentum_index,
    moving_average,
)


class TestMovingAverage:
    """Test the trailing moving average."""

    def test_partial_windows_at_start(self):
        assert moving_average([1, 2, 3, 4, 5], 3) == [1.0, 1.5, 2.0, 3.0, 4.0]

    def test_window_one_is_identity(self):
        assert moving_average([4, 8, 15], 1) == [4.0, 8.0, 15.0]

    def test_window_larger_than_series(self):
        assert moving_average([2, 4], 5) == [2.0, 3.0]

    def test_empty(self):
        assert moving_average([], 3) == []

    @pytest.mark.parametrize("window", [0, -1])
    def test_invalid_window(self, window):
        with pytest.raises(InvalidWindowError):
            moving_average([1, 2, 3], window)


class TestExponentialMovingAverage:
    """Test the EMA recurrence."""

    def test_recurrence(self):
        assert exponential_moving_average([10, 20, 30], 0.5) == [10.0, 15.0, 22.5]

    def test_alpha_one_is_identity(self):
        assert exponential_moving_average([3, 1, 4], 1) == [3.0, 1.0, 4.0]

    def test_empty(self):
        assert exponential_moving_average([], 0.3) == []

    @pytest.mark.parametrize("alpha", [0, -0.1, 1.5])
    def test_invalid_alpha(self, alpha):
        with pytest.raises(InvalidSmoothingFactorError):
            exponential_moving_average([1, 2, 3], alpha)


class TestMomentumIndex:
    """Test the RSI-style momentum index."""

    def test_no_losses_is_100(self):
        assert momentum_index([1, 2, 3, 4, 5], 2) == [100.0, 100.0, 100.0]

    def test_only_losses_is_0(self):
        assert momentum_index([5, 4, 3, 2, 1], 2) == [0.0, 0.0, 0.0]

    def test_mixed(self):
        """Average gain 1 and average loss 0.5 give RS 2."""
        result = momentum_index([10, 12, 11, 13, 12], 2)
        assert result == pytest.approx([200 / 3, 200 / 3, 200 / 3])

    def test_values_in_range(self):
        series = [12.0, 15.5, 9.0, 22.0, 18.0, 18.0, 30.0, 11.0, 14.0]
        assert all(0 <= v <= 100 for v in momentum_index(series, 3))

    def test_output_length(self):
        for n in range(8):
            series = list(range(n))
            assert len(momentum_index(series, 3)) == max(0, n - 3)

    def test_length_differs_from_moving_average(self):
        """Momentum drops the warm-up window; moving averages keep every point."""
        series = [10, 11, 9, 14, 12, 13]
        assert len(moving_average(series, 2)) == 6
        assert len(momentum_index(series, 2)) == 4

    def test_series_not_longer_than_period(self):
        assert momentum_index([1, 2, 3], 3) == []
        assert momentum_index([], 14) == []

    def test_invalid_period(self):
        with pytest.raises(InvalidWindowError):
            momentum_index([1, 2, 3], 0)


class TestLinearSlope:
    """Test least-squares slope."""

    def test_rising(self):
        assert linear_slope([1, 2, 3]) == pytest.approx(1.0)

    def test_flat(self):
        assert linear_slope([2, 2, 2]) == 0.0

    def test_too_short(self):
        assert linear_slope([5]) == 0.0
        assert linear_slope([]) == 0.0


class TestAnalyzeTrend:
    """Test trend direction and forecast."""

    def test_increasing(self):
        summary = analyze_trend([100, 110, 120, 130])
        assert summary.direction == TrendDirection.INCREASING
        assert summary.slope == pytest.approx(10.0)
        assert summary.percentage_change == pytest.approx(10 * 4 / 115 * 100)
        assert summary.absolute_change == 30.0
        assert summary.forecast == pytest.approx(140.0)

    def test_decreasing(self):
        summary = analyze_trend([130, 120, 110, 100])
        assert summary.direction == TrendDirection.DECREASING
        assert summary.percentage_change > 0
        assert summary.forecast == pytest.approx(90.0)

    def test_stable(self):
        summary = analyze_trend([100, 101, 100, 101])
        assert summary.direction == TrendDirection.STABLE
        assert summary.slope == pytest.approx(0.2)

    def test_custom_threshold(self):
        summary = analyze_trend([100, 101, 100, 101], stable_threshold=0.5)
        assert summary.direction == TrendDirection.INCREASING

    def test_single_point(self):
        summary = analyze_trend([42])
        assert summary.direction == TrendDirection.STABLE
        assert summary.forecast == 42.0

    def test_empty(self):
        summary = analyze_trend([])
        assert summary.direction == TrendDirection.STABLE
        assert summary.forecast == 0.0


class TestDetectOutliers:
    """Test z-score outlier detection."""

    def test_spike(self):
        series = [10] * 10 + [100]
        assert detect_outliers(series) == [10]

    def test_lower_threshold_flags_more(self):
        series = [10, 10, 10, 10, 20]
        assert detect_outliers(series, threshold=1.5) == [4]
        assert detect_outliers(series, threshold=2.5) == []

    def test_constant_series(self):
        assert detect_outliers([7, 7, 7]) == []

    def test_empty(self):
        assert detect_outliers([]) == []

    def test_logs_found_outliers(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="subtrack_core.trends"):
            detect_outliers([10] * 10 + [100])
        assert "Found 1 outliers" in caplog.text
