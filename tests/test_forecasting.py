"""
Tests for forecasting module
"""

import pytest
import pandas as pd
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from forecasting import forecast_series, moving_average_trend
from exceptions import InsufficientHistoryError
from period_series import build_period_series, period_key, period_label


def make_series(periods, values):
    """Build a period series frame from [(year, month), ...] and values"""
    return pd.DataFrame({
        'period_key': [period_key(y, m) for y, m in periods],
        'year': [y for y, _ in periods],
        'month': [m for _, m in periods],
        'period_label': [period_label(y, m) for y, m in periods],
        'value': values,
    })


class TestMovingAverageTrend:
    """Test the extrapolation rule"""

    def test_flat_history(self):
        assert moving_average_trend([5, 5, 5, 5]) == [5, 5, 5]

    def test_trend_from_trailing_window(self):
        """baseline = mean(16, 10.5, 6), trend = (6 - 16) / 3"""
        points = moving_average_trend([9, 16, 10.5, 6])
        baseline = 32.5 / 3
        trend = -10 / 3
        assert points == pytest.approx([baseline + trend, baseline + 2 * trend, baseline + 3 * trend])

    def test_only_last_three_values_matter(self):
        assert moving_average_trend([1000, 1, 2, 3]) == moving_average_trend([1, 2, 3])

    def test_short_history_raises(self):
        with pytest.raises(InsufficientHistoryError):
            moving_average_trend([1, 2])


class TestForecastSeries:
    """Test forecast series stitching"""

    def test_constant_lead_time_forecast(self, constant_lead_time_rows):
        """Jan-Apr 2024 with 5 day lead time -> May/Jun/Jul 2024 forecast of 5"""
        from data_loader import clean_order_log
        _, records, _ = clean_order_log(constant_lead_time_rows)
        series = build_period_series(records, 'lead_time')

        forecast = forecast_series(series)

        future = forecast[forecast['is_forecast']]
        assert list(future['period_label']) == ["May 2024", "Jun 2024", "Jul 2024"]
        assert list(future['forecast']) == pytest.approx([5, 5, 5])

    def test_length_and_null_padding(self):
        """L history periods -> L + 3 rows; each side null over the other's domain"""
        series = make_series([(2024, 1), (2024, 2), (2024, 3), (2024, 4), (2024, 5)], [3, 4, 5, 6, 7])
        forecast = forecast_series(series)

        assert len(forecast) == 8
        assert forecast['forecast'].iloc[:5].isna().all()
        assert forecast['historical'].iloc[5:].isna().all()
        assert forecast['historical'].iloc[:5].tolist() == [3, 4, 5, 6, 7]
        assert forecast['forecast'].iloc[5:].notna().all()

    def test_labels_wrap_into_next_year(self):
        series = make_series([(2024, 9), (2024, 10), (2024, 11)], [1, 2, 3])
        forecast = forecast_series(series)

        assert forecast['period_label'].tolist()[-3:] == ["Dec 2024", "Jan 2025", "Feb 2025"]
        assert forecast['period_key'].tolist()[-3:] == ["2024-12", "2025-01", "2025-02"]

    def test_floor_applied_to_forecast_only(self):
        """Ratio forecasts never drop below 1; history is left as-is"""
        series = make_series([(2024, 1), (2024, 2), (2024, 3)], [1.2, 0.9, 0.6])
        forecast = forecast_series(series, floor=1)

        assert (forecast['forecast'].dropna() >= 1).all()
        assert forecast['historical'].dropna().tolist() == [1.2, 0.9, 0.6]

    def test_without_floor_forecast_can_fall(self):
        series = make_series([(2024, 1), (2024, 2), (2024, 3)], [3, 2, 1])
        forecast = forecast_series(series)
        assert forecast['forecast'].dropna().tolist() == pytest.approx([1.3333333, 0.6666667, 0.0])

    def test_two_period_series_raises(self):
        """Forecasting a 2-period series fails instead of producing NaN"""
        series = make_series([(2024, 1), (2024, 2)], [5, 6])
        with pytest.raises(InsufficientHistoryError) as exc_info:
            forecast_series(series)
        assert exc_info.value.periods == 2
        assert exc_info.value.required == 3

    def test_no_nan_in_forecast_points(self):
        series = make_series([(2024, 1), (2024, 2), (2024, 3)], [1.5, 2.5, 3.5])
        forecast = forecast_series(series)
        assert np.isfinite(forecast['forecast'].iloc[3:]).all()
