"""
Forecasting Module

Short-horizon forecasts for monthly period series.
Uses a simple, interpretable method: trailing moving average plus trend.

    baseline = mean of the last 3 periods
    trend    = (last value - value 3 periods from the end) / 3
    point k  = baseline + trend * k,  k = 1..3

The output stitches history and forecast on one label axis so a chart can draw
a solid historical line followed by a dashed forecast line.
"""

import numpy as np
import pandas as pd

from business_rules import FORECAST_RULES
from exceptions import InsufficientHistoryError
from period_series import period_key, period_label, shift_period

FORECAST_HORIZON = FORECAST_RULES["horizon_periods"]
TRAILING_WINDOW = FORECAST_RULES["trailing_window"]

FORECAST_COLUMNS = ['period_key', 'period_label', 'historical', 'forecast', 'is_forecast']


def moving_average_trend(values, horizon: int = FORECAST_HORIZON, window: int = TRAILING_WINDOW) -> list:
    """Extrapolate `horizon` points from the trailing `window` values."""
    if len(values) < window:
        raise InsufficientHistoryError(len(values), window)

    trailing = [float(v) for v in values[-window:]]
    baseline = sum(trailing) / window
    trend = (trailing[-1] - trailing[0]) / window
    return [baseline + trend * step for step in range(1, horizon + 1)]


def forecast_series(series: pd.DataFrame, horizon: int = FORECAST_HORIZON, floor=None) -> pd.DataFrame:
    """
    Append `horizon` forecast periods to a period series.

    Args:
        series: period series from period_series.build_period_series / build_ratio_series
        horizon: number of future monthly periods
        floor: optional lower bound for forecast points (1 for bullwhip ratios)

    Returns:
        DataFrame [period_key, period_label, historical, forecast, is_forecast]
        with len(series) + horizon rows. 'historical' is NaN over the forecast
        periods and 'forecast' is NaN over the historical periods.

    Raises:
        InsufficientHistoryError: fewer than 3 historical periods
    """
    values = series['value'].astype(float).tolist()
    points = moving_average_trend(values, horizon=horizon)
    if floor is not None:
        points = [max(float(floor), point) for point in points]

    last_year = int(series['year'].iloc[-1])
    last_month = int(series['month'].iloc[-1])
    future_periods = [shift_period(last_year, last_month, step) for step in range(1, horizon + 1)]

    history_len = len(values)
    return pd.DataFrame({
        'period_key': list(series['period_key']) + [period_key(y, m) for y, m in future_periods],
        'period_label': list(series['period_label']) + [period_label(y, m) for y, m in future_periods],
        'historical': values + [np.nan] * horizon,
        'forecast': [np.nan] * history_len + points,
        'is_forecast': [False] * history_len + [True] * horizon,
    }, columns=FORECAST_COLUMNS)
