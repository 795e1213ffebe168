"""
Period Series Module

Buckets cleaned order records into calendar year-month periods and builds
ordered monthly series (mean lead time, mean demand, bullwhip ratio).

Series are sorted on a zero-padded "YYYY-MM" key so that Dec 2023 always
precedes Jan 2024; the "Mar 2024" style label is carried alongside for display.
"""

from datetime import date

import pandas as pd
from dateutil.relativedelta import relativedelta

from aggregations import coefficient_of_variation
from business_rules import FORECAST_RULES, MONTH_NAMES

PERIOD_COLUMNS = ['period_key', 'year', 'month', 'period_label', 'value']


# ===== PERIOD KEYS & LABELS =====

def period_key(year: int, month: int) -> str:
    """Sortable key, e.g. (2024, 3) -> '2024-03'."""
    return f"{int(year):04d}-{int(month):02d}"


def month_name(month: int) -> str:
    return MONTH_NAMES[(int(month) - 1) % 12]


def month_number(name: str) -> int:
    """Inverse of month_name: 'Mar' -> 3."""
    return MONTH_NAMES.index(name) + 1


def period_label(year: int, month: int) -> str:
    """Display label, e.g. (2024, 3) -> 'Mar 2024'."""
    return f"{month_name(month)} {int(year)}"


def shift_period(year: int, month: int, steps: int) -> tuple:
    """Roll a (year, month) period forward by whole months, wrapping December into January."""
    shifted = date(int(year), int(month), 1) + relativedelta(months=steps)
    return shifted.year, shifted.month


def _finalize(frame: pd.DataFrame) -> pd.DataFrame:
    """Add key/label columns and sort by period key."""
    if frame.empty:
        return pd.DataFrame(columns=PERIOD_COLUMNS)

    frame = frame.copy()
    frame['year'] = frame['year'].astype('int64')
    frame['month'] = frame['month'].astype('int64')
    frame['period_key'] = [period_key(y, m) for y, m in zip(frame['year'], frame['month'])]
    frame['period_label'] = [period_label(y, m) for y, m in zip(frame['year'], frame['month'])]
    frame['value'] = frame['value'].astype(float)
    return frame.sort_values('period_key').reset_index(drop=True)[PERIOD_COLUMNS]


# ===== SERIES BUILDERS =====

def build_period_series(records: pd.DataFrame, value_field: str) -> pd.DataFrame:
    """
    Mean of value_field per calendar year-month.

    Args:
        records: cleaned order records with 'year' and 'month'
        value_field: numeric column to average, e.g. 'lead_time'

    Returns:
        DataFrame [period_key, year, month, period_label, value] sorted by period_key
    """
    if records.empty:
        return pd.DataFrame(columns=PERIOD_COLUMNS)

    frame = records[['year', 'month']].assign(value=pd.to_numeric(records[value_field], errors='coerce'))
    frame = frame.dropna(subset=['value'])
    frame = frame.groupby(['year', 'month'], as_index=False)['value'].mean()
    return _finalize(frame)


def bullwhip_ratio(order_quantities, customer_demand) -> float:
    """
    Order-quantity variability over customer-demand variability.

    A demand variability that is not positive means amplification cannot be
    measured; the ratio is then reported as 1. The result is never negative.
    """
    demand_cv = coefficient_of_variation(customer_demand)
    if demand_cv <= 0:
        return float(FORECAST_RULES["bullwhip_ratio_when_flat_demand"])
    return max(0.0, coefficient_of_variation(order_quantities) / demand_cv)


def build_ratio_series(records: pd.DataFrame, numerator_field: str = 'Order_Quantity',
                       denominator_field: str = 'Customer_Demand') -> pd.DataFrame:
    """
    Bullwhip ratio per calendar year-month.

    Returns:
        DataFrame [period_key, year, month, period_label, value] sorted by period_key
    """
    if records.empty:
        return pd.DataFrame(columns=PERIOD_COLUMNS)

    rows = []
    for (year, month), group in records.groupby(['year', 'month'], sort=False):
        rows.append({
            'year': year,
            'month': month,
            'value': bullwhip_ratio(group[numerator_field], group[denominator_field]),
        })
    return _finalize(pd.DataFrame(rows))
