"""
Order Log Analysis Pipeline

Single entry point that turns raw order log rows into every structure the
dashboard renders: key metric extremes, chart data and the two forecasts.

Each call builds a fresh AnalysisResult from its own input. Nothing is kept
at module level, so a new run fully replaces the previous one in the caller.
"""

import time
from dataclasses import dataclass

import numpy as np
import pandas as pd

from aggregations import average_by_group, coefficient_of_variation, highest_entry, lowest_entry
from business_rules import FORECAST_RULES, KEY_METRICS
from data_loader import clean_order_log
from exceptions import NoUsableDataError
from file_loader import read_order_log
from forecasting import forecast_series
from period_series import build_period_series, build_ratio_series, month_name, period_key, period_label


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Everything one analysis run produces. Never mutated after creation."""
    records: pd.DataFrame
    error_rows: pd.DataFrame
    rows_received: int
    rows_dropped: int
    grouped_averages: dict
    key_metrics: list
    transport_delays: pd.DataFrame
    seasonal_lead_times: pd.DataFrame
    bullwhip: pd.DataFrame
    variability: pd.DataFrame
    lead_time_series: pd.DataFrame
    bullwhip_series: pd.DataFrame
    lead_time_forecast: pd.DataFrame
    bullwhip_forecast: pd.DataFrame


# ===== KEY METRICS =====

def prepare_key_metrics(records: pd.DataFrame):
    """
    Reduce each configured grouping to its highest or lowest entry.

    Returns:
        tuple: (grouped_averages, key_metrics)
            grouped_averages: {metric_id: {group_key: mean}}
            key_metrics: list of {id, label, group_field, key, value}

    Raises:
        EmptyAggregateError: a grouping had no qualifying records
    """
    grouped_averages = {}
    key_metrics = []
    for metric in KEY_METRICS:
        grouped = average_by_group(records, metric['group_field'], metric['value_field'])
        grouped_averages[metric['id']] = grouped
        pick = highest_entry if metric['extreme'] == 'highest' else lowest_entry
        key, value = pick(grouped)
        key_metrics.append({
            'id': metric['id'],
            'label': metric['label'],
            'group_field': metric['group_field'],
            'key': key,
            'value': value,
        })
    return grouped_averages, key_metrics


# ===== CHART DATA =====

def prepare_transport_delay_data(records: pd.DataFrame) -> pd.DataFrame:
    """Average delay per transportation mode, for the bar chart."""
    grouped = average_by_group(records, 'Transportation_Mode', 'delay')
    return pd.DataFrame(list(grouped.items()), columns=['Transportation_Mode', 'avg_delay'])


def prepare_seasonal_pattern_data(records: pd.DataFrame) -> pd.DataFrame:
    """Average lead time per calendar month present in the data, January first."""
    grouped = average_by_group(records, 'month', 'lead_time')
    months = sorted(grouped)
    return pd.DataFrame({
        'month': months,
        'month_label': [month_name(m) for m in months],
        'avg_lead_time': [grouped[m] for m in months],
    })


def prepare_bullwhip_data(records: pd.DataFrame) -> pd.DataFrame:
    """Mean customer demand and mean order quantity per year-month."""
    demand = build_period_series(records, 'Customer_Demand')
    orders = build_period_series(records, 'Order_Quantity')
    merged = pd.merge(
        demand.rename(columns={'value': 'customer_demand'}),
        orders.rename(columns={'value': 'order_quantity'}),
        on=['period_key', 'year', 'month', 'period_label'],
        how='outer',
    )
    return merged.sort_values('period_key').reset_index(drop=True)


def prepare_variability_data(records: pd.DataFrame) -> pd.DataFrame:
    """
    One scatter point per supplier and year-month:
    x = order quantity variability (%), y = lead time variability (%).
    """
    points = []
    for (supplier, year, month), group in records.groupby(['Supplier', 'year', 'month'], sort=True):
        points.append({
            'Supplier': supplier,
            'period_key': period_key(year, month),
            'period_label': period_label(year, month),
            'order_quantity_cv': coefficient_of_variation(group['Order_Quantity']),
            'lead_time_cv': coefficient_of_variation(group['lead_time']),
        })
    columns = ['Supplier', 'period_key', 'period_label', 'order_quantity_cv', 'lead_time_cv']
    df = pd.DataFrame(points, columns=columns)
    finite = np.isfinite(df['order_quantity_cv'].astype(float)) & np.isfinite(df['lead_time_cv'].astype(float))
    return df[finite].reset_index(drop=True)


# ===== PIPELINE =====

def run_analysis(raw_rows):
    """
    Clean raw rows and compute every aggregate, series and forecast.

    Args:
        raw_rows: list of dicts or DataFrame as produced by file_loader.read_order_log

    Returns:
        tuple: (logs, AnalysisResult)

    Raises:
        SchemaError: required columns missing
        NoUsableDataError: no rows, or no row with three valid dates
        EmptyAggregateError: a key metric grouping had no qualifying records
        InsufficientHistoryError: fewer than 3 monthly periods to forecast from
    """
    start_time = time.time()
    logs, records, error_rows = clean_order_log(raw_rows)
    logs.append("--- Order Log Analysis ---")

    if records.empty:
        raise NoUsableDataError(
            "No usable rows: every row has an unparsable Order, Expected or Actual delivery date"
        )

    grouped_averages, key_metrics = prepare_key_metrics(records)
    logs.append(f"INFO: Computed {len(key_metrics)} key metrics.")

    transport_delays = prepare_transport_delay_data(records)
    seasonal_lead_times = prepare_seasonal_pattern_data(records)
    bullwhip = prepare_bullwhip_data(records)
    variability = prepare_variability_data(records)
    logs.append(
        f"INFO: Prepared chart data: {len(transport_delays)} transport modes, "
        f"{len(bullwhip)} periods, {len(variability)} variability points."
    )

    lead_time_series = build_period_series(records, 'lead_time')
    bullwhip_series = build_ratio_series(records, 'Order_Quantity', 'Customer_Demand')
    lead_time_forecast = forecast_series(lead_time_series)
    bullwhip_forecast = forecast_series(bullwhip_series, floor=FORECAST_RULES["bullwhip_ratio_floor"])
    logs.append(f"INFO: Forecast {FORECAST_RULES['horizon_periods']} periods from {len(lead_time_series)} months of history.")

    end_time = time.time()
    logs.append(f"INFO: Order Log Analysis finished in {end_time - start_time:.2f} seconds.")

    result = AnalysisResult(
        records=records,
        error_rows=error_rows,
        rows_received=len(records) + len(error_rows),
        rows_dropped=len(error_rows),
        grouped_averages=grouped_averages,
        key_metrics=key_metrics,
        transport_delays=transport_delays,
        seasonal_lead_times=seasonal_lead_times,
        bullwhip=bullwhip,
        variability=variability,
        lead_time_series=lead_time_series,
        bullwhip_series=bullwhip_series,
        lead_time_forecast=lead_time_forecast,
        bullwhip_forecast=bullwhip_forecast,
    )
    return logs, result


def analyze_order_log(source):
    """Read an order log CSV (path or uploaded buffer) and run the full analysis."""
    read_logs, raw_rows = read_order_log(source)
    analysis_logs, result = run_analysis(raw_rows)
    return read_logs + analysis_logs, result
