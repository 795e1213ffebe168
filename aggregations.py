"""
Aggregation Module

Grouped averages over cleaned order records and the coefficient of variation
used by the variability and bullwhip analyses.
"""

import numpy as np
import pandas as pd

from exceptions import EmptyAggregateError


def _to_python_scalar(value):
    # numpy scalars (np.int64 month keys) -> plain int/float/str
    return value.item() if isinstance(value, np.generic) else value


def average_by_group(records: pd.DataFrame, group_field: str, value_field: str) -> dict:
    """
    Mean of value_field per distinct value of group_field.

    Records with a null or empty group key, or a null value, are skipped and
    count toward no group.

    Args:
        records: cleaned order records
        group_field: column to group on (e.g. 'Supplier', 'month')
        value_field: numeric column to average (e.g. 'lead_time', 'delay')

    Returns:
        dict: {group_key: mean}, one entry per qualifying group, in first-seen order
    """
    if records.empty:
        return {}

    keys = records[group_field]
    values = pd.to_numeric(records[value_field], errors='coerce')
    qualifying = keys.notna() & (keys.astype(str) != "") & values.notna()
    if not qualifying.any():
        return {}

    means = values[qualifying].groupby(keys[qualifying], sort=False).mean()
    return {_to_python_scalar(key): float(mean) for key, mean in means.items()}


def highest_entry(grouped: dict) -> tuple:
    """Return (key, value) with the largest value; first key wins ties."""
    if not grouped:
        raise EmptyAggregateError("Cannot pick the highest entry of an empty grouping")
    key = max(grouped, key=grouped.get)
    return key, grouped[key]


def lowest_entry(grouped: dict) -> tuple:
    """Return (key, value) with the smallest value; first key wins ties."""
    if not grouped:
        raise EmptyAggregateError("Cannot pick the lowest entry of an empty grouping")
    key = min(grouped, key=grouped.get)
    return key, grouped[key]


def coefficient_of_variation(values) -> float:
    """
    Population standard deviation divided by the mean, as a percentage.

    Returns 0 for an empty input or a zero mean. Null values are ignored.
    """
    arr = pd.to_numeric(pd.Series(values, dtype=object), errors='coerce').dropna().to_numpy(dtype=float)
    if len(arr) == 0:
        return 0.0

    mean = arr.mean()
    if mean == 0:
        return 0.0
    return float(np.std(arr) / mean * 100.0)
