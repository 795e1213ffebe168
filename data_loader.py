import time

import numpy as np
import pandas as pd

from business_rules import COLUMN_TYPES, DERIVED_FIELD_RULES, REQUIRED_COLUMNS
from exceptions import NoUsableDataError, SchemaError

# === Helper Functions ===

LOAD_TIMEOUT_SECONDS = 90
SECONDS_PER_DAY = DERIVED_FIELD_RULES["seconds_per_day"]
LEAD_TIME_FLOOR = DERIVED_FIELD_RULES["lead_time_floor"]
DATE_FIELDS = DERIVED_FIELD_RULES["date_fields"]


def clean_string_column(series: pd.Series) -> pd.Series:
    """
    Strip whitespace and normalize internal spaces.

    Missing and blank cells stay null so they never form a group of their own.

    Args:
        series: Pandas Series with string data

    Returns:
        Cleaned Series with normalized whitespace
    """
    cleaned = series.astype(str).str.strip().str.replace(r'\s+', ' ', regex=True)
    return cleaned.where(series.notna() & (cleaned != ""))


def safe_numeric_column(series: pd.Series, remove_commas: bool = False) -> pd.Series:
    """
    Convert column to numeric with optional comma removal.

    Unlike a fill-with-zero conversion, unparsable values stay NaN so that
    aggregations skip them instead of counting them as zero.

    Args:
        series: Pandas Series to convert
        remove_commas: If True, remove commas before conversion

    Returns:
        Numeric Series, NaN where the value is not a number
    """
    if remove_commas:
        series = series.astype(str).str.replace(',', '', regex=False)
    return pd.to_numeric(series, errors='coerce')


def parse_date_column(series: pd.Series) -> pd.Series:
    """Parse mixed date text into naive timestamps; unparsable values become NaT."""
    parsed = pd.to_datetime(series.astype(str), errors='coerce', format='mixed', utc=True)
    return parsed.dt.tz_localize(None)


def days_between(start: pd.Series, end: pd.Series) -> pd.Series:
    """Whole days from start to end on a fixed 24-hour day, rounded half up."""
    seconds = (end - start).dt.total_seconds()
    return np.floor(seconds / SECONDS_PER_DAY + 0.5).astype('int64')


def check_columns(raw_rows, required_cols=REQUIRED_COLUMNS):
    """
    Fail fast when the first row lacks any required column.

    Only the first row is inspected; later rows missing a key are handled by
    the per-row cleaning rules.

    Raises:
        SchemaError: listing every missing column in required order
    """
    if isinstance(raw_rows, pd.DataFrame):
        present = set(raw_rows.columns)
    else:
        present = set(raw_rows[0].keys())
    missing_cols = [col for col in required_cols if col not in present]
    if missing_cols:
        raise SchemaError(missing_cols)


def apply_column_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Apply the declared column types to every row.

    String and number columns are converted in place. Date columns keep their
    original text; the parsed timestamps go to order_date, expected_date and
    actual_date.
    """
    df = df.copy()
    for col, col_type in COLUMN_TYPES.items():
        if col_type == "number":
            df[col] = safe_numeric_column(df[col], remove_commas=True)
        elif col_type == "date":
            df[DATE_FIELDS[col]] = parse_date_column(df[col])
        else:
            df[col] = clean_string_column(df[col])
    return df


# === Order Log Cleaner ===

def clean_order_log(raw_rows):
    """
    Validate raw order log rows and derive lead time and delay fields.

    Args:
        raw_rows: list of dicts (one per CSV line) or a DataFrame

    Returns:
        tuple: (logs, cleaned_df, error_df)
            cleaned_df: one row per order with all three dates parsed
            error_df: rows dropped because a date did not parse

    Raises:
        NoUsableDataError: no rows were given
        SchemaError: the first row lacks required columns
    """
    logs = []
    start_time = time.time()
    logs.append("--- Order Log Cleaner ---")
    error_df = pd.DataFrame()

    if raw_rows is None or len(raw_rows) == 0:
        raise NoUsableDataError("No valid data found in the order log")

    check_columns(raw_rows)

    if isinstance(raw_rows, pd.DataFrame):
        df = raw_rows.reset_index(drop=True)
    else:
        df = pd.DataFrame(list(raw_rows))
    logs.append(f"INFO: Received {len(df)} rows.")

    number_cols = [col for col, col_type in COLUMN_TYPES.items() if col_type == "number"]
    raw_numbers = df[number_cols].notna()
    df = apply_column_types(df)

    coerced_count = int((raw_numbers & df[number_cols].isna()).sum().sum())
    if coerced_count > 0:
        logs.append(f"WARN: {coerced_count} numeric cells could not be parsed and were left blank.")
        logs.append("ADVICE: Check the 'Customer_Demand' and 'Order_Quantity' columns for non-numeric values.")

    date_fail_mask = df[list(DATE_FIELDS.values())].isna().any(axis=1)
    date_fail_count = int(date_fail_mask.sum())
    if date_fail_count > 0:
        logs.append(f"WARN: {date_fail_count} rows dropped because a date failed to parse.")
        logs.append(
            "ADVICE: Check the 'Order_Date', 'Expected_Delivery_Date' and "
            "'Actual_Delivery_Date' columns for blank or malformed values."
        )
        error_df = df.loc[date_fail_mask, REQUIRED_COLUMNS].assign(ErrorType="Unparsable_Date")

    df = df.loc[~date_fail_mask].reset_index(drop=True)

    df['month'] = df['order_date'].dt.month.astype('int64')
    df['year'] = df['order_date'].dt.year.astype('int64')
    df['lead_time'] = days_between(df['order_date'], df['actual_date']).clip(lower=LEAD_TIME_FLOOR)
    df['expected_lead_time'] = days_between(df['order_date'], df['expected_date']).clip(lower=LEAD_TIME_FLOOR)
    df['delay'] = days_between(df['expected_date'], df['actual_date'])

    logs.append(f"INFO: {len(df)} rows remaining after dropping unparsable dates.")
    if df.empty:
        logs.append("ERROR: No valid order data remained after processing. Check the date columns.")

    end_time = time.time()
    total_time = end_time - start_time
    logs.append(f"INFO: Order Log Cleaner finished in {total_time:.2f} seconds.")
    if total_time > LOAD_TIMEOUT_SECONDS:
        logs.append(f"WARNING: This step took longer than {LOAD_TIMEOUT_SECONDS} seconds!")

    return logs, df, error_df
