"""
Helper module to read the order log CSV from either disk or a Streamlit uploaded buffer.
"""
import time

import pandas as pd

from exceptions import NoUsableDataError


def read_order_log(source, **kwargs):
    """
    Read an order log CSV into raw rows.

    Every cell is read as text; column typing is applied later by the cleaner
    so that the same rules hold for uploaded files and in-memory rows.

    Args:
        source: file path or file-like object (BytesIO, StringIO, UploadedFile)
        **kwargs: passed to pd.read_csv()

    Returns:
        tuple: (logs, raw_rows) where raw_rows is a list of dicts, blank cells as None

    Raises:
        FileNotFoundError: path does not exist
        NoUsableDataError: the file has no header or no data rows, is not UTF-8
            or is not well-formed CSV
    """
    logs = []
    start_time = time.time()
    logs.append("--- Order Log Reader ---")

    if source is None:
        raise FileNotFoundError("No order log selected")

    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True, **kwargs)
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {source}")
    except pd.errors.EmptyDataError:
        raise NoUsableDataError("No valid data found in the CSV file")
    except (UnicodeDecodeError, pd.errors.ParserError) as e:
        raise NoUsableDataError(f"Could not read the CSV file: {e}")

    if df.empty:
        raise NoUsableDataError("No valid data found in the CSV file")

    df.columns = df.columns.str.strip()
    for col in df.columns:
        df[col] = df[col].str.strip()
    # Rows made only of delimiters survive skip_blank_lines
    df = df.mask(df == "")
    df = df.dropna(how="all")

    if df.empty:
        raise NoUsableDataError("No valid data found in the CSV file")

    raw_rows = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    logs.append(f"INFO: Read {len(raw_rows)} rows and {len(df.columns)} columns from order log.")

    end_time = time.time()
    logs.append(f"INFO: Order Log Reader finished in {end_time - start_time:.2f} seconds.")
    return logs, raw_rows
