"""
Pytest configuration and shared fixtures for all tests
Centralized mock data and utilities
"""

import pytest
import pandas as pd
import io
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

ORDER_LOG_HEADER = (
    "Order_ID,Supplier,Order_Date,Expected_Delivery_Date,Actual_Delivery_Date,"
    "Product_Category,Transportation_Mode,Supplier_Location,Disruption_Type,"
    "Customer_Demand,Order_Quantity\n"
)

# ===== SHARED MOCK DATA FIXTURES =====

@pytest.fixture
def mock_order_log_csv():
    """
    Creates a mock order log CSV spanning Nov 2023 - Feb 2024 with:
    - A year boundary (Dec 2023 -> Jan 2024) to test period ordering
    - Early, on-time and late deliveries (negative, zero, positive delay)
    - Single-order months (zero demand variability -> bullwhip ratio 1)
    - One row with an unparsable actual delivery date (should be dropped)

    Expected lead times: Nov 2023 = 9.0, Dec 2023 = 16.0, Jan 2024 = 10.5, Feb 2024 = 6.0
    """
    csv_data = (
        ORDER_LOG_HEADER +
        # lead 10, expected 7, delay 3
        "ORD-001,Alpha,2023-11-05,2023-11-12,2023-11-15,Electronics,Air,Shanghai,Weather,100,120\n"
        # lead 8, expected 10, delay -2 (early)
        "ORD-002,Beta,2023-11-20,2023-11-30,2023-11-28,Apparel,Sea,Hamburg,None,80,80\n"
        # lead 16, expected 10, delay 6
        "ORD-003,Alpha,2023-12-10,2023-12-20,2023-12-26,Electronics,Sea,Shanghai,Strike,120,150\n"
        # lead 7, expected 7, delay 0
        "ORD-004,Beta,2024-01-08,2024-01-15,2024-01-15,Apparel,Air,Hamburg,None,90,100\n"
        # lead 14, expected 10, delay 4
        "ORD-005,Gamma,2024-01-22,2024-02-01,2024-02-05,Furniture,Road,Austin,Weather,60,90\n"
        # lead 6, expected 7, delay -1
        "ORD-006,Alpha,2024-02-03,2024-02-10,2024-02-09,Electronics,Air,Shanghai,None,110,110\n"
        # Bad actual delivery date
        "ORD-007,Gamma,2024-02-14,2024-02-24,not-a-date,Furniture,Road,Austin,Strike,70,70\n"
    )
    return "order_log.csv", io.StringIO(csv_data)

@pytest.fixture
def mock_constant_lead_time_csv():
    """
    Creates a mock order log for Jan - Apr 2024 where every order has a 5 day lead time
    """
    csv_data = (
        ORDER_LOG_HEADER +
        "C-001,Alpha,2024-01-10,2024-01-14,2024-01-15,Electronics,Air,Shanghai,None,100,110\n"
        "C-002,Beta,2024-01-20,2024-01-24,2024-01-25,Apparel,Sea,Hamburg,Weather,80,95\n"
        "C-003,Alpha,2024-02-10,2024-02-14,2024-02-15,Electronics,Air,Shanghai,None,100,120\n"
        "C-004,Beta,2024-02-20,2024-02-24,2024-02-25,Apparel,Sea,Hamburg,Weather,90,90\n"
        "C-005,Alpha,2024-03-10,2024-03-14,2024-03-15,Electronics,Air,Shanghai,None,110,130\n"
        "C-006,Beta,2024-03-20,2024-03-24,2024-03-25,Apparel,Sea,Hamburg,Weather,70,80\n"
        "C-007,Alpha,2024-04-10,2024-04-14,2024-04-15,Electronics,Air,Shanghai,None,100,100\n"
        "C-008,Beta,2024-04-20,2024-04-24,2024-04-25,Apparel,Sea,Hamburg,Weather,60,75\n"
    )
    return "constant_lead_time.csv", io.StringIO(csv_data)

@pytest.fixture
def mock_missing_supplier_csv():
    """Creates a mock order log without the Supplier column"""
    csv_data = (
        "Order_ID,Order_Date,Expected_Delivery_Date,Actual_Delivery_Date,"
        "Product_Category,Transportation_Mode,Supplier_Location,Disruption_Type,"
        "Customer_Demand,Order_Quantity\n"
        "M-001,2024-01-10,2024-01-14,2024-01-15,Electronics,Air,Shanghai,None,100,110\n"
    )
    return "missing_supplier.csv", io.StringIO(csv_data)

# ===== MOCK CSV READER FIXTURE =====

@pytest.fixture(autouse=True)
def mock_read_csv(monkeypatch, mock_order_log_csv, mock_constant_lead_time_csv,
                  mock_missing_supplier_csv):
    """
    Auto-used fixture that intercepts all pd.read_csv calls and returns
    appropriate mock data. This allows tests to run without real CSV files.

    The fixture maps filenames to mock data streams.
    """
    mocks = {
        mock_order_log_csv[0]: mock_order_log_csv[1],
        mock_constant_lead_time_csv[0]: mock_constant_lead_time_csv[1],
        mock_missing_supplier_csv[0]: mock_missing_supplier_csv[1],
    }

    original_read_csv = pd.read_csv

    def new_read_csv(filepath_or_buffer, *args, **kwargs):
        """
        Replacement read_csv that checks if file is a mock,
        otherwise falls back to original function
        """
        if isinstance(filepath_or_buffer, str):
            filename = os.path.basename(filepath_or_buffer)
            if filename in mocks:
                mocks[filename].seek(0)
                return original_read_csv(mocks[filename], *args, **kwargs)

        return original_read_csv(filepath_or_buffer, *args, **kwargs)

    monkeypatch.setattr(pd, "read_csv", new_read_csv)

# ===== HELPER FIXTURES =====

def make_row(order_id, order_date, expected_date, actual_date, supplier="Alpha",
             mode="Air", category="Electronics", disruption="None", demand=100, quantity=100):
    """Build one raw order log row as the CSV reader would return it"""
    return {
        "Order_ID": order_id,
        "Supplier": supplier,
        "Order_Date": order_date,
        "Expected_Delivery_Date": expected_date,
        "Actual_Delivery_Date": actual_date,
        "Product_Category": category,
        "Transportation_Mode": mode,
        "Supplier_Location": "Shanghai",
        "Disruption_Type": disruption,
        "Customer_Demand": demand,
        "Order_Quantity": quantity,
    }

@pytest.fixture
def order_log_rows(mock_order_log_csv):
    """Raw rows of the mock order log, read with the project's CSV reader"""
    from file_loader import read_order_log
    _, rows = read_order_log(mock_order_log_csv[0])
    return rows

@pytest.fixture
def constant_lead_time_rows(mock_constant_lead_time_csv):
    """Raw rows of the constant lead time order log"""
    from file_loader import read_order_log
    _, rows = read_order_log(mock_constant_lead_time_csv[0])
    return rows

@pytest.fixture
def cleaned_records(order_log_rows):
    """Cleaned records of the mock order log (6 valid rows)"""
    from data_loader import clean_order_log
    _, records, _ = clean_order_log(order_log_rows)
    return records

# ===== UTILITY FUNCTIONS FOR TESTS =====

def assert_log_contains(logs, expected_message):
    """
    Helper to assert that a log message contains expected text

    Args:
        logs: List of log messages
        expected_message: Text expected to be in one of the logs
    """
    log_text = " ".join(logs)
    assert expected_message in log_text, f"Expected '{expected_message}' not found in logs: {log_text}"

def assert_columns_exist(df, columns):
    """
    Helper to assert that DataFrame contains required columns

    Args:
        df: Pandas DataFrame
        columns: List of column names that should exist
    """
    missing = set(columns) - set(df.columns)
    assert not missing, f"Missing required columns: {missing}"
