"""
Business Rules Configuration
Centralized definitions for fields, calculations, and business logic.
This file allows rules to be changed in one place without modifying tool code.
"""

# ===== INPUT SCHEMA =====

DATE_COLUMNS = [
    "Order_Date",
    "Expected_Delivery_Date",
    "Actual_Delivery_Date",
]

NUMERIC_COLUMNS = [
    "Customer_Demand",
    "Order_Quantity",
]

# Order matters: SchemaError lists missing columns in this order
REQUIRED_COLUMNS = [
    "Order_ID",
    "Supplier",
    "Order_Date",
    "Expected_Delivery_Date",
    "Actual_Delivery_Date",
    "Product_Category",
    "Transportation_Mode",
    "Supplier_Location",
    "Disruption_Type",
    "Customer_Demand",
    "Order_Quantity",
]

# Explicit column typing applied to every row ("date", "number" or "string")
COLUMN_TYPES = {
    col: ("date" if col in DATE_COLUMNS else "number" if col in NUMERIC_COLUMNS else "string")
    for col in REQUIRED_COLUMNS
}


# ===== DERIVED FIELD RULES =====

DERIVED_FIELD_RULES = {
    # Fixed 24-hour day, no timezone or DST adjustment
    "seconds_per_day": 24 * 60 * 60,
    # Day counts are clamped at this floor; delay is left signed
    "lead_time_floor": 0,
    "date_fields": {
        "Order_Date": "order_date",
        "Expected_Delivery_Date": "expected_date",
        "Actual_Delivery_Date": "actual_date",
    },
}


# ===== CALENDAR =====

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


# ===== FORECAST RULES =====

FORECAST_RULES = {
    "horizon_periods": 3,       # Periods appended after the last historical period
    "trailing_window": 3,       # Periods used for baseline and trend
    "bullwhip_ratio_floor": 1,  # Forecast ratio below 1 means no amplification
    # Demand variability of zero means amplification cannot be measured
    "bullwhip_ratio_when_flat_demand": 1,
}


# ===== KEY METRICS =====
# Each entry: grouped average to reduce, which extreme to pick, and its display caption

KEY_METRICS = [
    {
        "id": "highest_lead_supplier",
        "label": "Supplier with Highest Avg Lead Time",
        "group_field": "Supplier",
        "value_field": "lead_time",
        "extreme": "highest",
    },
    {
        "id": "lowest_lead_transport",
        "label": "Fastest Transportation Mode",
        "group_field": "Transportation_Mode",
        "value_field": "lead_time",
        "extreme": "lowest",
    },
    {
        "id": "highest_delay_month",
        "label": "Month with Highest Avg Delay",
        "group_field": "month",
        "value_field": "delay",
        "extreme": "highest",
    },
    {
        "id": "longest_delay_disruption",
        "label": "Disruption with Longest Avg Delay",
        "group_field": "Disruption_Type",
        "value_field": "delay",
        "extreme": "highest",
    },
    {
        "id": "shortest_lead_category",
        "label": "Category with Shortest Lead Time",
        "group_field": "Product_Category",
        "value_field": "lead_time",
        "extreme": "lowest",
    },
]


# ===== DISPLAY RULES =====

DISPLAY_RULES = {
    "decimal_places": 1,
    "day_unit": "days",
}
