"""
UI Components Module
Modular, reusable UI components for the Supply Chain Analytics dashboard
Easy to add, edit, and enhance without touching core logic
"""

import streamlit as st

from business_rules import DISPLAY_RULES
from period_series import month_name

# ===== UI LAYOUT HELPERS =====

def render_page_header(title, icon="📦", subtitle=None):
    """Render consistent page headers"""
    st.title(f"{icon} {title}")
    if subtitle:
        st.caption(subtitle)
    st.divider()

def render_kpi_row(metrics_dict):
    """
    Render a row of KPI metrics

    Args:
        metrics_dict: Dict with format {"Label": {"value": "123", "delta": "+5%", "help": "Help text"}}
    """
    cols = st.columns(len(metrics_dict))
    for idx, (label, data) in enumerate(metrics_dict.items()):
        with cols[idx]:
            # Normalize empty / None metric values so the UI doesn't render blank cards
            raw_value = data.get("value", "N/A")
            if raw_value is None or (isinstance(raw_value, str) and str(raw_value).strip() == ""):
                display_value = "N/A"
            else:
                display_value = raw_value

            st.metric(
                label=label,
                value=display_value,
                delta=data.get("delta"),
                help=data.get("help")
            )

def render_data_table(df, title=None, max_rows=100, downloadable=True, download_filename="data.csv"):
    """
    Render a data table with optional download

    Args:
        df: Pandas DataFrame
        title: Optional section title
        max_rows: Maximum rows to display
        downloadable: Show download button
        download_filename: Name for downloaded file
    """
    if title:
        st.subheader(title)

    if df.empty:
        st.info("No data available")
        return

    st.dataframe(df.head(max_rows), width='stretch')

    if len(df) > max_rows:
        st.caption(f"Showing first {max_rows} of {len(df)} records")

    if downloadable:
        csv = df.to_csv(index=False).encode('utf-8')
        st.download_button(
            label="📥 Download Full Data",
            data=csv,
            file_name=download_filename,
            mime="text/csv",
            key=f"download_{download_filename}"
        )

def render_chart(fig, title=None, height=400):
    """
    Render a Plotly chart with consistent styling

    Args:
        fig: Plotly figure object
        title: Optional chart title
        height: Chart height in pixels
    """
    if title:
        st.subheader(title)

    fig.update_layout(
        height=height,
        margin=dict(l=20, r=20, t=40, b=20),
        template="plotly_white"
    )

    st.plotly_chart(fig, width='stretch')

def render_info_box(message, type="info"):
    """
    Render an info/warning/error box

    Args:
        message: Message to display
        type: "info", "warning", "error", "success"
    """
    if type == "info":
        st.info(message)
    elif type == "warning":
        st.warning(message)
    elif type == "error":
        st.error(message)
    elif type == "success":
        st.success(message)

# ===== NAVIGATION HELPERS =====

def get_main_navigation():
    """
    Define the result tabs shown after an analysis
    Returns list of tab items with page info
    """
    return [
        {
            "id": "key_metrics",
            "label": "📊 Key Metrics",
            "description": "Highest and lowest averages by supplier, mode, month, disruption and category"
        },
        {
            "id": "visual_analysis",
            "label": "📈 Visual Analysis",
            "description": "Transport delays, seasonal lead times, bullwhip effect and variability"
        },
        {
            "id": "forecasting",
            "label": "🔮 Forecasting",
            "description": "Three-month lead time and bullwhip ratio forecasts"
        },
        {
            "id": "data",
            "label": "🗂️ Data",
            "description": "Cleaned records, dropped rows and processing log"
        }
    ]

# ===== UTILITY FORMATTERS =====

def format_number(value, format_type="integer"):
    """Format numbers consistently"""
    if value is None:
        return "N/A"

    formats = {
        'integer': '{:,}',
        'percentage': '{:.1f}%',
        'decimal': '{:.2f}',
        'days': '{:.%df} %s' % (DISPLAY_RULES["decimal_places"], DISPLAY_RULES["day_unit"]),
    }

    try:
        return formats.get(format_type, '{}').format(value)
    except (TypeError, ValueError):
        return str(value)

def format_metric(metric):
    """
    Summary text for a key metric, e.g. 'Supplier A (12.3 days)'.
    Month keys are shown by name.
    """
    key = metric["key"]
    if metric.get("group_field") == "month":
        key = month_name(key)
    return f"{key} ({format_number(metric['value'], 'days')})"
