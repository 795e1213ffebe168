import streamlit as st

from analysis import analyze_order_log
from charts import (
    create_bullwhip_chart,
    create_forecast_chart,
    create_seasonal_chart,
    create_transport_delay_chart,
    create_variability_chart,
)
from exceptions import AnalysisError
from ui_components import (
    format_metric,
    format_number,
    get_main_navigation,
    render_chart,
    render_data_table,
    render_info_box,
    render_kpi_row,
    render_page_header,
)

# ===== CONSTANTS & CONFIGURATION =====

CHART_HEIGHT_SMALL = 400
CHART_HEIGHT_LARGE = 500
MAX_DISPLAY_RECORDS = 100

# Session keys owned by one analysis run; replaced together, never partially
RESULT_KEYS = ('analysis_result', 'analysis_logs', 'analysis_error', 'analysis_file_name')


# ===== SESSION STATE =====

def reset_analysis():
    """Drop every trace of the previous run."""
    for key in RESULT_KEYS:
        st.session_state.pop(key, None)


def run_uploaded_analysis(uploaded_file):
    """
    Analyze an uploaded order log and store the outcome in session state.

    A fatal AnalysisError is stored as a message instead of a result so no
    partial output is ever shown.
    """
    reset_analysis()
    st.session_state['analysis_file_name'] = uploaded_file.name
    uploaded_file.seek(0)
    try:
        logs, result = analyze_order_log(uploaded_file)
    except AnalysisError as e:
        st.session_state['analysis_error'] = str(e)
        return
    st.session_state['analysis_logs'] = logs
    st.session_state['analysis_result'] = result


# ===== TAB RENDERERS =====

def render_key_metrics_tab(result):
    metrics = {
        metric['label']: {"value": format_metric(metric)}
        for metric in result.key_metrics
    }
    render_kpi_row(metrics)

    if result.rows_dropped:
        render_info_box(
            f"{result.rows_dropped} of {result.rows_received} rows were excluded because a date could not be parsed. "
            "See the Data tab for details.",
            "warning"
        )


def render_visual_analysis_tab(result):
    col1, col2 = st.columns(2)
    with col1:
        render_chart(create_transport_delay_chart(result.transport_delays),
                     "Transportation Mode Impact on Delays", CHART_HEIGHT_SMALL)
    with col2:
        render_chart(create_seasonal_chart(result.seasonal_lead_times),
                     "Seasonal Patterns in Lead Times", CHART_HEIGHT_SMALL)

    col3, col4 = st.columns(2)
    with col3:
        render_chart(create_bullwhip_chart(result.bullwhip),
                     "Bullwhip Effect: Demand vs Orders", CHART_HEIGHT_SMALL)
    with col4:
        render_chart(create_variability_chart(result.variability),
                     "Lead Time vs Order Quantity Variability", CHART_HEIGHT_SMALL)


def render_forecasting_tab(result):
    render_chart(create_forecast_chart(result.lead_time_forecast, 'Lead Time', 'Lead Time (days)'),
                 "Lead Time Forecast (next 3 months)", CHART_HEIGHT_LARGE)
    render_chart(create_forecast_chart(result.bullwhip_forecast, 'Bullwhip Ratio', 'Quantity Ratio'),
                 "Bullwhip Ratio Forecast (next 3 months)", CHART_HEIGHT_LARGE)
    st.caption("Forecasts use the average of the last 3 months plus the recent monthly trend.")


def render_data_tab(result, logs):
    render_kpi_row({
        "Rows Received": {"value": format_number(result.rows_received)},
        "Rows Analyzed": {"value": format_number(len(result.records))},
        "Rows Dropped": {"value": format_number(result.rows_dropped)},
    })
    render_data_table(result.records, "Cleaned Records", MAX_DISPLAY_RECORDS,
                      download_filename="cleaned_orders.csv")
    if not result.error_rows.empty:
        render_data_table(result.error_rows, "Rows with Unparsable Dates", MAX_DISPLAY_RECORDS,
                          download_filename="date_errors.csv")
    with st.expander("Processing Log"):
        st.code("\n".join(logs), language=None)


# ===== MAIN =====

def main():
    st.set_page_config(
        page_title="Supply Chain Analytics",
        page_icon="📦",
        layout="wide"
    )
    render_page_header(
        "Supply Chain Analytics",
        subtitle="Upload an order log CSV to analyze lead times, delays and the bullwhip effect"
    )

    with st.sidebar:
        uploaded_file = st.file_uploader("Order log (CSV)", type=["csv"], key="csv_upload")
        if st.button("🔍 Analyze", disabled=uploaded_file is None, width='stretch'):
            with st.spinner("Analyzing order log..."):
                run_uploaded_analysis(uploaded_file)
        if st.button("🏠 Home", width='stretch'):
            reset_analysis()

    if 'analysis_error' in st.session_state:
        render_info_box(f"Error: {st.session_state['analysis_error']}", "error")
        return

    result = st.session_state.get('analysis_result')
    if result is None:
        render_info_box("Select a CSV file and click Analyze to see results.")
        return

    st.caption(f"File: {st.session_state.get('analysis_file_name', '')}")
    tabs = get_main_navigation()
    tab_containers = st.tabs([tab["label"] for tab in tabs])
    renderers = {
        "key_metrics": lambda: render_key_metrics_tab(result),
        "visual_analysis": lambda: render_visual_analysis_tab(result),
        "forecasting": lambda: render_forecasting_tab(result),
        "data": lambda: render_data_tab(result, st.session_state.get('analysis_logs', [])),
    }
    for tab, container in zip(tabs, tab_containers):
        with container:
            st.caption(tab["description"])
            renderers[tab["id"]]()


if __name__ == "__main__":
    main()
