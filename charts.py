"""
Chart Builders
Plotly figures for the Visual Analysis and Forecasting tabs.
Each builder takes a frame from AnalysisResult and returns a go.Figure;
rendering is left to ui_components.render_chart.
"""

import plotly.graph_objects as go

# ===== COLORS =====

PRIMARY_COLOR = 'rgba(67, 97, 238, 1)'
PRIMARY_FILL = 'rgba(67, 97, 238, 0.1)'
ACCENT_COLOR = 'rgba(247, 37, 133, 1)'
ACCENT_FILL = 'rgba(247, 37, 133, 0.1)'
PURPLE_COLOR = 'rgba(114, 9, 183, 1)'
PURPLE_MARKER = 'rgba(114, 9, 183, 0.6)'
BAR_COLOR = 'rgba(67, 97, 238, 0.6)'


def _axis_titles(fig, x_title, y_title, tilt_x=False):
    fig.update_xaxes(title_text=x_title)
    if tilt_x:
        fig.update_xaxes(tickangle=-45)
    fig.update_yaxes(title_text=y_title)
    return fig


def create_transport_delay_chart(transport_delays):
    """Bar chart: average delay (days) per transportation mode."""
    fig = go.Figure(go.Bar(
        x=transport_delays['Transportation_Mode'],
        y=transport_delays['avg_delay'],
        name='Average Delay (days)',
        marker_color=BAR_COLOR,
        marker_line_color=PRIMARY_COLOR,
        marker_line_width=1,
    ))
    fig.update_layout(showlegend=False)
    return _axis_titles(fig, 'Transportation Modes', 'Average Delay (days)')


def create_seasonal_chart(seasonal_lead_times):
    """Line chart: average lead time per calendar month."""
    fig = go.Figure(go.Scatter(
        x=seasonal_lead_times['month_label'],
        y=seasonal_lead_times['avg_lead_time'],
        mode='lines+markers',
        name='Average Lead Time (days)',
        line=dict(color=PURPLE_COLOR),
    ))
    fig.update_layout(showlegend=False)
    return _axis_titles(fig, 'Month', 'Average Lead Time (days)')


def create_bullwhip_chart(bullwhip):
    """Two lines per year-month: mean customer demand vs mean order quantity."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=bullwhip['period_label'], y=bullwhip['customer_demand'],
        mode='lines', name='Customer Demand',
        line=dict(color=PRIMARY_COLOR), fill='tozeroy', fillcolor=PRIMARY_FILL,
    ))
    fig.add_trace(go.Scatter(
        x=bullwhip['period_label'], y=bullwhip['order_quantity'],
        mode='lines', name='Order Quantity',
        line=dict(color=ACCENT_COLOR), fill='tozeroy', fillcolor=ACCENT_FILL,
    ))
    fig.update_layout(legend=dict(orientation='h', y=1.1))
    return _axis_titles(fig, 'Month', 'Quantity', tilt_x=True)


def create_variability_chart(variability):
    """Scatter: order quantity variability (x) vs lead time variability (y), one point per supplier-month."""
    fig = go.Figure(go.Scatter(
        x=variability['order_quantity_cv'],
        y=variability['lead_time_cv'],
        mode='markers',
        name='Lead Time vs Order Quantity Variability',
        marker=dict(color=PURPLE_MARKER, size=10, line=dict(color=PURPLE_COLOR, width=1)),
        text=variability['Supplier'] + ' ' + variability['period_label'],
        hovertemplate='%{text}<br>Order Quantity Var: %{x:.1f}%<br>Lead Time Var: %{y:.1f}%<extra></extra>',
    ))
    fig.update_layout(showlegend=False)
    return _axis_titles(fig, 'Order Quantity Variability (%)', 'Lead Time Variability (%)')


def create_forecast_chart(forecast, series_name, y_title):
    """
    Historical line followed by a dashed forecast line on one label axis.

    Args:
        forecast: ForecastSeries frame from forecasting.forecast_series
        series_name: e.g. 'Lead Time' -> 'Historical Lead Time' / 'Forecasted Lead Time'
        y_title: y axis title
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=forecast['period_label'], y=forecast['historical'],
        mode='lines+markers', name=f'Historical {series_name}',
        line=dict(color=PRIMARY_COLOR), fill='tozeroy', fillcolor=PRIMARY_FILL,
    ))
    fig.add_trace(go.Scatter(
        x=forecast['period_label'], y=forecast['forecast'],
        mode='lines+markers', name=f'Forecasted {series_name}',
        line=dict(color=ACCENT_COLOR, dash='dash'), fill='tozeroy', fillcolor=ACCENT_FILL,
    ))
    fig.update_layout(legend=dict(orientation='h', y=1.1))
    return _axis_titles(fig, 'Month', y_title, tilt_x=True)
