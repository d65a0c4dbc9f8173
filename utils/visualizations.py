"""Visualization utilities for the gym financial model."""

import plotly.graph_objects as go


def create_profitability_chart(df):
    """EBITDA, PAT and FCF by month."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['ebitda'],
        mode='lines',
        name='EBITDA',
        line=dict(color='#1976d2', width=2)
    ))
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['pat'],
        mode='lines',
        name='PAT',
        line=dict(color='#2e7d32', width=2)
    ))
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['fcf'],
        mode='lines',
        name='FCF',
        line=dict(color='#ed6c02', width=2)
    ))
    fig.add_hline(y=0, line_dash="dash", line_color="gray")
    fig.update_layout(
        title='Monthly Profitability',
        xaxis_title='Month',
        yaxis_title='Amount (₹)',
        height=400
    )
    return fig


def create_membership_chart(df, max_capacity=None):
    """Total members with new and repeat joiners."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['total_members'],
        mode='lines',
        name='Total Members',
        line=dict(color='purple', width=2)
    ))
    fig.add_trace(go.Bar(
        x=df['month'],
        y=df['new_members'],
        name='New Members',
        marker_color='green'
    ))
    fig.add_trace(go.Bar(
        x=df['month'],
        y=df['repeat_members'],
        name='Repeat Members',
        marker_color='orange'
    ))
    if max_capacity:
        fig.add_hline(y=max_capacity, line_dash="dash", line_color="gray", annotation_text="Capacity")
    fig.update_layout(
        title='Membership',
        xaxis_title='Month',
        yaxis_title='Members',
        barmode='stack',
        height=400
    )
    return fig


def create_cumulative_cash_chart(df):
    """Cumulative FCF and DCF; the zero crossings are the payback points."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['cumulative_fcf'],
        mode='lines',
        name='Cumulative FCF',
        line=dict(color='green', width=2)
    ))
    fig.add_trace(go.Scatter(
        x=df['month'],
        y=df['cumulative_dcf'],
        mode='lines',
        name='Cumulative DCF',
        line=dict(color='blue', width=2, dash='dash')
    ))
    fig.add_hline(y=0, line_dash="dash", line_color="gray")
    fig.update_layout(
        title='Cumulative Cash Flow',
        xaxis_title='Month',
        yaxis_title='Amount (₹)',
        height=400
    )
    return fig
