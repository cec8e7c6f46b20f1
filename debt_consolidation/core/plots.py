from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd
import plotly.graph_objects as go

from .horizons import HorizonSnapshot, horizon_label


EMERGENCY_COLOR = "#cb746b"
INVESTING_COLOR = "#f8c4b7"
SAVINGS_COLOR = "#8b3534"


def cash_growth_bars(growth_df: pd.DataFrame, months: Sequence[int], title: str = "Cash growth over time") -> go.Figure:
    """Stacked bucket balances sampled at ``months``.

    growth_df: output of ``bucket_series`` (one row per month, month 0 included)
    """
    sampled = growth_df[growth_df["month"].isin(list(months))]
    labels = [horizon_label(int(m)) for m in sampled["month"]]
    fig = go.Figure()
    fig.add_bar(x=labels, y=sampled["emergency"], name="Emergency fund", marker_color=EMERGENCY_COLOR)
    fig.add_bar(x=labels, y=sampled["invest"], name="Investing/Retirement", marker_color=INVESTING_COLOR)
    fig.add_bar(x=labels, y=sampled["savings"], name="Savings", marker_color=SAVINGS_COLOR)
    fig.update_layout(
        title=title,
        barmode="stack",
        yaxis_title="$",
        legend=dict(orientation="h", yanchor="top", y=-0.15),
    )
    fig.update_yaxes(tickprefix="$", tickformat=",.0f")
    return fig


def debt_paydown_bars(paydown_df: pd.DataFrame, title: str = "Debt paydown comparison") -> go.Figure:
    labels = ["0" if y == 0 else f"{y} yr" for y in paydown_df["year"]]
    fig = go.Figure()
    fig.add_bar(x=labels, y=paydown_df["credit_card"], name="Credit card debt", marker_color=SAVINGS_COLOR)
    fig.add_bar(x=labels, y=paydown_df["consolidation"], name="Debt reorganization", marker_color=EMERGENCY_COLOR)
    fig.update_layout(
        title=title,
        barmode="group",
        xaxis_title="Year",
        yaxis_title="Remaining balance",
        legend=dict(orientation="h", yanchor="top", y=-0.15),
    )
    fig.update_yaxes(tickprefix="$", tickformat=",.0f")
    return fig


def impact_by_horizon(snaps: Sequence[HorizonSnapshot], title: str = "Total impact by horizon") -> go.Figure:
    """Stacked components of each snapshot's total impact."""
    labels = [horizon_label(s.months) for s in snaps]
    components: Dict[str, List[float]] = {
        "Extra principal": [s.principal_paid for s in snaps],
        "Investing": [s.buckets.invest for s in snaps],
        "Emergency fund": [s.buckets.emergency for s in snaps],
        "Savings": [s.buckets.savings for s in snaps],
        "Interest saved": [s.interest_saved for s in snaps],
    }
    fig = go.Figure()
    for name, ys in components.items():
        fig.add_bar(x=labels, y=ys, name=name)
    fig.add_trace(
        go.Scatter(x=labels, y=[s.total_impact for s in snaps], mode="lines+markers", name="Total impact")
    )
    fig.update_layout(title=title, barmode="relative", yaxis_title="$")
    return fig


def sensitivity_curve(
    xs: List[float],
    series: Dict[str, List[float]],
    x_label: str,
    title: str = "Sensitivity",
    percent_x: bool = False,
) -> go.Figure:
    """Plot multi-series curves vs a parameter.

    series: mapping label -> list of y values aligned with xs.
    """
    fig = go.Figure()
    for name, ys in series.items():
        fig.add_trace(
            go.Scatter(x=xs, y=ys, mode="lines+markers", name=name)
        )
    fig.update_layout(title=title, xaxis_title=x_label, yaxis_title="$")
    if percent_x:
        fig.update_xaxes(ticksuffix="%")
    return fig
