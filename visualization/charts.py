"""Plotly chart builders for the Ledgerline dashboard."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = ["build_monthly_chart"]

_SERIES: tuple[tuple[str, str, str], ...] = (
    ("Expenses", "Expenses", TOKENS.expense_color),
    ("Earnings", "Earnings", TOKENS.earning_color),
    ("Net", "Net earnings", TOKENS.net_color),
)


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_monthly_chart(
    monthly_df: pd.DataFrame,
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Render monthly expenses, earnings and net earnings as a line chart."""

    if monthly_df.empty:
        return _empty_plotly_figure("No months in the selected range.")

    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x}}<br>%{{fullData.name}}: {currency_prefix}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    for column, name, color in _SERIES:
        if column not in monthly_df.columns:
            continue
        is_net = column == "Net"
        fig.add_trace(
            go.Scatter(
                x=monthly_df["Month"],
                y=monthly_df[column].astype(float),
                mode="lines+markers",
                name=name,
                line=dict(color=color, width=3 if is_net else 2, shape="spline", smoothing=0.3),
                marker=dict(size=7, color=color, line=dict(color=TOKENS.neutral_white, width=1.5)),
                fill="tozeroy" if is_net else None,
                fillcolor=TOKENS.net_fill if is_net else None,
                hovertemplate=hover_template,
            )
        )

    fig.update_layout(
        title="",
        xaxis_title="Month",
        yaxis_title="Amount",
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, type="category"),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=True),
        font=dict(color=TOKENS.label_color, size=TOKENS.label_size, family=TOKENS.label_font),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )

    return fig
