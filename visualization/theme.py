"""Shared Plotly theme tokens for Ledgerline visualizations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "#EEF2FF"
    expense_color: str = "#EF4444"
    earning_color: str = "#22C55E"
    net_color: str = "#2563EB"
    net_fill: str = "rgba(37, 99, 235, 0.10)"
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the colours and fonts used by every Ledgerline chart."""

    return _TOKENS
