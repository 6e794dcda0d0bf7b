"""Visualization utilities for Ledgerline dashboards."""

from .charts import build_monthly_chart
from .theme import theme_tokens

__all__ = [
    "build_monthly_chart",
    "theme_tokens",
]
