from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from visualization import build_monthly_chart


def test_monthly_chart_has_three_series():
    frame = pd.DataFrame(
        {
            "Month": ["Jan 2024", "Feb 2024"],
            "Expenses": [100.0, 80.0],
            "Earnings": [300.0, 50.0],
            "Net": [200.0, -30.0],
        }
    )

    fig = build_monthly_chart(frame, "€")

    assert [trace.name for trace in fig.data] == ["Expenses", "Earnings", "Net earnings"]
    assert list(fig.data[2].y) == [200.0, -30.0]
    assert fig.data[2].fill == "tozeroy"
    assert "€" in fig.data[0].hovertemplate


def test_monthly_chart_placeholder_for_empty_range():
    fig = build_monthly_chart(pd.DataFrame(columns=["Month", "Expenses", "Earnings", "Net"]))

    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "No months in the selected range."
