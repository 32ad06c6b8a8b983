from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def industry_risk_chart(bars: List[Dict[str, Any]], height: int = 340) -> alt.Chart:
    df = pd.DataFrame(bars, columns=["industry", "count_pct"])
    base = alt.Chart(df).encode(
        x=alt.X("industry:N", title="Industry", sort=None),
        y=alt.Y("count_pct:Q", title="High Risk %", axis=alt.Axis(format="d")),
        tooltip=["industry", alt.Tooltip("count_pct:Q", title="High Risk %")],
    )
    bars_layer = base.mark_bar(color="#6366f1")
    labels = base.mark_text(dy=-6).encode(text="count_pct:Q")
    return (bars_layer + labels).properties(height=height)


def feature_importance_chart(features: List[Dict[str, Any]], height: int = 360) -> alt.Chart:
    df = pd.DataFrame(features, columns=["name", "importance"])
    base = alt.Chart(df).encode(
        x=alt.X("importance:Q", title="Importance"),
        y=alt.Y("name:N", title=None, sort="-x"),
        tooltip=["name", alt.Tooltip("importance:Q", format=".2f")],
    )
    bars_layer = base.mark_bar(color="#14b8a6")
    labels = base.mark_text(align="left", dx=4).encode(text=alt.Text("importance:Q", format=".2f"))
    return (bars_layer + labels).properties(height=height)
