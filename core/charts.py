from __future__ import annotations

from typing import Any, Dict, Tuple

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def fps_trend_chart(points: pd.DataFrame, *, sku: str, color: str, domain: Tuple[float, float]) -> alt.Chart:
    """Line chart of ``points`` (columns ``week``, ``performance``) in week order."""
    week_order = points["week"].tolist()
    return (
        alt.Chart(points)
        .mark_line(color=color, strokeWidth=3, point={"filled": True, "size": 80, "color": color})
        .encode(
            x=alt.X("week:N", title=None, sort=week_order, axis=alt.Axis(labelAngle=-45, grid=False)),
            y=alt.Y(
                "performance:Q",
                title="FPS",
                scale=alt.Scale(domain=list(domain)),
                axis=alt.Axis(gridDash=[3, 3], domain=False, ticks=False),
            ),
            tooltip=[
                alt.Tooltip("week:N", title="Week"),
                alt.Tooltip("performance:Q", title=sku, format="d"),
            ],
        )
        .properties(height=260)
    )
