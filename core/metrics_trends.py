from __future__ import annotations

from typing import Any, Dict, Literal, Optional

import numpy as np
import pandas as pd

from core.catalog import get_program, sku_color
from core.charts import fps_trend_chart, to_vega_spec
from core.config import GeneratorMode
from core.generators import generate_weekly_trend_data

Direction = Literal["up", "down", "flat"]

DIRECTION_GLYPHS: Dict[str, str] = {"up": "↗", "down": "↘", "flat": "→"}
DIRECTION_COLORS: Dict[str, str] = {"up": "#16a34a", "down": "#dc2626", "flat": "#6b7280"}
Y_PADDING = 3


def change_direction(change: float) -> Direction:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "flat"


def summarize_series(points: pd.DataFrame) -> Dict[str, Any]:
    """Latest/previous/min/max stats for a ``week``/``performance`` series."""
    values = points["performance"].astype(int).tolist()
    latest = values[-1]
    previous = values[-2] if len(values) >= 2 else latest
    change = latest - previous
    direction = change_direction(change)
    lo, hi = min(values), max(values)
    return {
        "latest": latest,
        "previous": previous,
        "change": change,
        "direction": direction,
        "glyph": DIRECTION_GLYPHS[direction],
        "change_color": DIRECTION_COLORS[direction],
        "change_label": f"{abs(change):.1f} vs last week",
        "min": lo,
        "max": hi,
        "range": hi - lo,
        "domain": [lo - Y_PADDING, hi + Y_PADDING],
    }


def compute_program_trends(
    program: str,
    *,
    rng: Optional[np.random.Generator] = None,
    mode: GeneratorMode = "faithful",
) -> Dict[str, Any]:
    meta = get_program(program)
    if meta is None:
        return {"program": program, "known": False, "color": None, "skus": []}

    trend = generate_weekly_trend_data(program, rng=rng, mode=mode)
    cards = []
    for index, sku in enumerate(meta.skus):
        color = sku_color(index)
        points = trend[["week", sku]].rename(columns={sku: "performance"})
        stats = summarize_series(points)
        chart = fps_trend_chart(points, sku=sku, color=color, domain=tuple(stats["domain"]))
        cards.append(
            {
                "sku": sku,
                "color": color,
                **stats,
                "points": points.to_dict(orient="records"),
                "chart": to_vega_spec(chart),
            }
        )
    return {"program": program, "known": True, "color": meta.color, "skus": cards}


def compute_trends(ctx: Dict[str, Any]) -> Dict[str, Any]:
    state = ctx["state"]
    return compute_program_trends(state.program, rng=ctx.get("rng"), mode=ctx["settings"].generator_mode)
