from __future__ import annotations

from typing import Any, Dict, Tuple

import pandas as pd

from core.catalog import GAMES, QUALITY_SETTING, RESOLUTION
from core.config import GeneratorMode
from core.formatting import format_fixed, round_half_up
from core.generators import CPUMetrics, generate_cpu_metrics

GREEN = "#16a34a"
YELLOW = "#ca8a04"
RED = "#dc2626"

EXCELLENT_FPS = 120
GOOD_FPS = 90
MAX_BAR_FPS = 160


def average_fps(benchmarks: pd.DataFrame) -> int:
    if benchmarks.empty or "score" not in benchmarks.columns:
        return 0
    return int(round_half_up(benchmarks["score"].astype(float).mean()))


def classify_fps(score: float) -> Tuple[str, str]:
    if score >= EXCELLENT_FPS:
        return "Excellent", GREEN
    if score >= GOOD_FPS:
        return "Good", YELLOW
    return "Fair", RED


def temperature_color(celsius: float) -> str:
    if celsius <= 70:
        return GREEN
    if celsius <= 80:
        return YELLOW
    return RED


def clipping_color(reason: str) -> str:
    if reason == "None":
        return GREEN
    if "Thermal" in reason:
        return RED
    return YELLOW


def bar_width_pct(score: float) -> float:
    return min(score / MAX_BAR_FPS * 100, 100.0)


def format_cpu_metrics(metrics: CPUMetrics) -> Dict[str, Any]:
    return {
        **metrics.to_dict(),
        "p_core_freq_label": f"{format_fixed(metrics.p_core_freq, 2)} GHz",
        "e_core_freq_label": f"{format_fixed(metrics.e_core_freq, 2)} GHz",
        "ia_power_label": f"{format_fixed(metrics.ia_power, 1)} W",
        "package_power_label": f"{format_fixed(metrics.package_power, 1)} W",
        "package_temperature_label": f"{metrics.package_temperature}°C",
        "clipping_color": clipping_color(metrics.clipping_reason),
        "temperature_color": temperature_color(metrics.package_temperature),
    }


def compute_telemetry(game: str, *, mode: GeneratorMode = "faithful") -> Dict[str, Any]:
    return {"game": game, **format_cpu_metrics(generate_cpu_metrics(game, mode=mode))}


def summary_cards(benchmarks: pd.DataFrame) -> Dict[str, Any]:
    return {
        "average_fps": average_fps(benchmarks),
        "total_games": len(GAMES),
        "resolution": RESOLUTION,
        "settings": QUALITY_SETTING,
    }


def compute_results(ctx: Dict[str, Any]) -> Dict[str, Any]:
    state = ctx["state"]
    mode: GeneratorMode = ctx["settings"].generator_mode
    benchmarks: pd.DataFrame = ctx.get("benchmarks", pd.DataFrame())

    rows = []
    for rec in benchmarks.to_dict(orient="records"):
        score = int(rec["score"])
        rating, color = classify_fps(score)
        expanded = rec["game"] in state.expanded_games
        rows.append(
            {
                "game": rec["game"],
                "score": score,
                "percentile": int(rec["percentile"]),
                "rating": rating,
                "rating_color": color,
                "bar_width_pct": bar_width_pct(score),
                "expanded": expanded,
                # Telemetry is derived on every render for open rows only.
                "cpu_metrics": compute_telemetry(rec["game"], mode=mode) if expanded else None,
            }
        )
    return {
        "program": state.program,
        "sku": state.sku,
        "build": state.build,
        "summary": summary_cards(benchmarks),
        "rows": rows,
    }
