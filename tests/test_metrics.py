#!/usr/bin/env python3
"""
Tests for page compute functions and the benchmark memo.
"""

import numpy as np
import pandas as pd
import pytest

from core.catalog import BUILDS, GAMES
from core.config import Settings
from core.data import BenchmarkMemo, load_dashboard_data, prepare_context
from core.metrics_overview import compute_overview
from core.metrics_results import (
    GREEN,
    RED,
    YELLOW,
    average_fps,
    bar_width_pct,
    classify_fps,
    clipping_color,
    compute_telemetry,
    temperature_color,
)
from core.metrics_trends import change_direction, compute_program_trends, summarize_series
from core.state import DashboardState, apply_event

SCENARIO = DashboardState(program="Arrow Lake", sku="Arrow Lake S", build="Build 2025.03 (Aug 18)")


def _ctx(state, memo=None, settings=None):
    return prepare_context(
        state,
        settings or Settings(),
        memo or BenchmarkMemo(rng=np.random.default_rng(3)),
        rng=np.random.default_rng(5),
    )


# ---------------- Benchmark memo ----------------
def test_memo_empty_without_full_selection():
    memo = BenchmarkMemo()
    assert memo.get("Arrow Lake S", "").empty
    assert memo.get("", BUILDS[0]).empty
    assert memo.generation == 0


def test_memo_reuses_frame_for_same_pair():
    memo = BenchmarkMemo(rng=np.random.default_rng(0))
    first = memo.get("Arrow Lake S", BUILDS[0])
    assert memo.get("Arrow Lake S", BUILDS[0]) is first
    assert memo.generation == 1


def test_memo_regenerates_on_pair_change():
    memo = BenchmarkMemo(rng=np.random.default_rng(0))
    memo.get("Arrow Lake S", BUILDS[0])
    memo.get("Arrow Lake S", BUILDS[1])
    assert memo.generation == 2
    memo.get("Arrow Lake S", "")
    memo.get("Arrow Lake S", BUILDS[1])
    assert memo.generation == 3


def test_game_toggle_does_not_regenerate():
    memo = BenchmarkMemo(rng=np.random.default_rng(0))
    ctx = _ctx(SCENARIO, memo)
    toggled = apply_event(SCENARIO, {"type": "toggle_game", "value": "Starfield"})
    ctx2 = _ctx(toggled, memo)
    assert ctx2["benchmarks"] is ctx["benchmarks"]
    assert memo.generation == 1


# ---------------- Results ----------------
def test_average_fps_rounds_half_up():
    assert average_fps(pd.DataFrame({"score": [100, 101]})) == 101
    assert average_fps(pd.DataFrame({"score": [60, 61, 62]})) == 61


def test_average_fps_empty_is_zero():
    assert average_fps(pd.DataFrame(columns=["game", "score", "percentile"])) == 0


@pytest.mark.parametrize(
    "score,expected",
    [(159, ("Excellent", GREEN)), (120, ("Excellent", GREEN)), (119, ("Good", YELLOW)), (90, ("Good", YELLOW)), (89, ("Fair", RED)), (60, ("Fair", RED))],
)
def test_classify_fps(score, expected):
    assert classify_fps(score) == expected


@pytest.mark.parametrize("celsius,expected", [(55, GREEN), (70, GREEN), (71, YELLOW), (80, YELLOW), (81, RED)])
def test_temperature_color(celsius, expected):
    assert temperature_color(celsius) == expected


@pytest.mark.parametrize(
    "reason,expected",
    [("None", GREEN), ("Thermal", RED), ("Thermal + Power", RED), ("Power", YELLOW), ("Current", YELLOW), ("Power + Current", YELLOW)],
)
def test_clipping_color(reason, expected):
    assert clipping_color(reason) == expected


def test_bar_width_capped():
    assert bar_width_pct(80) == pytest.approx(50.0)
    assert bar_width_pct(200) == 100.0


def test_telemetry_labels():
    payload = compute_telemetry("Control")
    assert payload["game"] == "Control"
    assert payload["p_core_freq_label"].endswith(" GHz")
    assert len(payload["p_core_freq_label"].split(" ")[0].split(".")[1]) == 2
    assert len(payload["ia_power_label"].split(" ")[0].split(".")[1]) == 1
    assert payload["package_temperature_label"] == f"{payload['package_temperature']}°C"


def test_scenario_results_view():
    """Arrow Lake -> Arrow Lake S -> Build 2025.03 gives 34 rows and four summary cards."""
    state = DashboardState()
    for event in [
        {"type": "select_program", "value": "Arrow Lake"},
        {"type": "select_sku", "value": "Arrow Lake S"},
        {"type": "select_build", "value": "Build 2025.03 (Aug 18)"},
    ]:
        state = apply_event(state, event)
    ctx = _ctx(state)
    view = compute_overview(ctx)
    assert view["mode"] == "results"
    results = view["results"]
    assert len(results["rows"]) == 34
    summary = results["summary"]
    assert summary["total_games"] == 34
    assert summary["resolution"] == "1080p"
    assert summary["settings"] == "High"
    assert summary["average_fps"] == average_fps(ctx["benchmarks"])
    assert all(row["cpu_metrics"] is None for row in results["rows"])
    assert view["header"]["selection"] == {
        "program": "Arrow Lake",
        "sku": "Arrow Lake S",
        "build": "Build 2025.03 (Aug 18)",
    }


def test_expanded_row_carries_telemetry():
    state = apply_event(SCENARIO, {"type": "toggle_game", "value": GAMES[0]})
    rows = compute_overview(_ctx(state))["results"]["rows"]
    expanded = [r for r in rows if r["expanded"]]
    assert [r["game"] for r in expanded] == [GAMES[0]]
    assert expanded[0]["cpu_metrics"]["game"] == GAMES[0]


# ---------------- Trends ----------------
def test_change_direction():
    assert change_direction(3) == "up"
    assert change_direction(-1) == "down"
    assert change_direction(0) == "flat"


def test_summarize_series():
    points = pd.DataFrame({"week": ["Week 1", "Week 2", "Week 3"], "performance": [110, 100, 104]})
    stats = summarize_series(points)
    assert stats["latest"] == 104
    assert stats["change"] == 4
    assert stats["glyph"] == "↗"
    assert stats["change_label"] == "4.0 vs last week"
    assert (stats["min"], stats["max"], stats["range"]) == (100, 110, 10)
    assert stats["domain"] == [97, 113]


def test_program_trends_cards():
    payload = compute_program_trends("Arrow Lake", rng=np.random.default_rng(9))
    assert payload["known"] is True
    assert payload["color"] == "#3b82f6"
    assert [c["sku"] for c in payload["skus"]] == ["Arrow Lake S", "Arrow Lake H", "Arrow Lake P"]
    assert [c["color"] for c in payload["skus"]] == ["#3b82f6", "#10b981", "#8b5cf6"]
    for c in payload["skus"]:
        assert len(c["points"]) == 12
        assert c["latest"] == c["points"][-1]["performance"]
        assert c["chart"]["mark"]["type"] == "line"


def test_unknown_program_renders_empty_trends():
    view = compute_overview(_ctx(DashboardState(program="Meteor Lake")))
    assert view["mode"] == "program_trends"
    assert view["trends"]["known"] is False
    assert view["trends"]["skus"] == []


@pytest.mark.parametrize(
    "state,mode",
    [
        (DashboardState(), "select_program"),
        (DashboardState(program="Nova Lake", sku="Nova Lake H"), "select_build"),
    ],
)
def test_prompt_views(state, mode):
    view = compute_overview(_ctx(state))
    assert view["mode"] == mode
    assert view["prompt"]["title"] in {"Select a Program", "Select a Build"}
    assert view["trends"] is None and view["results"] is None
    assert view["header"]["selection"] is None


def test_load_dashboard_data_catalog():
    data = load_dashboard_data()
    assert len(data["games"]) == 34
    assert len(data["weeks"]) == 12
    assert set(data["catalog"]["program"]) == set(data["programs"])
