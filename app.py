import html
from contextlib import contextmanager
from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

from core.catalog import BUILDS, PROGRAMS
from core.config import configure_logging, load_settings, make_rng
from core.data import BenchmarkMemo, prepare_context
from core.formatting import format_fps_columns, format_percent_columns
from core.metrics_overview import compute_overview
from core.state import DashboardState, apply_event


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .app-top-bar .subtitle {color: #6b7280;font-size: 0.9rem;margin-top: 2px;}
        .selection {text-align: right;}
        .selection .program {font-size: 0.85rem;color: #6b7280;}
        .selection .sku {font-weight: 600;color: #111827;}
        .selection .build {font-size: 0.75rem;color: #6b7280;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.9rem;color: #2563eb;}
        .dot {display: inline-block;width: 12px;height: 12px;border-radius: 50%;margin-top: 10px;}
        .tile {background: #f9fafb;border-radius: 8px;padding: 8px;text-align: center;}
        .tile .label {font-size: 0.7rem;color: #6b7280;text-transform: uppercase;letter-spacing: 0.05em;}
        .tile .value {font-size: 1.1rem;font-weight: 600;}
        .bar-track {background: #e5e7eb;border-radius: 9999px;height: 8px;width: 100%;margin-top: 8px;}
        .bar-fill {height: 8px;border-radius: 9999px;}
        .prompt {text-align: center;padding: 80px 0;color: #6b7280;}
        .prompt .icon {font-size: 3rem;}
        .prompt h3 {color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def colored(text: object, color: str, weight: int = 600) -> str:
    return f"<span style='color:{color};font-weight:{weight};'>{html.escape(str(text))}</span>"


def tile(label: str, value_html: str) -> str:
    return f"<div class='tile'><div class='label'>{label}</div><div class='value'>{value_html}</div></div>"


def dispatch(event_type: str, value: str):
    st.session_state["dashboard_state"] = apply_event(
        st.session_state["dashboard_state"], {"type": event_type, "value": value}
    )


# ---------- UI setup ----------
settings = load_settings()
configure_logging(settings)
st.set_page_config(page_title="Gaming Benchmark Dashboard", layout="wide")
inject_base_styles()

if "dashboard_state" not in st.session_state:
    st.session_state["dashboard_state"] = DashboardState()
if "benchmark_memo" not in st.session_state:
    st.session_state["rng"] = make_rng(settings)
    st.session_state["benchmark_memo"] = BenchmarkMemo(rng=st.session_state["rng"])

state: DashboardState = st.session_state["dashboard_state"]

# ----- Sidebar: program -> SKU -> build -----
with st.sidebar:
    st.markdown("## Gaming Benchmark Dashboard")
    st.caption("CPU Performance Analysis")
    st.markdown("---")
    st.markdown("### Programs")
    for program in PROGRAMS.values():
        expanded = program.name in state.expanded_programs
        dot_col, btn_col = st.columns([1, 9])
        dot_col.markdown(f"<span class='dot' style='background:{program.color};'></span>", unsafe_allow_html=True)
        btn_col.button(
            f"{'▾' if expanded else '▸'} {program.name}",
            key=f"program::{program.name}",
            type="primary" if state.program == program.name else "secondary",
            use_container_width=True,
            on_click=dispatch,
            args=("select_program", program.name),
        )
        if expanded:
            for sku in program.skus:
                _, sku_col = st.columns([1, 6])
                sku_col.button(
                    sku,
                    key=f"sku::{sku}",
                    type="primary" if state.sku == sku else "secondary",
                    use_container_width=True,
                    on_click=dispatch,
                    args=("select_sku", sku),
                )

    if state.sku:
        st.markdown("---")
        st.markdown("### Builds")
        for build in BUILDS:
            st.button(
                f"📅 {build}",
                key=f"build::{build}",
                type="primary" if state.build == build else "secondary",
                use_container_width=True,
                on_click=dispatch,
                args=("select_build", build),
            )

ctx = prepare_context(state, settings, st.session_state["benchmark_memo"], rng=st.session_state["rng"])
view = compute_overview(ctx)


# ----- Page renderers -----
def render_header(header: Dict[str, Any]):
    left, right = st.columns([3, 1])
    with left:
        st.markdown(
            f"<div class='app-top-bar'><div class='page-title'>{header['title']}</div>"
            f"<div class='subtitle'>{header['subtitle']}</div></div>",
            unsafe_allow_html=True,
        )
    selection = header.get("selection")
    if selection:
        with right:
            st.markdown(
                f"<div class='selection'><div class='program'>{html.escape(selection['program'])}</div>"
                f"<div class='sku'>{html.escape(selection['sku'])}</div>"
                f"<div class='build'>{html.escape(selection['build'])}</div></div>",
                unsafe_allow_html=True,
            )


def render_prompt(prompt: Dict[str, str]):
    st.markdown(
        f"<div class='prompt'><div class='icon'>{prompt['icon']}</div>"
        f"<h3>{prompt['title']}</h3><p>{prompt['message']}</p></div>",
        unsafe_allow_html=True,
    )


def render_trend_card(sku_card: Dict[str, Any]):
    with card(
        f"<span class='dot' style='background:{sku_card['color']};margin:0 6px 0 0;'></span>{html.escape(sku_card['sku'])}",
        actions=f"{sku_card['latest']} FPS",
    ):
        st.caption("Average FPS Trend")
        st.markdown(
            colored(f"{sku_card['glyph']} {sku_card['change_label']}", sku_card["change_color"], weight=500),
            unsafe_allow_html=True,
        )
        st.vega_lite_chart(sku_card["chart"], use_container_width=True)
        cols = st.columns(3)
        cols[0].markdown(tile("Min", colored(f"{sku_card['min']} FPS", "#dc2626")), unsafe_allow_html=True)
        cols[1].markdown(tile("Max", colored(f"{sku_card['max']} FPS", "#16a34a")), unsafe_allow_html=True)
        cols[2].markdown(tile("Range", colored(f"{sku_card['range']} FPS", "#2563eb")), unsafe_allow_html=True)


def render_trends_page(trends: Dict[str, Any]):
    title_col, badge_col = st.columns([4, 1])
    title_col.markdown(f"### {html.escape(trends['program'])} - Performance Trends")
    title_col.caption("Weekly average performance across 34 games (1080p High Settings)")
    if trends.get("color"):
        badge_col.markdown(
            f"<span class='dot' style='background:{trends['color']};'></span> {html.escape(trends['program'])}",
            unsafe_allow_html=True,
        )
    if not trends["skus"]:
        st.info("No SKUs found for this program.")
        return
    for start in range(0, len(trends["skus"]), 2):
        cols = st.columns(2)
        for col, sku_card in zip(cols, trends["skus"][start : start + 2]):
            with col:
                render_trend_card(sku_card)
    st.info(trends["hint"])


def render_telemetry(metrics: Dict[str, Any]):
    st.markdown("**CPU Performance Metrics**")
    first = st.columns(3)
    first[0].markdown(tile("Avg P Core Frequency", metrics["p_core_freq_label"]), unsafe_allow_html=True)
    first[1].markdown(tile("Avg E Core Frequency", metrics["e_core_freq_label"]), unsafe_allow_html=True)
    first[2].markdown(tile("Avg IA Power", metrics["ia_power_label"]), unsafe_allow_html=True)
    second = st.columns(3)
    second[0].markdown(tile("Avg Package Power", metrics["package_power_label"]), unsafe_allow_html=True)
    second[1].markdown(
        tile("IA Clipping Reason", colored(metrics["clipping_reason"], metrics["clipping_color"], weight=700)),
        unsafe_allow_html=True,
    )
    second[2].markdown(
        tile(
            "Avg Package Temperature",
            colored(metrics["package_temperature_label"], metrics["temperature_color"], weight=700),
        ),
        unsafe_allow_html=True,
    )


def render_results_page(results: Dict[str, Any]):
    summary = results["summary"]
    cols = st.columns(4)
    cols[0].metric("Average FPS", f"{summary['average_fps']}")
    cols[1].metric("Total Games", f"{summary['total_games']}")
    cols[2].metric("Resolution", summary["resolution"])
    cols[3].metric("Settings", summary["settings"])

    with card("Game Performance Results"):
        widths = [5, 2, 2, 3]
        head = st.columns(widths)
        for col, label in zip(head, ["Game Title", "FPS Score", "Percentile", "Performance"]):
            col.markdown(f"**{label}**")
        for i, row in enumerate(results["rows"]):
            cells = st.columns(widths)
            cells[0].button(
                f"{'▴' if row['expanded'] else '▸'} {row['game']}",
                key=f"game::{i}",
                use_container_width=True,
                on_click=dispatch,
                args=("toggle_game", row["game"]),
            )
            cells[1].markdown(f"**{row['score']}** FPS")
            cells[2].markdown(f"{row['percentile']}%")
            cells[3].markdown(
                f"<div class='bar-track'><div class='bar-fill' style='width:{row['bar_width_pct']:.1f}%;"
                f"background:{row['rating_color']};'></div></div>"
                + colored(row["rating"], row["rating_color"], weight=500),
                unsafe_allow_html=True,
            )
            if row["expanded"] and row["cpu_metrics"]:
                render_telemetry(row["cpu_metrics"])

    with st.expander("Results table", expanded=False):
        table = pd.DataFrame(results["rows"], columns=["game", "score", "percentile", "rating"])
        table = format_percent_columns(format_fps_columns(table, ["score"]), ["percentile"])
        st.dataframe(table, hide_index=True, use_container_width=True)


render_header(view["header"])

if view["mode"] == "program_trends":
    render_trends_page(view["trends"])
elif view["mode"] == "results":
    render_results_page(view["results"])
else:
    render_prompt(view["prompt"])
