from __future__ import annotations

from typing import Any, Dict

from core.catalog import SUITE_LABEL
from core.metrics_results import compute_results
from core.metrics_trends import compute_trends

PROMPTS: Dict[str, Dict[str, str]] = {
    "select_program": {
        "icon": "📊",
        "title": "Select a Program",
        "message": "Choose a CPU program from the left sidebar to view benchmark results",
    },
    "select_build": {
        "icon": "📅",
        "title": "Select a Build",
        "message": "Choose a build to view gaming benchmark results",
    },
}

SKU_HINT = (
    "Select a SKU from the left sidebar to view detailed build-specific results "
    "and individual game performance metrics."
)


def compute_header(ctx: Dict[str, Any]) -> Dict[str, Any]:
    state = ctx["state"]
    selection = None
    if state.sku and state.build:
        selection = {"program": state.program, "sku": state.sku, "build": state.build}
    return {"title": "Gaming Benchmark Results", "subtitle": SUITE_LABEL, "selection": selection}


def compute_overview(ctx: Dict[str, Any]) -> Dict[str, Any]:
    """Full view payload for the current selection; exactly one panel is populated."""
    mode = ctx["mode"]
    payload: Dict[str, Any] = {
        "state": ctx["state"].to_dict(),
        "mode": mode,
        "header": compute_header(ctx),
        "prompt": PROMPTS.get(mode),
        "trends": None,
        "results": None,
    }
    if mode == "program_trends":
        payload["trends"] = {**compute_trends(ctx), "hint": SKU_HINT}
    elif mode == "results":
        payload["results"] = compute_results(ctx)
    return payload
