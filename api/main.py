from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import DashboardStateModel, MetaProgramsResponse, ProgramModel, TransitionRequest
from core.config import configure_logging, load_settings, make_rng
from core.data import BenchmarkMemo, load_dashboard_data, prepare_context
from core.metrics_overview import compute_overview
from core.metrics_results import average_fps, compute_results, compute_telemetry
from core.metrics_trends import compute_program_trends
from core.state import apply_event, normalize_state

settings = load_settings()
configure_logging(settings)

app = FastAPI(title="CPU Gaming Benchmark API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One memo per process; benchmarks only change when the (sku, build) pair does.
benchmark_memo = BenchmarkMemo(rng=make_rng(settings))


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(name: str, exc: Exception) -> JSONResponse:
    logger.exception("%s failed", name)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _context(model: DashboardStateModel):
    return prepare_context(normalize_state(model.model_dump()), settings, benchmark_memo)


@app.get("/meta/programs", response_model=MetaProgramsResponse)
def meta_programs():
    programs = load_dashboard_data()["programs"]
    return MetaProgramsResponse(
        programs=[ProgramModel(name=p.name, skus=list(p.skus), color=p.color) for p in programs.values()]
    )


@app.get("/meta/builds")
def meta_builds():
    return _json({"builds": load_dashboard_data()["builds"]})


@app.get("/meta/games")
def meta_games():
    return _json({"games": load_dashboard_data()["games"]})


@app.get("/trends/{program}")
def trends(program: str):
    try:
        payload = compute_program_trends(program, rng=make_rng(settings), mode=settings.generator_mode)
        return _json(payload)
    except Exception as exc:
        return _error("trends", exc)


@app.post("/benchmarks")
def benchmarks(state: DashboardStateModel):
    try:
        ctx = _context(state)
        results = compute_results(ctx)
        return _json({"rows": results["rows"], "average_fps": average_fps(ctx["benchmarks"])})
    except Exception as exc:
        return _error("benchmarks", exc)


@app.get("/telemetry/{game}")
def telemetry(game: str):
    try:
        return _json(compute_telemetry(game, mode=settings.generator_mode))
    except Exception as exc:
        return _error("telemetry", exc)


@app.post("/state/transition")
def state_transition(request: TransitionRequest):
    try:
        state = normalize_state(request.state.model_dump())
        new_state = apply_event(state, request.event.model_dump())
        return _json(new_state.to_dict())
    except Exception as exc:
        return _error("state_transition", exc)


@app.post("/view")
def view(state: DashboardStateModel):
    try:
        return _json(compute_overview(_context(state)))
    except Exception as exc:
        return _error("view", exc)
