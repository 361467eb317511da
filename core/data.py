from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd

from core.catalog import BUILDS, GAMES, PROGRAMS, WEEK_LABELS, catalog_frame, get_program
from core.config import Settings, make_rng
from core.generators import generate_mock_scores
from core.state import DashboardState, normalize_state, view_mode

logger = logging.getLogger(__name__)

BENCHMARK_COLUMNS = ["game", "score", "percentile"]


def empty_benchmarks() -> pd.DataFrame:
    return pd.DataFrame(columns=BENCHMARK_COLUMNS)


class BenchmarkMemo:
    """Single-slot memo keyed on the (sku, build) pair.

    A new pair always regenerates, even one seen before; game-row toggles reuse
    the current frame.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self._rng = rng
        self._key: Optional[Tuple[str, str]] = None
        self._data: pd.DataFrame = empty_benchmarks()
        self.generation = 0

    @property
    def key(self) -> Optional[Tuple[str, str]]:
        return self._key

    def get(self, sku: str, build: str) -> pd.DataFrame:
        if not sku or not build:
            self._key = None
            self._data = empty_benchmarks()
            return self._data
        if self._key != (sku, build):
            self._data = generate_mock_scores(rng=self._rng)
            self._key = (sku, build)
            self.generation += 1
            logger.debug("Regenerated %d benchmark rows for %s / %s", len(self._data), sku, build)
        return self._data


# ---------------- Public API (Streamlit parity + FastAPI use) ----------------
@lru_cache(maxsize=1)
def load_dashboard_data() -> Dict[str, Any]:
    """Static catalog context shared by the Streamlit page and the API."""
    return {
        "programs": PROGRAMS,
        "builds": list(BUILDS),
        "games": list(GAMES),
        "weeks": list(WEEK_LABELS),
        "catalog": catalog_frame(),
    }


def prepare_context(
    state: DashboardState | Dict[str, Any],
    settings: Settings,
    memo: BenchmarkMemo,
    *,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, Any]:
    st_ = state if isinstance(state, DashboardState) else normalize_state(state)
    mode = view_mode(st_)
    benchmarks = memo.get(st_.sku, st_.build)
    return {
        "state": st_,
        "mode": mode,
        "settings": settings,
        "rng": rng if rng is not None else make_rng(settings),
        "program": get_program(st_.program),
        "benchmarks": benchmarks,
    }
