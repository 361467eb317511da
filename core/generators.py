"""Synthetic data generators.

Two modes exist (see ``core.config.Settings.generator_mode``):

- ``faithful``: mirrors the dashboard's observed behaviour. Trend values mix a
  sine seed with a live random term, so repeated calls differ. Telemetry draws
  a single fractional value per game, so its six metrics move together.
- ``seeded``: one generator per SKU / game, seeded from the name, with an
  independent draw per week / metric. Repeated calls return the same values.
"""

from __future__ import annotations

import math
import zlib
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from core.catalog import CLIPPING_REASONS, GAMES, WEEK_LABELS, program_skus, week_short_label
from core.config import GeneratorMode
from core.formatting import round_half_up

P_CORE_FREQ_RANGE = (4.5, 5.8)
E_CORE_FREQ_RANGE = (3.2, 4.4)
IA_POWER_RANGE = (45.0, 125.0)
PACKAGE_POWER_RANGE = (65.0, 185.0)
PACKAGE_TEMP_RANGE = (55, 85)

SCORE_MIN, SCORE_SPAN = 60, 100
PERCENTILE_MIN, PERCENTILE_SPAN = 60, 40


@dataclass(frozen=True)
class CPUMetrics:
    p_core_freq: float
    e_core_freq: float
    ia_power: float
    package_power: float
    clipping_reason: str
    package_temperature: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def stable_seed(name: str) -> int:
    return zlib.crc32(name.encode("utf-8"))


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _scale(fraction: float, low: float, high: float) -> float:
    return low + fraction * (high - low)


# ---------------- Weekly trend ----------------
def _trend_value(sku: str, week_index: int, noise: float) -> int:
    seed = len(sku) * 7 + week_index * 3
    trend = math.sin(seed / 5) * 10 + noise
    base = 95 + (seed % 25)
    return int(round_half_up(base + trend))


def generate_weekly_trend_data(
    program: str,
    *,
    rng: Optional[np.random.Generator] = None,
    mode: GeneratorMode = "faithful",
) -> pd.DataFrame:
    """One row per week (oldest first) with a ``week`` column and one int column per SKU."""
    skus = program_skus(program)
    weeks = [week_short_label(w) for w in reversed(WEEK_LABELS)]
    if not skus:
        return pd.DataFrame(columns=["week"])

    data: Dict[str, Sequence[object]] = {"week": weeks}
    for sku in skus:
        if mode == "seeded":
            noise = np.random.default_rng(stable_seed(sku)).uniform(0, 8, size=len(weeks))
        else:
            noise = _rng(rng).uniform(0, 8, size=len(weeks))
        data[sku] = [_trend_value(sku, i, float(noise[i])) for i in range(len(weeks))]
    return pd.DataFrame(data)


# ---------------- Benchmarks ----------------
def generate_mock_scores(
    *,
    rng: Optional[np.random.Generator] = None,
    games: Sequence[str] = GAMES,
) -> pd.DataFrame:
    gen = _rng(rng)
    scores = np.floor(gen.uniform(0, SCORE_SPAN, size=len(games))).astype(int) + SCORE_MIN
    percentiles = np.floor(gen.uniform(0, PERCENTILE_SPAN, size=len(games))).astype(int) + PERCENTILE_MIN
    return pd.DataFrame({"game": list(games), "score": scores, "percentile": percentiles})


# ---------------- CPU telemetry ----------------
def _sine_fraction(game: str) -> float:
    seed = len(game) * 13
    x = math.sin(seed * 9.9731) * 10000
    return x - math.floor(x)


def _clipping_reason(fraction: float) -> str:
    idx = min(int(math.floor(fraction * len(CLIPPING_REASONS))), len(CLIPPING_REASONS) - 1)
    return CLIPPING_REASONS[idx]


def generate_cpu_metrics(game: str, *, mode: GeneratorMode = "faithful") -> CPUMetrics:
    if mode == "seeded":
        fractions = np.random.default_rng(stable_seed(game)).random(6).tolist()
    else:
        fractions = [_sine_fraction(game)] * 6

    return CPUMetrics(
        p_core_freq=_scale(fractions[0], *P_CORE_FREQ_RANGE),
        e_core_freq=_scale(fractions[1], *E_CORE_FREQ_RANGE),
        ia_power=_scale(fractions[2], *IA_POWER_RANGE),
        package_power=_scale(fractions[3], *PACKAGE_POWER_RANGE),
        clipping_reason=_clipping_reason(fractions[4]),
        package_temperature=int(math.floor(_scale(fractions[5], *PACKAGE_TEMP_RANGE))),
    )
