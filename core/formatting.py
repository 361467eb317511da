from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import pandas as pd


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def format_fixed(value: object, decimals: int) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{float(value):.{decimals}f}"


def format_fps(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{int(value)} FPS"


def format_fps_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].apply(format_fps)
    return formatted


def format_percent_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].apply(lambda v: f"{int(v)}%" if pd.notna(v) else "")
    return formatted
