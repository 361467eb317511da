from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal, Mapping, Optional

import numpy as np

GeneratorMode = Literal["faithful", "seeded"]
GENERATOR_MODES = ("faithful", "seeded")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_PREFIX = "CPU_DASH_"


@dataclass(frozen=True)
class Settings:
    generator_mode: GeneratorMode = "faithful"
    random_seed: Optional[int] = None
    log_level: str = "INFO"


def _as_optional_int(value: object) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except Exception:
        return None


def normalize_settings(raw: Mapping[str, object]) -> Settings:
    mode = str(raw.get("generator_mode") or "faithful").strip().lower()
    if mode not in GENERATOR_MODES:
        mode = "faithful"

    log_level = str(raw.get("log_level") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return Settings(
        generator_mode=mode,  # type: ignore[arg-type]
        random_seed=_as_optional_int(raw.get("random_seed")),
        log_level=log_level,
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read CPU_DASH_GENERATOR_MODE / CPU_DASH_RANDOM_SEED / CPU_DASH_LOG_LEVEL."""
    env = os.environ if environ is None else environ
    raw = {
        "generator_mode": env.get(f"{ENV_PREFIX}GENERATOR_MODE"),
        "random_seed": env.get(f"{ENV_PREFIX}RANDOM_SEED"),
        "log_level": env.get(f"{ENV_PREFIX}LOG_LEVEL"),
    }
    return normalize_settings(raw)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def make_rng(settings: Settings) -> np.random.Generator:
    return np.random.default_rng(settings.random_seed)
