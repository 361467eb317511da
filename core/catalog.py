from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Program:
    name: str
    skus: Tuple[str, ...]
    color: str


PROGRAMS: Dict[str, Program] = {
    p.name: p
    for p in (
        Program("Arrow Lake", ("Arrow Lake S", "Arrow Lake H", "Arrow Lake P"), "#3b82f6"),
        Program("Nova Lake", ("Nova Lake S", "Nova Lake H"), "#10b981"),
        Program("Arrow Lake Refresh", ("Arrow Lake Refresh S", "Arrow Lake Refresh H"), "#8b5cf6"),
        Program("Panther Lake", ("Panther Lake P", "Panther Lake U"), "#f59e0b"),
        Program("Battrel Lake", ("Battrel Lake S", "Battrel Lake P"), "#ef4444"),
    )
}

# Bi-weekly builds, newest first.
BUILDS: Tuple[str, ...] = (
    "Build 2025.03 (Aug 18)",
    "Build 2025.02 (Aug 4)",
    "Build 2025.01 (Jul 21)",
    "Build 2024.26 (Jul 7)",
    "Build 2024.25 (Jun 23)",
    "Build 2024.24 (Jun 9)",
)

# Newest first; trend series reverse this.
WEEK_LABELS: Tuple[str, ...] = (
    "Week 33 (Aug 18)",
    "Week 31 (Aug 4)",
    "Week 29 (Jul 21)",
    "Week 27 (Jul 7)",
    "Week 25 (Jun 23)",
    "Week 23 (Jun 9)",
    "Week 21 (May 26)",
    "Week 19 (May 12)",
    "Week 17 (Apr 28)",
    "Week 15 (Apr 14)",
    "Week 13 (Mar 31)",
    "Week 11 (Mar 17)",
)

GAMES: Tuple[str, ...] = (
    "Cyberpunk 2077",
    "Call of Duty: MW III",
    "Assassin's Creed Mirage",
    "Baldur's Gate 3",
    "Starfield",
    "Forza Horizon 5",
    "Red Dead Redemption 2",
    "The Witcher 3",
    "Horizon Zero Dawn",
    "Control",
    "Metro Exodus",
    "Shadow of the Tomb Raider",
    "Total War: Warhammer III",
    "F1 23",
    "Far Cry 6",
    "Resident Evil 4",
    "Spider-Man Remastered",
    "God of War",
    "Death Stranding",
    "Hitman 3",
    "Watch Dogs: Legion",
    "Dirt 5",
    "Borderlands 3",
    "The Division 2",
    "Gears 5",
    "Strange Brigade",
    "Serious Sam 4",
    "World War Z",
    "Rainbow Six Siege",
    "Overwatch 2",
    "Valorant",
    "Counter-Strike 2",
    "Dota 2",
    "League of Legends",
)

CLIPPING_REASONS: Tuple[str, ...] = (
    "None",
    "Thermal",
    "Power",
    "Current",
    "Thermal + Power",
    "Power + Current",
)

# Per-SKU chart colors, assigned by position within the program.
SKU_PALETTE: Tuple[str, ...] = ("#3b82f6", "#10b981", "#8b5cf6", "#f59e0b", "#ef4444", "#06b6d4")

RESOLUTION = "1080p"
QUALITY_SETTING = "High"
SUITE_LABEL = f"{RESOLUTION} {QUALITY_SETTING} Settings • {len(GAMES)} Game Benchmark Suite"


def get_program(name: str) -> Optional[Program]:
    return PROGRAMS.get(name)


def program_skus(name: str) -> List[str]:
    program = PROGRAMS.get(name)
    return list(program.skus) if program is not None else []


def find_program_for_sku(sku: str) -> Optional[str]:
    for program in PROGRAMS.values():
        if sku in program.skus:
            return program.name
    return None


def sku_color(index: int) -> str:
    return SKU_PALETTE[index % len(SKU_PALETTE)]


def week_short_label(label: str) -> str:
    """'Week 33 (Aug 18)' -> 'Week 33'."""
    return label.split(" (")[0]


def catalog_frame() -> pd.DataFrame:
    """Flatten the catalog into one row per (program, sku)."""
    rows = [
        {"program": p.name, "sku": sku, "sku_index": i, "program_color": p.color}
        for p in PROGRAMS.values()
        for i, sku in enumerate(p.skus)
    ]
    return pd.DataFrame(rows, columns=["program", "sku", "sku_index", "program_color"])
