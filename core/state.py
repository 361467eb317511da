from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, Literal, Mapping, Optional

from core.catalog import find_program_for_sku

logger = logging.getLogger(__name__)

ViewMode = Literal["select_program", "program_trends", "select_build", "results"]

EVENT_TYPES = ("select_program", "select_sku", "select_build", "toggle_program", "toggle_game")


@dataclass(frozen=True)
class DashboardState:
    program: str = ""
    sku: str = ""
    build: str = ""
    expanded_programs: FrozenSet[str] = field(default_factory=frozenset)
    expanded_games: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program": self.program,
            "sku": self.sku,
            "build": self.build,
            "expanded_programs": sorted(self.expanded_programs),
            "expanded_games": sorted(self.expanded_games),
        }


def _toggle(members: FrozenSet[str], key: str) -> FrozenSet[str]:
    return members - {key} if key in members else members | {key}


def select_program(state: DashboardState, name: str) -> DashboardState:
    expanded = state.expanded_programs | {name}
    return replace(state, program=name, sku="", build="", expanded_programs=expanded)


def select_sku(state: DashboardState, name: str) -> DashboardState:
    program = state.program
    if not program:
        # Keep sku => program: adopt the owning program from the catalog.
        program = find_program_for_sku(name) or ""
        if not program:
            logger.warning("Ignoring SKU %r: no program selected and none owns it", name)
            return state
    return replace(state, program=program, sku=name, build="", expanded_games=frozenset())


def select_build(state: DashboardState, label: str) -> DashboardState:
    if not state.sku:
        logger.warning("Ignoring build %r: no SKU selected", label)
        return state
    return replace(state, build=label)


def toggle_program_expansion(state: DashboardState, name: str) -> DashboardState:
    return replace(state, expanded_programs=_toggle(state.expanded_programs, name))


def toggle_game_expansion(state: DashboardState, name: str) -> DashboardState:
    return replace(state, expanded_games=_toggle(state.expanded_games, name))


_TRANSITIONS = {
    "select_program": select_program,
    "select_sku": select_sku,
    "select_build": select_build,
    "toggle_program": toggle_program_expansion,
    "toggle_game": toggle_game_expansion,
}


def apply_event(state: DashboardState, event: Mapping[str, Any]) -> DashboardState:
    """Reduce one UI event ({"type": ..., "value": ...}) into a new state."""
    event_type = str(event.get("type") or "")
    transition = _TRANSITIONS.get(event_type)
    if transition is None:
        logger.warning("Ignoring unknown event type %r", event_type)
        return state
    value = event.get("value")
    new_state = transition(state, "" if value is None else str(value))
    logger.debug("event %s(%r): %s -> %s", event_type, value, state.to_dict(), new_state.to_dict())
    return new_state


def _as_str_set(values: Optional[Iterable[object]]) -> FrozenSet[str]:
    if not values:
        return frozenset()
    return frozenset(str(v) for v in values if v is not None)


def normalize_state(raw: Mapping[str, Any]) -> DashboardState:
    """Build a state from JSON-ish input, truncating a broken program/sku/build chain."""
    program = str(raw.get("program") or "").strip()
    sku = str(raw.get("sku") or "").strip() if program else ""
    build = str(raw.get("build") or "").strip() if sku else ""
    return DashboardState(
        program=program,
        sku=sku,
        build=build,
        expanded_programs=_as_str_set(raw.get("expanded_programs")),
        expanded_games=_as_str_set(raw.get("expanded_games")),
    )


def view_mode(state: DashboardState) -> ViewMode:
    if not state.program:
        return "select_program"
    if not state.sku:
        return "program_trends"
    if not state.build:
        return "select_build"
    return "results"
