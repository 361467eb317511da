from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class DashboardStateModel(BaseModel):
    program: str = ""
    sku: str = ""
    build: str = ""
    expanded_programs: List[str] = Field(default_factory=list)
    expanded_games: List[str] = Field(default_factory=list)


class EventModel(BaseModel):
    type: Literal["select_program", "select_sku", "select_build", "toggle_program", "toggle_game"]
    value: str = ""


class TransitionRequest(BaseModel):
    state: DashboardStateModel = Field(default_factory=DashboardStateModel)
    event: EventModel


class ProgramModel(BaseModel):
    name: str
    skus: List[str]
    color: str


class MetaProgramsResponse(BaseModel):
    programs: List[ProgramModel]
