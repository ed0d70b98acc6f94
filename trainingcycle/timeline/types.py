"""
Type definitions for the training-cycle timeline.

Events are what the engine consumes, CycleDay is what the builder emits, and
the *Entry types are the data contract handed to a renderer.
"""

from datetime import datetime
from typing import Optional, Union, Literal
from pydantic import BaseModel, ConfigDict, Field


class MatchEvent(BaseModel):
    """A match the player took part in"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["match"] = "match"
    date: datetime
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    source_id: str


class TrainingEvent(BaseModel):
    """A training session the player attended"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["training"] = "training"
    date: datetime
    session_type: Optional[str] = None
    intensity: Optional[str] = None
    duration: Optional[int] = None  # minutes
    source_id: str


Event = Union[MatchEvent, TrainingEvent]


class CycleDay(BaseModel):
    """An event placed in the timeline with its distance to the next match"""
    model_config = ConfigDict(frozen=True)

    event: Event = Field(discriminator="kind")
    days_before_match: Optional[int] = None


class MatchInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    homeTeam: Optional[str] = None
    awayTeam: Optional[str] = None


class TrainingInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    intensity: Optional[str] = None
    duration: Optional[int] = None


class MatchEntry(BaseModel):
    """Match day in the rendered timeline (always J-0)"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["match"] = "match"
    date: datetime
    label: str
    daysBeforeMatch: int = 0
    matchInfo: MatchInfo


class TrainingEntry(BaseModel):
    """Training day in the rendered timeline; daysBeforeMatch is unset outside a cycle"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["training"] = "training"
    date: datetime
    label: str
    daysBeforeMatch: Optional[int] = None
    trainingInfo: TrainingInfo


TimelineEntry = Union[MatchEntry, TrainingEntry]
