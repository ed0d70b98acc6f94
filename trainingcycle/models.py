from datetime import date, timedelta
from typing import Optional, List
from pydantic import AliasChoices, BaseModel, Field, validator

from .config import DEFAULT_WINDOW_DAYS


class MatchRecord(BaseModel):
    """Match as fetched for a player and date window"""
    id: str
    date: str  # ISO-8601, parsed by the collector
    home_team: Optional[str] = Field(default=None, validation_alias=AliasChoices('home_team', 'homeTeam'))
    away_team: Optional[str] = Field(default=None, validation_alias=AliasChoices('away_team', 'awayTeam'))

    @validator('id', pre=True)
    def coerce_id(cls, v):
        if v is None:
            raise ValueError('Match id is required')
        return str(v)

    @validator('home_team', 'away_team')
    def normalize_team(cls, v):
        # Unscheduled opponents come through as null or blank
        if v is None or not v.strip():
            return None
        return v.strip()


class AttendanceRecord(BaseModel):
    attended: bool = False


class TrainingSessionRecord(BaseModel):
    """Training session with the target player's attendance rows"""
    id: str
    date: str  # ISO-8601, parsed by the collector
    type: Optional[str] = None
    intensity: Optional[str] = None
    duration: Optional[int] = None  # minutes
    attendance: List[AttendanceRecord] = Field(default_factory=list)

    @validator('id', pre=True)
    def coerce_id(cls, v):
        if v is None:
            raise ValueError('Training session id is required')
        return str(v)

    @validator('attendance', pre=True)
    def default_attendance(cls, v):
        return v if v is not None else []

    @validator('duration')
    def validate_duration(cls, v):
        if v is not None and v < 0:
            raise ValueError('Duration must be non-negative')
        return v

    @property
    def attended_by_target_player(self) -> bool:
        # The query narrows attendance to the target player, so the first row is theirs
        return bool(self.attendance) and self.attendance[0].attended

    @classmethod
    def from_dict(cls, data: dict) -> 'TrainingSessionRecord':
        """Build from a GraphQL row or from the flat attendedByTargetPlayer shape"""
        data = dict(data)
        for key in ('attendedByTargetPlayer', 'attended_by_target_player'):
            if key in data:
                attended = data.pop(key)
                data.setdefault('attendance', [{'attended': bool(attended)}])
        return cls(**data)


class TimelineQuery(BaseModel):
    """Player and inclusive date window to build a timeline for"""
    player_id: str
    start_date: str  # ISO-8601 date
    end_date: str  # ISO-8601 date

    @validator('player_id', 'start_date', 'end_date')
    def validate_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

    @classmethod
    def default_window(cls, player_id: str, today: Optional[date] = None) -> 'TimelineQuery':
        """Window of the last DEFAULT_WINDOW_DAYS days, ending today"""
        end = today or date.today()
        start = end - timedelta(days=DEFAULT_WINDOW_DAYS)
        return cls(player_id=player_id, start_date=start.isoformat(), end_date=end.isoformat())
