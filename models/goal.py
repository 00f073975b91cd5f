from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional

from .base import BaseGolfModel
from .round import parse_round_date


class GoalType(BaseModel):
    """Static description of a goal type; direction is never stored per goal."""
    value: str
    label: str
    lower_is_better: bool
    format: str  # "0", "0.0" or "0.0%"


GOAL_TYPES: Dict[str, GoalType] = {
    "handicap": GoalType(value="handicap", label="Handicap", lower_is_better=True, format="0.0"),
    "score": GoalType(value="score", label="Average Score", lower_is_better=True, format="0"),
    "putts": GoalType(value="putts", label="Putts per Round", lower_is_better=True, format="0.0"),
    "fairways": GoalType(value="fairways", label="Fairways Hit %", lower_is_better=False, format="0.0%"),
    "gir": GoalType(value="gir", label="Greens in Regulation %", lower_is_better=False, format="0.0%"),
}


def _parse_deadline(v):
    parsed = parse_round_date(v)
    if isinstance(parsed, str):
        raise ValueError(f"Invalid deadline: {parsed!r}")
    return parsed


class Goal(BaseGolfModel):
    """A persisted performance goal."""
    id: Optional[str] = None
    type: str
    target_value: float
    start_value: Optional[float] = None
    deadline: Optional[datetime] = None
    is_completed: bool = False
    progress: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('deadline', 'created_at', 'updated_at', mode='before')
    @classmethod
    def normalize_datetimes(cls, v):
        return _parse_deadline(v)

    @property
    def goal_type(self) -> Optional[GoalType]:
        return GOAL_TYPES.get(self.type)


class GoalCreate(BaseGolfModel):
    """Body for POST /api/goals."""
    type: str
    target_value: float
    deadline: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator('type')
    @classmethod
    def known_type(cls, v):
        if v not in GOAL_TYPES:
            raise ValueError(f"Unknown goal type '{v}'. Expected one of: {', '.join(GOAL_TYPES)}")
        return v

    @field_validator('deadline', mode='before')
    @classmethod
    def normalize_deadline(cls, v):
        return _parse_deadline(v)


class GoalUpdate(BaseGolfModel):
    """Body for PATCH /api/goals/{id}; omitted fields are left unchanged."""
    target_value: Optional[float] = None
    deadline: Optional[datetime] = None
    is_completed: Optional[bool] = None
    current_value: Optional[float] = None
    notes: Optional[str] = None

    @field_validator('deadline', mode='before')
    @classmethod
    def normalize_deadline(cls, v):
        return _parse_deadline(v)


class DeadlineState(str, Enum):
    """Three-way classification of time left before a goal deadline."""
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    COMFORTABLE = "comfortable"


class DeadlineStatus(BaseGolfModel):
    state: DeadlineState
    days_remaining: int
    label: str


class GoalView(BaseGolfModel):
    """A goal prepared for display: progress, deadline and formatted values."""
    goal: Goal
    label: str
    lower_is_better: Optional[bool] = None
    current_value: Optional[float] = None
    progress: Optional[float] = None
    deadline_status: Optional[DeadlineStatus] = None
    formatted_target: str
    formatted_start: Optional[str] = None
    formatted_current: Optional[str] = None
