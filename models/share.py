from datetime import datetime
from pydantic import Field, field_validator, model_validator
from typing import List, Literal, Optional

from .base import BaseGolfModel
from .round import parse_round_date
from .stats import ComparisonStats


ContentType = Literal["round", "goal", "stats"]


class SharedUser(BaseGolfModel):
    id: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None


class SharedHole(BaseGolfModel):
    number: int = Field(..., ge=1, le=18)
    par: Optional[int] = Field(None, ge=3, le=6)
    distance: Optional[int] = Field(None, ge=0)
    score: Optional[int] = Field(None, ge=1)


class SharedCourse(BaseGolfModel):
    id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    par: Optional[int] = None
    holes: List[SharedHole] = Field(default_factory=list)


class SharedRound(BaseGolfModel):
    """Round snapshot as shown on a public share page."""
    id: Optional[str] = None
    date: Optional[datetime] = None
    score: Optional[int] = None
    course: Optional[SharedCourse] = None

    @model_validator(mode='before')
    @classmethod
    def accept_round_shape(cls, data):
        # The share list endpoint embeds plain rounds: totalScore + course name
        if isinstance(data, dict):
            data = dict(data)
            if data.get("score") is None and data.get("totalScore") is not None:
                data["score"] = data["totalScore"]
            if isinstance(data.get("course"), str):
                data["course"] = {"name": data["course"]}
            data["date"] = parse_round_date(data.get("date"))
            if isinstance(data["date"], str):
                data["date"] = None
        return data

    def to_par(self) -> Optional[int]:
        if self.score is None or self.course is None or self.course.par is None:
            return None
        return self.score - self.course.par


class SharedGoal(BaseGolfModel):
    id: Optional[str] = None
    type: str
    target_value: float
    progress: Optional[float] = None
    is_completed: bool = False


class SharedContent(BaseGolfModel):
    """Tagged snapshot behind a public share link.

    The payload that must be present depends on content_type.
    """
    id: Optional[str] = None
    share_id: str
    content_type: ContentType
    title: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    view_count: int = 0
    user: Optional[SharedUser] = None
    round: Optional[SharedRound] = None
    goal: Optional[SharedGoal] = None
    stats: Optional[ComparisonStats] = None

    @field_validator('created_at', 'expires_at', mode='before')
    @classmethod
    def normalize_datetimes(cls, v):
        parsed = parse_round_date(v)
        return None if isinstance(parsed, str) else parsed

    @model_validator(mode='after')
    def validate_payload_matches_type(self):
        if self.content_type == "round" and self.round is None:
            raise ValueError("Shared round content is missing its round")
        if self.content_type == "goal" and self.goal is None:
            raise ValueError("Shared goal content is missing its goal")
        return self


class ShareCreate(BaseGolfModel):
    """Body for POST /api/share."""
    content_type: ContentType
    content_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    is_public: bool = True
    expires_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_content_id(self):
        if self.content_type in ("round", "goal") and not self.content_id:
            raise ValueError(f"content_id is required when sharing a {self.content_type}")
        return self


class ShareLink(BaseGolfModel):
    share_id: str
    share_url: str
