from pydantic import field_validator
from typing import Optional

from .base import BaseGolfModel


class CourseSummary(BaseGolfModel):
    """Course entry from GET /api/courses."""
    id: str
    name: str
    location: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v
