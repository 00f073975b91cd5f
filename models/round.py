from datetime import date as date_type, datetime, timezone
from pydantic import Field, field_validator, model_validator
from typing import Any, Optional, Union

from .base import BaseGolfModel


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, the convention all round dates use."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_round_date(value: Any) -> Any:
    """Normalize a round date to a naive UTC datetime.

    Numbers are read as epoch seconds. Values that cannot be parsed are
    returned as strings so a single bad record never fails a whole payload.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date_type):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return str(value)
    else:
        return str(value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class Round(BaseGolfModel):
    """One played round of golf as stored by the backend."""
    id: Optional[str] = None
    date: Union[datetime, str, None] = None
    course: str = ""
    total_score: int = Field(..., ge=1)
    par: Optional[int] = Field(None, ge=27, le=80)
    putts: Optional[int] = Field(None, ge=0)
    fairways_hit: Optional[int] = Field(None, ge=0)
    total_fairways: Optional[int] = Field(None, ge=0)
    greens_in_regulation: Optional[int] = Field(None, ge=0)
    total_greens: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date(cls, v):
        return parse_round_date(v)

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else None

    @field_validator('course', mode='before')
    @classmethod
    def course_name(cls, v):
        # Some endpoints embed the course object instead of its name
        if isinstance(v, dict):
            return v.get("name") or ""
        return v if v is not None else ""

    @model_validator(mode='after')
    def validate_hits_within_attempts(self):
        if (self.fairways_hit is not None and self.total_fairways is not None
                and self.fairways_hit > self.total_fairways):
            raise ValueError(
                f"Fairways hit ({self.fairways_hit}) cannot exceed total fairways ({self.total_fairways})"
            )
        if (self.greens_in_regulation is not None and self.total_greens is not None
                and self.greens_in_regulation > self.total_greens):
            raise ValueError(
                f"Greens in regulation ({self.greens_in_regulation}) cannot exceed total greens ({self.total_greens})"
            )
        return self

    def played_at(self) -> Optional[datetime]:
        """Parsed play date, or None when missing or unparsable."""
        return self.date if isinstance(self.date, datetime) else None

    def to_par(self) -> Optional[int]:
        """Total score relative to par (+10, -2, etc.)."""
        if self.par is None:
            return None
        return self.total_score - self.par

    def fairway_percentage(self) -> Optional[float]:
        """Per-round fairway percentage, for single-round displays only."""
        if not self.total_fairways or self.fairways_hit is None:
            return None
        return self.fairways_hit / self.total_fairways * 100

    def gir_percentage(self) -> Optional[float]:
        """Per-round GIR percentage, for single-round displays only."""
        if not self.total_greens or self.greens_in_regulation is None:
            return None
        return self.greens_in_regulation / self.total_greens * 100
