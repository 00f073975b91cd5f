from datetime import datetime
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .goal import GoalView
from .round import Round, utc_now
from .stats import ComparisonResponse, StatSummary


class PerformanceReport(BaseGolfModel):
    """Plain data handed to the PDF renderer."""
    player_name: str
    handicap: Optional[float] = None
    round: Optional[Round] = None  # featured round, usually the latest
    summary: Optional[StatSummary] = None
    comparison: Optional[ComparisonResponse] = None
    goals: List[GoalView] = Field(default_factory=list)
    insights: Optional[str] = None
    share_url: Optional[str] = None
    generated_at: datetime = Field(default_factory=utc_now)
