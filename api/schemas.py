"""API-specific response models for the page views."""

from pydantic import Field
from typing import List, Optional

from models import (
    BaseGolfModel,
    ComparisonRow,
    ComparisonStats,
    GoalView,
    RecentForm,
    StatSummary,
    TrendPoint,
)
from state import ComparisonFilters, LoadStatus


class StatisticsResponse(BaseGolfModel):
    """Statistics page: summary plus chart series, or status "empty"."""
    status: LoadStatus
    summary: Optional[StatSummary] = None
    trend: List[TrendPoint] = Field(default_factory=list)
    form: Optional[RecentForm] = None


class ComparisonResponseView(BaseGolfModel):
    """Comparison page: bar chart rows for the chosen filters."""
    status: LoadStatus
    filters: ComparisonFilters
    show_global: bool
    is_default: bool = False
    user_stats: Optional[ComparisonStats] = None
    global_stats: Optional[ComparisonStats] = None
    rows: List[ComparisonRow] = Field(default_factory=list)


class GoalsResponse(BaseGolfModel):
    status: LoadStatus
    goals: List[GoalView] = Field(default_factory=list)
