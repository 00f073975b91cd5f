from .pages import (
    ComparisonFilters,
    ComparisonPageState,
    GoalsPageState,
    LoadStatus,
    StatisticsPageState,
    reduce_comparison,
    reduce_goals,
    reduce_statistics,
)
from .runner import LatestRequestRunner
from .session import PageSession

__all__ = [
    "ComparisonFilters",
    "ComparisonPageState",
    "GoalsPageState",
    "LatestRequestRunner",
    "LoadStatus",
    "PageSession",
    "StatisticsPageState",
    "reduce_comparison",
    "reduce_goals",
    "reduce_statistics",
]
