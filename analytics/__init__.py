from .goals import build_goal_views, deadline_status, describe_goal, format_goal_value, goal_progress
from .stats import (
    aggregate_rounds,
    course_stats,
    current_goal_value,
    monthly_averages,
    newest_first,
    recent_form,
    recent_rounds,
    summarize_rounds,
)
from .trends import (
    summary_to_comparison_stats,
    to_comparison_rows,
    to_trend_series,
    user_is_better,
)

__all__ = [
    "aggregate_rounds",
    "build_goal_views",
    "course_stats",
    "current_goal_value",
    "deadline_status",
    "describe_goal",
    "format_goal_value",
    "goal_progress",
    "monthly_averages",
    "newest_first",
    "recent_form",
    "recent_rounds",
    "summarize_rounds",
    "summary_to_comparison_stats",
    "to_comparison_rows",
    "to_trend_series",
    "user_is_better",
]
