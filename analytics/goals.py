"""Goal progress, deadline status and value formatting."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from models.goal import (
    GOAL_TYPES,
    DeadlineState,
    DeadlineStatus,
    Goal,
    GoalType,
    GoalView,
)
from models.round import Round, utc_now

from .stats import current_goal_value

DUE_SOON_DAYS = 7


def lookup_goal_type(goal_type: str) -> Optional[GoalType]:
    return GOAL_TYPES.get(goal_type)


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))


def goal_progress(
    goal_type: str,
    target_value: float,
    start_value: Optional[float],
    current_value: Optional[float],
) -> Optional[float]:
    """
    Progress toward a target as 0-100.

    Progress is the share of the start-to-target gap that has been closed,
    in the direction the goal type defines. Reaching (or passing) the target
    is 100. Without a start value there is no gap to measure, so progress is
    either 0 or 100. Returns None when the current value is unknown.
    """
    info = lookup_goal_type(goal_type)
    if info is None:
        raise ValueError(f"Unknown goal type: {goal_type}")
    if current_value is None:
        return None

    if info.lower_is_better:
        achieved = current_value <= target_value
        already_met = start_value is not None and start_value <= target_value
    else:
        achieved = current_value >= target_value
        already_met = start_value is not None and start_value >= target_value

    if achieved or already_met:
        return 100.0
    if start_value is None:
        return 0.0

    if info.lower_is_better:
        needed = start_value - target_value
        made = start_value - current_value
    else:
        needed = target_value - start_value
        made = current_value - start_value
    return _clamp(made / needed * 100)


def deadline_status(deadline: Optional[datetime], now: Optional[datetime] = None) -> Optional[DeadlineStatus]:
    """
    Classify the time left before a deadline.

    Days are counted on calendar dates, so a deadline of today is due soon
    rather than overdue. Recomputed on every call.
    """
    if deadline is None:
        return None
    now = now or utc_now()
    days = (deadline.date() - now.date()).days

    if days < 0:
        return DeadlineStatus(state=DeadlineState.OVERDUE, days_remaining=days, label="Overdue")
    if days == 0:
        label = "Due today"
    elif days == 1:
        label = "1 day left"
    else:
        label = f"{days} days left"
    state = DeadlineState.DUE_SOON if days < DUE_SOON_DAYS else DeadlineState.COMFORTABLE
    return DeadlineStatus(state=state, days_remaining=days, label=label)


def format_goal_value(goal_type: str, value: float) -> str:
    info = lookup_goal_type(goal_type)
    if info is None:
        return str(value)
    if info.format == "0.0":
        return f"{value:.1f}"
    if info.format == "0.0%":
        return f"{value:.1f}%"
    if info.format == "0":
        return str(math.floor(value + 0.5))
    return str(value)


def describe_goal(
    goal: Goal,
    current_value: Optional[float] = None,
    now: Optional[datetime] = None,
) -> GoalView:
    """Everything a goal card shows, derived fresh from the goal and a measurement."""
    info = lookup_goal_type(goal.type)
    progress = goal.progress
    if info is not None and current_value is not None:
        progress = goal_progress(goal.type, goal.target_value, goal.start_value, current_value)
    if goal.is_completed:
        progress = 100.0

    return GoalView(
        goal=goal,
        label=info.label if info else goal.type,
        lower_is_better=info.lower_is_better if info else None,
        current_value=current_value,
        progress=progress,
        deadline_status=None if goal.is_completed else deadline_status(goal.deadline, now),
        formatted_target=format_goal_value(goal.type, goal.target_value),
        formatted_start=(
            format_goal_value(goal.type, goal.start_value) if goal.start_value is not None else None
        ),
        formatted_current=(
            format_goal_value(goal.type, current_value) if current_value is not None else None
        ),
    )


def build_goal_views(
    goals: Iterable[Goal],
    rounds: Sequence[Round],
    now: Optional[datetime] = None,
    handicap: Optional[float] = None,
) -> List[GoalView]:
    """Describe each goal against values measured from the player's rounds."""
    views = []
    for goal in goals:
        current = None
        if goal.type in GOAL_TYPES:
            current = current_goal_value(goal.type, rounds, handicap=handicap)
        views.append(describe_goal(goal, current, now))
    return views
