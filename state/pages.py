"""Explicit page state advanced by pure reducers.

Every fetch carries a generation number. A result whose generation is not
the page's current one belongs to a superseded request and is dropped, so a
slow earlier response can never overwrite a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Sequence, Union

from pydantic import ConfigDict, Field

from analytics.goals import build_goal_views
from analytics.stats import recent_form, summarize_rounds
from analytics.trends import to_comparison_rows, to_trend_series
from models import (
    BaseGolfModel,
    ComparisonResponse,
    ComparisonRow,
    Goal,
    GoalView,
    RecentForm,
    Round,
    StatSummary,
    TrendPoint,
)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"    # fetched fine, nothing to show yet
    ERROR = "error"    # fetch failed


class PageState(BaseGolfModel):
    model_config = ConfigDict(frozen=True, validate_assignment=False)

    generation: int = 0
    status: LoadStatus = LoadStatus.IDLE
    error: Optional[str] = None


class StatisticsPageState(PageState):
    summary: Optional[StatSummary] = None
    trend: List[TrendPoint] = Field(default_factory=list)
    form: Optional[RecentForm] = None


class ComparisonFilters(BaseGolfModel):
    model_config = ConfigDict(frozen=True)

    from_date: Optional[date] = None
    to_date: Optional[date] = None


class ComparisonPageState(PageState):
    filters: ComparisonFilters = Field(default_factory=ComparisonFilters)
    show_global: bool = True
    response: Optional[ComparisonResponse] = None
    rows: List[ComparisonRow] = Field(default_factory=list)


class GoalsPageState(PageState):
    goals: List[GoalView] = Field(default_factory=list)


# ================================================================
# Actions
# ================================================================

@dataclass(frozen=True)
class FetchStarted:
    generation: int


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class RoundsLoaded:
    generation: int
    rounds: Sequence[Round]
    now: datetime


@dataclass(frozen=True)
class ComparisonLoaded:
    generation: int
    response: ComparisonResponse


@dataclass(frozen=True)
class FiltersChanged:
    filters: ComparisonFilters


@dataclass(frozen=True)
class GlobalToggled:
    show_global: bool


@dataclass(frozen=True)
class GoalsLoaded:
    generation: int
    goals: Sequence[Goal]
    rounds: Sequence[Round]
    now: datetime
    handicap: Optional[float] = None


Action = Union[
    FetchStarted, FetchFailed, RoundsLoaded, ComparisonLoaded,
    FiltersChanged, GlobalToggled, GoalsLoaded,
]


# ================================================================
# Reducers
# ================================================================

def _is_stale(state: PageState, action) -> bool:
    return getattr(action, "generation", state.generation) != state.generation


def _common(state: PageState, action: Action) -> Optional[PageState]:
    """Transitions every page shares; None when the action is page specific."""
    if isinstance(action, FetchStarted):
        if action.generation <= state.generation:
            return state
        return state.model_copy(
            update={"generation": action.generation, "status": LoadStatus.LOADING, "error": None}
        )
    if isinstance(action, FetchFailed):
        if _is_stale(state, action):
            return state
        return state.model_copy(update={"status": LoadStatus.ERROR, "error": action.message})
    return None


def reduce_statistics(state: StatisticsPageState, action: Action) -> StatisticsPageState:
    common = _common(state, action)
    if common is not None:
        return common
    if isinstance(action, RoundsLoaded):
        if _is_stale(state, action):
            return state
        summary = summarize_rounds(action.rounds, action.now)
        if summary is None:
            return state.model_copy(
                update={"status": LoadStatus.EMPTY, "summary": None, "trend": [], "form": None}
            )
        return state.model_copy(
            update={
                "status": LoadStatus.READY,
                "summary": summary,
                "trend": to_trend_series(summary),
                "form": recent_form(action.rounds),
            }
        )
    return state


def _rows(response: Optional[ComparisonResponse], show_global: bool) -> List[ComparisonRow]:
    if response is None:
        return []
    return to_comparison_rows(response.user_stats, response.global_stats, show_global)


def reduce_comparison(state: ComparisonPageState, action: Action) -> ComparisonPageState:
    common = _common(state, action)
    if common is not None:
        return common
    if isinstance(action, FiltersChanged):
        return state.model_copy(update={"filters": action.filters})
    if isinstance(action, GlobalToggled):
        return state.model_copy(
            update={
                "show_global": action.show_global,
                "rows": _rows(state.response, action.show_global),
            }
        )
    if isinstance(action, ComparisonLoaded):
        if _is_stale(state, action):
            return state
        status = LoadStatus.READY if action.response.user_stats.round_count else LoadStatus.EMPTY
        return state.model_copy(
            update={
                "status": status,
                "response": action.response,
                "rows": _rows(action.response, state.show_global),
            }
        )
    return state


def reduce_goals(state: GoalsPageState, action: Action) -> GoalsPageState:
    common = _common(state, action)
    if common is not None:
        return common
    if isinstance(action, GoalsLoaded):
        if _is_stale(state, action):
            return state
        views = build_goal_views(action.goals, action.rounds, action.now, action.handicap)
        return state.model_copy(
            update={
                "status": LoadStatus.READY if views else LoadStatus.EMPTY,
                "goals": views,
            }
        )
    return state
