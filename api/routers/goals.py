"""Goal endpoints. Every goal is returned with progress and deadline status."""

from datetime import datetime
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, Response

from analytics.goals import describe_goal
from analytics.stats import current_goal_value
from api.dependencies import call_backend, get_backend, get_clock
from api.schemas import GoalsResponse
from backend.manager import BackendManager
from models import GoalCreate, GoalUpdate, GoalView
from state import GoalsPageState, reduce_goals
from state.pages import GoalsLoaded

router = APIRouter()


async def _view(manager: BackendManager, goal, now: datetime, handicap: Optional[float]) -> GoalView:
    rounds = await call_backend(manager.rounds.get_rounds)
    current = None
    if goal.goal_type is not None:
        current = current_goal_value(goal.type, rounds, handicap=handicap)
    return describe_goal(goal, current, now)


@router.get("", response_model=GoalsResponse)
async def list_goals(
    handicap: Optional[float] = Query(None, description="Current handicap, for handicap goals"),
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    goals = await call_backend(manager.goals.list_goals)
    rounds = await call_backend(manager.rounds.get_rounds)
    page = reduce_goals(GoalsPageState(), GoalsLoaded(0, goals, rounds, clock(), handicap))
    return GoalsResponse(status=page.status, goals=page.goals)


@router.post("", response_model=GoalView, status_code=201)
async def create_goal(
    req: GoalCreate,
    handicap: Optional[float] = Query(None),
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    goal = await call_backend(manager.goals.create_goal, req)
    return await _view(manager, goal, clock(), handicap)


@router.patch("/{goal_id}", response_model=GoalView)
async def update_goal(
    goal_id: str,
    req: GoalUpdate,
    handicap: Optional[float] = Query(None),
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    goal = await call_backend(manager.goals.update_goal, goal_id, req)
    return await _view(manager, goal, clock(), handicap)


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: str, manager: BackendManager = Depends(get_backend)):
    await call_backend(manager.goals.delete_goal, goal_id)
    return Response(status_code=204)
