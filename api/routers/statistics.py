"""Statistics page endpoints: summary, monthly trend and recent form."""

from datetime import datetime
from typing import Callable, List

from fastapi import APIRouter, Depends

from analytics.stats import summarize_rounds
from analytics.trends import to_trend_series
from api.dependencies import call_backend, get_backend, get_clock
from api.schemas import StatisticsResponse
from backend.manager import BackendManager
from models import TrendPoint
from state import StatisticsPageState, reduce_statistics
from state.pages import RoundsLoaded

router = APIRouter()


@router.get("", response_model=StatisticsResponse)
async def get_statistics(
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Summary of all the caller's rounds; status "empty" when none are recorded."""
    rounds = await call_backend(manager.rounds.get_rounds)
    page = reduce_statistics(StatisticsPageState(), RoundsLoaded(0, rounds, clock()))
    return StatisticsResponse(
        status=page.status, summary=page.summary, trend=page.trend, form=page.form
    )


@router.get("/trend", response_model=List[TrendPoint])
async def get_trend(
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    rounds = await call_backend(manager.rounds.get_rounds)
    summary = summarize_rounds(rounds, clock())
    if summary is None:
        return []
    return to_trend_series(summary)
