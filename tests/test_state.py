import asyncio
import threading
from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from backend.exceptions import NetworkError
from models import ComparisonResponse, ComparisonStats, Goal, Round
from state import (
    ComparisonFilters,
    ComparisonPageState,
    GoalsPageState,
    LatestRequestRunner,
    LoadStatus,
    PageSession,
    StatisticsPageState,
    reduce_comparison,
    reduce_goals,
    reduce_statistics,
)
from state.pages import (
    ComparisonLoaded,
    FetchFailed,
    FetchStarted,
    GlobalToggled,
    GoalsLoaded,
    RoundsLoaded,
)

NOW = datetime(2026, 6, 15, 12, 0)


def _rounds():
    return [
        Round(total_score=82, date=datetime(2026, 6, 1), putts=30),
        Round(total_score=90, date=datetime(2026, 5, 1), putts=34),
    ]


def _comparison(avg_score=85.0, round_count=4, is_default=False):
    return ComparisonResponse(
        user_stats=ComparisonStats(avg_score=avg_score, round_count=round_count),
        global_stats=ComparisonStats(avg_score=92.0, round_count=400),
        is_default=is_default,
    )


# ================================================================
# Reducers
# ================================================================

def test_statistics_ready_and_empty():
    state = reduce_statistics(StatisticsPageState(), FetchStarted(1))
    assert state.status == LoadStatus.LOADING

    ready = reduce_statistics(state, RoundsLoaded(1, _rounds(), NOW))
    assert ready.status == LoadStatus.READY
    assert ready.summary.best_score == 82
    assert len(ready.trend) == 12
    assert ready.form is not None

    empty = reduce_statistics(state, RoundsLoaded(1, [], NOW))
    assert empty.status == LoadStatus.EMPTY
    assert empty.summary is None


def test_error_is_distinct_from_empty():
    state = reduce_statistics(StatisticsPageState(), FetchStarted(1))
    failed = reduce_statistics(state, FetchFailed(1, "backend down"))
    assert failed.status == LoadStatus.ERROR
    assert failed.error == "backend down"

    # a new fetch clears the error
    retry = reduce_statistics(failed, FetchStarted(2))
    assert retry.status == LoadStatus.LOADING
    assert retry.error is None


def test_stale_results_are_dropped():
    state = reduce_statistics(StatisticsPageState(), FetchStarted(1))
    state = reduce_statistics(state, FetchStarted(2))

    stale = reduce_statistics(state, RoundsLoaded(1, _rounds(), NOW))
    assert stale is state
    assert reduce_statistics(state, FetchFailed(1, "late failure")) is state
    assert reduce_statistics(state, FetchStarted(1)) is state


def test_comparison_toggle_recomputes_rows():
    state = reduce_comparison(ComparisonPageState(), FetchStarted(1))
    state = reduce_comparison(state, ComparisonLoaded(1, _comparison()))
    assert state.status == LoadStatus.READY
    assert state.rows[0].global_value == 92.0

    hidden = reduce_comparison(state, GlobalToggled(False))
    assert not hidden.show_global
    assert all(r.global_value is None for r in hidden.rows)
    assert hidden.response is state.response


def test_comparison_without_user_rounds_is_empty():
    state = reduce_comparison(ComparisonPageState(), FetchStarted(1))
    state = reduce_comparison(state, ComparisonLoaded(1, _comparison(avg_score=None, round_count=0)))
    assert state.status == LoadStatus.EMPTY


def test_goals_reducer():
    state = reduce_goals(GoalsPageState(), FetchStarted(1))
    goals = [Goal(id="g1", type="score", target_value=80, start_value=90)]

    loaded = reduce_goals(state, GoalsLoaded(1, goals, _rounds(), NOW))
    assert loaded.status == LoadStatus.READY
    assert loaded.goals[0].progress == pytest.approx(40)

    assert reduce_goals(state, GoalsLoaded(1, [], _rounds(), NOW)).status == LoadStatus.EMPTY


def test_page_state_is_immutable():
    state = StatisticsPageState()
    with pytest.raises(Exception):
        state.status = LoadStatus.READY


# ================================================================
# Runner
# ================================================================

@pytest.mark.asyncio
async def test_runner_newest_load_wins():
    runner = LatestRequestRunner()
    gate = asyncio.Event()

    async def slow(generation):
        await gate.wait()
        return "slow"

    async def fast(generation):
        return f"fast-{generation}"

    first = asyncio.create_task(runner.run(slow))
    await asyncio.sleep(0)

    assert await runner.run(fast) == "fast-2"
    assert await first is None


@pytest.mark.asyncio
async def test_runner_close_cancels_in_flight():
    runner = LatestRequestRunner()

    async def never(generation):
        await asyncio.Event().wait()

    first = asyncio.create_task(runner.run(never))
    await asyncio.sleep(0)
    await runner.close()

    assert await first is None
    assert runner.closed
    with pytest.raises(RuntimeError):
        await runner.run(never)


# ================================================================
# Session
# ================================================================

@pytest.fixture
def manager():
    manager = MagicMock()
    manager.rounds.get_rounds.return_value = _rounds()
    manager.goals.list_goals.return_value = [Goal(id="g1", type="putts", target_value=30, start_value=36)]
    return manager


@pytest.mark.asyncio
async def test_session_loads_statistics(manager):
    session = PageSession(manager, clock=lambda: NOW)
    state = await session.load_statistics()

    assert state.status == LoadStatus.READY
    assert state.summary.total_rounds == 2
    assert session.statistics is state
    await session.close()


@pytest.mark.asyncio
async def test_session_reports_fetch_failure(manager):
    manager.rounds.get_rounds.side_effect = NetworkError("timed out")
    session = PageSession(manager, clock=lambda: NOW)

    state = await session.load_statistics()

    assert state.status == LoadStatus.ERROR
    assert state.error == "timed out"


@pytest.mark.asyncio
async def test_session_loads_goals(manager):
    session = PageSession(manager, clock=lambda: NOW)
    state = await session.load_goals()

    assert state.status == LoadStatus.READY
    assert state.goals[0].current_value == 32
    assert state.goals[0].progress == pytest.approx(100 * 4 / 6)


@pytest.mark.asyncio
async def test_slow_comparison_never_overwrites_newer_filters(manager):
    started = threading.Event()
    release = threading.Event()

    def get_comparison(from_date, to_date):
        if from_date == date(2026, 1, 1):
            started.set()
            release.wait(5)
            return _comparison(avg_score=99.0)
        return _comparison(avg_score=80.0)

    manager.stats.get_comparison.side_effect = get_comparison
    session = PageSession(manager, clock=lambda: NOW)

    try:
        first = asyncio.create_task(session.load_comparison(ComparisonFilters(from_date=date(2026, 1, 1))))
        while not started.is_set():
            await asyncio.sleep(0.01)

        second = await session.load_comparison(ComparisonFilters(from_date=date(2026, 3, 1)))
        superseded = await first
        assert superseded.filters.from_date == date(2026, 3, 1)
    finally:
        release.set()

    assert second.status == LoadStatus.READY
    assert session.comparison.filters.from_date == date(2026, 3, 1)
    assert session.comparison.response.user_stats.avg_score == 80.0

    toggled = session.toggle_global()
    assert not toggled.show_global
    await session.close()
