import asyncio
import functools
import logging
from datetime import datetime
from typing import Callable, Optional

from backend.exceptions import BackendError
from backend.manager import BackendManager
from models.round import utc_now
from state.pages import (
    ComparisonFilters,
    ComparisonLoaded,
    ComparisonPageState,
    FetchFailed,
    FetchStarted,
    FiltersChanged,
    GlobalToggled,
    GoalsLoaded,
    GoalsPageState,
    RoundsLoaded,
    StatisticsPageState,
    reduce_comparison,
    reduce_goals,
    reduce_statistics,
)
from state.runner import LatestRequestRunner

logger = logging.getLogger(__name__)


class PageSession:
    """Holds the state of the statistics, comparison and goals pages for one viewer.

    Usage:
        session = PageSession(BackendManager.with_token(backend, token))
        await session.load_comparison(ComparisonFilters(from_date=date(2026, 1, 1)))
        rows = session.comparison.rows
        await session.close()
    """

    def __init__(self, manager: BackendManager, clock: Callable[[], datetime] = utc_now):
        self._manager = manager
        self._clock = clock
        self.statistics = StatisticsPageState()
        self.comparison = ComparisonPageState()
        self.goals = GoalsPageState()
        self._statistics_runner = LatestRequestRunner()
        self._comparison_runner = LatestRequestRunner()
        self._goals_runner = LatestRequestRunner()

    async def _call(self, func, *args):
        """Run a blocking backend call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    # ================================================================
    # Statistics
    # ================================================================

    async def load_statistics(self) -> StatisticsPageState:
        async def load(generation: int) -> None:
            self.statistics = reduce_statistics(self.statistics, FetchStarted(generation))
            try:
                rounds = await self._call(self._manager.rounds.get_rounds)
            except BackendError as e:
                logger.warning("Loading statistics failed: %s", e)
                self.statistics = reduce_statistics(self.statistics, FetchFailed(generation, str(e)))
                return
            self.statistics = reduce_statistics(
                self.statistics, RoundsLoaded(generation, rounds, self._clock())
            )

        await self._statistics_runner.run(load)
        return self.statistics

    # ================================================================
    # Comparison
    # ================================================================

    async def load_comparison(self, filters: Optional[ComparisonFilters] = None) -> ComparisonPageState:
        """Apply new filters (if any) and fetch; an earlier in-flight fetch is abandoned."""
        if filters is not None:
            self.comparison = reduce_comparison(self.comparison, FiltersChanged(filters))
        active = self.comparison.filters

        async def load(generation: int) -> None:
            self.comparison = reduce_comparison(self.comparison, FetchStarted(generation))
            try:
                response = await self._call(
                    self._manager.stats.get_comparison, active.from_date, active.to_date
                )
            except BackendError as e:
                logger.warning("Loading comparison failed: %s", e)
                self.comparison = reduce_comparison(self.comparison, FetchFailed(generation, str(e)))
                return
            self.comparison = reduce_comparison(self.comparison, ComparisonLoaded(generation, response))

        await self._comparison_runner.run(load)
        return self.comparison

    def toggle_global(self) -> ComparisonPageState:
        self.comparison = reduce_comparison(
            self.comparison, GlobalToggled(not self.comparison.show_global)
        )
        return self.comparison

    # ================================================================
    # Goals
    # ================================================================

    async def load_goals(self) -> GoalsPageState:
        async def load(generation: int) -> None:
            self.goals = reduce_goals(self.goals, FetchStarted(generation))
            try:
                goals = await self._call(self._manager.goals.list_goals)
                rounds = await self._call(self._manager.rounds.get_rounds)
            except BackendError as e:
                logger.warning("Loading goals failed: %s", e)
                self.goals = reduce_goals(self.goals, FetchFailed(generation, str(e)))
                return
            self.goals = reduce_goals(self.goals, GoalsLoaded(generation, goals, rounds, self._clock()))

        await self._goals_runner.run(load)
        return self.goals

    async def close(self) -> None:
        """Stop applying results of loads still in flight."""
        for runner in (self._statistics_runner, self._comparison_runner, self._goals_runner):
            await runner.close()
