"""Assemble a PerformanceReport from backend data."""

import logging
from datetime import datetime
from typing import Optional, Sequence

from analytics.goals import build_goal_views
from analytics.stats import newest_first, summarize_rounds
from backend.exceptions import BackendError, NotFoundError
from backend.manager import BackendManager
from models import PerformanceReport, Round, RoundStatsInput, utc_now

logger = logging.getLogger(__name__)


def _round_insights(manager: BackendManager, round_obj: Optional[Round]) -> Optional[str]:
    if round_obj is None:
        return None
    try:
        return manager.coaching.analyze_round(RoundStatsInput.from_round(round_obj)).analysis
    except BackendError as e:
        logger.warning("Insights unavailable for report: %s", e)
        return None


def build_performance_report(
    manager: BackendManager,
    player_name: str,
    handicap: Optional[float] = None,
    share_url: Optional[str] = None,
    now: Optional[datetime] = None,
    rounds: Optional[Sequence[Round]] = None,
    with_insights: bool = True,
) -> PerformanceReport:
    """
    Fetch rounds, goals, comparison data and insights and derive the report contents.

    Rounds are required (pass them in if already fetched). Goals, comparison
    and the analysis of the featured round are optional sections: if the
    backend cannot provide them the report leaves them out.
    """
    now = now or utc_now()
    if rounds is None:
        rounds = manager.rounds.get_rounds()

    try:
        goals = manager.goals.list_goals()
    except NotFoundError:
        goals = []

    try:
        comparison = manager.stats.get_comparison()
    except BackendError as e:
        logger.warning("Comparison unavailable for report: %s", e)
        comparison = None

    latest = newest_first(rounds)
    featured = latest[0] if latest else None
    return PerformanceReport(
        player_name=player_name,
        handicap=handicap,
        round=featured,
        summary=summarize_rounds(rounds, now),
        comparison=comparison,
        goals=build_goal_views(goals, rounds, now, handicap),
        insights=_round_insights(manager, featured) if with_insights else None,
        share_url=share_url,
        generated_at=now,
    )
