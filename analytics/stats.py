from __future__ import annotations

import calendar
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from models.goal import GOAL_TYPES
from models.round import Round, utc_now
from models.stats import (
    CourseBucket,
    FormMetric,
    MonthlyBucket,
    RecentForm,
    RoundAggregate,
    StatSummary,
    Trend,
)

logger = logging.getLogger(__name__)

MONTHS_IN_SERIES = 12
RECENT_MONTHS = 3


def _month_start(moment: datetime) -> datetime:
    return datetime(moment.year, moment.month, 1)


def _shift_months(month_start: datetime, months: int) -> datetime:
    """Move a first-of-month datetime by a signed number of months."""
    index = month_start.year * 12 + (month_start.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1)


def _months_ago(moment: datetime, months: int) -> datetime:
    """Same day and time `months` earlier, clamped to the end of shorter months."""
    start = _shift_months(_month_start(moment), -months)
    last_day = calendar.monthrange(start.year, start.month)[1]
    return moment.replace(year=start.year, month=start.month, day=min(moment.day, last_day))


def _percentage(hits: int, attempts: int) -> float:
    return hits / attempts * 100 if attempts else 0.0


def aggregate_rounds(rounds: Iterable[Round]) -> RoundAggregate:
    """
    Aggregate a set of rounds.

    - average/best/worst score come from total_score
    - average_putts only counts rounds that recorded putts
    - fairway/GIR percentages are summed hits over summed attempts, with
      missing values contributing zero to both sides
    An empty set yields zero values.
    """
    count = 0
    score_total = 0
    best: Optional[int] = None
    worst: Optional[int] = None
    putts_total = 0
    putts_rounds = 0
    fairways_hit = 0
    fairway_attempts = 0
    greens_hit = 0
    green_attempts = 0

    for round_obj in rounds:
        score = round_obj.total_score
        count += 1
        score_total += score
        best = score if best is None else min(best, score)
        worst = score if worst is None else max(worst, score)

        if round_obj.putts is not None:
            putts_total += round_obj.putts
            putts_rounds += 1

        fairways_hit += round_obj.fairways_hit or 0
        fairway_attempts += round_obj.total_fairways or 0
        greens_hit += round_obj.greens_in_regulation or 0
        green_attempts += round_obj.total_greens or 0

    return RoundAggregate(
        rounds_played=count,
        average_score=score_total / count if count else 0.0,
        best_score=best,
        worst_score=worst,
        average_putts=putts_total / putts_rounds if putts_rounds else 0.0,
        fairway_percentage=_percentage(fairways_hit, fairway_attempts),
        gir_percentage=_percentage(greens_hit, green_attempts),
    )


def _dated_rounds(rounds: Iterable[Round]) -> List[tuple]:
    """Pair rounds with their parsed date, skipping (and logging) bad dates."""
    dated = []
    for round_obj in rounds:
        played = round_obj.played_at()
        if played is None or played.tzinfo is not None:
            logger.warning(
                "Round %s has an unparsable or missing date (%r); excluded from date buckets",
                round_obj.id, round_obj.date,
            )
            continue
        dated.append((played, round_obj))
    return dated


def monthly_averages(rounds: Sequence[Round], now: Optional[datetime] = None) -> List[MonthlyBucket]:
    """
    One bucket per calendar month for the last 12 months, oldest first.

    The current month is the last bucket. Months without rounds are kept as
    zero-valued buckets so the series length is always 12.
    """
    now = now or utc_now()
    current = _month_start(now)
    dated = _dated_rounds(rounds)

    buckets: List[MonthlyBucket] = []
    for offset in range(MONTHS_IN_SERIES - 1, -1, -1):
        start = _shift_months(current, -offset)
        end = _shift_months(start, 1)
        in_month = [r for played, r in dated if start <= played < end]
        aggregate = aggregate_rounds(in_month)
        buckets.append(
            MonthlyBucket(
                month=start.strftime("%b %Y"),
                month_start=start,
                **aggregate.model_dump(),
            )
        )
    return buckets


def course_stats(rounds: Iterable[Round]) -> List[CourseBucket]:
    """Aggregate rounds grouped by the exact course string."""
    by_course: Dict[str, List[Round]] = {}
    for round_obj in rounds:
        by_course.setdefault(round_obj.course, []).append(round_obj)

    return [
        CourseBucket(course=course, **aggregate_rounds(course_rounds).model_dump())
        for course, course_rounds in by_course.items()
    ]


def recent_rounds(
    rounds: Iterable[Round],
    now: Optional[datetime] = None,
    months: int = RECENT_MONTHS,
) -> List[Round]:
    """Rounds played within the last `months` months, newest first."""
    now = now or utc_now()
    cutoff = _months_ago(now, months)
    dated = [(played, r) for played, r in _dated_rounds(rounds) if played >= cutoff]
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [r for _, r in dated]


def summarize_rounds(rounds: Sequence[Round], now: Optional[datetime] = None) -> Optional[StatSummary]:
    """
    Build the full statistics summary.

    Returns None when there are no rounds; callers render an empty state
    instead of averages.
    """
    if not rounds:
        return None

    now = now or utc_now()
    overall = aggregate_rounds(rounds)
    return StatSummary(
        total_rounds=overall.rounds_played,
        monthly_averages=monthly_averages(rounds, now),
        course_stats=course_stats(rounds),
        recent_rounds=recent_rounds(rounds, now),
        **overall.model_dump(),
    )


def newest_first(rounds: Iterable[Round]) -> List[Round]:
    """Sort newest first; undated rounds sink to the end in input order."""
    rounds = list(rounds)
    return sorted(
        rounds,
        key=lambda r: r.played_at() or datetime.min,
        reverse=True,
    )


def _form_metric(current: float, previous: Optional[float], lower_is_better: bool) -> FormMetric:
    if previous is None:
        return FormMetric(value=round(current, 1))
    if lower_is_better:
        trend = Trend.DOWN if current < previous else Trend.UP
    else:
        trend = Trend.UP if current > previous else Trend.DOWN
    return FormMetric(
        value=round(current, 1),
        trend=trend,
        change=round(abs(current - previous), 1),
    )


def recent_form(rounds: Iterable[Round], window: int = 3) -> Optional[RecentForm]:
    """
    Compare the newest `window` rounds against the `window` rounds before them.

    Trend is the raw direction of the metric (score going down reads "down"),
    change is the absolute difference. Without an earlier window every trend
    is neutral. Returns None when there are no rounds.
    """
    ordered = newest_first(rounds)
    current_rounds = ordered[:window]
    if not current_rounds:
        return None
    previous_rounds = ordered[window:window * 2]

    current = aggregate_rounds(current_rounds)
    previous = aggregate_rounds(previous_rounds) if previous_rounds else None

    # putts only compare when both windows recorded some
    previous_putts = None
    if previous and any(r.putts is not None for r in previous_rounds) \
            and any(r.putts is not None for r in current_rounds):
        previous_putts = previous.average_putts

    return RecentForm(
        scoring_average=_form_metric(
            current.average_score, previous.average_score if previous else None, True
        ),
        putts_per_round=_form_metric(current.average_putts, previous_putts, True),
        fairway_percentage=_form_metric(
            current.fairway_percentage, previous.fairway_percentage if previous else None, False
        ),
        gir_percentage=_form_metric(
            current.gir_percentage, previous.gir_percentage if previous else None, False
        ),
    )


def current_goal_value(
    goal_type: str,
    rounds: Iterable[Round],
    handicap: Optional[float] = None,
    sample: int = 5,
) -> Optional[float]:
    """
    Measured value a goal of this type is judged against.

    Handicap comes from the player profile; every other type is computed over
    the newest `sample` rounds. None when nothing has been measured yet.
    """
    if goal_type not in GOAL_TYPES:
        raise ValueError(f"Unknown goal type: {goal_type}")
    if goal_type == "handicap":
        return handicap

    latest = newest_first(rounds)[:sample]
    if not latest:
        return None

    if goal_type == "score":
        return aggregate_rounds(latest).average_score
    if goal_type == "putts":
        with_putts = [r for r in latest if r.putts is not None]
        return aggregate_rounds(with_putts).average_putts if with_putts else None
    if goal_type == "fairways":
        tracked = [r for r in latest if r.total_fairways]
        return aggregate_rounds(tracked).fairway_percentage if tracked else None
    tracked = [r for r in latest if r.total_greens]
    return aggregate_rounds(tracked).gir_percentage if tracked else None
