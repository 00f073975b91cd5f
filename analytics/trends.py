from __future__ import annotations

from typing import List, NamedTuple, Optional

from models.stats import ComparisonRow, ComparisonStats, StatSummary, TrendPoint


class ComparisonMetric(NamedTuple):
    name: str
    field: str
    lower_is_better: bool
    unit: str


# Fixed order; direction is a property of the metric, not of the data
COMPARISON_METRICS = (
    ComparisonMetric("Avg Score", "avg_score", True, ""),
    ComparisonMetric("Avg Putts", "avg_putts", True, ""),
    ComparisonMetric("Fairways Hit", "fairway_hit_percentage", False, "%"),
    ComparisonMetric("Greens in Regulation", "gir_percentage", False, "%"),
)


def _one_decimal(value: Optional[float]) -> Optional[float]:
    return round(value, 1) if value is not None else None


def to_trend_series(summary: StatSummary) -> List[TrendPoint]:
    """Monthly buckets as chart points, oldest month first."""
    buckets = sorted(summary.monthly_averages, key=lambda b: b.month_start)
    return [
        TrendPoint(
            month=bucket.month,
            score=round(bucket.average_score, 1),
            putts=round(bucket.average_putts, 1),
            fairways=round(bucket.fairway_percentage, 1),
            gir=round(bucket.gir_percentage, 1),
        )
        for bucket in buckets
    ]


def to_comparison_rows(
    user: ComparisonStats,
    global_: ComparisonStats,
    show_global: bool = True,
) -> List[ComparisonRow]:
    """
    User-vs-everyone rows for the comparison bar chart.

    With show_global=False the global values are left out so only the
    user's bars are drawn.
    """
    rows: List[ComparisonRow] = []
    for metric in COMPARISON_METRICS:
        rows.append(
            ComparisonRow(
                metric_name=metric.name,
                user_value=_one_decimal(getattr(user, metric.field)),
                global_value=_one_decimal(getattr(global_, metric.field)) if show_global else None,
                lower_is_better=metric.lower_is_better,
                unit=metric.unit,
            )
        )
    return rows


def user_is_better(row: ComparisonRow) -> bool:
    """Whether the user's value beats the global one in the metric's direction."""
    if row.user_value is None or row.global_value is None:
        return False
    if row.lower_is_better:
        return row.user_value < row.global_value
    return row.user_value > row.global_value


def summary_to_comparison_stats(summary: Optional[StatSummary]) -> ComparisonStats:
    """Project a locally computed summary onto the comparison shape."""
    if summary is None:
        return ComparisonStats()
    return ComparisonStats(
        avg_score=round(summary.average_score, 1),
        avg_putts=round(summary.average_putts, 1),
        fairway_hit_percentage=round(summary.fairway_percentage, 1),
        gir_percentage=round(summary.gir_percentage, 1),
        round_count=summary.total_rounds,
    )
