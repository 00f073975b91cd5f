from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .round import Round


class RoundAggregate(BaseGolfModel):
    """Aggregate view over a set of rounds.

    Percentages are ratio-of-sums: 100 * total hits / total attempts.
    """
    rounds_played: int = 0
    average_score: float = 0.0
    best_score: Optional[int] = None
    worst_score: Optional[int] = None
    average_putts: float = 0.0
    fairway_percentage: float = 0.0
    gir_percentage: float = 0.0


class MonthlyBucket(RoundAggregate):
    month: str  # "Mar 2026"
    month_start: datetime


class CourseBucket(RoundAggregate):
    course: str


class StatSummary(RoundAggregate):
    """Everything the statistics views render. Never persisted."""
    total_rounds: int
    monthly_averages: List[MonthlyBucket] = Field(default_factory=list)
    course_stats: List[CourseBucket] = Field(default_factory=list)
    recent_rounds: List[Round] = Field(default_factory=list)


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class FormMetric(BaseGolfModel):
    """Recent value of a metric and how it moved against the prior window."""
    value: float
    trend: Trend = Trend.NEUTRAL
    change: float = 0.0


class RecentForm(BaseGolfModel):
    scoring_average: FormMetric
    putts_per_round: FormMetric
    fairway_percentage: FormMetric
    gir_percentage: FormMetric


class ComparisonStats(BaseGolfModel):
    """Averages for one population (the user, or every player)."""
    avg_score: Optional[float] = None
    avg_putts: Optional[float] = None
    fairway_hit_percentage: float = 0.0
    gir_percentage: float = 0.0
    round_count: int = 0


class ComparisonResponse(BaseGolfModel):
    """Payload of GET /api/stats/comparison."""
    user_stats: ComparisonStats
    global_stats: ComparisonStats
    is_default: bool = False


class TrendPoint(BaseGolfModel):
    month: str
    score: float
    putts: float
    fairways: float
    gir: float


class ComparisonRow(BaseGolfModel):
    metric_name: str
    user_value: Optional[float] = None
    global_value: Optional[float] = None
    lower_is_better: bool
    unit: str = ""
