from .base import BaseGolfModel
from .coaching import AnalysisResult, EquipmentRecommendation, PlayerProfile, RoundStatsInput
from .course import CourseSummary
from .goal import (
    GOAL_TYPES,
    DeadlineState,
    DeadlineStatus,
    Goal,
    GoalCreate,
    GoalType,
    GoalUpdate,
    GoalView,
)
from .report import PerformanceReport
from .round import Round, utc_now
from .share import SharedContent, ShareCreate, ShareLink
from .stats import (
    ComparisonResponse,
    ComparisonRow,
    ComparisonStats,
    CourseBucket,
    FormMetric,
    MonthlyBucket,
    RecentForm,
    RoundAggregate,
    StatSummary,
    Trend,
    TrendPoint,
)

__all__ = [
    "AnalysisResult",
    "BaseGolfModel",
    "ComparisonResponse",
    "ComparisonRow",
    "ComparisonStats",
    "CourseBucket",
    "CourseSummary",
    "DeadlineState",
    "DeadlineStatus",
    "EquipmentRecommendation",
    "FormMetric",
    "GOAL_TYPES",
    "Goal",
    "GoalCreate",
    "GoalType",
    "GoalUpdate",
    "GoalView",
    "MonthlyBucket",
    "PerformanceReport",
    "PlayerProfile",
    "RecentForm",
    "Round",
    "RoundAggregate",
    "RoundStatsInput",
    "ShareCreate",
    "ShareLink",
    "SharedContent",
    "StatSummary",
    "Trend",
    "TrendPoint",
    "utc_now",
]
