from .coaching_repo import CoachingRepository
from .course_repo import CourseRepository
from .goal_repo import GoalRepository
from .round_repo import RoundRepository
from .share_repo import ShareRepository
from .stats_repo import StatsRepository

__all__ = [
    "CoachingRepository",
    "CourseRepository",
    "GoalRepository",
    "RoundRepository",
    "ShareRepository",
    "StatsRepository",
]
