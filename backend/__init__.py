from backend.connection import BackendClient, backend
from backend.manager import BackendManager
from backend.repositories import (
    CoachingRepository,
    CourseRepository,
    GoalRepository,
    RoundRepository,
    ShareRepository,
    StatsRepository,
)
from backend.exceptions import AuthError, BackendError, NetworkError, NotFoundError, PayloadError

__all__ = [
    "BackendClient",
    "backend",
    "BackendManager",
    "CoachingRepository",
    "CourseRepository",
    "GoalRepository",
    "RoundRepository",
    "ShareRepository",
    "StatsRepository",
    "AuthError",
    "BackendError",
    "NetworkError",
    "NotFoundError",
    "PayloadError",
]
