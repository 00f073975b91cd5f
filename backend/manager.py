from typing import Mapping, Optional

from backend.connection import BackendClient
from backend.repositories import (
    CoachingRepository,
    CourseRepository,
    GoalRepository,
    RoundRepository,
    ShareRepository,
    StatsRepository,
)

# Request headers that identify the caller to the backend
FORWARDED_HEADERS = ("authorization", "cookie")


class BackendManager:
    """All backend repositories for one caller, sharing one client."""

    def __init__(self, client: BackendClient, headers: Optional[Mapping[str, str]] = None):
        self.client = client
        self.rounds = RoundRepository(client, headers)
        self.goals = GoalRepository(client, headers)
        self.stats = StatsRepository(client, headers)
        self.shares = ShareRepository(client, headers)
        self.courses = CourseRepository(client, headers)
        self.coaching = CoachingRepository(client, headers)

    @classmethod
    def for_caller(cls, client: BackendClient, request_headers: Mapping[str, str]) -> "BackendManager":
        """Forward only the caller's credentials, never hop-by-hop headers."""
        headers = {
            name: value
            for name, value in request_headers.items()
            if name.lower() in FORWARDED_HEADERS
        }
        return cls(client, headers)

    @classmethod
    def with_token(cls, client: BackendClient, token: Optional[str]) -> "BackendManager":
        return cls(client, {"Authorization": f"Bearer {token}"} if token else None)
