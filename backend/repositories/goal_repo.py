"""CRUD for goals (/api/goals)."""

from typing import List

from models import Goal, GoalCreate, GoalUpdate
from backend.converters import goal_from_payload, goals_from_payload, to_payload
from backend.repositories.base import BackendRepository


class GoalRepository(BackendRepository):

    def list_goals(self) -> List[Goal]:
        return goals_from_payload(self._request("GET", "/api/goals"))

    def create_goal(self, goal: GoalCreate) -> Goal:
        """Create a goal; the backend records the start value and initial progress."""
        return goal_from_payload(self._request("POST", "/api/goals", json=to_payload(goal)))

    def update_goal(self, goal_id: str, update: GoalUpdate) -> Goal:
        return goal_from_payload(
            self._request("PATCH", f"/api/goals/{goal_id}", json=to_payload(update))
        )

    def delete_goal(self, goal_id: str) -> None:
        self._request("DELETE", f"/api/goals/{goal_id}")
