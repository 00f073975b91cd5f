from datetime import date
from typing import Optional

from models import ComparisonResponse
from backend.converters import comparison_from_payload
from backend.repositories.base import BackendRepository


class StatsRepository(BackendRepository):
    """User-vs-global statistics (/api/stats/comparison)."""

    def get_comparison(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> ComparisonResponse:
        params = {
            "fromDate": from_date.isoformat() if from_date else None,
            "toDate": to_date.isoformat() if to_date else None,
        }
        return comparison_from_payload(
            self._request("GET", "/api/stats/comparison", params=params)
        )
