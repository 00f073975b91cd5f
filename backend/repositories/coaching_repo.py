"""AI round analysis and equipment recommendations, both computed by the backend."""

from models import AnalysisResult, EquipmentRecommendation, PlayerProfile, RoundStatsInput
from backend.converters import analysis_from_payload, equipment_from_payload, to_payload
from backend.repositories.base import BackendRepository


class CoachingRepository(BackendRepository):

    def analyze_round(self, stats: RoundStatsInput) -> AnalysisResult:
        return analysis_from_payload(self._request("POST", "/api/analyze", json=to_payload(stats)))

    def recommend_equipment(self, profile: PlayerProfile) -> EquipmentRecommendation:
        return equipment_from_payload(
            self._request("POST", "/api/equipment", json=to_payload(profile))
        )
