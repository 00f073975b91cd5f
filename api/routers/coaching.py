"""Round analysis and equipment advice, passed through to the backend."""

from fastapi import APIRouter, Depends

from api.dependencies import call_backend, get_backend
from backend.manager import BackendManager
from models import AnalysisResult, EquipmentRecommendation, PlayerProfile, RoundStatsInput

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_round(req: RoundStatsInput, manager: BackendManager = Depends(get_backend)):
    return await call_backend(manager.coaching.analyze_round, req)


@router.post("/equipment", response_model=EquipmentRecommendation)
async def recommend_equipment(req: PlayerProfile, manager: BackendManager = Depends(get_backend)):
    return await call_backend(manager.coaching.recommend_equipment, req)
