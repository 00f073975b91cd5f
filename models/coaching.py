from pydantic import Field
from typing import Optional

from .base import BaseGolfModel
from .round import Round


class RoundStatsInput(BaseGolfModel):
    """Round statistics sent to the analysis endpoint."""
    total_score: int = Field(..., ge=1)
    putts: Optional[int] = Field(None, ge=0)
    fairways_hit: Optional[int] = Field(None, ge=0)
    greens_in_regulation: Optional[int] = Field(None, ge=0)

    @classmethod
    def from_round(cls, round_obj: Round) -> "RoundStatsInput":
        return cls(
            total_score=round_obj.total_score,
            putts=round_obj.putts,
            fairways_hit=round_obj.fairways_hit,
            greens_in_regulation=round_obj.greens_in_regulation,
        )


class AnalysisResult(BaseGolfModel):
    analysis: str


class PlayerProfile(BaseGolfModel):
    """Player details the equipment endpoint bases recommendations on."""
    handicap: float = Field(..., ge=-10, le=54)
    swing_speed: float = Field(..., gt=0, le=160)
    budget: float = Field(..., ge=0)
    primary_concern: str
    club_type: str


class EquipmentRecommendation(BaseGolfModel):
    recommendations: str
