"""Conversion between backend JSON payloads and Pydantic domain models.

Every response is validated here, at the boundary, so the rest of the code
works with typed models only.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from backend.exceptions import PayloadError
from models import (
    AnalysisResult,
    ComparisonResponse,
    CourseSummary,
    EquipmentRecommendation,
    Goal,
    Round,
    SharedContent,
    ShareLink,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


# ================================================================
# Helpers
# ================================================================

def _unwrap(payload: Any, key: Optional[str]) -> Any:
    """Accept both a bare value and one wrapped as {key: value}."""
    if key and isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload


def _one(payload: Any, model: Type[T], what: str, key: Optional[str] = None) -> T:
    data = _unwrap(payload, key)
    if not isinstance(data, dict):
        raise PayloadError(f"Expected a {what} object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid {what} payload: {e.errors()[0]['msg']}") from e


def _many(payload: Any, model: Type[T], what: str, key: Optional[str] = None) -> List[T]:
    """Validate a list payload, skipping (and logging) items that fail validation."""
    items = _unwrap(payload, key)
    if not isinstance(items, list):
        raise PayloadError(f"Expected a list of {what}s, got {type(items).__name__}")

    results: List[T] = []
    for index, item in enumerate(items):
        try:
            results.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping invalid %s at index %d: %s", what, index, e.errors()[0]["msg"])
    return results


def to_payload(model: BaseModel) -> dict:
    """Model -> camelCase JSON body for the backend."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


# ================================================================
# Payload -> Model (reads)
# ================================================================

def rounds_from_payload(payload: Any) -> List[Round]:
    """GET /api/rounds body -> rounds."""
    return _many(payload, Round, "round", key="rounds")


def round_from_payload(payload: Any) -> Round:
    return _one(payload, Round, "round", key="round")


def goals_from_payload(payload: Any) -> List[Goal]:
    """GET /api/goals body ({"goals": [...]}) -> goals."""
    return _many(payload, Goal, "goal", key="goals")


def goal_from_payload(payload: Any) -> Goal:
    return _one(payload, Goal, "goal", key="goal")


def comparison_from_payload(payload: Any) -> ComparisonResponse:
    return _one(payload, ComparisonResponse, "comparison")


def shared_content_from_payload(payload: Any) -> SharedContent:
    return _one(payload, SharedContent, "shared content")


def shared_list_from_payload(payload: Any) -> List[SharedContent]:
    return _many(payload, SharedContent, "shared content")


def share_link_from_payload(payload: Any) -> ShareLink:
    return _one(payload, ShareLink, "share link")


def courses_from_payload(payload: Any) -> List[CourseSummary]:
    return _many(payload, CourseSummary, "course", key="courses")


def analysis_from_payload(payload: Any) -> AnalysisResult:
    return _one(payload, AnalysisResult, "analysis")


def equipment_from_payload(payload: Any) -> EquipmentRecommendation:
    return _one(payload, EquipmentRecommendation, "equipment recommendation")
