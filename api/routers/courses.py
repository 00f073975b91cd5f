"""Course API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import call_backend, get_backend
from backend.manager import BackendManager
from models import CourseSummary

router = APIRouter()


@router.get("", response_model=List[CourseSummary])
async def list_courses(
    q: Optional[str] = Query(None, description="Case-insensitive name filter"),
    manager: BackendManager = Depends(get_backend),
):
    courses = await call_backend(manager.courses.list_courses)
    if q:
        needle = q.lower()
        courses = [c for c in courses if needle in c.name.lower()]
    return courses
