"""User vs everyone comparison endpoint."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import call_backend, get_backend
from api.schemas import ComparisonResponseView
from backend.manager import BackendManager
from state import ComparisonFilters, ComparisonPageState, reduce_comparison
from state.pages import ComparisonLoaded

router = APIRouter()


@router.get("", response_model=ComparisonResponseView)
async def get_comparison(
    from_date: Optional[date] = Query(None, alias="fromDate"),
    to_date: Optional[date] = Query(None, alias="toDate"),
    show_global: bool = Query(True, alias="showGlobal"),
    manager: BackendManager = Depends(get_backend),
):
    if from_date and to_date and from_date > to_date:
        raise HTTPException(422, "fromDate must not be after toDate")

    filters = ComparisonFilters(from_date=from_date, to_date=to_date)
    response = await call_backend(manager.stats.get_comparison, from_date, to_date)
    page = reduce_comparison(
        ComparisonPageState(filters=filters, show_global=show_global),
        ComparisonLoaded(0, response),
    )
    return ComparisonResponseView(
        status=page.status,
        filters=page.filters,
        show_global=page.show_global,
        is_default=response.is_default,
        user_stats=response.user_stats,
        global_stats=response.global_stats if show_global else None,
        rows=page.rows,
    )
