"""PDF and CSV exports."""

import asyncio
import io
from datetime import datetime
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import call_backend, get_backend, get_clock
from backend.manager import BackendManager
from reports.builder import build_performance_report
from reports.csv_export import export_rounds_csv
from reports.pdf import render_performance_report

router = APIRouter()


def _render_pdf(report) -> bytes:
    buffer = io.BytesIO()
    render_performance_report(report, buffer)
    return buffer.getvalue()


@router.get("/performance.pdf")
async def performance_pdf(
    player: str = Query("Golfer", description="Name printed on the report"),
    handicap: Optional[float] = Query(None),
    share_url: Optional[str] = Query(None, alias="shareUrl"),
    insights: bool = Query(True, description="Include the backend analysis of the latest round"),
    manager: BackendManager = Depends(get_backend),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    report = await call_backend(
        build_performance_report, manager, player,
        handicap=handicap, share_url=share_url, now=clock(), with_insights=insights,
    )
    loop = asyncio.get_running_loop()
    content = await loop.run_in_executor(None, _render_pdf, report)
    return Response(
        content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="performance_report.pdf"'},
    )


@router.get("/rounds.csv")
async def rounds_csv(manager: BackendManager = Depends(get_backend)):
    rounds = await call_backend(manager.rounds.get_rounds)
    return Response(
        export_rounds_csv(rounds),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="golf_rounds.csv"'},
    )
