from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from cashier.api.v1.receipts.service import render_dashboard_summary
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository, get_repository

from .schemas import DashboardResponse
from . import service

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def read_dashboard(
    today: Optional[date] = Query(None, description="Reference date, defaults to today (UTC)"),
    repo: SchoolRepository = Depends(get_repository),
) -> DashboardResponse:
    try:
        return await service.compute_dashboard(repo, today=today)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/summary.html", response_class=HTMLResponse)
async def read_dashboard_summary(
    today: Optional[date] = Query(None),
    repo: SchoolRepository = Depends(get_repository),
) -> HTMLResponse:
    """Printable summary of the dashboard."""
    try:
        stats = await service.compute_dashboard(repo, today=today)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return HTMLResponse(render_dashboard_summary(stats))
