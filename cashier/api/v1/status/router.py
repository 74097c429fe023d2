"""Status router: single cell, grid, CSV and Excel exports."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from cashier.core.enums import CalendarLabel, ClassLabel
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository, get_repository

from .schemas import StatusCellResponse, StatusGridResponse
from . import service

router = APIRouter(prefix="/api/v1/status", tags=["status"])


@router.get("/grid", response_model=StatusGridResponse)
async def read_status_grid(
    class_name: Optional[ClassLabel] = Query(None),
    search: Optional[str] = Query(None, description="Substring of name or matricule"),
    repo: SchoolRepository = Depends(get_repository),
) -> StatusGridResponse:
    try:
        return await service.build_grid(repo, class_name=class_name, search=search)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/grid/export.csv")
async def export_status_grid_csv(
    class_name: Optional[ClassLabel] = Query(None),
    search: Optional[str] = Query(None),
    repo: SchoolRepository = Depends(get_repository),
) -> Response:
    try:
        grid = await service.build_grid(repo, class_name=class_name, search=search)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=service.grid_to_csv(grid),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=suivi_paiements.csv"},
    )


@router.get("/grid/export.xlsx")
async def export_status_grid_xlsx(
    class_name: Optional[ClassLabel] = Query(None),
    search: Optional[str] = Query(None),
    repo: SchoolRepository = Depends(get_repository),
) -> Response:
    try:
        grid = await service.build_grid(repo, class_name=class_name, search=search)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=service.grid_to_xlsx(grid),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=suivi_paiements.xlsx"},
    )


@router.get("/{student_id}/{label}", response_model=StatusCellResponse)
async def read_status_cell(
    student_id: UUID,
    label: CalendarLabel,
    repo: SchoolRepository = Depends(get_repository),
) -> StatusCellResponse:
    try:
        return await service.get_status_cell(repo, student_id, label)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
