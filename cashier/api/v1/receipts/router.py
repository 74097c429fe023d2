from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository, get_repository

from . import service

router = APIRouter(prefix="/api/v1/receipts", tags=["receipts"])


@router.get("/{payment_id}", response_class=HTMLResponse)
async def read_receipt(
    payment_id: UUID,
    download: bool = Query(False, description="Return the receipt as an attachment"),
    repo: SchoolRepository = Depends(get_repository),
) -> HTMLResponse:
    try:
        payment = await service.get_receipt(repo, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    headers = None
    if download:
        headers = {"Content-Disposition": f"attachment; filename={service.receipt_filename(payment)}"}
    return HTMLResponse(service.render_receipt(payment), headers=headers)
