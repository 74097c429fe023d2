"""Payments router: record, search, remainder settlement, history."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from cashier.core.enums import CalendarLabel
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository, get_repository

from .schemas import (
    PaymentCreate,
    PaymentListResponse,
    PaymentResponse,
    PaymentSort,
    RemainderUpdate,
)
from . import service

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    payload: PaymentCreate,
    repo: SchoolRepository = Depends(get_repository),
) -> PaymentResponse:
    try:
        return await service.record_payment(repo, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    search: Optional[str] = Query(None, description="Substring of student name or matricule"),
    label: Optional[CalendarLabel] = Query(None, description="Paid or owed on this label"),
    sort_by: PaymentSort = Query(PaymentSort.date),
    repo: SchoolRepository = Depends(get_repository),
) -> PaymentListResponse:
    try:
        return await service.list_payments(repo, search=search, label=label, sort_by=sort_by)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/student/{student_id}", response_model=List[PaymentResponse])
async def get_payment_history(
    student_id: UUID,
    repo: SchoolRepository = Depends(get_repository),
) -> List[PaymentResponse]:
    try:
        return await service.get_payment_history(repo, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: UUID,
    repo: SchoolRepository = Depends(get_repository),
) -> PaymentResponse:
    try:
        return await service.get_payment(repo, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{payment_id}/remainder", response_model=PaymentResponse)
async def update_remainder(
    payment_id: UUID,
    payload: RemainderUpdate,
    repo: SchoolRepository = Depends(get_repository),
) -> PaymentResponse:
    try:
        return await service.set_remainder(repo, payment_id, payload.remainder)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: UUID,
    repo: SchoolRepository = Depends(get_repository),
) -> Response:
    try:
        await service.delete_payment(repo, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
