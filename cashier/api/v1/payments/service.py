"""Payments service: record, search, remainder settlement, history."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import status

from cashier.core.enums import CalendarLabel, PaymentMethod
from cashier.core.exceptions import ServiceError
from cashier.core.models import Payment
from cashier.db.repository import SchoolRepository
from cashier.api.v1.students.service import matches_search

from .schemas import (
    PaymentCreate,
    PaymentListResponse,
    PaymentResponse,
    PaymentSort,
    Remainder,
    RemainderResponse,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_utc(value: Optional[datetime]) -> datetime:
    """Stored dates come back naive from some backends; they are UTC."""
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


def payment_to_response(p: Payment) -> PaymentResponse:
    remainder = None
    if p.remainder_month is not None:
        remainder = RemainderResponse(month=p.remainder_month, amount=to_decimal(p.remainder_amount))
    return PaymentResponse(
        id=p.id,
        student_id=p.student_id,
        student_name=p.student_name,
        student_matricule=p.student_matricule,
        months_paid=list(p.months_paid or []),
        remainder=remainder,
        amount=to_decimal(p.amount),
        payment_method=PaymentMethod(p.payment_method),
        date=as_utc(p.date),
        academic_year=p.academic_year,
        receipt_number=p.receipt_number,
    )


def mentions_label(p: Payment, label: str) -> bool:
    return label in (p.months_paid or []) or p.remainder_month == label


def _sort_payments(payments: List[Payment], sort_by: PaymentSort) -> List[Payment]:
    if sort_by == PaymentSort.amount:
        return sorted(payments, key=lambda p: to_decimal(p.amount), reverse=True)
    if sort_by == PaymentSort.student:
        return sorted(payments, key=lambda p: p.student_name.casefold())
    return sorted(payments, key=lambda p: as_utc(p.date), reverse=True)


async def record_payment(repo: SchoolRepository, payload: PaymentCreate) -> PaymentResponse:
    student = await repo.get_student(payload.student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    # de-duplicate while keeping the cashier's order
    months = list(dict.fromkeys(m.value for m in payload.months_paid))
    remainder = payload.remainder
    payment = await repo.insert_payment(
        student_id=student.id,
        student_name=student.name,
        student_matricule=student.matricule,
        months_paid=months,
        remainder_month=remainder.month.value if remainder else None,
        remainder_amount=remainder.amount if remainder else None,
        amount=payload.amount,
        payment_method=payload.payment_method.value,
        date=as_utc(payload.date).astimezone(timezone.utc) if payload.date else datetime.now(timezone.utc),
        academic_year=payload.academic_year.strip(),
        receipt_number=(payload.receipt_number or "").strip() or None,
    )
    logger.info(
        "Recorded payment %s: %s paid %s for %s%s",
        payment.id,
        student.matricule,
        payload.amount,
        ", ".join(months),
        f" (owes {remainder.amount} on {remainder.month.value})" if remainder else "",
    )
    return payment_to_response(payment)


async def list_payments(
    repo: SchoolRepository,
    search: Optional[str] = None,
    label: Optional[CalendarLabel] = None,
    sort_by: PaymentSort = PaymentSort.date,
) -> PaymentListResponse:
    payments = [
        p
        for p in await repo.list_payments()
        if matches_search(search, p.student_name, p.student_matricule)
        and (label is None or mentions_label(p, label.value))
    ]
    payments = _sort_payments(payments, sort_by)
    return PaymentListResponse(
        payments=[payment_to_response(p) for p in payments],
        count=len(payments),
        total_amount=sum((to_decimal(p.amount) for p in payments), Decimal("0")),
    )


async def get_payment(repo: SchoolRepository, payment_id: UUID) -> PaymentResponse:
    payment = await repo.get_payment(payment_id)
    if not payment:
        raise ServiceError("Payment not found", status.HTTP_404_NOT_FOUND)
    return payment_to_response(payment)


async def get_payment_history(repo: SchoolRepository, student_id: UUID) -> List[PaymentResponse]:
    if not await repo.get_student(student_id):
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    payments = _sort_payments(await repo.list_payments(student_id=student_id), PaymentSort.date)
    return [payment_to_response(p) for p in payments]


async def set_remainder(
    repo: SchoolRepository,
    payment_id: UUID,
    remainder: Optional[Remainder],
) -> PaymentResponse:
    pair = (remainder.month.value, remainder.amount) if remainder else None
    payment = await repo.update_payment_remainder(payment_id, pair)
    if not payment:
        raise ServiceError("Payment not found", status.HTTP_404_NOT_FOUND)
    if pair:
        logger.info("Payment %s now owes %s on %s", payment_id, pair[1], pair[0])
    else:
        logger.info("Cleared remainder on payment %s", payment_id)
    return payment_to_response(payment)


async def delete_payment(repo: SchoolRepository, payment_id: UUID) -> None:
    if not await repo.delete_payment(payment_id):
        raise ServiceError("Payment not found", status.HTTP_404_NOT_FOUND)
    logger.info("Deleted payment %s", payment_id)
