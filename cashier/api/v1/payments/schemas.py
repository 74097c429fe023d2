"""Payments schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from cashier.core.enums import CalendarLabel, PaymentMethod


class Remainder(BaseModel):
    """Balance still owed on one calendar label after a partial payment."""

    month: CalendarLabel
    amount: Decimal = Field(..., gt=0)


class RemainderResponse(BaseModel):
    month: str
    amount: Decimal


class PaymentCreate(BaseModel):
    student_id: UUID
    months_paid: List[CalendarLabel] = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    remainder: Optional[Remainder] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    date: Optional[datetime] = None
    academic_year: str = Field(..., min_length=1, max_length=20, description="e.g. 2024-2025")
    receipt_number: Optional[str] = Field(None, max_length=50)


class RemainderUpdate(BaseModel):
    """null clears the remainder: the owed balance has been settled."""

    remainder: Optional[Remainder] = None


class PaymentResponse(BaseModel):
    id: UUID
    student_id: Optional[UUID] = None
    student_name: str
    student_matricule: str
    months_paid: List[str]
    remainder: Optional[RemainderResponse] = None
    amount: Decimal
    payment_method: PaymentMethod
    date: datetime
    academic_year: str
    receipt_number: Optional[str] = None


class PaymentListResponse(BaseModel):
    payments: List[PaymentResponse]
    count: int
    total_amount: Decimal


class PaymentSort(str, Enum):
    date = "date"
    amount = "amount"
    student = "student"
