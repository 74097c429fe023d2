from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from cashier.api.v1.payments.schemas import PaymentResponse


class LabelCoverage(BaseModel):
    label: str
    students_paid: int
    percentage: float


class DashboardResponse(BaseModel):
    today: date
    current_label: Optional[str] = None
    total_students: int
    paid_this_month: int
    pending_payments: int
    total_amount: Decimal
    inscriptions: int
    reinscriptions: int
    label_coverage: List[LabelCoverage]
    recent_payments: List[PaymentResponse]
