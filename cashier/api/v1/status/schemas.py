from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel

from cashier.core.enums import PaymentStatus


class StatusCellResponse(BaseModel):
    student_id: UUID
    student_name: str
    matricule: str
    label: str
    status: PaymentStatus


class StatusGridRow(BaseModel):
    student_id: UUID
    matricule: str
    name: str
    class_name: str
    statuses: Dict[str, PaymentStatus]


class StatusGridResponse(BaseModel):
    labels: List[str]
    rows: List[StatusGridRow]
