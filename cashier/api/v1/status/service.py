"""Status service: per-student, per-label payment status grid and its exports."""

import csv
import io
from typing import List, Optional
from uuid import UUID

from fastapi import status
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from cashier.api.v1.students.service import matches_search, sort_students
from cashier.core.enums import PAYMENT_STATUS_LABELS, CalendarLabel, ClassLabel, PaymentStatus
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository
from cashier.domain.reconciler import index_payments, label_status, status_row, student_payments

from .schemas import StatusCellResponse, StatusGridResponse, StatusGridRow

LABELS = [label.value for label in CalendarLabel]
EXPORT_HEADERS = ["Matricule", "Nom", "Classe"]

_XLSX_FILLS = {
    PaymentStatus.paid: PatternFill("solid", start_color="C6EFCE"),
    PaymentStatus.partial: PatternFill("solid", start_color="FFEB9C"),
    PaymentStatus.unpaid: PatternFill("solid", start_color="FFC7CE"),
}


async def get_status_cell(
    repo: SchoolRepository,
    student_id: UUID,
    label: CalendarLabel,
) -> StatusCellResponse:
    student = await repo.get_student(student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    index = index_payments(await repo.list_payments())
    return StatusCellResponse(
        student_id=student.id,
        student_name=student.name,
        matricule=student.matricule,
        label=label.value,
        status=label_status(label, student_payments(student, index)),
    )


async def build_grid(
    repo: SchoolRepository,
    class_name: Optional[ClassLabel] = None,
    search: Optional[str] = None,
) -> StatusGridResponse:
    """One reconciler pass per cell over a ledger indexed once per request."""
    students = await repo.list_students(class_name=class_name.value if class_name else None)
    index = index_payments(await repo.list_payments())
    rows = [
        StatusGridRow(
            student_id=s.id,
            matricule=s.matricule,
            name=s.name,
            class_name=s.class_name,
            statuses=dict(status_row(s, LABELS, index)),
        )
        for s in sort_students(students)
        if matches_search(search, s.name, s.matricule)
    ]
    return StatusGridResponse(labels=LABELS, rows=rows)


def _export_rows(grid: StatusGridResponse) -> List[List[str]]:
    table = [EXPORT_HEADERS + grid.labels]
    for row in grid.rows:
        table.append(
            [row.matricule, row.name, row.class_name]
            + [PAYMENT_STATUS_LABELS[row.statuses[label]] for label in grid.labels]
        )
    return table


def grid_to_csv(grid: StatusGridResponse) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(_export_rows(grid))
    return buf.getvalue()


def grid_to_xlsx(grid: StatusGridResponse) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Suivi paiements"
    table = _export_rows(grid)
    ws.append(table[0])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row, values in zip(grid.rows, table[1:]):
        ws.append(values)
        for offset, label in enumerate(grid.labels):
            ws.cell(row=ws.max_row, column=len(EXPORT_HEADERS) + 1 + offset).fill = _XLSX_FILLS[row.statuses[label]]
    ws.freeze_panes = "D2"
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()
