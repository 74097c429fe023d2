"""Dashboard statistics over the whole directory and ledger."""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from cashier.api.v1.payments.service import payment_to_response, to_decimal, as_utc
from cashier.core.enums import SCHOOL_MONTHS, CalendarLabel
from cashier.core.models import Payment
from cashier.db.repository import SchoolRepository
from cashier.domain.reconciler import index_payments, student_payments

from .schemas import DashboardResponse, LabelCoverage

COVERAGE_LABELS = [CalendarLabel.INSCRIPTION, CalendarLabel.REINSCRIPTION] + list(SCHOOL_MONTHS.values())
COVERAGE_LABELS.sort(key=list(CalendarLabel).index)


def current_school_label(today: date) -> Optional[CalendarLabel]:
    """School month for ``today``; None during the June-August break."""
    return SCHOOL_MONTHS.get(today.month)


def week_bounds(today: date):
    """Sunday 00:00 (inclusive) to the next Sunday 00:00 (exclusive), UTC."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    start_dt = datetime.combine(start, time.min, tzinfo=timezone.utc)
    return start_dt, start_dt + timedelta(days=7)


def _students_with_label(ledgers: Dict[UUID, List[Payment]], label: str) -> int:
    return sum(1 for own in ledgers.values() if any(label in (p.months_paid or []) for p in own))


async def compute_dashboard(repo: SchoolRepository, today: Optional[date] = None) -> DashboardResponse:
    today = today or datetime.now(timezone.utc).date()
    students = await repo.list_students()
    payments = await repo.list_payments()
    total_students = len(students)
    index = index_payments(payments)
    ledgers = {s.id: student_payments(s, index) for s in students}

    current = current_school_label(today)
    paid_this_month = _students_with_label(ledgers, current.value) if current else 0

    coverage: List[LabelCoverage] = []
    for label in COVERAGE_LABELS:
        paid = _students_with_label(ledgers, label.value)
        percentage = round(paid / total_students * 100, 1) if total_students else 0.0
        coverage.append(LabelCoverage(label=label.value, students_paid=paid, percentage=percentage))

    start, end = week_bounds(today)
    recent = sorted(
        (p for p in payments if start <= as_utc(p.date) < end),
        key=lambda p: as_utc(p.date),
        reverse=True,
    )

    return DashboardResponse(
        today=today,
        current_label=current.value if current else None,
        total_students=total_students,
        paid_this_month=paid_this_month,
        pending_payments=max(total_students - paid_this_month, 0),
        total_amount=sum((to_decimal(p.amount) for p in payments), Decimal("0")),
        inscriptions=sum(1 for p in payments if CalendarLabel.INSCRIPTION.value in (p.months_paid or [])),
        reinscriptions=sum(1 for p in payments if CalendarLabel.REINSCRIPTION.value in (p.months_paid or [])),
        label_coverage=coverage,
        recent_payments=[payment_to_response(p) for p in recent],
    )
