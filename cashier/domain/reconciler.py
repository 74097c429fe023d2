"""
Payment status reconciliation.

A (student, calendar label) cell is:
- paid: some payment lists the label in months_paid and does not itself leave
  a positive remainder on that label;
- partial: otherwise, some payment leaves a positive remainder on the label;
- unpaid: neither.

Paid wins across records, so a later full payment overrides an earlier partial one.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union
from uuid import UUID

from cashier.core.enums import PaymentStatus
from cashier.core.models import Payment, Student

IndexKey = Union[UUID, str]


def normalize_name(name: Optional[str]) -> str:
    """Case-insensitive, whitespace-insensitive match key for student names."""
    if not name:
        return ""
    return " ".join(name.split()).casefold()


def _label_value(label) -> str:
    return getattr(label, "value", label)


def _owes_on(payment: Payment, label: str) -> bool:
    amount = payment.remainder_amount
    return payment.remainder_month == label and amount is not None and amount > 0


def label_status(label, student_payments: Iterable[Payment]) -> PaymentStatus:
    """Status of one label over payments already filtered to a single student."""
    label = _label_value(label)
    partial = False
    for p in student_payments:
        owes = _owes_on(p, label)
        if label in (p.months_paid or []) and not owes:
            return PaymentStatus.paid
        if owes:
            partial = True
    return PaymentStatus.partial if partial else PaymentStatus.unpaid


def payment_status(student_name: str, label, payments: Iterable[Payment]) -> PaymentStatus:
    key = normalize_name(student_name)
    return label_status(label, (p for p in payments if normalize_name(p.student_name) == key))


def index_payments(payments: Iterable[Payment]) -> Dict[IndexKey, List[Payment]]:
    """Group a ledger by student id, or by normalised name for payments without one."""
    index: Dict[IndexKey, List[Payment]] = defaultdict(list)
    for p in payments:
        index[p.student_id if p.student_id is not None else normalize_name(p.student_name)].append(p)
    return index


def student_payments(student: Student, index: Dict[IndexKey, List[Payment]]) -> List[Payment]:
    return index.get(student.id, []) + index.get(normalize_name(student.name), [])


def status_row(
    student: Student,
    labels: Sequence,
    index: Dict[IndexKey, List[Payment]],
) -> List[Tuple[str, PaymentStatus]]:
    own = student_payments(student, index)
    return [(_label_value(label), label_status(label, own)) for label in labels]
