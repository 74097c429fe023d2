"""Payment: one cashier transaction covering one or more calendar labels."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, Numeric, String, Uuid

from cashier.db.session import Base


class Payment(Base):
    """
    Immutable once recorded, except for the remainder pair which is cleared
    when a later payment settles the owed balance.
    student_name and student_matricule are copied from the student at
    recording time; student_id is nulled if the student is deleted.
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="chk_payment_amount_non_negative"),
        CheckConstraint(
            "(remainder_month IS NULL AND remainder_amount IS NULL)"
            " OR "
            "(remainder_month IS NOT NULL AND remainder_amount IS NOT NULL)",
            name="chk_payment_remainder_pair",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True)
    student_name = Column(String(255), nullable=False, index=True)
    student_matricule = Column(String(20), nullable=False)
    months_paid = Column(JSON, nullable=False, default=list)
    remainder_month = Column(String(30), nullable=True)
    remainder_amount = Column(Numeric(12, 2), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(20), nullable=False, default="cash")  # cash, transfer, check, mobile
    date = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    academic_year = Column(String(20), nullable=False)
    receipt_number = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
