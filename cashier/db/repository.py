"""
Repository over the student directory and payment ledger.

Services depend on SchoolRepository, never on a database client. Every method
returns a result or raises StorageError.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, List, Optional, Tuple
from uuid import UUID

from fastapi import Depends, status
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.core.exceptions import ServiceError, StorageError
from cashier.core.models import Payment, Student
from cashier.db.session import get_db

logger = logging.getLogger(__name__)

Remainder = Tuple[str, Decimal]


class DuplicateMatriculeError(ServiceError):
    """Insert or update would give two students the same matricule."""

    def __init__(self, matricule: str) -> None:
        super().__init__(f"Matricule {matricule} is already taken", status.HTTP_409_CONFLICT)
        self.matricule = matricule


class SchoolRepository(ABC):
    # --- Students ---
    @abstractmethod
    async def list_students(self, class_name: Optional[str] = None) -> List[Student]: ...

    @abstractmethod
    async def get_student(self, student_id: UUID) -> Optional[Student]: ...

    @abstractmethod
    async def insert_student(self, **fields: Any) -> Student: ...

    @abstractmethod
    async def update_student(self, student_id: UUID, **changes: Any) -> Optional[Student]: ...

    @abstractmethod
    async def delete_student(self, student_id: UUID) -> bool: ...

    # --- Payments ---
    @abstractmethod
    async def list_payments(self, student_id: Optional[UUID] = None) -> List[Payment]: ...

    @abstractmethod
    async def get_payment(self, payment_id: UUID) -> Optional[Payment]: ...

    @abstractmethod
    async def insert_payment(self, **fields: Any) -> Payment: ...

    @abstractmethod
    async def update_payment_remainder(
        self, payment_id: UUID, remainder: Optional[Remainder]
    ) -> Optional[Payment]: ...

    @abstractmethod
    async def delete_payment(self, payment_id: UUID) -> bool: ...


class SqlAlchemyRepository(SchoolRepository):
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _fail(self, action: str) -> StorageError:
        logger.exception("Storage failure while trying to %s", action)
        await self.db.rollback()
        return StorageError(f"Could not {action}")

    # --- Students ---
    async def list_students(self, class_name: Optional[str] = None) -> List[Student]:
        stmt = select(Student)
        if class_name is not None:
            stmt = stmt.where(Student.class_name == class_name)
        stmt = stmt.order_by(Student.class_name, Student.matricule)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError:
            raise await self._fail("list students")
        return list(result.scalars().all())

    async def get_student(self, student_id: UUID) -> Optional[Student]:
        try:
            return await self.db.get(Student, student_id)
        except SQLAlchemyError:
            raise await self._fail("load student")

    async def insert_student(self, **fields: Any) -> Student:
        student = Student(**fields)
        try:
            self.db.add(student)
            await self.db.commit()
            await self.db.refresh(student)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateMatriculeError(fields.get("matricule", ""))
        except SQLAlchemyError:
            raise await self._fail("insert student")
        return student

    async def update_student(self, student_id: UUID, **changes: Any) -> Optional[Student]:
        try:
            student = await self.db.get(Student, student_id)
            if student is None:
                return None
            for key, value in changes.items():
                setattr(student, key, value)
            await self.db.commit()
            await self.db.refresh(student)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateMatriculeError(changes.get("matricule", ""))
        except SQLAlchemyError:
            raise await self._fail("update student")
        return student

    async def delete_student(self, student_id: UUID) -> bool:
        try:
            await self.db.execute(
                update(Payment).where(Payment.student_id == student_id).values(student_id=None)
            )
            result = await self.db.execute(delete(Student).where(Student.id == student_id))
            await self.db.commit()
        except SQLAlchemyError:
            raise await self._fail("delete student")
        return result.rowcount > 0

    # --- Payments ---
    async def list_payments(self, student_id: Optional[UUID] = None) -> List[Payment]:
        stmt = select(Payment)
        if student_id is not None:
            stmt = stmt.where(Payment.student_id == student_id)
        stmt = stmt.order_by(Payment.date.desc())
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError:
            raise await self._fail("list payments")
        return list(result.scalars().all())

    async def get_payment(self, payment_id: UUID) -> Optional[Payment]:
        try:
            return await self.db.get(Payment, payment_id)
        except SQLAlchemyError:
            raise await self._fail("load payment")

    async def insert_payment(self, **fields: Any) -> Payment:
        payment = Payment(**fields)
        try:
            self.db.add(payment)
            await self.db.commit()
            await self.db.refresh(payment)
        except SQLAlchemyError:
            raise await self._fail("insert payment")
        return payment

    async def update_payment_remainder(
        self, payment_id: UUID, remainder: Optional[Remainder]
    ) -> Optional[Payment]:
        try:
            payment = await self.db.get(Payment, payment_id)
            if payment is None:
                return None
            payment.remainder_month, payment.remainder_amount = remainder or (None, None)
            await self.db.commit()
            await self.db.refresh(payment)
        except SQLAlchemyError:
            raise await self._fail("update payment remainder")
        return payment

    async def delete_payment(self, payment_id: UUID) -> bool:
        try:
            result = await self.db.execute(delete(Payment).where(Payment.id == payment_id))
            await self.db.commit()
        except SQLAlchemyError:
            raise await self._fail("delete payment")
        return result.rowcount > 0


async def get_repository(db: AsyncSession = Depends(get_db)) -> SchoolRepository:
    return SqlAlchemyRepository(db)
