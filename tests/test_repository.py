import logging
import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from cashier.core.exceptions import StorageError
from cashier.db.repository import SqlAlchemyRepository, get_repository
from cashier.main import app


class _BrokenSession:
    """Stands in for an AsyncSession whose database went away."""

    def __init__(self) -> None:
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def get(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.mark.asyncio
async def test_failures_surface_as_storage_error(caplog) -> None:
    session = _BrokenSession()
    repo = SqlAlchemyRepository(session)
    with caplog.at_level(logging.ERROR, logger="cashier"):
        with pytest.raises(StorageError) as exc:
            await repo.list_payments()
    assert exc.value.status_code == 503
    assert exc.value.message == "Could not list payments"
    assert session.rolled_back
    assert "Storage failure while trying to list payments" in caplog.text


@pytest.mark.asyncio
async def test_storage_error_maps_to_503(client: AsyncClient) -> None:
    async def broken_repository():
        return SqlAlchemyRepository(_BrokenSession())

    app.dependency_overrides[get_repository] = broken_repository
    try:
        resp = await client.get("/api/v1/status/grid")
    finally:
        app.dependency_overrides.pop(get_repository, None)
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Could not list students"


@pytest.mark.asyncio
async def test_remainder_update_round_trip(repo) -> None:
    student = await repo.insert_student(matricule="CM2-001", name="Awa Ndong", class_name="CM2")
    payment = await repo.insert_payment(
        student_id=student.id,
        student_name=student.name,
        student_matricule=student.matricule,
        months_paid=["Septembre"],
        remainder_month="Octobre",
        remainder_amount=Decimal("5000"),
        amount=Decimal("20000"),
        academic_year="2024-2025",
    )
    assert payment.payment_method == "cash"

    updated = await repo.update_payment_remainder(payment.id, None)
    assert updated.remainder_month is None and updated.remainder_amount is None
    assert await repo.update_payment_remainder(uuid.uuid4(), None) is None

    assert [p.id for p in await repo.list_payments(student_id=student.id)] == [payment.id]
    assert await repo.delete_payment(payment.id) is True
    assert await repo.delete_payment(payment.id) is False
