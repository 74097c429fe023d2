import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_record_payment_copies_student_identity(client: AsyncClient, create_student, record_payment) -> None:
    student = await create_student("Awa Ndong", "CM2")
    payment = await record_payment(
        student["id"],
        ["Septembre", "Octobre", "Septembre"],
        amount="50000",
        receipt_number=" 0042 ",
        payment_method="mobile",
    )

    assert payment["student_id"] == student["id"]
    assert payment["student_name"] == "Awa Ndong"
    assert payment["student_matricule"] == "CM2-001"
    assert payment["months_paid"] == ["Septembre", "Octobre"]
    assert payment["remainder"] is None
    assert Decimal(payment["amount"]) == Decimal("50000")
    assert payment["payment_method"] == "mobile"
    assert payment["receipt_number"] == "0042"

    resp = await client.get(f"/api/v1/payments/{payment['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == payment["id"]


@pytest.mark.asyncio
async def test_record_partial_payment(create_student, record_payment) -> None:
    student = await create_student("Awa Ndong")
    payment = await record_payment(
        student["id"], ["Septembre"], amount="20000", remainder={"month": "Octobre", "amount": "5000"}
    )
    assert payment["remainder"]["month"] == "Octobre"
    assert Decimal(payment["remainder"]["amount"]) == Decimal("5000")


@pytest.mark.asyncio
async def test_record_payment_validation(client: AsyncClient, create_student) -> None:
    student = await create_student("Awa Ndong")
    base = {"student_id": student["id"], "months_paid": ["Mai"], "amount": "1000", "academic_year": "2024-2025"}

    assert (await client.post("/api/v1/payments", json={**base, "months_paid": []})).status_code == 422
    assert (await client.post("/api/v1/payments", json={**base, "months_paid": ["Juin"]})).status_code == 422
    assert (await client.post("/api/v1/payments", json={**base, "amount": "-1"})).status_code == 422
    zero_remainder = {**base, "remainder": {"month": "Mai", "amount": "0"}}
    assert (await client.post("/api/v1/payments", json=zero_remainder)).status_code == 422

    resp = await client.post("/api/v1/payments", json={**base, "student_id": str(uuid.uuid4())})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_search_filter_and_sort(client: AsyncClient, create_student, record_payment) -> None:
    awa = await create_student("Awa Ndong", "CM2")
    paul = await create_student("Paul Mba", "CP1")
    await record_payment(awa["id"], ["Septembre"], amount="10000", date="2024-09-05T08:00:00Z")
    await record_payment(paul["id"], ["Septembre"], amount="30000", date="2024-09-06T08:00:00Z")
    await record_payment(
        awa["id"], ["Octobre"], amount="20000", date="2024-10-05T08:00:00Z",
        remainder={"month": "Novembre", "amount": "5000"},
    )

    resp = await client.get("/api/v1/payments")
    data = resp.json()
    assert data["count"] == 3
    assert Decimal(data["total_amount"]) == Decimal("60000")
    assert [Decimal(p["amount"]) for p in data["payments"]] == [Decimal("20000"), Decimal("30000"), Decimal("10000")]

    resp = await client.get("/api/v1/payments", params={"sort_by": "amount"})
    assert [Decimal(p["amount"]) for p in resp.json()["payments"]] == [Decimal("30000"), Decimal("20000"), Decimal("10000")]

    resp = await client.get("/api/v1/payments", params={"sort_by": "student"})
    assert [p["student_name"] for p in resp.json()["payments"]][-1] == "Paul Mba"

    resp = await client.get("/api/v1/payments", params={"search": "cp1-"})
    assert [p["student_name"] for p in resp.json()["payments"]] == ["Paul Mba"]

    # the remainder label counts as mentioned
    resp = await client.get("/api/v1/payments", params={"label": "Novembre"})
    data = resp.json()
    assert data["count"] == 1
    assert Decimal(data["total_amount"]) == Decimal("20000")


@pytest.mark.asyncio
async def test_clear_and_set_remainder(client: AsyncClient, create_student, record_payment) -> None:
    student = await create_student("Awa Ndong")
    payment = await record_payment(student["id"], ["Septembre"], remainder={"month": "Octobre", "amount": "5000"})
    url = f"/api/v1/payments/{payment['id']}/remainder"

    resp = await client.patch(url, json={"remainder": None})
    assert resp.status_code == 200
    assert resp.json()["remainder"] is None

    resp = await client.patch(url, json={"remainder": {"month": "Novembre", "amount": "2500"}})
    assert resp.json()["remainder"]["month"] == "Novembre"

    resp = await client.patch(f"/api/v1/payments/{uuid.uuid4()}/remainder", json={"remainder": None})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_history_and_delete(client: AsyncClient, create_student, record_payment) -> None:
    student = await create_student("Awa Ndong")
    other = await create_student("Paul Mba")
    older = await record_payment(student["id"], ["Septembre"], date="2024-09-01T09:00:00Z")
    newer = await record_payment(student["id"], ["Octobre"], date="2024-10-01T09:00:00Z")
    await record_payment(other["id"], ["Septembre"])

    resp = await client.get(f"/api/v1/payments/student/{student['id']}")
    assert [p["id"] for p in resp.json()] == [newer["id"], older["id"]]

    assert (await client.delete(f"/api/v1/payments/{older['id']}")).status_code == 204
    resp = await client.get(f"/api/v1/payments/student/{student['id']}")
    assert [p["id"] for p in resp.json()] == [newer["id"]]
    assert (await client.get(f"/api/v1/payments/{older['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_deleting_student_keeps_payments(client: AsyncClient, create_student, record_payment) -> None:
    student = await create_student("Awa Ndong")
    payment = await record_payment(student["id"], ["Septembre"])

    assert (await client.delete(f"/api/v1/students/{student['id']}")).status_code == 204

    resp = await client.get(f"/api/v1/payments/{payment['id']}")
    assert resp.status_code == 200
    assert resp.json()["student_id"] is None
    assert resp.json()["student_name"] == "Awa Ndong"
