import os
from typing import AsyncGenerator

os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cashier.main import app
from cashier.db.repository import SqlAlchemyRepository
from cashier.db.session import Base, get_db


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test; overrides the FastAPI session dependency."""
    # StaticPool keeps a single connection so every session sees the same in-memory DB
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture()
def repo(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session)


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def create_student(client: AsyncClient):
    async def _create(name: str, class_name: str = "CM2", **extra) -> dict:
        resp = await client.post("/api/v1/students", json={"name": name, "class_name": class_name, **extra})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture()
def record_payment(client: AsyncClient):
    async def _record(student_id: str, months, amount="25000", **extra) -> dict:
        payload = {
            "student_id": student_id,
            "months_paid": list(months),
            "amount": amount,
            "academic_year": "2024-2025",
            **extra,
        }
        resp = await client.post("/api/v1/payments", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _record
