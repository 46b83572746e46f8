import asyncio
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from outlet_admin.database import Base, get_async_session
from outlet_admin.main import app

OUTLET = "h1"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_room(client):
    def _make_room(room_number="101", price=100, capacity=2, **extra):
        body = {"room_number": room_number, "price": price, "capacity": capacity, **extra}
        response = client.post(f"/api/v1/outlets/{OUTLET}/rooms", json=body)
        assert response.status_code == 201, response.text
        return response.json()
    return _make_room


@pytest.fixture
def book(client, today):
    def _book(room_ids, check_in=None, check_out=None, **extra):
        check_in = check_in or today + timedelta(days=5)
        check_out = check_out or check_in + timedelta(days=3)
        body = {
            "room_ids": room_ids,
            "guest_name": "Asha Verma",
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
            **extra,
        }
        return client.post(f"/api/v1/outlets/{OUTLET}/bookings", json=body)
    return _book
