import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["SMTP_HOST"] = ""

import pytest
from httpx import ASGITransport, AsyncClient

from clinic.core.db import build_engine, build_session_maker, get_session, init_db
from clinic.main import app
from clinic.services.seed import seed_demo_data


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_maker(engine):
    maker = build_session_maker(engine)
    async with maker() as session:
        await seed_demo_data(session)
        await session.commit()
    return maker


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def login(client: AsyncClient, email: str, password: str, role: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password, "role": role},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def reception_headers(client):
    return await login(client, "reception@clinic.com", "reception123", "receptionist")


@pytest.fixture
async def physio_headers(client):
    # Dr. Mike Johnson, id "3", assigned to Sarah Williams
    return await login(client, "physio2@clinic.com", "physio123", "physiotherapist")


@pytest.fixture
async def patient_headers(client):
    return await login(client, "patient@clinic.com", "patient123", "patient")


@pytest.fixture
async def admin_headers(client):
    return await login(client, "admin@clinic.com", "admin123", "admin")


@pytest.fixture
async def other_physio_headers(client):
    # Dr. Sarah Wilson, id "2"
    return await login(client, "physio1@clinic.com", "physio123", "physiotherapist")
