from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from neocoffee.main import create_app
from neocoffee.shared.config.settings import Settings

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "Minad123!"


def order_payload(**overrides):
    payload = {
        "vevo_nev": "Teszt",
        "telefon": "+36301234567",
        "email": "t@example.com",
        "iranyitoszam": "1051",
        "telepules": "Budapest",
        "utca_hazszam": "Fő utca 1.",
        "items": [
            {"termek_nev": "Cappuccino", "termek_ar": 850, "mennyiseg": 2, "tej": "Oat", "cukor": "1 spoon"}
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret_key="test-secret",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        seed_catalog=False,
        rate_limit_enabled=False,
        metrics_enabled=False,
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def db(app):
    async with app.state.database.sessionmaker() as session:
        yield session


@pytest.fixture
async def admin_headers(client):
    resp = await client.post(
        "/api/admin/login",
        json={"felhasznalonev": ADMIN_USERNAME, "jelszo": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@asynccontextmanager
async def serve(settings):
    """Runs a separate app (lifespan included) for tests that need non-default settings."""
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
