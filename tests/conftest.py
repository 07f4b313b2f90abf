import httpx
import pytest

from cartelera.core.config import Settings
from cartelera.main import create_app


def make_settings(database_url: str, **overrides) -> Settings:
    return Settings(database_url=database_url, otel_enabled=False, **overrides)


@pytest.fixture
def store_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'cartelera.db'}"


@pytest.fixture
def missing_store_url(tmp_path) -> str:
    # sqlite cannot create a file inside a directory that does not exist
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'cartelera.db'}"


@pytest.fixture
def settings_overrides() -> dict:
    return {}


@pytest.fixture
async def app(store_url, settings_overrides):
    app = create_app(make_settings(store_url, **settings_overrides))
    async with app.state.database.engine.begin() as conn:
        await conn.run_sync(app.state.database.listings.create)

    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def offline_client(missing_store_url):
    """App started with DB_FAIL_FAST=false against a store that cannot be reached."""
    app = create_app(make_settings(missing_store_url, db_fail_fast=False))
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
