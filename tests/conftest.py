import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from eventboard.core import clock
from eventboard.core.database import database as app_database
from eventboard.core.migrations import run_migrations
from eventboard.models.event import Event

FROZEN_NOW = 1_700_000_000


@pytest.fixture
def database_url(tmp_path):
    """Fresh SQLite file per test"""
    return f"sqlite+aiosqlite:///{tmp_path / 'eventboard.db'}"


@pytest.fixture
def missing_database_url(tmp_path):
    """SQLite cannot create a file inside a directory that does not exist"""
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'eventboard.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """The process-wide pool, connected to a fresh migrated database"""
    await app_database.connect(database_url, pool_size=5, pool_timeout=5.0)
    await run_migrations(app_database)
    yield app_database
    await app_database.disconnect()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    from eventboard.main import app

    # ASGITransport does not run the lifespan; the database fixture stands in for it
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr(clock, "unix_now", lambda: FROZEN_NOW)
    return FROZEN_NOW


def event_state(event: Event) -> dict:
    return {column.name: getattr(event, column.name) for column in Event.__table__.columns}
