"""Shared fixtures: every test gets its own SQLite file under tmp_path."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from personal_expense.config import LedgerSettings
from personal_expense.db import Database
from personal_expense.imports.init_categories import initialize
from personal_expense.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database file."""
    return LedgerSettings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db(settings):
    """Initialized and seeded storage handle."""
    database = Database(settings.database_url)
    await database.init()
    assert await initialize(database)
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(db):
    async with db.session() as s:
        yield s


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """HTTP client with lifespan (table creation and seeding) applied."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
