import pytest
from fastapi.testclient import TestClient

from resource_service.api.main import create_app
from resource_service.db.database import Database
from resource_service.services import reset_price_table_for_tests
from resource_service.utils.settings import Settings, refresh_settings_cache

_ENV_VARS = (
    "DATABASE_URL",
    "PORT",
    "HOST",
    "LOG_LEVEL",
    "APP_ENV",
    "CORS_ALLOWED_ORIGINS",
    "SQL_ECHO",
    "PRICE_FEED_URL",
    "PRICE_FEED_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Clear env + cached settings/prices for each test to avoid cross-contamination."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    refresh_settings_cache()
    reset_price_table_for_tests()
    yield
    refresh_settings_cache()
    reset_price_table_for_tests()


@pytest.fixture
def database():
    database = Database.in_memory()
    database.create_all()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+pysqlite:///:memory:", environment="test")


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app):
    # Unhandled errors must come back as 500 responses instead of being re-raised
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
