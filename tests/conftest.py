import os
import pytest
from fastapi.testclient import TestClient

from staff_registry.db.database import ConnectionProvider, get_provider
from staff_registry.db.repositories.records import (
    customer_store,
    employee_store,
    external_employee_store,
)

# Keep the environment from pointing tests at a real server
_DB_ENV_VARS = [
    'DATABASE_URL',
    'REGISTRY_DB_HOST',
    'REGISTRY_DB_PORT',
    'REGISTRY_DB_NAME',
    'REGISTRY_DB_USER',
    'REGISTRY_DB_PASSWORD',
    'REGISTRY_DB_DRIVER',
]


@pytest.fixture(autouse=True)
def _isolated_db_env(monkeypatch):
    for var in _DB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_provider.cache_clear()
    yield
    get_provider.cache_clear()


@pytest.fixture
def sqlite_url(tmp_path):
    # File-backed so each NullPool connection sees the same data
    return f"sqlite+pysqlite:///{os.path.join(tmp_path, 'registry.db')}"


@pytest.fixture
def provider(sqlite_url):
    p = ConnectionProvider(sqlite_url)
    p.create_schema()
    try:
        yield p
    finally:
        p.dispose()


@pytest.fixture
def employees(provider):
    return employee_store(provider)


@pytest.fixture
def external_employees(provider):
    return external_employee_store(provider)


@pytest.fixture
def customers(provider):
    return customer_store(provider)


@pytest.fixture
def client(provider):
    from staff_registry.api.main import app

    app.dependency_overrides[get_provider] = lambda: provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_provider, None)
