import pytest
from fastapi.testclient import TestClient

from student_service.core.config import Settings
from student_service.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        'DATABASE_URL': 'sqlite://',
        'DB_CREATE_TABLES': True,
        'BACKEND_CORS_ORIGINS': [],
        'LOG_LEVEL': 'WARNING',
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    """Fresh in-memory SQLite database for every test."""
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client):
    session = client.app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def alice() -> dict:
    return {
        'name': 'Alice',
        'domain': 'Computer Science',
        'gpa': 3.8,
        'email': 'alice@example.com',
    }
