"""Shared fixtures for URL Shortener Service tests."""

from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from url_shortener.core.database import Database, get_db
from url_shortener.main import app
from url_shortener.services.url_service import UrlShortenerService

BASE_URL = "http://localhost:8080"


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = Database(":memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def service(test_db):
    """Create a shortening service over the test database."""
    return UrlShortenerService(store=test_db, base_url=BASE_URL)


@pytest.fixture
def client(test_db):
    """Create a test client bound to the test database."""
    # Set the dependency override BEFORE creating TestClient
    # so endpoint requests use the test database
    app.dependency_overrides[get_db] = lambda: test_db

    # The default lifespan would initialize the global database
    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()
