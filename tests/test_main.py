"""Tests for the URL Shortener HTTP API."""

import re
from unittest.mock import MagicMock

import pytest

from url_shortener.core.database import Database, get_db
from url_shortener.core.exceptions import StoreUnavailableError
from url_shortener.main import app

SHORT_URL_PATTERN = re.compile(r"^http://localhost:8080/[0-9A-Za-z]{1,10}$")


@pytest.fixture
def failing_db():
    """A store whose every query fails."""
    db = MagicMock(spec=Database)
    db.find_by_original_url.side_effect = StoreUnavailableError("database is locked")
    db.find_by_short_code.side_effect = StoreUnavailableError("database is locked")
    db.count.side_effect = StoreUnavailableError("database is locked")
    return db


def shorten(client, original_url):
    return client.post("/api/shorten", json={"originalUrl": original_url})


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_check_store_down(self, client, failing_db):
        app.dependency_overrides[get_db] = lambda: failing_db
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy"}


class TestShortenEndpoint:
    """Tests for POST /api/shorten endpoint."""

    def test_shorten_success(self, client):
        """Test shortening a valid URL."""
        response = shorten(client, "https://www.google.com")
        assert response.status_code == 200
        data = response.json()
        assert SHORT_URL_PATTERN.match(data["shortUrl"])
        assert data["shortUrl"].endswith("/" + data["shortCode"])
        assert data["originalUrl"] == "https://www.google.com"

    def test_shorten_same_url_twice(self, client, test_db):
        """Shortening a URL again returns the same short URL without a new row."""
        first = shorten(client, "https://www.google.com").json()
        second = shorten(client, "https://www.google.com").json()
        assert first["shortUrl"] == second["shortUrl"]
        assert test_db.count() == 1

    def test_shorten_different_urls(self, client, test_db):
        first = shorten(client, "https://example.com/a").json()
        second = shorten(client, "https://example.com/b").json()
        assert first["shortCode"] != second["shortCode"]
        assert test_db.count() == 2

    @pytest.mark.parametrize(
        "original_url",
        ["bad-url", "", "   ", None, "ftp://example.com", "http://"],
    )
    def test_shorten_invalid_url(self, client, test_db, original_url):
        """Invalid URLs are rejected with 400 and nothing is stored."""
        response = shorten(client, original_url)
        assert response.status_code == 400
        assert response.json()["error_code"] == "400"
        assert test_db.count() == 0

    def test_shorten_missing_url(self, client):
        response = client.post("/api/shorten", json={})
        assert response.status_code == 400

    def test_shorten_non_string_url(self, client, test_db):
        """A number in place of the URL is a bad request."""
        response = client.post("/api/shorten", json={"originalUrl": 123})
        assert response.status_code == 400
        assert response.json()["error_code"] == "400"
        assert test_db.count() == 0

    def test_shorten_body_not_an_object(self, client):
        response = client.post("/api/shorten", json="https://example.com")
        assert response.status_code == 400
        assert response.json()["error_code"] == "400"

    def test_shorten_malformed_json(self, client):
        response = client.post(
            "/api/shorten",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "400"

    def test_shorten_store_unavailable(self, client, failing_db):
        app.dependency_overrides[get_db] = lambda: failing_db
        response = shorten(client, "https://example.com")
        assert response.status_code == 503
        assert response.json()["error_code"] == "503"


class TestExpandEndpoint:
    """Tests for GET /api/expand/{short_code} endpoint."""

    def test_expand_success(self, client):
        """Test expanding a short code created through the API."""
        original_url = "https://www.example.com"
        short_code = shorten(client, original_url).json()["shortCode"]

        response = client.get(f"/api/expand/{short_code}")
        assert response.status_code == 200
        assert response.json() == {"originalUrl": original_url}

    @pytest.mark.parametrize("short_code", ["nonexistent", "abc", "test%20code"])
    def test_expand_not_found(self, client, short_code):
        """Unknown or malformed short codes are 404."""
        response = client.get(f"/api/expand/{short_code}")
        assert response.status_code == 404
        assert response.json()["error_code"] == "404"


class TestRedirectEndpoint:
    """Tests for GET /{short_code} endpoint."""

    def test_complete_workflow(self, client):
        """Shorten, expand and follow a short link."""
        original_url = "https://www.example.com/very/long/path?param=value"
        data = shorten(client, original_url).json()
        short_code = data["shortUrl"].rsplit("/", 1)[1]

        expand_response = client.get(f"/api/expand/{short_code}")
        assert expand_response.json()["originalUrl"] == original_url

        response = client.get(f"/{short_code}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == original_url

    def test_redirect_not_found(self, client):
        """Test redirect for non-existent short code."""
        response = client.get("/nonexistent", follow_redirects=False)
        assert response.status_code == 404

    def test_redirect_unknown_valid_code(self, client):
        response = client.get("/abc123", follow_redirects=False)
        assert response.status_code == 404
