import pytest
from fastapi.testclient import TestClient

from planner import config, database
from planner.main import app


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the recent-books and settings files at a temporary directory."""
    path = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", path)
    monkeypatch.setattr(config, "RECENT_BOOKS_FILE", path / "recent.json")
    monkeypatch.setattr(config, "SETTINGS_FILE", path / "settings.json")
    return path


@pytest.fixture
def client(tmp_path, config_dir):
    """API client with a fresh book open."""
    with TestClient(app) as test_client:
        response = test_client.post(
            "/api/books/create", json={"path": str(tmp_path / "book.db"), "name": "Test"}
        )
        assert response.status_code == 200
        yield test_client
    database.close_book()


@pytest.fixture
def account_id(client) -> int:
    response = client.post("/api/accounts/", json={
        "name": "Checking",
        "starting_balance": 1000.0,
        "starting_date": "2026-01",
        "planning_horizon_months": 12,
    })
    assert response.status_code == 201
    return response.json()["id"]
