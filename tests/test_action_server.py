from datetime import datetime, timedelta

import pytest

from daylog.action.config import ActionConfig
from daylog.action.server import create_app, main


@pytest.fixture
def client(tmp_path):
    config = ActionConfig(
        port="8081",
        db_path=str(tmp_path / "action.db"),
        cache_ttl=timedelta(seconds=60),
        log_level="info",
    )
    return create_app(config).test_client()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert datetime.fromisoformat(body["time"]).tzinfo is not None


def test_categories_round_trip(client):
    created = client.post("/api/v1/categories", json={"name": "sport"})
    assert created.status_code == 201
    assert client.get("/api/v1/categories").get_json() == [created.get_json()]


def test_actions_round_trip(client):
    created = client.post("/api/v1/days/2024-05-01/actions", json={})
    assert created.status_code == 201
    listed = client.get("/api/v1/days/2024-05-01/actions")
    assert listed.status_code == 200
    assert listed.get_json() == [created.get_json()]
    assert client.get("/api/v1/days/2024-05-02/actions").get_json() == []


def test_bad_date_on_routed_endpoint(client):
    response = client.get("/api/v1/days/bad/actions")
    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid date format"}


def test_update_routes_are_not_registered(client):
    assert client.put("/api/v1/categories/1", json={"name": "x"}).status_code == 404
    assert client.delete("/api/v1/days/2024-05-01/actions/1").status_code == 404


def test_create_app_fails_for_unopenable_database(tmp_path):
    config = ActionConfig(
        port="8081",
        db_path=str(tmp_path / "missing" / "action.db"),
        cache_ttl=timedelta(seconds=60),
        log_level="info",
    )
    with pytest.raises(Exception) as info:
        create_app(config)
    assert "unable to open" in str(info.value)


def test_main_exits_on_bad_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CACHE_TTL_SEC", "abc")
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1


def test_main_exits_when_database_cannot_open(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CACHE_TTL_SEC", "60")
    monkeypatch.setenv("ACTION_DB_PATH", str(tmp_path / "missing" / "action.db"))
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1