from datetime import timedelta

import jwt
import pytest

from daylog.auth.config import AuthConfig
from daylog.auth.server import create_app, main


@pytest.fixture
def client():
    config = AuthConfig(
        port="8080",
        db_path=":memory:",
        jwt_secret="secret",
        access_ttl=timedelta(seconds=900),
        refresh_ttl=timedelta(hours=24),
    )
    return create_app(config).test_client()


def test_full_flow(client):
    password = "password"
    creds = {"username": "carol", "password": password}
    assert client.post("/api/v1/auth/register", json=creds).status_code == 201
    body = client.post("/api/v1/auth/login", json=creds).get_json()
    claims = jwt.decode(body["access_token"], "secret", algorithms=["HS256"])
    assert claims["sub"] == "\x01"
    refreshed = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": body["refresh_token"]}
    ).get_json()
    claims = jwt.decode(refreshed["access_token"], "secret", algorithms=["HS256"])
    assert claims["sub"] == "1"
    out = client.post("/api/v1/auth/logout", json={"refresh_token": refreshed["refresh_token"]})
    assert out.status_code == 204


def test_get_not_allowed(client):
    assert client.get("/api/v1/auth/login").status_code == 405


def test_main_without_secret_exits(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1