import time

from mentor_admin_api.app.core.config import settings
from mentor_admin_api.app.core.security import create_access_token, decode_access_token


def test_token_round_trip():
    token = create_access_token({"sub": "admin@example.com"})
    payload = decode_access_token(token)
    assert payload["sub"] == "admin@example.com"
    assert payload["exp"] > time.time()


def test_token_signed_with_other_secret_is_rejected(monkeypatch):
    token = create_access_token({"sub": "admin@example.com"})
    monkeypatch.setattr(settings, "secret_key", "another secret")
    assert decode_access_token(token) is None


def test_expired_token_is_rejected(monkeypatch):
    token = create_access_token({"sub": "admin@example.com"}, expires_delta=60)
    monkeypatch.setattr(time, "time", lambda: 10**12)
    assert decode_access_token(token) is None


def test_malformed_tokens_are_rejected():
    assert decode_access_token("not-a-token") is None
    assert decode_access_token("a.b.c") is None
    assert decode_access_token("") is None


def test_expired_token_request_is_unauthorized(client, seed):
    token = create_access_token({"sub": "admin@example.com"}, expires_delta=-10)
    response = client.get("/api/v1/mentors/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
