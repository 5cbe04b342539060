from io import BytesIO

import hireflow.main as main_mod
import hireflow.routers.auth as auth_mod


def test_auth_rate_limit_blocks_excess_requests(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 2)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    payload = {"email": "x@example.com", "password": "bad"}
    r1 = client.post("/auth/login", json=payload)
    r2 = client.post("/auth/login", json=payload)
    r3 = client.post("/auth/login", json=payload)

    assert r1.status_code == 401
    assert r2.status_code == 401
    assert r3.status_code == 429
    assert int(r3.headers["retry-after"]) >= 1


def test_upload_rate_limit_is_separate_from_auth(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    monkeypatch.setattr(main_mod.settings, "rate_limit_upload_per_min", 1)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    client.post("/auth/login", json={"email": "x@example.com", "password": "bad"})
    files = {"file": ("cv.txt", BytesIO(b"x"), "text/plain")}
    first = client.post("/profile/resume", files=files)
    second = client.post("/profile/resume", files=files)
    assert first.status_code == 400
    assert second.status_code == 429


def test_zero_limit_disables_throttling(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 0)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)
    for _ in range(5):
        assert client.post("/auth/login", json={"email": "x@example.com", "password": "bad"}).status_code == 401


def test_get_requests_are_not_limited(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    for _ in range(3):
        assert client.get("/health/live").status_code == 200
