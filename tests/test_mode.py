from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_set_mode_sets_cookie():
    r = client.post("/api/mode", json={"mode": " Learning "})
    assert r.status_code == 200
    assert r.json() == {"mode": "learning", "label": "Nauka"}
    assert r.cookies.get("mg_mode") == "learning"
    assert "samesite=strict" in r.headers["set-cookie"].lower()


def test_set_mode_legacy_key_and_locale():
    r = client.post("/api/mode", params={"locale": "en"}, json={"Mode": "normal"})
    assert r.status_code == 200
    assert r.json() == {"mode": "normal", "label": "Game"}


def test_set_mode_missing_400():
    r = client.post("/api/mode", json={})
    assert r.status_code == 400


def test_set_mode_unknown_400():
    r = client.post("/api/mode", json={"mode": "turbo"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid mode"
