import random

import pytest
from fastapi.testclient import TestClient

from deps.game import get_rng
from main import app
from settings import GameSettings, get_settings

client = TestClient(app)


@pytest.fixture(autouse=True)
def seeded_rng():
    app.dependency_overrides[get_rng] = lambda: random.Random(1234)
    yield
    app.dependency_overrides.pop(get_rng, None)


def test_root_ok():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_get_question_ok():
    r = client.get("/api/multiplication/question", params={"level": 20})
    assert r.status_code == 200
    q = r.json()
    assert q["level"] == 20
    assert 1 <= q["a"] <= 10 and 1 <= q["b"] <= 10
    assert q["a"] * q["b"] <= 20


def test_get_question_skips_solved():
    solved = ";".join(f"{a}-{b}" for a in range(1, 11) for b in range(1, 11) if (a, b) != (7, 8))
    r = client.get("/api/multiplication/question", params={"level": 100, "solved": solved})
    assert r.status_code == 200
    assert (r.json()["a"], r.json()["b"]) == (7, 8)


def test_get_question_invalid_level_400():
    r = client.get("/api/multiplication/question", params={"level": 7})
    assert r.status_code == 400
    assert "Invalid level" in r.json()["detail"]


def test_check_answer():
    r = client.post("/api/multiplication/answer", json={"a": 3, "b": 4, "user_answer": 12})
    assert r.status_code == 200
    assert r.json() == {"is_correct": True, "correct": 12}

    r = client.post("/api/multiplication/answer", json={"a": 3, "b": 4, "user_answer": 13})
    assert r.json() == {"is_correct": False, "correct": 12}


def test_check_answer_rejects_non_integer():
    r = client.post("/api/multiplication/answer", json={"a": 3, "b": 4, "user_answer": "abc"})
    assert r.status_code == 422


def test_round_flow():
    r = client.post("/api/game/round", json={})
    assert r.status_code == 200
    s = r.json()
    assert s["level"] == 20
    assert s["attempts_left"] == 3
    assert s["required_answers"] == 10
    assert s["question_text"] == f"{s['a']} × {s['b']}"
    assert s["answer_checked"] is False

    s["user_answer"] = str(s["a"] * s["b"])
    r = client.post("/api/game/round", json=s)
    assert r.status_code == 200
    s = r.json()
    assert s["streak"] == 1
    assert s["progress"] == 1
    assert s["elapsed_text"].endswith("sek")


def test_round_wrong_answer_then_skip():
    s = client.post("/api/game/round", json={"level": 50}).json()
    a, b = s["a"], s["b"]
    s["user_answer"] = str(a * b + 1)
    s = client.post("/api/game/round", json=s).json()
    assert s["is_correct"] is False
    assert s["correct_answer"] == a * b
    assert s["attempts_left"] == 2

    s["next_question"] = True
    s = client.post("/api/game/round", json=s).json()
    assert s["answer_checked"] is False
    assert s["attempts_left"] == 2


def test_round_malformed_answer_400():
    s = client.post("/api/game/round", json={}).json()
    s["user_answer"] = "2, 9"
    r = client.post("/api/game/round", json=s)
    assert r.status_code == 400


def test_round_malformed_history_400():
    s = client.post("/api/game/round", json={}).json()
    s["user_answer"] = "1"
    s["history_raw"] = "not json"
    r = client.post("/api/game/round", json=s)
    assert r.status_code == 400


def test_round_invalid_level_400():
    r = client.post("/api/game/round", json={"level": 33})
    assert r.status_code == 400


def test_round_english_elapsed_text():
    r = client.post("/api/game/round", params={"locale": "en"}, json={})
    assert r.json()["elapsed_text"] == "0 sec"


def test_round_mode_cookie_overrides_session():
    c = TestClient(app)
    c.cookies.set("mg_mode", "learning")
    r = c.post("/api/game/round", json={"mode": "normal"})
    assert r.status_code == 200
    assert r.json()["mode"] == "learning"


def test_round_unlimited_attempts_from_settings():
    app.dependency_overrides[get_settings] = lambda: GameSettings(levels={20}, initial_attempts=0)
    try:
        s = client.post("/api/game/round", json={}).json()
        assert s["attempts_unlimited"] is True
        s["user_answer"] = str(s["a"] * s["b"] + 1)
        s = client.post("/api/game/round", json=s).json()
        assert s["attempts_left"] == 0
        assert s["game_lost"] is False
    finally:
        app.dependency_overrides.pop(get_settings, None)


def test_round_question_outside_level_400():
    s = client.post("/api/game/round", json={}).json()
    s.update({"a": 3, "b": 0, "user_answer": "0"})
    r = client.post("/api/game/round", json=s)
    assert r.status_code == 400
    assert "not a question of level" in r.json()["detail"]
