"""
Tests for the Wellspring HTTP API.
"""
from src.core.achievements import RULE_CATALOG

HEADERS = {"X-User-Id": "user-1"}


def test_health(test_client):
    response = test_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "initialized": True}


def test_missing_user_header(test_client):
    response = test_client.get("/api/level")
    assert response.status_code == 401


def test_log_mood_unlocks_first_entry(test_client):
    response = test_client.post("/api/moods", json={"mood": 7, "stress_level": "medium"}, headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["event"]["mood"] == 7
    assert data["event"]["ai_response_text"]
    assert [a["rule_id"] for a in data["new_achievements"]] == ["first_entry"]
    assert data["level"]["points"] == 10


def test_log_mood_validates_range(test_client):
    response = test_client.post("/api/moods", json={"mood": 12, "stress_level": "low"}, headers=HEADERS)
    assert response.status_code == 422


def test_log_mood_validates_stress_level(test_client):
    response = test_client.post("/api/moods", json={"mood": 5, "stress_level": "extreme"}, headers=HEADERS)
    assert response.status_code == 422


def test_list_moods(test_client):
    test_client.post("/api/moods", json={"mood": 4, "stress_level": "high"}, headers=HEADERS)
    test_client.post("/api/moods", json={"mood": 6, "stress_level": "low"}, headers=HEADERS)

    response = test_client.get("/api/moods", headers=HEADERS)

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert test_client.get("/api/moods", headers={"X-User-Id": "someone-else"}).json() == []


def test_check_is_idempotent(test_client):
    test_client.post("/api/moods", json={"mood": 7, "stress_level": "medium", "journal_text": "hi"},
                     headers=HEADERS)

    response = test_client.post("/api/achievements/check", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == []


def test_achievements_listing(test_client):
    test_client.post("/api/moods", json={"mood": 7, "stress_level": "medium"}, headers=HEADERS)

    response = test_client.get("/api/achievements", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert [a["id"] for a in data] == [r.id for r in RULE_CATALOG]
    earned = [a["id"] for a in data if a["earned"]]
    assert earned == ["first_entry"]


def test_level_and_stats(test_client):
    test_client.post("/api/moods", json={"mood": 9, "stress_level": "low", "journal_text": "Great"},
                     headers=HEADERS)

    level = test_client.get("/api/level", headers=HEADERS).json()
    stats = test_client.get("/api/stats", headers=HEADERS).json()

    assert level == {"level": 1, "points": 25, "next_level_points": 100, "progress": 25.0}
    assert stats["total_entries"] == 1
    assert stats["current_streak"] == 1
    assert stats["journal_entries"] == 1
