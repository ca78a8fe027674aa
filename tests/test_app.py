"""Tests for ui/app.py: HTTP surface over the store and analytics."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from ui.app import app

TODAY = "2026-02-11"


@pytest.fixture
def client(workspace):
    with patch("ui.app.today_str", return_value=TODAY):
        yield TestClient(app)


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_get_data(client):
    data = client.get("/api/data").json()
    assert [h["habitId"] for h in data["habits"]] == ["run", "water", "snack"]
    assert data["badges"][1]["minScore"] == 80


def test_get_legacy_day(client):
    body = client.get("/api/day/2026-02-09").json()
    assert body == {
        "date": "2026-02-09",
        "counts": {"water": 3, "run": 1},
        "locked": False,
        "completedAt": None,
    }


def test_save_and_complete_day(client, workspace):
    resp = client.put(f"/api/day/{TODAY}", json={"counts": {"water": 4}})
    assert resp.status_code == 200
    assert resp.json()["counts"] == {"water": 4}

    resp = client.post(f"/api/day/{TODAY}/complete", json={})
    assert resp.status_code == 200
    assert resp.json()["locked"] is True
    assert resp.json()["completedAt"]

    resp = client.put(f"/api/day/{TODAY}", json={"counts": {"water": 1}})
    assert resp.status_code == 400
    assert resp.json()["detail"]["message"] == "Unable to save day log."


def test_locked_day_unlock_flow(client):
    assert client.put("/api/day/2026-02-10", json={"counts": {}}).status_code == 400
    resp = client.post("/api/day/2026-02-10/unlock")
    assert resp.json()["locked"] is False
    assert client.put("/api/day/2026-02-10", json={"counts": {"water": 9}}).status_code == 200


def test_future_and_invalid_dates(client):
    assert client.put("/api/day/2026-02-12", json={"counts": {"water": 1}}).status_code == 400
    resp = client.get("/api/day/not-a-date")
    assert resp.status_code == 400
    assert "YYYY-MM-DD" in resp.json()["detail"]["details"]


def test_open_day(client):
    assert client.get("/api/day-open").json() == {
        "openDay": {"date": "2026-02-09", "locked": False, "hasProgress": True}
    }


def test_analytics(client):
    data = client.get("/api/analytics", params={"date": "2026-02-10"}).json()
    assert data["generatedForDate"] == "2026-02-10"
    # run 5 + water 2 - snack 2
    assert data["totalScore"] == 5
    # 2026-02-09 missed the snack minimum
    assert data["globalStreak"] == 1
    # 5 of a max positive 6
    assert data["dailyBadge"]["badgeId"] == "gold"


def test_analytics_defaults_to_today(client):
    assert client.get("/api/analytics", params={"date": "garbage"}).json()["generatedForDate"] == TODAY


def test_history(client):
    habits = client.get("/api/analytics/history").json()["habits"]
    water = next(h for h in habits if h["habitId"] == "water")
    assert water["totalCount"] == 5
    assert water["daysActive"] == 2


def test_badge_map(client):
    days = client.get("/api/analytics/badges", params={"start": "2026-02-01", "end": TODAY}).json()["days"]
    assert set(days) == {"2026-02-09", "2026-02-10"}
    assert client.get("/api/analytics/badges", params={"start": "x", "end": TODAY}).status_code == 400


def test_export_csv(client):
    resp = client.get("/api/export/csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]
    assert resp.text.splitlines()[0] == f"Test Export,{TODAY}"
