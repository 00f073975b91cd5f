from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_backend, get_clock
from api.main import create_app
from backend.config import Settings
from backend.exceptions import AuthError, NetworkError, NotFoundError
from models import (
    AnalysisResult,
    ComparisonResponse,
    ComparisonStats,
    CourseSummary,
    Goal,
    Round,
    SharedContent,
)

NOW = datetime(2026, 6, 15, 12, 0)


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def manager():
    manager = MagicMock()
    manager.rounds.get_rounds.return_value = [
        Round(id="r1", total_score=82, date=datetime(2026, 6, 1), course="Home", par=72, putts=30,
              fairways_hit=7, total_fairways=14, greens_in_regulation=9, total_greens=18),
        Round(id="r2", total_score=90, date=datetime(2026, 5, 1), course="Away", par=72, putts=36),
    ]
    manager.goals.list_goals.return_value = [Goal(id="g1", type="score", target_value=80, start_value=90)]
    manager.stats.get_comparison.return_value = ComparisonResponse(
        user_stats=ComparisonStats(avg_score=86.0, avg_putts=33.0, fairway_hit_percentage=50.0,
                                   gir_percentage=50.0, round_count=2),
        global_stats=ComparisonStats(avg_score=92.0, avg_putts=34.0, fairway_hit_percentage=45.0,
                                     gir_percentage=30.0, round_count=500),
    )
    manager.coaching.analyze_round.return_value = AnalysisResult(analysis="Solid iron play.")
    return manager


@pytest.fixture
def app(manager):
    app = create_app(Settings())
    app.dependency_overrides[get_backend] = lambda: manager
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


# ================================================================
# Statistics
# ================================================================

def test_statistics_ready(client):
    resp = client.get("/api/statistics")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ready"
    assert body["summary"]["totalRounds"] == 2
    assert body["summary"]["averagePutts"] == 33
    assert len(body["trend"]) == 12
    assert body["form"]["scoringAverage"]["value"] == 86


def test_statistics_empty_is_not_an_error(client, manager):
    manager.rounds.get_rounds.return_value = []
    resp = client.get("/api/statistics")

    assert resp.status_code == 200
    assert resp.json()["status"] == "empty"
    assert resp.json()["summary"] is None


def test_statistics_backend_failures(client, manager):
    manager.rounds.get_rounds.side_effect = AuthError("Unauthorized", 401)
    assert client.get("/api/statistics").status_code == 401

    manager.rounds.get_rounds.side_effect = NetworkError("timed out")
    resp = client.get("/api/statistics")
    assert resp.status_code == 502
    assert "timed out" in resp.json()["detail"]


def test_trend_endpoint(client, manager):
    points = client.get("/api/statistics/trend").json()
    assert len(points) == 12
    assert points[-1]["month"] == "Jun 2026"

    manager.rounds.get_rounds.return_value = []
    assert client.get("/api/statistics/trend").json() == []


# ================================================================
# Comparison
# ================================================================

def test_comparison_with_filters(client, manager):
    resp = client.get("/api/comparison", params={"fromDate": "2026-01-01", "showGlobal": "false"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["filters"]["fromDate"] == "2026-01-01"
    assert body["showGlobal"] is False
    assert body["globalStats"] is None
    assert [row["metricName"] for row in body["rows"]][0] == "Avg Score"
    assert all(row["globalValue"] is None for row in body["rows"])
    args = manager.stats.get_comparison.call_args[0]
    assert str(args[0]) == "2026-01-01"
    assert args[1] is None


def test_comparison_rejects_inverted_range(client):
    resp = client.get("/api/comparison", params={"fromDate": "2026-05-01", "toDate": "2026-01-01"})
    assert resp.status_code == 422


# ================================================================
# Goals
# ================================================================

def test_list_goals(client):
    body = client.get("/api/goals").json()
    assert body["status"] == "ready"
    goal = body["goals"][0]
    assert goal["label"] == "Average Score"
    assert goal["currentValue"] == 86
    assert goal["progress"] == pytest.approx(40)
    assert goal["formattedTarget"] == "80"


def test_create_goal(client, manager):
    manager.goals.create_goal.return_value = Goal(id="g2", type="putts", target_value=30, start_value=36)

    resp = client.post("/api/goals", json={"type": "putts", "targetValue": 30})

    assert resp.status_code == 201
    assert resp.json()["progress"] == pytest.approx(50)
    sent = manager.goals.create_goal.call_args[0][0]
    assert sent.target_value == 30


def test_create_goal_unknown_type(client, manager):
    resp = client.post("/api/goals", json={"type": "eagles", "targetValue": 3})
    assert resp.status_code == 422
    manager.goals.create_goal.assert_not_called()


def test_update_and_delete_goal(client, manager):
    manager.goals.update_goal.return_value = Goal(id="g1", type="score", target_value=80, is_completed=True)

    resp = client.patch("/api/goals/g1", json={"isCompleted": True})
    assert resp.status_code == 200
    assert resp.json()["progress"] == 100
    assert resp.json()["deadlineStatus"] is None

    assert client.delete("/api/goals/g1").status_code == 204
    manager.goals.delete_goal.assert_called_once_with("g1")


def test_update_missing_goal(client, manager):
    manager.goals.update_goal.side_effect = NotFoundError("Goal not found", 404)
    assert client.patch("/api/goals/nope", json={"notes": "x"}).status_code == 404


# ================================================================
# Share, courses, coaching
# ================================================================

def test_get_shared(client, manager):
    manager.shares.get_shared.return_value = SharedContent.model_validate({
        "shareId": "abc", "contentType": "stats", "stats": {"avgScore": 84.0, "roundCount": 10},
    })
    body = client.get("/api/share/abc").json()
    assert body["contentType"] == "stats"
    assert body["stats"]["avgScore"] == 84.0

    manager.shares.get_shared.side_effect = NotFoundError("Share not found", 404)
    assert client.get("/api/share/missing").status_code == 404


def test_courses_filter(client, manager):
    manager.courses.list_courses.return_value = [
        CourseSummary(id="1", name="Pebble Beach"),
        CourseSummary(id="2", name="St Andrews Old Course"),
    ]
    assert len(client.get("/api/courses").json()) == 2
    assert [c["name"] for c in client.get("/api/courses", params={"q": "pebble"}).json()] == ["Pebble Beach"]


def test_analyze_round(client, manager):
    manager.coaching.analyze_round.return_value = AnalysisResult(analysis="Work on lag putting.")

    resp = client.post("/api/coaching/analyze", json={"totalScore": 88, "putts": 36})

    assert resp.json() == {"analysis": "Work on lag putting."}
    assert manager.coaching.analyze_round.call_args[0][0].putts == 36


def test_equipment_requires_profile_fields(client):
    resp = client.post("/api/coaching/equipment", json={"handicap": 12})
    assert resp.status_code == 422


# ================================================================
# Reports and health
# ================================================================

def test_rounds_csv(client):
    resp = client.get("/api/reports/rounds.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.splitlines()
    assert lines[0] == "Date,Course,Score,Par,Fairways Hit,GIR,Putts"
    assert lines[1] == "2026-06-01,Home,82,72,7/14,9/18,30"


def test_performance_pdf(client, manager):
    resp = client.get("/api/reports/performance.pdf", params={"player": "Sam", "handicap": 12.3})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
    assert manager.coaching.analyze_round.call_count == 1

    resp = client.get("/api/reports/performance.pdf", params={"insights": "false"})
    assert resp.status_code == 200
    assert manager.coaching.analyze_round.call_count == 1


def test_health(app):
    app.state.backend = MagicMock()
    app.state.backend.health_check.return_value = False
    resp = TestClient(app).get("/api/health")
    assert resp.json() == {"status": "degraded", "backend": False}
