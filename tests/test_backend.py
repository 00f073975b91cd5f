import logging
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from backend.config import Settings
from backend.connection import BackendClient
from backend.converters import goals_from_payload, rounds_from_payload, to_payload
from backend.exceptions import AuthError, BackendError, NetworkError, NotFoundError, PayloadError
from backend.manager import BackendManager
from models import GoalCreate, GoalUpdate, Round


# ================================================================
# Fixtures
# ================================================================

def _response(status=200, body=None, content=None):
    response = MagicMock()
    response.status_code = status
    if body is None and content is None:
        response.content = b""
        response.json.side_effect = ValueError("no body")
    elif body is not None:
        response.content = b"{...}"
        response.json.return_value = body
    else:
        response.content = content
        response.json.side_effect = ValueError("not json")
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    client = BackendClient()
    client.initialize("http://backend.test/", timeout=3, session=session)
    return client


@pytest.fixture
def manager(client):
    return BackendManager.with_token(client, "tok")


# ================================================================
# Client
# ================================================================

def test_uninitialized_client_raises():
    with pytest.raises(RuntimeError):
        BackendClient().request_json("GET", "/api/rounds")


def test_request_builds_url_and_drops_none_params(client, session):
    session.request.return_value = _response(body={"ok": True})

    assert client.request_json("GET", "/api/x", params={"a": 1, "b": None}) == {"ok": True}

    args, kwargs = session.request.call_args
    assert args == ("GET", "http://backend.test/api/x")
    assert kwargs["params"] == {"a": 1}
    assert kwargs["timeout"] == 3


@pytest.mark.parametrize(
    "status, error",
    [(401, AuthError), (403, AuthError), (404, NotFoundError), (500, BackendError), (422, BackendError)],
)
def test_error_statuses_map_to_exceptions(client, session, status, error):
    session.request.return_value = _response(status, body={"error": "nope"})

    with pytest.raises(error) as exc:
        client.request_json("GET", "/api/rounds")
    assert str(exc.value) == "nope"
    assert exc.value.status_code == status


def test_timeout_becomes_network_error(client, session):
    session.request.side_effect = requests.Timeout("slow")
    with pytest.raises(NetworkError):
        client.request_json("GET", "/api/rounds")


def test_connection_error_becomes_network_error(client, session):
    session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(NetworkError):
        client.request_json("GET", "/api/rounds")


def test_empty_and_non_json_bodies(client, session):
    session.request.return_value = _response(204)
    assert client.request_json("DELETE", "/api/goals/1") is None

    session.request.return_value = _response(200, content=b"<html>")
    with pytest.raises(PayloadError):
        client.request_json("GET", "/api/rounds")


def test_health_check(client, session):
    session.get.return_value = _response(200, body={})
    assert client.health_check() is True

    session.get.side_effect = requests.ConnectionError("down")
    assert client.health_check() is False


def test_close_releases_session(client, session):
    client.close()
    session.close.assert_called_once()
    with pytest.raises(RuntimeError):
        _ = client.session


# ================================================================
# Converters
# ================================================================

def test_rounds_payload_wrapped_or_bare():
    body = [{"id": 1, "totalScore": 80}]
    assert rounds_from_payload(body)[0].id == "1"
    assert rounds_from_payload({"rounds": body})[0].total_score == 80


def test_empty_list_is_not_an_error():
    assert rounds_from_payload([]) == []
    assert goals_from_payload({"goals": []}) == []


def test_wrong_shape_is_payload_error():
    with pytest.raises(PayloadError):
        rounds_from_payload({"error": "boom"})


def test_invalid_items_skipped_with_warning(caplog):
    body = [{"totalScore": 80}, {"totalScore": -5}, {"totalScore": 85, "fairwaysHit": 20, "totalFairways": 14}]
    with caplog.at_level(logging.WARNING, logger="backend.converters"):
        rounds = rounds_from_payload(body)
    assert [r.total_score for r in rounds] == [80]
    assert caplog.text.count("Skipping invalid round") == 2


def test_to_payload_is_camel_case_without_nones():
    body = to_payload(GoalCreate(type="score", target_value=79))
    assert body == {"type": "score", "targetValue": 79.0}


# ================================================================
# Repositories
# ================================================================

def test_get_rounds_sends_bearer_token(manager, session):
    session.request.return_value = _response(body=[{"id": "r1", "totalScore": 88, "date": "2026-05-01"}])

    rounds = manager.rounds.get_rounds()

    assert rounds[0].total_score == 88
    _, kwargs = session.request.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_get_rounds_propagates_failure(manager, session):
    session.request.return_value = _response(503, body={"error": "down"})
    with pytest.raises(BackendError):
        manager.rounds.get_rounds()


def test_create_round_drops_id(manager, session):
    session.request.return_value = _response(201, body={"id": "new", "totalScore": 80})

    created = manager.rounds.create_round(Round(id="local", total_score=80, course="Home"))

    assert created.id == "new"
    _, kwargs = session.request.call_args
    assert "id" not in kwargs["json"]
    assert kwargs["json"]["totalScore"] == 80


def test_comparison_date_params(manager, session):
    session.request.return_value = _response(body={
        "userStats": {"avgScore": 85, "roundCount": 4},
        "globalStats": {"avgScore": 92, "roundCount": 400},
        "isDefault": True,
    })

    result = manager.stats.get_comparison(date(2026, 1, 1), None)

    assert result.is_default
    assert result.user_stats.avg_score == 85
    args, kwargs = session.request.call_args
    assert args[1].endswith("/api/stats/comparison")
    assert kwargs["params"] == {"fromDate": "2026-01-01"}


def test_update_goal_patches(manager, session):
    session.request.return_value = _response(body={"goal": {"id": "g1", "type": "putts", "targetValue": 30}})

    goal = manager.goals.update_goal("g1", GoalUpdate(is_completed=True))

    assert goal.id == "g1"
    args, kwargs = session.request.call_args
    assert args[0] == "PATCH"
    assert kwargs["json"] == {"isCompleted": True}


def test_unknown_share_is_not_found(manager, session):
    session.request.return_value = _response(404, body={"error": "Share not found"})
    with pytest.raises(NotFoundError):
        manager.shares.get_shared("missing")


def test_for_caller_forwards_only_credentials(client):
    manager = BackendManager.for_caller(
        client, {"Authorization": "Bearer a", "Cookie": "s=1", "Host": "x", "Connection": "keep-alive"}
    )
    assert manager.rounds._headers == {"Authorization": "Bearer a", "Cookie": "s=1"}


# ================================================================
# Config
# ================================================================

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GOLF_BACKEND_URL", "https://golf.example/")
    monkeypatch.setenv("GOLF_BACKEND_TIMEOUT", "2.5")
    monkeypatch.setenv("GOLF_CORS_ORIGINS", "http://a, http://b")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.backend_url == "https://golf.example"
    assert settings.timeout == 2.5
    assert settings.cors_origins == ["http://a", "http://b"]
    assert settings.log_level == "DEBUG"
