"""
Tests for the recommendations HTTP endpoint.
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.dependencies import get_config, get_db
from backend.main import app
from who_to_follow.recommenders import RecommendationManager


@pytest.fixture
def client(session, config):
    """TestClient wired to the test session and config."""

    def override_db():
        yield session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_config] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token(user_manager, make_users):
    """Signed-in user "me" following m, who follows a, b and c."""
    make_users("me", "m", "a", "b", "c")
    user_manager.follow("me", "m")
    for user_id in ("a", "b", "c"):
        user_manager.follow("m", user_id)
    return user_manager.create_auth_session("me").id


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_requires_authentication(client):
    response = client.get("/api/recommendations")
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


@pytest.mark.parametrize("header", ["Bearer unknown", "Basic abc", "Bearer "])
def test_rejects_bad_tokens(client, token, header):
    response = client.get("/api/recommendations", headers={"Authorization": header})
    assert response.status_code == 401


def test_rejects_expired_session(client, token, user_manager):
    expired = user_manager.create_auth_session("me", ttl=timedelta(seconds=-1))
    response = client.get("/api/recommendations", headers=auth(expired.id))
    assert response.status_code == 401


def test_returns_recommendations(client, token):
    response = client.get("/api/recommendations", headers=auth(token))

    assert response.status_code == 200
    body = response.json()
    assert [r["user"]["id"] for r in body["recommendations"]] == ["a", "b", "c"]

    first = body["recommendations"][0]
    assert first["score"] == 2.0
    assert first["reason"] == "1 mutual connections"
    assert first["user"]["username"] == "a"
    assert first["user"]["follower_count"] == 1
    assert first["user"]["post_count"] == 0


def test_limit_is_respected(client, token):
    response = client.get("/api/recommendations", params={"limit": 1}, headers=auth(token))
    assert len(response.json()["recommendations"]) == 1


def test_limit_is_clamped(client, token, config):
    with patch.object(
        RecommendationManager, "get_recommendations", return_value=[]
    ) as mocked:
        response = client.get("/api/recommendations", params={"limit": 500}, headers=auth(token))

    assert response.status_code == 200
    assert mocked.call_args.kwargs["limit"] == config.recommendation.max_limit


def test_clamped_limit_caps_real_results(client, token, user_manager, config):
    for i in range(config.recommendation.max_limit + 5):
        user_manager.create_user(f"extra{i:02d}", user_id=f"extra{i:02d}")
        user_manager.follow("m", f"extra{i:02d}")

    response = client.get("/api/recommendations", params={"limit": 500}, headers=auth(token))

    assert response.status_code == 200
    assert len(response.json()["recommendations"]) == config.recommendation.max_limit


def test_invalid_limit_rejected(client, token):
    response = client.get("/api/recommendations", params={"limit": 0}, headers=auth(token))
    assert response.status_code == 422


def test_engine_failure_is_generic_500(client, token):
    with patch.object(
        RecommendationManager,
        "get_recommendations",
        side_effect=RuntimeError("database password is hunter2"),
    ):
        response = client.get("/api/recommendations", headers=auth(token))

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "hunter2" not in response.text
