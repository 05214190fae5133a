"""
Tests for the UserManager store facade.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from who_to_follow.database import AuthSession


def test_follow_edges(user_manager, make_users):
    make_users("alice", "bob", "carol")
    user_manager.follow("alice", "bob")
    user_manager.follow("carol", "bob")
    user_manager.follow("alice", "bob")  # idempotent

    assert user_manager.is_following("alice", "bob")
    assert not user_manager.is_following("bob", "alice")
    assert user_manager.follower_count("bob") == 2
    assert user_manager.following_ids("alice") == {"bob"}


def test_cannot_follow_self(user_manager, make_users):
    make_users("alice")
    with pytest.raises(ValueError):
        user_manager.follow("alice", "alice")


def test_unfollow(user_manager, make_users):
    make_users("alice", "bob")
    user_manager.follow("alice", "bob")

    assert user_manager.unfollow("alice", "bob")
    assert not user_manager.unfollow("alice", "bob")
    assert user_manager.follower_count("bob") == 0


def test_engagement_pairs(user_manager, make_users):
    make_users("alice", "bob")
    post = user_manager.create_post("bob", "hi")
    user_manager.like("alice", post.id)
    user_manager.like("alice", post.id)
    user_manager.comment("alice", post.id, "one")
    user_manager.comment("alice", post.id, "two")

    assert user_manager.likes(user_id="alice") == [("alice", post.id)]
    assert user_manager.likes(post_id=post.id) == [("alice", post.id)]
    assert user_manager.comments(post_id=post.id) == [("alice", post.id)]
    assert user_manager.comments(user_id="bob") == []


def test_post_lookup(user_manager, make_users, now):
    make_users("bob")
    post = user_manager.create_post("bob", "hi", created_at=now)

    found = user_manager.get_post(post.id)

    assert found.user_id == "bob"
    assert found.created_at.replace(tzinfo=None) == now
    assert user_manager.get_post("missing") is None


def test_auth_sessions(user_manager, make_users):
    make_users("alice")
    live = user_manager.create_auth_session("alice")
    expired = user_manager.create_auth_session("alice", ttl=timedelta(seconds=-1))

    assert user_manager.resolve_session(live.id) == "alice"
    assert user_manager.resolve_session(expired.id) is None
    assert user_manager.resolve_session("nope") is None



def test_aware_expiry_is_compared_in_its_own_timezone(user_manager, make_users):
    make_users("alice")
    utc_now = datetime.now(timezone.utc)
    behind = timezone(timedelta(hours=-10))
    ahead = timezone(timedelta(hours=10))
    live = AuthSession(id="live", user_id="alice", expires_at=(utc_now + timedelta(minutes=30)).astimezone(behind))
    stale = AuthSession(id="stale", user_id="alice", expires_at=(utc_now - timedelta(minutes=30)).astimezone(ahead))

    with patch.object(user_manager.session, "get", return_value=live):
        assert user_manager.resolve_session("live") == "alice"
    with patch.object(user_manager.session, "get", return_value=stale):
        assert user_manager.resolve_session("stale") is None


def test_generated_user_ids(user_manager):
    user = user_manager.create_user("dora")

    assert user.id
    assert user.display_name == "dora"
    assert user_manager.get_user(user.id).username == "dora"
