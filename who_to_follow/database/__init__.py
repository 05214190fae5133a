"""
Database module for the social graph, posts and engagement.

This module provides SQLAlchemy models and database utilities for the
store the recommendation engine queries.
"""

from who_to_follow.database.models import (
    Base,
    User,
    Follow,
    Post,
    Like,
    Comment,
    AuthSession,
    Session,
    init_db,
)

__all__ = [
    "Base",
    "User",
    "Follow",
    "Post",
    "Like",
    "Comment",
    "AuthSession",
    "Session",
    "init_db",
]
