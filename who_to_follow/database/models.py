"""
SQLAlchemy models for the Who To Follow system.

This module defines the schema of the social network the recommendation
engine reads from:
- users: User profiles
- follows: Directed follow edges (follower -> following)
- posts: Authored posts
- likes: (user, post) like pairs
- comments: Comments left by users on posts
- auth_sessions: Bearer tokens resolved to a user by the API
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, Session
from sqlalchemy.pool import StaticPool


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """
    Model representing a user of the social network.

    Attributes:
        id: Opaque string identity.
        username: Unique handle.
        display_name: Name shown on profile cards.
        avatar_url: Optional avatar reference.
        bio: Optional profile text.
        created_at: Account creation timestamp.
        posts: Posts authored by the user.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(200))
    avatar_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now()
    )

    posts: Mapped[List["Post"]] = relationship(
        back_populates="author", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"

    def to_dict(self) -> dict:
        """
        Convert user to dictionary representation.

        Returns:
            Dictionary containing all profile fields.
        """
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Follow(Base):
    """
    Directed follow edge: follower_id subscribes to following_id's posts.
    """

    __tablename__ = "follows"

    id: Mapped[int] = mapped_column(primary_key=True)
    follower_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    following_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now()
    )

    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="unique_follow_edge"),
    )

    def __repr__(self) -> str:
        return f"<Follow({self.follower_id} -> {self.following_id})>"


class Post(Base):
    """
    Model representing a post authored by a user.

    Attributes:
        id: Opaque string identity.
        user_id: Author of the post.
        content: Post body.
        created_at: Authorship timestamp (drives the recency strategy).
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(), index=True
    )

    author: Mapped["User"] = relationship(back_populates="posts")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Like(Base):
    """A user liking a post. One like per (user, post)."""

    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    post_id: Mapped[str] = mapped_column(ForeignKey("posts.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="unique_user_like"),
    )

    def __repr__(self) -> str:
        return f"<Like(user_id={self.user_id}, post_id={self.post_id})>"


class Comment(Base):
    """A comment left by a user on a post. A user may comment many times."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    post_id: Mapped[str] = mapped_column(ForeignKey("posts.id"), index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now()
    )

    def __repr__(self) -> str:
        return f"<Comment(user_id={self.user_id}, post_id={self.post_id})>"


class AuthSession(Base):
    """
    Bearer token issued to a signed-in user.

    The id doubles as the token value sent in the Authorization header.
    """

    __tablename__ = "auth_sessions"

    id: Mapped[str] = mapped_column(String(128), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<AuthSession(user_id={self.user_id}, expires_at={self.expires_at})>"


def init_db(database_url: str) -> Session:
    """
    Initialize database connection and create tables.

    Creates all tables defined in the Base metadata if they don't exist.
    In-memory SQLite databases share a single connection so that the
    session can be used from the API's worker threads.

    Args:
        database_url: SQLAlchemy database URL (e.g., 'sqlite:///data/social.db').

    Returns:
        A configured SQLAlchemy Session instance.

    Examples:
        >>> session = init_db("sqlite:///:memory:")
        >>> session.add(User(username="alice", display_name="Alice"))
        >>> session.commit()
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)
    Base.metadata.create_all(engine)
    return Session(engine)
