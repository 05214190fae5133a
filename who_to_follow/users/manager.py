"""
Social graph, engagement and content store access.

Manages users, follow edges, posts, likes and comments.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Set, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from who_to_follow.database import AuthSession, Comment, Follow, Like, Post, User

logger = logging.getLogger(__name__)


class UserManager:
    """
    Store facade for the social network.

    Exposes the primitives the recommendation engine is built on (follow
    edge existence, follower counts, followed identities, engagement
    pairs, post lookup) and the writes used to populate a graph.

    Typical usage:
        >>> manager = UserManager(session)
        >>> alice = manager.create_user("alice", "Alice")
        >>> bob = manager.create_user("bob", "Bob")
        >>> manager.follow(alice.id, bob.id)
        >>> manager.is_following(alice.id, bob.id)
        True

    Attributes:
        session: Database session.
    """

    def __init__(self, session: Session):
        """
        Initialize the user manager.

        Args:
            session: SQLAlchemy database session.
        """
        self.session = session

    def create_user(
        self,
        username: str,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        avatar_url: Optional[str] = None,
        user_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> User:
        """
        Create a user.

        Args:
            username: Unique handle.
            display_name: Shown name (defaults to username).
            bio: Optional profile text.
            avatar_url: Optional avatar reference.
            user_id: Explicit identity (generated if omitted).
            created_at: Explicit creation time (now if omitted).

        Returns:
            The persisted User.
        """
        user = User(
            username=username,
            display_name=display_name or username,
            bio=bio,
            avatar_url=avatar_url,
            created_at=created_at or datetime.now(),
        )
        if user_id is not None:
            user.id = user_id
        self.session.add(user)
        self.session.commit()
        logger.debug(f"Created user {user.username} ({user.id})")
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user by id, or None."""
        return self.session.get(User, user_id)

    # Social graph

    def follow(self, follower_id: str, following_id: str) -> Follow:
        """
        Create a follow edge follower -> following.

        Following an already-followed user returns the existing edge.

        Raises:
            ValueError: If a user tries to follow themselves.
        """
        if follower_id == following_id:
            raise ValueError("Users cannot follow themselves")

        edge = (
            self.session.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .first()
        )
        if edge:
            return edge

        edge = Follow(follower_id=follower_id, following_id=following_id)
        self.session.add(edge)
        self.session.commit()
        logger.debug(f"{follower_id} now follows {following_id}")
        return edge

    def unfollow(self, follower_id: str, following_id: str) -> bool:
        """
        Remove a follow edge.

        Returns:
            True if an edge was removed.
        """
        deleted = (
            self.session.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .delete()
        )
        self.session.commit()
        return deleted > 0

    def is_following(self, follower_id: str, following_id: str) -> bool:
        """Check whether the follow edge follower -> following exists."""
        return self.session.query(
            self.session.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .exists()
        ).scalar()

    def follower_count(self, user_id: str) -> int:
        """Count follow edges incoming to a user."""
        return (
            self.session.query(func.count(Follow.id))
            .filter(Follow.following_id == user_id)
            .scalar()
        )

    def following_ids(self, user_id: str) -> Set[str]:
        """Identities the given user follows."""
        return {
            fid
            for (fid,) in self.session.query(Follow.following_id)
            .filter(Follow.follower_id == user_id)
            .all()
        }

    # Content

    def create_post(
        self,
        user_id: str,
        content: str = "",
        created_at: Optional[datetime] = None,
    ) -> Post:
        """Create a post authored by user_id."""
        post = Post(user_id=user_id, content=content, created_at=created_at or datetime.now())
        self.session.add(post)
        self.session.commit()
        return post

    def get_post(self, post_id: str) -> Optional[Post]:
        """Look up a post (author and creation time) by id."""
        return self.session.get(Post, post_id)

    # Engagement

    def like(self, user_id: str, post_id: str) -> Like:
        """Like a post. Liking twice returns the existing like."""
        like = (
            self.session.query(Like)
            .filter(Like.user_id == user_id, Like.post_id == post_id)
            .first()
        )
        if like:
            return like

        like = Like(user_id=user_id, post_id=post_id)
        self.session.add(like)
        self.session.commit()
        return like

    def comment(self, user_id: str, post_id: str, content: str = "") -> Comment:
        """Comment on a post."""
        comment = Comment(user_id=user_id, post_id=post_id, content=content)
        self.session.add(comment)
        self.session.commit()
        return comment

    def likes(
        self,
        user_id: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> List[Tuple[str, str]]:
        """
        Enumerate (user_id, post_id) like pairs.

        Args:
            user_id: Only likes by this user.
            post_id: Only likes on this post.
        """
        query = self.session.query(Like.user_id, Like.post_id)
        if user_id is not None:
            query = query.filter(Like.user_id == user_id)
        if post_id is not None:
            query = query.filter(Like.post_id == post_id)
        return [(uid, pid) for uid, pid in query.all()]

    def comments(
        self,
        user_id: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> List[Tuple[str, str]]:
        """
        Enumerate distinct (user_id, post_id) comment pairs.

        Args:
            user_id: Only comments by this user.
            post_id: Only comments on this post.
        """
        query = self.session.query(Comment.user_id, Comment.post_id).distinct()
        if user_id is not None:
            query = query.filter(Comment.user_id == user_id)
        if post_id is not None:
            query = query.filter(Comment.post_id == post_id)
        return [(uid, pid) for uid, pid in query.all()]

    # Sessions

    def create_auth_session(self, user_id: str, ttl: timedelta = timedelta(days=30)) -> AuthSession:
        """Issue a bearer token for user_id."""
        auth_session = AuthSession(user_id=user_id, expires_at=datetime.now() + ttl)
        self.session.add(auth_session)
        self.session.commit()
        logger.info(f"Issued session for user {user_id}")
        return auth_session

    def resolve_session(self, token: str) -> Optional[str]:
        """
        Resolve a bearer token to a user id.

        Returns:
            The user id, or None if the token is unknown or expired.
        """
        auth_session = self.session.get(AuthSession, token)
        if auth_session is None:
            return None
        # SQLite hands back naive local times, other backends aware ones
        expires_at = auth_session.expires_at
        if expires_at <= datetime.now(expires_at.tzinfo):
            logger.debug(f"Session for user {auth_session.user_id} has expired")
            return None
        return auth_session.user_id
