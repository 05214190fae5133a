"""
Base recommender interface for plugin architecture.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import exists, func
from sqlalchemy.orm import Session, aliased

from who_to_follow.database.models import Follow, Post, User


@dataclass(frozen=True)
class Candidate:
    """
    A user who may be recommended to the requester.

    Attributes:
        id: User identity.
        username: Unique handle.
        display_name: Name shown on profile cards.
        avatar_url: Optional avatar reference.
        bio: Optional profile text.
        created_at: Account creation timestamp.
        follower_count: Number of users following the candidate.
        post_count: Number of posts the candidate authored.
    """

    id: str
    username: str
    display_name: str
    avatar_url: Optional[str]
    bio: Optional[str]
    created_at: Optional[datetime]
    follower_count: int = 0
    post_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "follower_count": self.follower_count,
            "post_count": self.post_count,
        }


@dataclass(frozen=True)
class Signal:
    """
    One strategy's scored opinion about one candidate.

    Attributes:
        candidate: The recommended user.
        score: Raw, non-negative strategy score (higher is better).
        reason: Human-readable explanation.
        strategy_name: Name of the strategy that produced this signal.
    """

    candidate: Candidate
    score: float
    reason: str
    strategy_name: str

    @property
    def candidate_id(self) -> str:
        return self.candidate.id


@dataclass
class AggregateRecommendation:
    """
    Fused recommendation for one candidate.

    Attributes:
        candidate: The recommended user.
        score: Fused score across strategies.
        reasons: Reasons in strategy execution order.
    """

    candidate: Candidate
    score: float
    reasons: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        """Reasons joined for display, e.g. '3 mutual connections, Similar interests'."""
        return ", ".join(self.reasons)

    def to_dict(self) -> dict:
        return {
            "user": self.candidate.to_dict(),
            "score": self.score,
            "reason": self.reason,
        }


class BaseRecommender(ABC):
    """
    Abstract base class for follow recommendation strategies.

    All strategy plugins inherit from this class. Each strategy queries the
    store on its own, excludes the requester and every user the requester
    already follows inside its query, and returns at most ``limit`` signals.

    The typical workflow:
    1. RecommendationManager calls recommend() for each enabled strategy
    2. Each strategy returns a list of Signal
    3. FusionEngine folds all signals into AggregateRecommendation objects

    Example:
        >>> recommender = GraphProximityRecommender(session, config)
        >>> for signal in recommender.recommend(user_id, limit=10):
        ...     print(f"{signal.candidate.username}: {signal.score}")
    """

    def __init__(
        self,
        session: Session,
        config: Optional[object] = None,
    ):
        """
        Initialize the recommender.

        Args:
            session: SQLAlchemy database session.
            config: Application configuration object.
        """
        self.session = session
        self.config = config

    @abstractmethod
    def recommend(
        self,
        requester_id: str,
        limit: int = 10,
        **kwargs,
    ) -> List[Signal]:
        """
        Generate follow suggestions for a user.

        Args:
            requester_id: User the suggestions are for.
            limit: Maximum number of signals to return.
            **kwargs: Additional strategy-specific parameters.

        Returns:
            List of Signal objects in the strategy's ranking order.
        """
        pass

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """
        Return the name of this recommendation strategy.

        Returns:
            Strategy identifier (e.g., 'graph_proximity', 'popularity').
        """
        pass

    @staticmethod
    def _not_followed_by(requester_id: str, user_column):
        """
        Clause excluding users the requester already follows.

        Args:
            requester_id: User the suggestions are for.
            user_column: Column holding the candidate identity.
        """
        edge = aliased(Follow)
        return ~exists().where(
            edge.follower_id == requester_id,
            edge.following_id == user_column,
        )

    def _follower_counts(self):
        """Subquery of (user_id, follower_count) over all follow edges."""
        return (
            self.session.query(
                Follow.following_id.label("user_id"),
                func.count(Follow.id).label("follower_count"),
            )
            .group_by(Follow.following_id)
            .subquery("follower_counts")
        )

    def _load_candidates(self, user_ids: Iterable[str]) -> Dict[str, Candidate]:
        """
        Load candidate profiles with follower and post counts.

        Args:
            user_ids: Identities to load.

        Returns:
            Dictionary mapping user id to Candidate.
        """
        user_ids = list(user_ids)
        if not user_ids:
            return {}

        followers = self._follower_counts()
        posts = (
            self.session.query(
                Post.user_id.label("user_id"),
                func.count(Post.id).label("post_count"),
            )
            .group_by(Post.user_id)
            .subquery("post_counts")
        )

        rows = (
            self.session.query(
                User,
                func.coalesce(followers.c.follower_count, 0),
                func.coalesce(posts.c.post_count, 0),
            )
            .outerjoin(followers, followers.c.user_id == User.id)
            .outerjoin(posts, posts.c.user_id == User.id)
            .filter(User.id.in_(user_ids))
            .all()
        )

        return {
            user.id: Candidate(
                id=user.id,
                username=user.username,
                display_name=user.display_name,
                avatar_url=user.avatar_url,
                bio=user.bio,
                created_at=user.created_at,
                follower_count=int(follower_count),
                post_count=int(post_count),
            )
            for user, follower_count, post_count in rows
        }
