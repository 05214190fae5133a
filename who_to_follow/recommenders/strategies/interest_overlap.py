"""
Shared-interest recommender.

This strategy suggests users who engaged with the same posts as the
requester, where engagement is a like or a comment.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import and_, distinct, func, select, union

from who_to_follow.config import Config
from who_to_follow.database import Comment, Like, User
from who_to_follow.recommenders.base import BaseRecommender, Signal

logger = logging.getLogger(__name__)


def _interactions(name: str):
    """Union of (user_id, post_id) pairs from likes and comments."""
    return union(
        select(Like.user_id.label("user_id"), Like.post_id.label("post_id")),
        select(Comment.user_id.label("user_id"), Comment.post_id.label("post_id")),
    ).subquery(name)


class InterestOverlapRecommender(BaseRecommender):
    """
    Recommend users who interacted with the posts the requester interacted with.

    Likes and comments are merged into a single interaction relation before
    the overlap is counted, so a candidate who commented on a post the
    requester liked shares that post.

    Score is ``interest_weight * shared_post_count`` (1.5 per post by default).
    The reason is always "Similar interests".

    Typical usage:
        >>> recommender = InterestOverlapRecommender(session, config)
        >>> signals = recommender.recommend(user_id, limit=10)
    """

    def __init__(self, session, config: Config = None):
        super().__init__(session, config)
        self.config = config or Config.from_env()

    @property
    def strategy_name(self) -> str:
        """Return strategy identifier."""
        return "interest_overlap"

    def recommend(
        self,
        requester_id: str,
        limit: int = 10,
        **kwargs,
    ) -> List[Signal]:
        """
        Rank non-followed users by the number of posts both sides engaged with.

        Args:
            requester_id: User the suggestions are for.
            limit: Maximum number of signals to return.
            **kwargs: Additional parameters (interest_weight).

        Returns:
            Signals ordered by shared post count desc, user id asc.
        """
        interest_weight = kwargs.get("interest_weight", self.config.recommendation.interest_weight)

        mine = _interactions("mine")
        theirs = _interactions("theirs")

        shared_posts = func.count(distinct(theirs.c.post_id)).label("shared_posts")

        rows = (
            self.session.query(theirs.c.user_id, shared_posts)
            .join(
                mine,
                and_(mine.c.post_id == theirs.c.post_id, mine.c.user_id == requester_id),
            )
            .join(User, User.id == theirs.c.user_id)
            .filter(
                theirs.c.user_id != requester_id,
                self._not_followed_by(requester_id, theirs.c.user_id),
            )
            .group_by(theirs.c.user_id)
            .order_by(shared_posts.desc(), theirs.c.user_id)
            .limit(limit)
            .all()
        )

        if not rows:
            logger.info(f"Interest overlap: no shared engagement for user {requester_id}")
            return []

        candidates = self._load_candidates(user_id for user_id, _ in rows)

        signals = [
            Signal(
                candidate=candidates[user_id],
                score=float(interest_weight * shared),
                reason="Similar interests",
                strategy_name=self.strategy_name,
            )
            for user_id, shared in rows
        ]

        logger.info(f"Interest overlap: {len(signals)} candidates for user {requester_id}")
        return signals
