"""
Friends-of-friends recommender.

This strategy suggests users followed by the people the requester follows,
scored by the number of such mutual connections.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import and_, distinct, func
from sqlalchemy.orm import aliased

from who_to_follow.config import Config
from who_to_follow.database import Follow, User
from who_to_follow.recommenders.base import BaseRecommender, Signal

logger = logging.getLogger(__name__)


class GraphProximityRecommender(BaseRecommender):
    """
    Recommend users followed by the requester's followings.

    This strategy:
    1. Walks two follow hops: requester -> mutual -> candidate
    2. Counts distinct mutual connections per candidate
    3. Ranks by mutual count, then by the candidate's follower count

    Score is ``mutual_weight * mutual_count`` (2.0 per connection by default).

    Typical usage:
        >>> recommender = GraphProximityRecommender(session, config)
        >>> signals = recommender.recommend(user_id, limit=10)
        >>> signals[0].reason
        '3 mutual connections'
    """

    def __init__(self, session, config: Config = None):
        super().__init__(session, config)
        self.config = config or Config.from_env()

    @property
    def strategy_name(self) -> str:
        """Return strategy identifier."""
        return "graph_proximity"

    def recommend(
        self,
        requester_id: str,
        limit: int = 10,
        **kwargs,
    ) -> List[Signal]:
        """
        Rank non-followed users by mutual connections.

        Args:
            requester_id: User the suggestions are for.
            limit: Maximum number of signals to return.
            **kwargs: Additional parameters (mutual_weight).

        Returns:
            Signals ordered by mutual count desc, follower count desc,
            user id asc.
        """
        mutual_weight = kwargs.get("mutual_weight", self.config.recommendation.mutual_weight)

        # requester -f1-> mutual -f2-> candidate
        f1 = aliased(Follow)
        f2 = aliased(Follow)
        followers = self._follower_counts()

        mutual_count = func.count(distinct(f2.follower_id)).label("mutual_count")
        follower_count = func.coalesce(followers.c.follower_count, 0).label("follower_count")

        rows = (
            self.session.query(f2.following_id, mutual_count, follower_count)
            .join(
                f1,
                and_(f1.following_id == f2.follower_id, f1.follower_id == requester_id),
            )
            .join(User, User.id == f2.following_id)
            .outerjoin(followers, followers.c.user_id == f2.following_id)
            .filter(
                f2.following_id != requester_id,
                self._not_followed_by(requester_id, f2.following_id),
            )
            .group_by(f2.following_id, followers.c.follower_count)
            .order_by(mutual_count.desc(), follower_count.desc(), f2.following_id)
            .limit(limit)
            .all()
        )

        if not rows:
            logger.info(f"Graph proximity: no friends-of-friends for user {requester_id}")
            return []

        candidates = self._load_candidates(user_id for user_id, _, _ in rows)

        signals = [
            Signal(
                candidate=candidates[user_id],
                score=float(mutual_weight * mutuals),
                reason=f"{mutuals} mutual connections",
                strategy_name=self.strategy_name,
            )
            for user_id, mutuals, _ in rows
        ]

        logger.info(f"Graph proximity: {len(signals)} candidates for user {requester_id}")
        return signals
