"""
Popular users recommender.

This strategy suggests the most followed users the requester does not
follow yet.
"""

from __future__ import annotations

import logging
import math
from typing import List

from sqlalchemy import func

from who_to_follow.config import Config
from who_to_follow.database import User
from who_to_follow.recommenders.base import BaseRecommender, Signal

logger = logging.getLogger(__name__)


class PopularityRecommender(BaseRecommender):
    """
    Recommend the most followed users.

    This strategy:
    1. Orders non-followed users by follower count
    2. Takes the top ``limit`` of them
    3. Keeps only those with more than ``popular_min_followers`` followers

    The threshold is applied after truncation, so fewer than ``limit``
    signals may come back even when more users clear the threshold.

    Score is ``ln(follower_count + 1)``.
    """

    def __init__(self, session, config: Config = None):
        super().__init__(session, config)
        self.config = config or Config.from_env()

    @property
    def strategy_name(self) -> str:
        """Return strategy identifier."""
        return "popularity"

    def recommend(
        self,
        requester_id: str,
        limit: int = 10,
        **kwargs,
    ) -> List[Signal]:
        """
        Rank non-followed users by follower count.

        Args:
            requester_id: User the suggestions are for.
            limit: Number of users considered before the follower threshold.
            **kwargs: Additional parameters (min_followers).

        Returns:
            Signals ordered by follower count desc, user id asc.
        """
        min_followers = kwargs.get(
            "min_followers", self.config.recommendation.popular_min_followers
        )

        followers = self._follower_counts()
        follower_count = func.coalesce(followers.c.follower_count, 0).label("follower_count")

        rows = (
            self.session.query(User.id, follower_count)
            .outerjoin(followers, followers.c.user_id == User.id)
            .filter(
                User.id != requester_id,
                self._not_followed_by(requester_id, User.id),
            )
            .order_by(follower_count.desc(), User.id)
            .limit(limit)
            .all()
        )

        popular = [(user_id, count) for user_id, count in rows if count > min_followers]
        logger.debug(
            f"Popularity: {len(popular)}/{len(rows)} top users above {min_followers} followers"
        )

        if not popular:
            return []

        candidates = self._load_candidates(user_id for user_id, _ in popular)

        return [
            Signal(
                candidate=candidates[user_id],
                score=math.log(count + 1),
                reason="Popular user",
                strategy_name=self.strategy_name,
            )
            for user_id, count in popular
        ]
