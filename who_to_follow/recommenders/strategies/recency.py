"""
Recently active users recommender.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy import func

from who_to_follow.config import Config
from who_to_follow.database import Post, User
from who_to_follow.recommenders.base import BaseRecommender, Signal

logger = logging.getLogger(__name__)


class RecencyRecommender(BaseRecommender):
    """
    Recommend non-followed users who posted within the last few days.

    Users are ranked by their latest post, then by how many posts they
    wrote in the window. Score is the recent post count; fusion applies
    the recency weight.
    """

    def __init__(self, session, config: Config = None):
        super().__init__(session, config)
        self.config = config or Config.from_env()

    @property
    def strategy_name(self) -> str:
        """Return strategy identifier."""
        return "recency"

    def recommend(
        self,
        requester_id: str,
        limit: int = 10,
        **kwargs,
    ) -> List[Signal]:
        """
        Rank non-followed users by recent authorship.

        Args:
            requester_id: User the suggestions are for.
            limit: Maximum number of signals to return.
            **kwargs: Additional parameters (now, recent_days).

        Returns:
            Signals ordered by latest post desc, recent post count desc,
            user id asc.
        """
        now = kwargs.get("now") or datetime.now()
        recent_days = kwargs.get("recent_days", self.config.recommendation.recent_days)
        cutoff = now - timedelta(days=recent_days)

        last_post = func.max(Post.created_at).label("last_post")
        recent_posts = func.count(Post.id).label("recent_posts")

        rows = (
            self.session.query(Post.user_id, recent_posts, last_post)
            .join(User, User.id == Post.user_id)
            .filter(
                Post.user_id != requester_id,
                Post.created_at > cutoff,
                Post.created_at <= now,
                self._not_followed_by(requester_id, Post.user_id),
            )
            .group_by(Post.user_id)
            .order_by(last_post.desc(), recent_posts.desc(), Post.user_id)
            .limit(limit)
            .all()
        )

        if not rows:
            logger.info(f"Recency: nobody posted in the last {recent_days} days")
            return []

        candidates = self._load_candidates(user_id for user_id, _, _ in rows)

        signals = [
            Signal(
                candidate=candidates[user_id],
                score=float(count),
                reason="Recently active",
                strategy_name=self.strategy_name,
            )
            for user_id, count, _ in rows
        ]

        logger.info(f"Recency: {len(signals)} candidates since {cutoff:%Y-%m-%d %H:%M}")
        return signals
