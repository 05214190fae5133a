"""
Recommendation manager for orchestrating follow recommendation strategies.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from who_to_follow.config import Config
from who_to_follow.recommenders.base import AggregateRecommendation, Signal
from who_to_follow.recommenders.fusion import FusionEngine
from who_to_follow.recommenders.registry import StrategyRegistry

# Import all strategies to register them
from who_to_follow.recommenders.strategies import (
    GraphProximityRecommender,
    InterestOverlapRecommender,
    PopularityRecommender,
    RecencyRecommender,
)

logger = logging.getLogger(__name__)


class RecommendationManager:
    """
    Manager for follow recommendations with multi-strategy fusion.

    Runs every enabled strategy against the same store snapshot and folds
    their signals with the FusionEngine. Nothing is cached or persisted.

    A failing strategy fails the whole request: the store error is logged
    and re-raised, so partial recommendations are never returned.

    Typical usage:
        >>> manager = RecommendationManager(Config.from_env(), session)
        >>> for rec in manager.get_recommendations(user_id, limit=10):
        ...     print(f"{rec.candidate.username}: {rec.score:.2f} ({rec.reason})")

    Attributes:
        config: Application configuration.
        session: Database session.
        fusion_engine: Fusion engine for combining strategy results.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[Session] = None,
    ):
        """
        Initialize the recommendation manager.

        Args:
            config: Application configuration.
            session: Database session.
        """
        self.config = config or Config.from_env()
        self.session = session

        self._register_strategies()

        rec_config = self.config.recommendation
        self.fusion_engine = FusionEngine(
            strategy_order=rec_config.enabled_strategies,
            strategy_weights=rec_config.strategy_weights(),
        )

        logger.debug(
            f"Initialized RecommendationManager with strategies {rec_config.enabled_strategies}"
        )

    def _register_strategies(self) -> None:
        """Register all available strategies."""
        strategies = [
            ("graph_proximity", GraphProximityRecommender),
            ("interest_overlap", InterestOverlapRecommender),
            ("popularity", PopularityRecommender),
            ("recency", RecencyRecommender),
        ]

        for name, strategy_class in strategies:
            if not StrategyRegistry.is_registered(name):
                StrategyRegistry.register(name, strategy_class)

    def get_recommendations(
        self,
        requester_id: str,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[AggregateRecommendation]:
        """
        Recommend users for requester_id to follow.

        Args:
            requester_id: User the suggestions are for.
            limit: Maximum number of recommendations (config default if None).
            now: Evaluation time for time-windowed strategies (defaults to now).

        Returns:
            Recommendations sorted by fused score desc, candidate id asc.

        Raises:
            ValueError: If limit is smaller than 1.
            sqlalchemy.exc.SQLAlchemyError: If any strategy's store query fails.
        """
        if limit is None:
            limit = self.config.recommendation.default_limit
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        enabled_strategies = self.config.recommendation.enabled_strategies
        if not enabled_strategies:
            logger.warning("No strategies enabled in configuration")
            return []

        logger.info(
            f"Generating recommendations for user {requester_id} "
            f"with {len(enabled_strategies)} strategies, limit={limit}"
        )

        # Buffer per strategy; fusion replays them in declared order
        all_results: Dict[str, List[Signal]] = {}
        for strategy_name in enabled_strategies:
            strategy = StrategyRegistry.get_strategy(
                strategy_name,
                session=self.session,
                config=self.config,
            )

            try:
                signals = strategy.recommend(requester_id, limit=limit, now=now)
            except Exception as e:
                logger.error(f"Strategy '{strategy_name}' failed for user {requester_id}: {e}")
                raise

            all_results[strategy_name] = signals
            logger.debug(f"Strategy '{strategy_name}': {len(signals)} signals")

        fused = self.fusion_engine.fuse(all_results, limit=limit)

        top_score = fused[0].score if fused else 0.0
        logger.info(
            f"Recommendation generation complete: {len(fused)} recommendations, "
            f"top_score={top_score:.4f}"
        )
        return fused
