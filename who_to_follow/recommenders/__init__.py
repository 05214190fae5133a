"""
Recommendation module for plugin-based follow suggestions.

Independent strategies (friends of friends, shared interests, popularity,
recent activity) are plugged in and combined by the fusion engine.
"""

from who_to_follow.recommenders.base import (
    AggregateRecommendation,
    BaseRecommender,
    Candidate,
    Signal,
)
from who_to_follow.recommenders.fusion import FusionEngine
from who_to_follow.recommenders.manager import RecommendationManager
from who_to_follow.recommenders.registry import StrategyRegistry

__all__ = [
    "RecommendationManager",
    "StrategyRegistry",
    "FusionEngine",
    "BaseRecommender",
    "Candidate",
    "Signal",
    "AggregateRecommendation",
]
