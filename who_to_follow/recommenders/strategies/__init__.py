"""
Recommendation strategies package.

Each strategy inherits from BaseRecommender and can be registered
independently in the fusion recommendation system.

Available strategies:
- GraphProximityRecommender: Friends of friends (mutual connections)
- InterestOverlapRecommender: Shared likes and comments
- PopularityRecommender: Most followed users
- RecencyRecommender: Users who posted recently
"""

from who_to_follow.recommenders.strategies.graph_proximity import GraphProximityRecommender
from who_to_follow.recommenders.strategies.interest_overlap import InterestOverlapRecommender
from who_to_follow.recommenders.strategies.popularity import PopularityRecommender
from who_to_follow.recommenders.strategies.recency import RecencyRecommender

__all__ = [
    "GraphProximityRecommender",
    "InterestOverlapRecommender",
    "PopularityRecommender",
    "RecencyRecommender",
]
