"""
Pydantic models for API requests and responses.
"""

from .recommendation import (
    CandidateResponse,
    RecommendationListResponse,
    RecommendationResponse,
)

__all__ = [
    "CandidateResponse",
    "RecommendationListResponse",
    "RecommendationResponse",
]
