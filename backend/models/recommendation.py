"""
Recommendation Pydantic models.
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CandidateResponse(BaseModel):
    """Profile of a suggested user."""

    id: str
    username: str
    display_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    follower_count: int = 0
    post_count: int = 0


class RecommendationResponse(BaseModel):
    """Recommendation result model for API responses."""

    user: CandidateResponse
    score: float
    reason: str


class RecommendationListResponse(BaseModel):
    """Envelope returned by the recommendations endpoint."""

    recommendations: List[RecommendationResponse]
