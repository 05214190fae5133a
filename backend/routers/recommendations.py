"""
Recommendations router for follow suggestions.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_config, get_current_user_id, get_recommendation_manager
from backend.models.recommendation import (
    CandidateResponse,
    RecommendationListResponse,
    RecommendationResponse,
)
from who_to_follow.config import Config
from who_to_follow.recommenders import RecommendationManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=RecommendationListResponse)
def get_recommendations(
    limit: int = Query(10, ge=1, description="Number of users to suggest"),
    user_id: str = Depends(get_current_user_id),
    config: Config = Depends(get_config),
    recommendation_manager: RecommendationManager = Depends(get_recommendation_manager),
):
    """
    Suggest users for the signed-in user to follow.

    Args:
        limit: Requested number of suggestions, clamped to the configured maximum.

    Returns:
        Ranked suggestions with profile, fused score and reason.
    """
    limit = min(limit, config.recommendation.max_limit)

    try:
        results = recommendation_manager.get_recommendations(user_id, limit=limit)
    except Exception:
        logger.exception(f"Error fetching recommendations for user {user_id}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return RecommendationListResponse(
        recommendations=[
            RecommendationResponse(
                user=CandidateResponse(**rec.candidate.to_dict()),
                score=rec.score,
                reason=rec.reason,
            )
            for rec in results
        ]
    )
