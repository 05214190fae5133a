"""
Dependency injection for FastAPI backend.

Provides database sessions, requester identity and manager instances
as dependencies.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from who_to_follow.config import Config
from who_to_follow.database import init_db
from who_to_follow.recommenders import RecommendationManager
from who_to_follow.users import UserManager


def get_config() -> Config:
    """Get application configuration."""
    return Config.from_env()


def get_db(config: Config = Depends(get_config)):
    """
    Get database session.

    Yields a SQLAlchemy session for the request lifecycle.
    Session is properly closed after the request completes.
    """
    session = init_db(config.database.url)
    try:
        yield session
    finally:
        session.close()


def get_user_manager(db: Session = Depends(get_db)) -> UserManager:
    """
    Get UserManager instance.

    Args:
        db: Database session from dependency injection.

    Returns:
        UserManager instance for the current request.
    """
    return UserManager(db)


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    user_manager: UserManager = Depends(get_user_manager),
) -> str:
    """
    Resolve the requester from an ``Authorization: Bearer <token>`` header.

    Raises:
        HTTPException: 401 if the header is missing, malformed, unknown
            or expired.
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Unauthorized")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")

    user_id = user_manager.resolve_session(token.strip())
    if user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    return user_id


def get_recommendation_manager(
    db: Session = Depends(get_db),
    config: Config = Depends(get_config),
) -> RecommendationManager:
    """
    Get RecommendationManager instance.

    Args:
        db: Database session from dependency injection.
        config: Application configuration.

    Returns:
        RecommendationManager instance for the current request.
    """
    return RecommendationManager(config, db)
