"""
FastAPI routers for API endpoints.
"""

from .recommendations import router as recommendations_router

__all__ = [
    "recommendations_router",
]
