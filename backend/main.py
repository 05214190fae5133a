"""
Who To Follow FastAPI Application.

Main application entry point with CORS and router registration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routers import recommendations_router

# Create FastAPI app
app = FastAPI(
    title="Who To Follow API",
    description="REST API for follow suggestions",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recommendations_router, prefix="/api/recommendations", tags=["recommendations"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    from who_to_follow.config import Config
    from who_to_follow.logging_config import setup_logging

    setup_logging(Config.from_env().log)
    uvicorn.run(app, host="0.0.0.0", port=8000)
