# src/contest_stage/main.py
"""Main entry point for the Contest Stage application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from contest_stage.api.v1 import (
    categories_router,
    leaderboard_router,
    payments_router,
    phases_router,
    videos_router,
    votes_router,
)
from contest_stage.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Contest Stage API",
    description="Video competition voting, judging and leaderboard API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(leaderboard_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(videos_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")
app.include_router(phases_router, prefix="/api/v1")
app.include_router(payments_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Video competition voting, judging and leaderboard API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("contest_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
