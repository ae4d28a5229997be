"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI

from finsuite.config import get_settings
from finsuite.api import router as api_router
from finsuite.api.auth import router as auth_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Financial and project-management calculators with AI insights",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(auth_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}


def run():
    """Serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "finsuite.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
