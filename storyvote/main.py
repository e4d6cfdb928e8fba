"""
Main application module.

This module initializes and configures the FastAPI application, including:
- Logging configuration
- CORS middleware
- Centralized error handling
- API routers
- Database initialization on startup
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storyvote import __version__
from storyvote.middleware.error_handler import add_error_handlers
from storyvote.routes.episodes import router as episodes_router
from storyvote.routes.sessions import router as sessions_router
from storyvote.routes.stories import router as stories_router
from storyvote.routes.submissions import router as submissions_router
from storyvote.routes.users import router as users_router
from storyvote.routes.votes import router as votes_router
from storyvote.utils.config import get_settings
from storyvote.utils.database import SessionLocal, init_db, close_db
from storyvote.utils.seed import seed_demo_data

logger = logging.getLogger(__name__)

settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title="StoryVote API",
    description="Collaborative storytelling: submit and vote on phrases that become video episodes",
    version=__version__
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)

# Include routers
app.include_router(users_router)
app.include_router(sessions_router)
app.include_router(submissions_router)
app.include_router(votes_router)
app.include_router(stories_router)
app.include_router(episodes_router)

@app.on_event("startup")
async def startup_event():
    """Initialize services on application startup."""
    try:
        logger.info("Starting up application...")
        await init_db()
        if get_settings().SEED_DEMO_DATA:
            async with SessionLocal() as session:
                await seed_demo_data(session)
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Error during startup: {str(e)}")
        raise

@app.on_event("shutdown")
async def shutdown_event():
    """Clean up services on application shutdown."""
    try:
        logger.info("Shutting down application...")
        await close_db()
        logger.info("Application shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")
        raise

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
