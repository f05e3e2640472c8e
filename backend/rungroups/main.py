"""
RunGroups Backend - FastAPI Application
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rungroups import __version__
from rungroups.core.config import settings
from rungroups.core.logging import setup_logging, get_logger
from rungroups.api import groups

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting RunGroups Backend", version=__version__)

    yield

    # Shutdown
    logger.info("Shutting down RunGroups Backend")


app = FastAPI(
    title="RunGroups API",
    description="Groups workout history by distance, pace or altitude and ranks the groups",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(groups.router, prefix="/api/groups", tags=["groups"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "rungroups-backend"}
