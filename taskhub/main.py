"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub import __version__
from taskhub.core.config import settings
from taskhub.core.logging_config import setup_logging
from taskhub.errors import register_error_handlers
from taskhub.routers import comments, health, subtasks, tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Runs once when the server starts and once when it stops."""
    setup_logging()
    logger.info("Starting %s (user directory at %s)", settings.APP_NAME, settings.USER_SERVICE_URL)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="Task, subtask and comment service for the team dashboard",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router, tags=["Health"])
app.include_router(tasks.router)
app.include_router(subtasks.router)
app.include_router(comments.router)
