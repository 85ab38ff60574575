"""FastAPI application entry point.

This module wires together the API routers, configures logging,
middleware and startup tasks, and exposes the ASGI application object
used by the server.
"""

import os
import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.routes import (
    auth,
    users,
    admin,
    courses,
    lessons,
    quizzes,
    mandatory,
    services,
    settings,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import create_db_and_tables, async_session, get_session
from app.crud import get_settings, ensure_seed_content
from app.exceptions import LearningError, PersistenceError

# Basic logging configuration.  The log level can be controlled with an
# environment variable so deployments can adjust verbosity without code
# changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_DEMO_CONTENT = os.getenv("SEED_DEMO_CONTENT", "false").lower() == "true"
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(title="Training Center API")

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Create missing tables and the settings row, optionally seeding demo data."""

    await create_db_and_tables()
    async with async_session() as session:
        await get_settings(session)
        if SEED_DEMO_CONTENT:
            await ensure_seed_content(session)
    logger.info("Database ready")


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(admin.router)
app.include_router(courses.router)
app.include_router(lessons.router)
app.include_router(quizzes.router)
app.include_router(quizzes.attempts_router)
app.include_router(mandatory.router)
app.include_router(services.router)
app.include_router(settings.router)


@app.get("/")
async def read_root(db: AsyncSession = Depends(get_session)):
    s = await get_settings(db)
    return {"message": f"Welcome to {s.site_name} API"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(LearningError)
async def learning_error_handler(request: Request, exc: LearningError):
    """Render domain errors as ``{"code", "message"}`` with their status."""
    if exc.status_code >= 500:
        logger.error("Request %s failed: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Database failures outside the core helpers get the persistence body."""
    logger.warning("Database failure during request %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={
            "code": PersistenceError.code,
            "message": "The database could not complete the request",
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
