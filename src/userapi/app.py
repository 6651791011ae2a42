"""
User API Server
Core functionality: user CRUD over PostgreSQL, health check
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userapi import __version__
from userapi.config.settings import ALLOWED_ORIGINS, ENV, STORE_BACKEND
from userapi.database.connection import init_database, close_database, get_db_pool
from userapi.api.routes import health, users
from userapi.services.user_repository import (
    InMemoryUserRepository,
    PostgresUserRepository,
    set_user_repository,
)
from userapi.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Environment: {ENV}, store backend: {STORE_BACKEND}")
    if STORE_BACKEND == "memory":
        logger.warning("Using in-memory user store - data is lost on restart")
        repository = InMemoryUserRepository()
    else:
        await init_database()
        repository = PostgresUserRepository(get_db_pool())

    set_user_repository(repository)
    try:
        yield
    finally:
        set_user_repository(None)
        if STORE_BACKEND != "memory":
            await close_database()

# FastAPI app initialization
app = FastAPI(
    title="User API",
    description="Backend API for user management",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
