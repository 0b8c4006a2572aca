# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    dashboard_router,
    students_router,
    groups_router,
    my_group_router,
    public_router,
)

# --- Startup Imports ---
from .core import config
from .core.config import get_cors_origins
from .core.logging_config import configure_logging
from .db.database import init_db
from .services import user_service
from .services.database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once when the application starts up.
    configure_logging()
    init_db()
    user_service.seed_demonstrator(
        DatabaseService(),
        config.SEED_DEMONSTRATOR_EMAIL,
        config.SEED_DEMONSTRATOR_PASSWORD,
        config.SEED_DEMONSTRATOR_NAME,
    )
    logger.info("Lab groups backend started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Lab Groups API",
    description="Manage lab students and groups: demonstrators build rosters, students pick their group.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(groups_router.router, prefix="/api/groups", tags=["Groups"])
app.include_router(my_group_router.router, prefix="/api/my-group", tags=["My Group"])

# Unauthenticated, public-facing routes under the /public prefix
app.include_router(public_router.router, prefix="/public", tags=["Public"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Lab Groups backend is running!", "version": app.version}
