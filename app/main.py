# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the TaskList API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.container import build_container
from app.exceptions import (
    INTERNAL_ERROR_BODY,
    TaskListException,
    http_exception_handler,
    store_exception_handler,
    tasklist_exception_handler,
    validation_exception_handler,
)
from app.routers import health, tasks
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: build the container, connect the store, and wait for the
      cache connection attempt to resolve before accepting traffic
    - Shutdown: close cache and store clients
    """
    logger.info(f"Starting TaskList API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    container = getattr(app.state, "container", None) or build_container(settings)
    await container.startup()
    app.state.container = container

    yield

    logger.info("Shutting down TaskList API")
    await container.shutdown()


def create_app() -> FastAPI:
    """Build the FastAPI application (routers, middleware, handlers)."""
    app = FastAPI(
        title="TaskList API",
        description="""
## Per-user task list

Sign up or log in to get a bearer token, then manage your own tasks.
Reads are served from a Redis cache (5 minute TTL) and refreshed from the
database on a miss; every write invalidates your cached entries.

```bash
# 1. Sign up
curl -X POST http://localhost:5000/auth/signup \\
  -H "Content-Type: application/json" \\
  -d '{"email": "a@x.com", "password": "p"}'

# 2. Create a task
curl -X POST http://localhost:5000/tasks \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"taskName": "buy milk", "dueDate": "2025-01-01"}'

# 3. List tasks
curl http://localhost:5000/tasks -H "Authorization: Bearer $TOKEN"
```
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Auth",
                "description": "Signup, login, and token verification",
            },
            {
                "name": "Tasks",
                "description": "Create, read, update and delete your tasks",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(TaskListException, tasklist_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SupabaseClientError, store_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(auth_routes.router)
    app.include_router(tasks.router, tags=["Tasks"])
    app.include_router(health.router, tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "message": "TaskList API",
            "name": "TaskList API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


# Create FastAPI application
app = create_app()
