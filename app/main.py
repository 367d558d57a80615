# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Contact Manager API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    ContactManagerException,
    contact_manager_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import health, contacts, dashboard, pages
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

FEATURES_DIR = Path(__file__).resolve().parent / "static" / "features"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration
    - Shutdown: drop the shared database client
    """
    logger.info(f"Starting Contact Manager API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Contact Manager API")
    SupabaseClient.reset()


# Create FastAPI application
app = FastAPI(
    title="Contact Manager API",
    description="""
## Contact Management API

Manage a shared address book behind a login.

### Quick Start

```bash
# 1. Log in
curl -X POST http://localhost:8000/api/v1/auth/login \\
  -H "Content-Type: application/json" \\
  -d '{"email": "me@example.com", "password": "secret"}'

# 2. Add a contact
curl -X POST http://localhost:8000/api/v1/contacts \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Ada Lovelace", "email": "ada@example.com", "number": "555-0100"}'

# 3. List contacts
curl http://localhost:8000/api/v1/contacts -H "Authorization: Bearer $TOKEN"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Login, logout and current user",
        },
        {
            "name": "Contacts",
            "description": "Create, read, update and delete contacts",
        },
        {
            "name": "Dashboard",
            "description": "Dashboard summary",
        },
        {
            "name": "Views",
            "description": "Client view states and path resolution",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ContactManagerException)
async def handle_contact_manager_exception(request: Request, exc: ContactManagerException):
    """Handle custom Contact Manager exceptions."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return await contact_manager_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP errors (auth 401s, 405s)."""
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body / parameter validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    contacts.router,
    prefix="/api/v1/contacts",
    tags=["Contacts"]
)

app.include_router(
    dashboard.router,
    prefix="/api/v1",
    tags=["Dashboard"]
)

app.include_router(
    pages.api_router,
    prefix="/api/v1",
    tags=["Views"]
)

# View templates referenced by the state table
app.mount(
    "/features",
    StaticFiles(directory=FEATURES_DIR, check_dir=False),
    name="features",
)

# Page shell catch-all - must stay last
app.include_router(pages.router)
