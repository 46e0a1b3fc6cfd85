"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount auth and ad routers under the /api prefix
  - Expose health check endpoint

Collaborators:
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - api: auth and ad routers
  - infrastructure.db: PostgreSQL pool and MongoDB client lifecycle

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - APP_ENV=test skips store initialization (in-memory repositories)

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api import ad_router, auth_router
from .config import get_settings
from .container import get_ad_repository, get_user_repository
from .exception_handlers import register_exception_handlers
from .infrastructure.db.stores import close_stores, open_stores
from .logger import logger
from .middleware import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and opens the stores."""
    # This will raise ValidationError if env vars are missing/invalid
    settings = get_settings()

    if not settings.is_test():
        # R: PostgreSQL pool (users) and MongoDB client (ads)
        open_stores(settings)

    logger.info(
        "Marketplace API starting up",
        extra={
            "app_env": settings.app_env,
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
            "mongo_db": settings.mongo_db,
            "jwt_ttl_seconds": settings.jwt_ttl_seconds,
        },
    )
    yield

    close_stores()
    logger.info("Marketplace API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback for import-time errors."""
    try:
        return get_settings().get_allowed_origins_list()
    except Exception:
        return ["http://localhost:3000"]


def _get_allow_credentials() -> bool:
    try:
        return get_settings().cors_allow_credentials
    except Exception:
        return False


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Marketplace API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration and login (JWT)"},
        {"name": "ads", "description": "Ad publishing and listing"},
    ],
)

# R: Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=_get_allow_credentials(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    # R: Browsers only expose the session token header when listed here
    expose_headers=["Authorization", "X-Request-Id"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(ad_router, prefix="/api")

register_exception_handlers(app)


@app.get("/healthz")
def healthz(request: Request):
    """
    R: Health check that verifies both stores.

    Returns:
        ok: True if both stores respond
        postgres: "connected" or "disconnected"
        mongo: "connected" or "disconnected"
        request_id: Correlation ID for this request
    """
    result = {
        "postgres": _ping("postgres", get_user_repository),
        "mongo": _ping("mongo", get_ad_repository),
    }
    result["ok"] = all(status == "connected" for status in result.values())
    result["request_id"] = getattr(request.state, "request_id", None)
    return result


def _ping(name: str, repository_factory) -> str:
    try:
        if repository_factory().ping():
            return "connected"
    except Exception as e:
        logger.warning(f"Health check: {name} unavailable", extra={"error": str(e)})
    return "disconnected"
