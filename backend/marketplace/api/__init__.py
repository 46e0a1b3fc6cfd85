"""HTTP routers for the marketplace API."""

from .ad_routes import router as ad_router
from .auth_routes import router as auth_router

__all__ = ["ad_router", "auth_router"]
